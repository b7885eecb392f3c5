from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from common.constants import EXTERNAL, PATHS, RECOMMEND
from common.utils import setup_logging
from recommenders import (
    IdentifierKind,
    RecommendationContext,
    RecommendationResult,
    RecommendConfig,
    build_external_provider,
    get_recommendations,
    load_source_file,
    make_random_source,
)

logger = setup_logging(__name__, PATHS["app_log_file"])


class RecommendationService:
    """Service holding the loaded source tables and answering recommendation requests."""

    def __init__(self, paths=None, provider=None, rng=None, config: Optional[RecommendConfig] = None):
        """Load both source tables once at startup, build context and config."""
        logger.info("Initializing RecommendationService...")

        self.paths: Dict[str, str] = {**PATHS, **(paths or {})}
        self.provider = provider or build_external_provider(EXTERNAL)
        self.rng = rng if rng is not None else make_random_source(RECOMMEND["random_seed"])
        self.config: RecommendConfig = {
            "k": RECOMMEND["k"],
            "single_row_window": RECOMMEND["single_row_window"],
            "first_field_window": RECOMMEND["first_field_window"],
            **(config or {}),
        }

        self.context: Optional[RecommendationContext] = None
        self.ready: bool = False
        self.init_error: Optional[str] = None

        missing = self._missing_sources()
        if missing:
            self.init_error = f"Missing source tables: {missing}"
            logger.warning(self.init_error)
            return

        try:
            self.reload()
            logger.info("✓ RecommendationService initialized successfully")
        except Exception as e:
            self.init_error = str(e)
            logger.error(f"Failed to initialize RecommendationService: {self.init_error}")

    def _missing_sources(self):
        return [self.paths[key] for key in ("collaborative_table", "content_table") if not Path(self.paths[key]).exists()]

    def reload(self, on_source_loaded: Optional[Callable[[str], None]] = None) -> RecommendationContext:
        """
        Load both tables into a fresh context and publish it in one assignment.

        In-flight requests keep using the context they already read. If either
        table fails to load the exception propagates and the previous context
        stays published.
        """
        collaborative = load_source_file(self.paths["collaborative_table"], "collaborative")
        if on_source_loaded:
            on_source_loaded("collaborative")

        content = load_source_file(self.paths["content_table"], "content")
        if on_source_loaded:
            on_source_loaded("content")

        context: RecommendationContext = {
            "collaborative": collaborative,
            "content": content,
            "loaded_at": datetime.now(),
        }
        self.context = context
        self.ready = True
        self.init_error = None

        logger.info(f"Published tables: collaborative={len(collaborative)} rows, content={len(content)} rows")
        return context

    def status(self) -> Dict[str, Any]:
        """Return readiness status and any initialization errors."""
        context = self.context
        return {
            "ready": self.ready,
            "missing_sources": self._missing_sources(),
            "error": self.init_error,
            "external_provider": type(self.provider).__name__,
            "tables": {
                "collaborative": len(context["collaborative"]) if context else 0,
                "content": len(context["content"]) if context else 0,
            },
            "loaded_at": context["loaded_at"].isoformat() if context else None,
        }

    def recommend(self, identifier: str, kind: IdentifierKind) -> RecommendationResult:
        context = self.context
        if not self.ready or context is None:
            raise ValueError("Recommendation tables are not available")

        return get_recommendations(
            context=context,
            identifier=identifier,
            kind=kind,
            provider=self.provider,
            rng=self.rng,
            config=self.config,
        )
