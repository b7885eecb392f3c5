"""
Recommendation orchestrator that combines the collaborative, content and external sources.
Identifiers of the matching kind are looked up exactly; the other table is sampled as a fallback.
"""

from typing import Dict, List, Optional

from common.constants import *
from common.helpers import normalize_recommendations, placeholder_recommendations
from common.logging import log_recommendation_summary
from common.utils import *

from .data_models import (
    Exact,
    IdentifierKind,
    RecommendationContext,
    RecommendationResult,
    RecommendConfig,
    ResolvedRecommendation,
    SourceTable,
)
from .errors import ExternalSourceError, ValidationError
from .external import ExternalRecommendationProvider
from .resolver import resolve
from .sampler import RandomSource, SamplingStrategy, sample

logger = setup_logging(__name__, APP_LOG_FILE)


def get_recommendations(
    context: RecommendationContext,
    identifier: str,
    kind: IdentifierKind,
    provider: ExternalRecommendationProvider,
    rng: RandomSource,
    config: Optional[RecommendConfig] = None,
) -> RecommendationResult:
    """
    Generate the three recommendation lists for one identifier.
    - User-based: collaborative row looked up exactly, content sampled from a single random row
    - Content-based: content row looked up exactly, collaborative built from random first fields
    - External: always delegated to the provider, placeholders on failure

    Raises:
        ValidationError: identifier is empty or whitespace-only, or kind is unknown.
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise ValidationError("Identifier must not be empty")

    try:
        kind = IdentifierKind(kind)
    except ValueError as e:
        raise ValidationError(f"Unknown identifier kind: {kind!r}") from e

    config = {**RECOMMEND, **(config or {})}
    k = config["k"]

    logger.info(f"identifier={identifier!r}, kind={kind.value}, k={k}")

    strategies: Dict[str, str] = {}

    # ===================================================================
    # Collaborative: exact for user ids, first-field sampling otherwise
    # ===================================================================
    collaborative_table = context["collaborative"]
    resolved = resolve(collaborative_table, identifier, is_primary=kind == IdentifierKind.USER_BASED)
    collaborative = _items_or_sample(
        collaborative_table, resolved, SamplingStrategy.MULTIPLE_RANDOM_FIRST_FIELDS, rng, config, strategies
    )

    # ===================================================================
    # Content: exact for content ids, single-row sampling otherwise
    # ===================================================================
    content_table = context["content"]
    resolved = resolve(content_table, identifier, is_primary=kind == IdentifierKind.CONTENT_BASED)
    content = _items_or_sample(content_table, resolved, SamplingStrategy.SINGLE_RANDOM_ROW, rng, config, strategies)

    # ===================================================================
    # External: never resolved locally
    # ===================================================================
    external, strategies["external"] = _fetch_external(provider, identifier, k)

    result = RecommendationResult(
        collaborative=normalize_recommendations(collaborative, k),
        content=normalize_recommendations(content, k),
        external=normalize_recommendations(external, k),
    )

    log_recommendation_summary(logger, identifier, kind, result, strategies)
    return result


def _items_or_sample(
    table: SourceTable,
    resolved: ResolvedRecommendation,
    strategy: SamplingStrategy,
    rng: RandomSource,
    config: RecommendConfig,
    strategies: Dict[str, str],
) -> List[str]:
    if isinstance(resolved, Exact):
        strategies[table.name] = "exact"
        return list(resolved.items)

    strategies[table.name] = f"{strategy.value} ({resolved.reason})"
    return sample(
        table,
        count=config["k"],
        strategy=strategy,
        rng=rng,
        single_row_window=config["single_row_window"],
        first_field_window=config["first_field_window"],
    )


def _fetch_external(provider: ExternalRecommendationProvider, identifier: str, k: int):
    try:
        items = provider.fetch(identifier)
        if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
            raise ExternalSourceError(f"{provider.name} returned {type(items).__name__}, expected a list of strings")
        return items, provider.name
    except ExternalSourceError as e:
        logger.warning(f"⚠️ {provider.name} unavailable, using placeholders: {e}")
    except Exception as e:
        logger.error(f"Unexpected {provider.name} failure, using placeholders: {e!r}")
    return placeholder_recommendations(provider.name, k), "placeholder"
