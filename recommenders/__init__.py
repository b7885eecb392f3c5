"""
Recommendation aggregation components.
Pure functions over immutable tables; randomness and the external service are injected.
"""

from .data_models import (
    IdentifierKind,
    RecommendationRow,
    SourceTable,
    Exact,
    Fallback,
    RecommendationResult,
    RecommendationContext,
    RecommendConfig,
)
from .errors import ValidationError, MalformedSourceError, ExternalSourceError
from .loader import load_source_table, load_source_file
from .resolver import resolve
from .sampler import SamplingStrategy, sample, make_random_source
from .external import (
    ExternalRecommendationProvider,
    PlaceholderRecommendationProvider,
    AzureMLRecommendationProvider,
    build_external_provider,
)
from .orchestrator import get_recommendations

__all__ = [
    "IdentifierKind",
    "RecommendationRow",
    "SourceTable",
    "Exact",
    "Fallback",
    "RecommendationResult",
    "RecommendationContext",
    "RecommendConfig",
    "ValidationError",
    "MalformedSourceError",
    "ExternalSourceError",
    "load_source_table",
    "load_source_file",
    "resolve",
    "SamplingStrategy",
    "sample",
    "make_random_source",
    "ExternalRecommendationProvider",
    "PlaceholderRecommendationProvider",
    "AzureMLRecommendationProvider",
    "build_external_provider",
    "get_recommendations",
]
