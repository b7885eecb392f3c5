"""
External ML scoring service boundary.

The orchestrator only sees `ExternalRecommendationProvider.fetch`; whether the
list comes from the Azure ML endpoint or a local placeholder is decided once,
when the provider is built from configuration.
"""

from typing import Any, List, Optional, Protocol

import requests

from common.constants import *
from common.helpers import placeholder_recommendations
from common.utils import *

from .errors import ExternalSourceError

logger = setup_logging(__name__, APP_LOG_FILE)


class ExternalRecommendationProvider(Protocol):
    name: str

    def fetch(self, identifier: str) -> List[str]: ...


class PlaceholderRecommendationProvider:
    """Local stand-in used when no endpoint is configured (and in tests)."""

    def __init__(self, name: str = EXTERNAL["name"], k: int = RECOMMEND["k"]):
        self.name = name
        self.k = k

    def fetch(self, identifier: str) -> List[str]:
        return placeholder_recommendations(self.name, self.k)


class AzureMLRecommendationProvider:
    """Fetches recommendations from the deployed Azure ML scoring endpoint."""

    def __init__(
        self,
        endpoint_url: str,
        name: str = EXTERNAL["name"],
        timeout_seconds: float = EXTERNAL["timeout_seconds"],
        query_param: str = EXTERNAL["query_param"],
        session: Optional[requests.Session] = None,
    ):
        self.endpoint_url = endpoint_url
        self.name = name
        self.timeout_seconds = timeout_seconds
        self.query_param = query_param
        self.session = session or requests.Session()

    def fetch(self, identifier: str) -> List[str]:
        try:
            response = self.session.get(
                self.endpoint_url,
                params={self.query_param: identifier},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise ExternalSourceError(f"Request to {self.endpoint_url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ExternalSourceError(f"{self.name} returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ExternalSourceError(f"{self.name} returned invalid JSON: {e}") from e

        return _parse_payload(payload)


def _parse_payload(payload: Any) -> List[str]:
    """Accept either a bare list of strings or {"recommendations": [...]}."""
    if isinstance(payload, dict):
        payload = payload.get("recommendations")
    if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
        raise ExternalSourceError(f"Unexpected payload shape: {type(payload).__name__}")
    return payload


def build_external_provider(config=EXTERNAL) -> ExternalRecommendationProvider:
    if config.get("endpoint_url"):
        logger.info(f"Using {config['name']} endpoint at {config['endpoint_url']}")
        return AzureMLRecommendationProvider(
            endpoint_url=config["endpoint_url"],
            name=config["name"],
            timeout_seconds=config.get("timeout_seconds", EXTERNAL["timeout_seconds"]),
            query_param=config.get("query_param", EXTERNAL["query_param"]),
        )
    logger.info(f"No {config['name']} endpoint configured, using placeholder provider")
    return PlaceholderRecommendationProvider(config["name"])
