from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from recommenders import IdentifierKind


class RecommendResponse(BaseModel):
    """
    Three fixed-length lists, one per source.

    azureML: the external ML service's list (placeholders when it is unavailable)
    """
    identifier: str
    kind: IdentifierKind
    collaborative: list[str]
    content: list[str]
    azureML: list[str]


class TableStatus(BaseModel):
    ready: bool
    missing_sources: list[str]
    error: Optional[str] = None
    external_provider: str
    tables: dict[str, int]
    loaded_at: Optional[datetime] = None


class ReloadResponse(BaseModel):
    reload_id: str
    status: str
    message: str
