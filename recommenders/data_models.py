"""
Type definitions for the recommendation aggregation engine.
Tables and results are immutable once built; configs use TypedDicts.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, TypedDict, Union

import pandas as pd

ITEM_COLUMNS = ["item_1", "item_2", "item_3", "item_4", "item_5"]


class IdentifierKind(str, Enum):
    """Which table the supplied identifier is expected to match."""
    USER_BASED = "user"  # collaborative table keys
    CONTENT_BASED = "content"  # content table keys


@dataclass(frozen=True)
class RecommendationRow:
    key: str
    items: Tuple[str, ...]  # always 5 entries, may contain ""


class SourceTable:
    """
    Read-only mapping key -> RecommendationRow for one source.

    Rows keep the order they had in the source text so positional sampling
    sees the same window the file shows. Built once by the loader, never mutated.
    """

    def __init__(self, name: str, frame: pd.DataFrame):
        self.name = name
        self._frame = frame.reset_index(drop=True)
        self._positions: Dict[str, int] = {key: i for i, key in enumerate(self._frame["key"])}

    def __len__(self) -> int:
        return len(self._frame)

    def __contains__(self, key: object) -> bool:
        return key in self._positions

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def get(self, key: str) -> Optional[RecommendationRow]:
        position = self._positions.get(key)
        if position is None:
            return None
        return self.row_at(position)

    def row_at(self, position: int) -> RecommendationRow:
        record = self._frame.iloc[position]
        return RecommendationRow(key=record["key"], items=tuple(record[c] for c in ITEM_COLUMNS))

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame.copy()


@dataclass(frozen=True)
class Exact:
    items: Tuple[str, ...]


@dataclass(frozen=True)
class Fallback:
    reason: str


ResolvedRecommendation = Union[Exact, Fallback]


@dataclass(frozen=True)
class RecommendationResult:
    collaborative: List[str]
    content: List[str]
    external: List[str]

    def to_dict(self) -> Dict[str, List[str]]:
        # "azureML" is the key the form UI reads
        return {
            "collaborative": list(self.collaborative),
            "content": list(self.content),
            "azureML": list(self.external),
        }


class RecommendationContext(TypedDict):
    """
    World state - the loaded source tables.
    Load once at startup, published as a whole, passed to every request.
    """
    collaborative: SourceTable
    content: SourceTable
    loaded_at: datetime


class RecommendConfig(TypedDict, total=False):
    """
    Runtime behavior parameters for one request.
    """
    k: int  # Length of every returned list
    single_row_window: int  # Rows eligible for SINGLE_RANDOM_ROW
    first_field_window: int  # Rows eligible for MULTIPLE_RANDOM_FIRST_FIELDS
