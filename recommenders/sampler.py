"""
Fallback sampling over a loaded table.
Used when a source has no exact match for the identifier.
"""

from enum import Enum
from typing import List, Optional, Protocol

import numpy as np

from common.constants import *
from common.utils import *

from .data_models import SourceTable

logger = setup_logging(__name__, APP_LOG_FILE, logging.DEBUG)


class RandomSource(Protocol):
    """Anything with numpy Generator.integers semantics (high is exclusive)."""

    def integers(self, low: int, high: int): ...


class SamplingStrategy(str, Enum):
    SINGLE_RANDOM_ROW = "single_random_row"
    MULTIPLE_RANDOM_FIRST_FIELDS = "multiple_random_first_fields"


def make_random_source(seed: Optional[int] = RECOMMEND["random_seed"]) -> np.random.Generator:
    return np.random.default_rng(seed)


def sample(
    table: SourceTable,
    count: int,
    strategy: SamplingStrategy,
    rng: RandomSource,
    single_row_window: int = RECOMMEND["single_row_window"],
    first_field_window: int = RECOMMEND["first_field_window"],
) -> List[str]:
    """
    Draw substitute recommendations from the head of a table.

    - SINGLE_RANDOM_ROW: all items of one row picked from the first
      `single_row_window` rows. `count` is not used.
    - MULTIPLE_RANDOM_FIRST_FIELDS: `count` independent picks (repeats allowed)
      from the first `first_field_window` rows, keeping only each row's first item.

    An empty table yields an empty list; padding is left to the normalizer.
    """
    if len(table) == 0:
        logger.debug(f"[{table.name}] Empty table, nothing to sample")
        return []

    if strategy == SamplingStrategy.SINGLE_RANDOM_ROW:
        window = min(len(table), single_row_window)
        position = int(rng.integers(0, window))
        logger.debug(f"[{table.name}] Sampled row {position} of window {window}")
        return list(table.row_at(position).items)

    if strategy == SamplingStrategy.MULTIPLE_RANDOM_FIRST_FIELDS:
        window = min(len(table), first_field_window)
        positions = [int(rng.integers(0, window)) for _ in range(count)]
        logger.debug(f"[{table.name}] Sampled rows {positions} of window {window}")
        return [table.row_at(p).items[0] for p in positions]

    raise ValueError(f"Unknown sampling strategy: {strategy}")
