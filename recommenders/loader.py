"""
Tabular source loader.
Parses comma-delimited recommendation text into a SourceTable keyed by the first column.
"""

from typing import List

import pandas as pd

from common.constants import *
from common.logging import log_table_summary
from common.utils import *

from .data_models import ITEM_COLUMNS, SourceTable
from .errors import MalformedSourceError

logger = setup_logging(__name__, APP_LOG_FILE)


def load_source_table(source_text: str, name: str = "source") -> SourceTable:
    """
    Build a SourceTable from delimited text.

    The first non-blank line is the header and is not parsed as data. Each data
    line is split on the delimiter with no quote handling, so a field containing
    a comma shifts the rest of that row. Lines with fewer than 6 fields and blank
    lines are skipped. The first occurrence of a duplicated key wins.

    Raises:
        MalformedSourceError: the text has no header line.
    """
    lines = [line.rstrip("\r") for line in source_text.split("\n")]
    lines = [line for line in lines if line.strip()]
    if not lines:
        raise MalformedSourceError(f"Source '{name}' has no header line")

    delimiter = SOURCE_TABLE["delimiter"]
    min_fields = SOURCE_TABLE["min_fields"]
    n_items = SOURCE_TABLE["n_items"]

    records: List[List[str]] = []
    n_skipped = 0
    for line in lines[1:]:
        fields = line.split(delimiter)
        if len(fields) < min_fields:
            n_skipped += 1
            continue
        records.append(fields[: 1 + n_items])

    frame = pd.DataFrame(records, columns=["key"] + ITEM_COLUMNS, dtype=object)
    n_rows = len(frame)
    frame = frame.drop_duplicates(subset="key", keep="first")

    logger.debug(
        f"[{name}] Parsed {n_rows} rows, skipped {n_skipped} malformed, dropped {n_rows - len(frame)} duplicate keys"
    )

    table = SourceTable(name, frame)
    log_table_summary(logger, table, n_skipped)
    return table


def load_source_file(filepath: str, name: str) -> SourceTable:
    """Read a UTF-8 source file and parse it."""
    logger.info(f"Loading {name} table from {filepath}")
    return load_source_table(safe_read_text(filepath), name)
