"""
Identifier resolution against a single source table.
"""

from common.constants import *
from common.utils import *

from .data_models import Exact, Fallback, ResolvedRecommendation, SourceTable

logger = setup_logging(__name__, APP_LOG_FILE, logging.DEBUG)

NO_MATCH = "no match for identifier"
KIND_MISMATCH = "identifier kind mismatch"


def resolve(table: SourceTable, identifier: str, is_primary: bool) -> ResolvedRecommendation:
    """
    Resolve an identifier against one table.

    Only the table whose key space matches the identifier kind is searched
    exactly; for the other table there is no defined relationship between the
    identifier and its keys, so it always resolves to a fallback.
    """
    if not is_primary:
        logger.debug(f"[{table.name}] Not primary for this identifier kind")
        return Fallback(KIND_MISMATCH)

    row = table.get(identifier)
    if row is None:
        logger.debug(f"[{table.name}] No row for key={identifier!r}")
        return Fallback(NO_MATCH)

    logger.debug(f"[{table.name}] Exact match for key={identifier!r}")
    return Exact(row.items)
