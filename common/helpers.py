from typing import Iterable, List


# region Normalization
def normalize_recommendations(candidates: Iterable[str], target_length: int = 5) -> List[str]:
    """
    Force a candidate list to exactly `target_length` entries.

    Empty and whitespace-only entries are dropped, the remainder keeps its order,
    short lists are padded with "Recommendation {n}" where n is the 1-based slot
    being filled, and long lists are truncated.
    """
    filtered = [c for c in candidates if c and c.strip()]

    if len(filtered) > target_length:
        return filtered[:target_length]

    for position in range(len(filtered) + 1, target_length + 1):
        filtered.append(f"Recommendation {position}")
    return filtered


def placeholder_recommendations(source_name: str, count: int = 5) -> List[str]:
    """Synthetic list standing in for a source that produced nothing usable."""
    return [f"{source_name} Recommendation {n}" for n in range(1, count + 1)]


# endregion
