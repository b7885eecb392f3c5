import os
import tempfile

# Keep test logs out of the project tree; must run before common.constants is imported
os.environ.setdefault("RECOMMENDER_LOGS_DIR", tempfile.mkdtemp(prefix="recommender-logs-"))

import pytest

from recommenders import PlaceholderRecommendationProvider, load_source_table

COLLABORATIVE_TEXT = "\n".join(
    ["user_id,rec_1,rec_2,rec_3,rec_4,rec_5"]
    + [f"U{i:03d},c{i}a,c{i}b,c{i}c,c{i}d,c{i}e" for i in range(25)]
)

CONTENT_TEXT = "\n".join(
    ["item_id,sim_1,sim_2,sim_3,sim_4,sim_5"]
    + [f"item{i},s{i}a,s{i}b,s{i}c,s{i}d,s{i}e" for i in range(15)]
)


class FixedIndexRandom:
    """Random source returning a scripted sequence of indices."""

    def __init__(self, indices):
        self.indices = list(indices)
        self.calls = []

    def integers(self, low, high):
        self.calls.append((low, high))
        value = self.indices.pop(0)
        assert low <= value < high, f"scripted index {value} outside [{low}, {high})"
        return value


class FailingProvider:
    name = "Azure ML"

    def __init__(self, error):
        self.error = error
        self.calls = 0

    def fetch(self, identifier):
        self.calls += 1
        raise self.error


class StaticProvider:
    name = "Azure ML"

    def __init__(self, items):
        self.items = list(items)

    def fetch(self, identifier):
        return list(self.items)


@pytest.fixture
def collaborative_table():
    return load_source_table(COLLABORATIVE_TEXT, "collaborative")


@pytest.fixture
def content_table():
    return load_source_table(CONTENT_TEXT, "content")


@pytest.fixture
def context(collaborative_table, content_table):
    from datetime import datetime

    return {"collaborative": collaborative_table, "content": content_table, "loaded_at": datetime.now()}


@pytest.fixture
def placeholder_provider():
    return PlaceholderRecommendationProvider()


@pytest.fixture
def source_files(tmp_path):
    collaborative_path = tmp_path / "collaborative.csv"
    content_path = tmp_path / "content.csv"
    collaborative_path.write_text(COLLABORATIVE_TEXT, encoding="utf-8")
    content_path.write_text(CONTENT_TEXT, encoding="utf-8")
    return {"collaborative_table": str(collaborative_path), "content_table": str(content_path)}


@pytest.fixture
def fixed_random():
    return FixedIndexRandom


@pytest.fixture
def failing_provider():
    return FailingProvider


@pytest.fixture
def static_provider():
    return StaticProvider
