import pytest

from recommenders import IdentifierKind, MalformedSourceError, PlaceholderRecommendationProvider
from server.recommendation_service import RecommendationService


def _service(paths, fixed_random, indices=()):
    return RecommendationService(
        paths=paths, provider=PlaceholderRecommendationProvider(), rng=fixed_random(list(indices))
    )


def test_loads_tables_at_startup(source_files, fixed_random):
    service = _service(source_files, fixed_random)
    assert service.ready
    assert service.init_error is None
    status = service.status()
    assert status["tables"] == {"collaborative": 25, "content": 15}
    assert status["missing_sources"] == []
    assert status["external_provider"] == "PlaceholderRecommendationProvider"


def test_recommend(source_files, fixed_random):
    service = _service(source_files, fixed_random, [4])
    result = service.recommend("U002", IdentifierKind.USER_BASED)
    assert result.collaborative == ["c2a", "c2b", "c2c", "c2d", "c2e"]
    assert result.content == ["s4a", "s4b", "s4c", "s4d", "s4e"]


def test_missing_source_file(source_files, fixed_random, tmp_path):
    paths = {**source_files, "content_table": str(tmp_path / "missing.csv")}
    service = _service(paths, fixed_random)
    assert not service.ready
    assert "missing.csv" in service.init_error
    with pytest.raises(ValueError):
        service.recommend("U001", IdentifierKind.USER_BASED)


def test_malformed_source_file(source_files, fixed_random, tmp_path):
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    service = _service({**source_files, "collaborative_table": str(empty)}, fixed_random)
    assert not service.ready
    assert service.context is None
    assert "no header" in service.init_error


def test_reload_publishes_new_tables(source_files, fixed_random, tmp_path):
    service = _service(source_files, fixed_random)
    old_context = service.context

    with open(source_files["collaborative_table"], "a", encoding="utf-8") as f:
        f.write("\nNEW,n1,n2,n3,n4,n5")

    loaded = []
    service.reload(on_source_loaded=loaded.append)

    assert loaded == ["collaborative", "content"]
    assert service.context is not old_context
    assert "NEW" in service.context["collaborative"]
    assert "NEW" not in old_context["collaborative"]


def test_failed_reload_keeps_previous_tables(source_files, fixed_random):
    service = _service(source_files, fixed_random)
    old_context = service.context

    with open(source_files["content_table"], "w", encoding="utf-8") as f:
        f.write("\n")

    with pytest.raises(MalformedSourceError):
        service.reload()

    assert service.context is old_context
    assert service.ready
