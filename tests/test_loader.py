import pytest

from recommenders import MalformedSourceError, load_source_file, load_source_table

HEADER = "key,i1,i2,i3,i4,i5"


def test_rows_keyed_by_first_field(collaborative_table):
    assert len(collaborative_table) == 25
    row = collaborative_table.get("U003")
    assert row.key == "U003"
    assert row.items == ("c3a", "c3b", "c3c", "c3d", "c3e")


def test_header_is_not_a_row(collaborative_table):
    assert "user_id" not in collaborative_table


def test_source_order_is_preserved(content_table):
    assert list(content_table) == [f"item{i}" for i in range(15)]
    assert content_table.row_at(2).key == "item2"


@pytest.mark.parametrize("text", ["", "\n\n", "   \n\t\n"])
def test_missing_header_raises(text):
    with pytest.raises(MalformedSourceError):
        load_source_table(text, "broken")


def test_header_only_gives_empty_table():
    table = load_source_table(HEADER + "\n", "empty")
    assert len(table) == 0
    assert table.get("anything") is None


def test_short_rows_are_skipped():
    text = "\n".join([HEADER, "badrow,onlytwo,fields", "good,a,b,c,d,e"])
    table = load_source_table(text)
    assert "badrow" not in table
    assert list(table) == ["good"]


def test_blank_lines_are_skipped():
    text = "\n".join([HEADER, "", "a,1,2,3,4,5", "   ", "b,1,2,3,4,5", ""])
    table = load_source_table(text)
    assert list(table) == ["a", "b"]


def test_first_occurrence_wins():
    text = "\n".join([HEADER, "dup,first1,first2,first3,first4,first5", "other,1,2,3,4,5", "dup,x,x,x,x,x"])
    table = load_source_table(text)
    assert len(table) == 2
    assert table.get("dup").items[0] == "first1"
    assert list(table) == ["dup", "other"]


def test_empty_fields_are_kept_and_not_trimmed():
    text = "\n".join([HEADER, "k, spaced ,,c,,e"])
    row = load_source_table(text).get("k")
    assert row.items == (" spaced ", "", "c", "", "e")


def test_extra_fields_are_ignored():
    text = "\n".join([HEADER, "k,1,2,3,4,5,6,7"])
    assert load_source_table(text).get("k").items == ("1", "2", "3", "4", "5")


def test_embedded_comma_shifts_the_row():
    # no quote handling: the quoted field is split like any other
    text = "\n".join([HEADER, 'k,"Hello, world",2,3,4,5'])
    assert load_source_table(text).get("k").items == ('"Hello', ' world"', "2", "3", "4")


def test_crlf_line_endings():
    text = HEADER + "\r\nk,1,2,3,4,5\r\n"
    assert load_source_table(text).get("k").items == ("1", "2", "3", "4", "5")


def test_load_source_file(tmp_path):
    path = tmp_path / "table.csv"
    path.write_text("\n".join([HEADER, "k,a,b,c,d,e"]), encoding="utf-8")
    table = load_source_file(str(path), "collaborative")
    assert table.name == "collaborative"
    assert "k" in table


def test_load_source_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_source_file(str(tmp_path / "nope.csv"), "collaborative")
