import pytest

from mucowls.catalog import Catalog
from mucowls.completion.context import TagContext
from mucowls.completion.tag_hints import TagCompletionEngine


TAGS = {
    "widget": {"attributes": ["name"], "context": ["/root$"]},
    "parameters": {"attributes": [], "context": ["widget"]},
    "table": {"attributes": ["border"], "context": []},
    "row": {"attributes": ["span"], "context": ["table"]},
    "rowgroup": {"attributes": [], "context": ["table", "div"]},
    "div": {"attributes": ["id"]},
}


@pytest.fixture
def engine() -> TagCompletionEngine:
    return TagCompletionEngine(Catalog.from_dicts(TAGS, {}))


def test_row_allowed_inside_table(engine):
    assert engine.get_hints("ro", "table") == ["row", "rowgroup"]


def test_row_excluded_inside_div(engine):
    assert engine.get_hints("ro", "div") == ["rowgroup"]


def test_root_level_tags_are_sorted(engine):
    assert engine.get_hints("", "/root$") == ["div", "table", "widget"]


def test_leading_bracket_is_ignored(engine):
    assert engine.get_hints("<wid", "/root$") == ["widget"]


def test_no_match_is_an_empty_list(engine):
    assert engine.get_hints("zzz", "table") == []


def test_result_is_prefix_filtered_sorted_and_unique(engine):
    for parent in ("/root$", "widget", "table", "div", "other"):
        for prefix in ("", "r", "ro", "t", "w", "x"):
            hints = engine.get_hints(prefix, parent)
            assert hints == sorted(set(hints))
            assert all(h.startswith(prefix) for h in hints)


def test_complete_returns_hint_list(engine):
    context = TagContext(
        query="par", token_text="par", token_offset=3, parent_name="widget"
    )

    result = engine.complete(context)

    assert result.hints == ["parameters"]
    assert result.match == "par"
    assert result.to_dict() == {
        "hints": ["parameters"],
        "match": "par",
        "selectInitial": True,
        "handleWideResults": False,
    }
