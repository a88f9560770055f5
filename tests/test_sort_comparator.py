# File: /tests/test_sort_comparator.py | Version: 1.0 | Title: Sort Comparator (stability, nulls, empties, locale, comparators)
import pytest

from docview.core.errors import NotFoundError, ValidationError
from docview.engine import collation
from docview.engine.sorting import CUSTOM_COMPARATORS, SortComparator, register_comparator
from docview.schemas.property import Property, SelectOption
from docview.schemas.view import Sort, SortConfig

PRIORITY = [
    SelectOption(id="low", name="Low"),
    SelectOption(id="medium", name="Medium"),
    SelectOption(id="high", name="High"),
    SelectOption(id="urgent", name="Urgent"),
]

SCHEMA = {
    p.id: p
    for p in [
        Property(id="title", name="Title", type="text"),
        Property(id="priority", name="Priority", type="select", options=PRIORITY),
        Property(id="points", name="Points", type="number"),
        Property(id="due", name="Due", type="date"),
        Property(id="done", name="Done", type="boolean"),
        Property(id="tags", name="Tags", type="multi_select"),
    ]
}


def s(property_id, direction="ASC", order=0, **config) -> Sort:
    return Sort(
        property_id=property_id,
        direction=direction,
        order=order,
        config=SortConfig(**config) if config else None,
    )


def _sorted(records, sorts, key="id"):
    return [r[key] for r in SortComparator(SCHEMA).sort(records, sorts)]


def test_stable_for_fully_tied_keys():
    records = [{"id": str(i), "priority": "high"} for i in range(6)]
    assert _sorted(records, [s("priority")]) == ["0", "1", "2", "3", "4", "5"]
    assert _sorted(records, [s("priority", "DESC")]) == ["0", "1", "2", "3", "4", "5"]


def test_no_sorts_keeps_input_order():
    records = [{"id": "b"}, {"id": "a"}]
    assert _sorted(records, []) == ["b", "a"]


def test_nulls_last_by_default_in_both_directions():
    records = [{"id": "a", "points": 3}, {"id": "n"}, {"id": "b", "points": 1}, {"id": "m", "points": None}]
    assert _sorted(records, [s("points")]) == ["b", "a", "n", "m"]
    assert _sorted(records, [s("points", "DESC")]) == ["a", "b", "n", "m"]


def test_nulls_first():
    records = [{"id": "a", "points": 3}, {"id": "n"}, {"id": "b", "points": 1}]
    assert _sorted(records, [s("points", nulls_first=True)]) == ["n", "b", "a"]
    assert _sorted(records, [s("points", "DESC", nulls_first=True)]) == ["n", "a", "b"]


def test_empty_string_handling():
    records = [{"id": "e", "title": ""}, {"id": "b", "title": "beta"}, {"id": "n"}, {"id": "a", "title": "alpha"}]
    # Default treats "" like a null: after every value
    assert _sorted(records, [s("title")]) == ["a", "b", "e", "n"]
    assert _sorted(records, [s("title", empty_string_handling="first")]) == ["e", "a", "b", "n"]
    assert _sorted(records, [s("title", "DESC", empty_string_handling="first")]) == ["e", "b", "a", "n"]
    assert _sorted(records, [s("title", empty_string_handling="last", nulls_first=True)]) == ["n", "a", "b", "e"]


def test_treat_as_number_on_text():
    records = [{"id": "10", "title": "10"}, {"id": "9", "title": "9"}, {"id": "100", "title": "100"}]
    assert _sorted(records, [s("title")]) == ["10", "100", "9"]
    assert _sorted(records, [s("title", treat_as_number=True)]) == ["9", "10", "100"]


def test_case_sensitivity():
    records = [{"id": w, "title": w} for w in ("cherry", "Banana", "apple")]
    assert _sorted(records, [s("title")]) == ["apple", "Banana", "cherry"]
    assert _sorted(records, [s("title", case_sensitive=True)]) == ["Banana", "apple", "cherry"]


def test_locale_collation():
    records = [{"id": w, "title": w} for w in ("b", "ä", "a")]
    # Code point order puts "ä" after "b"
    assert _sorted(records, [s("title")]) == ["a", "b", "ä"]
    assert _sorted(records, [s("title", locale="de")]) == ["a", "ä", "b"]


def test_locale_tailoring_differs_per_language():
    pytest.importorskip("icu")
    records = [{"id": w, "title": w} for w in ("z", "ä", "a")]
    assert _sorted(records, [s("title", locale="sv")]) == ["a", "z", "ä"]
    assert _sorted(records, [s("title", locale="de-DE")]) == ["a", "ä", "z"]


def test_locale_falls_back_to_root_collation_without_icu(monkeypatch):
    monkeypatch.setattr(collation, "_locale_collator", lambda tag: None)
    records = [{"id": w, "title": w} for w in ("z", "ä", "a")]
    assert _sorted(records, [s("title", locale="sv")]) == ["a", "ä", "z"]
    assert _sorted(records, [s("title", locale="de")]) == ["a", "ä", "z"]


def test_default_locale_applies_without_per_sort_locale():
    records = [{"id": w, "title": w} for w in ("b", "ä", "a")]
    cmp = SortComparator(SCHEMA, default_locale="en")
    assert [r["id"] for r in cmp.sort(records, [s("title")])] == ["a", "ä", "b"]


def test_option_order_comparator():
    records = [{"id": p, "priority": p} for p in ("medium", "urgent", "low", "high")]
    assert _sorted(records, [s("priority", "DESC", custom_comparator="option_order")]) == [
        "urgent",
        "high",
        "medium",
        "low",
    ]
    # Plain string order without the comparator
    assert _sorted(records, [s("priority")]) == ["high", "low", "medium", "urgent"]


def test_natural_and_length_comparators():
    records = [{"id": t, "title": t} for t in ("item10", "item2", "item1")]
    assert _sorted(records, [s("title", custom_comparator="natural")]) == ["item1", "item2", "item10"]
    assert _sorted(records, [s("title", "DESC", custom_comparator="length")]) == ["item10", "item2", "item1"]


def test_register_custom_comparator():
    @register_comparator("reverse_text")
    def _reverse(a, b, prop):
        return (str(a) < str(b)) - (str(a) > str(b))

    try:
        records = [{"id": t, "title": t} for t in ("a", "c", "b")]
        assert _sorted(records, [s("title", custom_comparator="reverse_text")]) == ["c", "b", "a"]
    finally:
        CUSTOM_COMPARATORS.pop("reverse_text", None)


def test_dates_and_date_format():
    records = [
        {"id": "late", "due": "2024-06-01"},
        {"id": "early", "due": "2024-01-15T08:00:00Z"},
        {"id": "mid", "due": "2024-03-02"},
    ]
    assert _sorted(records, [s("due")]) == ["early", "mid", "late"]
    european = [{"id": "b", "due": "02/03/2024"}, {"id": "a", "due": "15/01/2024"}]
    assert _sorted(european, [s("due", date_format="%d/%m/%Y")]) == ["a", "b"]


def test_boolean_and_multi_value_keys():
    records = [{"id": "t", "done": True}, {"id": "f", "done": False}]
    assert _sorted(records, [s("done")]) == ["f", "t"]
    tagged = [{"id": "2", "tags": ["b", "a"]}, {"id": "1", "tags": ["a", "z"]}, {"id": "0", "tags": []}]
    assert _sorted(tagged, [s("tags")]) == ["1", "2", "0"]


def test_multi_key_tiebreak_and_order_field():
    records = [
        {"id": "a", "priority": "high", "points": 1},
        {"id": "b", "priority": "low", "points": 7},
        {"id": "c", "priority": "high", "points": 5},
    ]
    sorts = [s("points", "DESC", order=1), s("priority", order=0, custom_comparator="option_order")]
    assert _sorted(records, sorts) == ["b", "c", "a"]


def test_disabled_and_dangling_sorts_are_ties(caplog):
    records = [{"id": "b", "points": 2}, {"id": "a", "points": 1}]
    disabled = Sort(property_id="points", enabled=False)
    assert _sorted(records, [disabled]) == ["b", "a"]
    with caplog.at_level("WARNING"):
        assert _sorted(records, [s("ghost")]) == ["b", "a"]
    assert "missing property" in caplog.text


def test_compare_returns_sign():
    cmp = SortComparator(SCHEMA)
    sorts = [s("points")]
    assert cmp.compare({"points": 1}, {"points": 2}, sorts) == -1
    assert cmp.compare({"points": 2}, {"points": 2}, sorts) == 0
    assert cmp.compare({"points": 3}, {"points": 2}, sorts) == 1


def test_lowercase_direction_is_accepted():
    assert Sort.model_validate({"propertyId": "points", "direction": "desc"}).direction.value == "DESC"


def test_validate_sorts():
    cmp = SortComparator(SCHEMA)
    with pytest.raises(NotFoundError):
        cmp.validate(s("ghost"))
    with pytest.raises(ValidationError):
        cmp.validate(s("title", custom_comparator="nope"))
    cmp.validate(s("priority", custom_comparator="option_order"))
