from dataclasses import dataclass, FrozenInstanceError

import pytest

from sectionkit.core.exceptions import ConfigurationError, FetchError
from sectionkit.core.models import EngineConfig, FetchResult, Index, Item, Section


def test_section_coerces_items_to_tuple():
    section = Section("s", items=[Item("a"), Item("b")])
    assert isinstance(section.items, tuple)
    assert section.item_identities() == ("a", "b")


def test_section_rejects_negative_total():
    with pytest.raises(ValueError):
        Section("s", total_count=-1)


def test_values_are_frozen():
    item = Item("a")
    with pytest.raises(FrozenInstanceError):
        item.selected = True  # type: ignore[misc]


def test_with_selected_returns_copy_and_keeps_original():
    item = Item("a", payload={"title": "A"})
    selected = item.with_selected(True)
    assert selected.selected is True
    assert item.selected is False
    assert selected.payload == {"title": "A"}
    # No copy when the flag is unchanged
    assert item.with_selected(False) is item


def test_subclassed_item_keeps_its_fields_through_selection():
    @dataclass(frozen=True)
    class Photo(Item):
        url: str = ""

    photo = Photo("p1", url="http://example.com/p1.jpg")
    toggled = photo.toggled()
    assert isinstance(toggled, Photo)
    assert toggled.url == photo.url
    assert toggled.selected is True


def test_items_with_payload_are_hashable():
    @dataclass(frozen=True)
    class Photo(Item):
        url: str = ""

    a = Item("a", payload={"tags": ["x"]})
    same = Item("a", payload={"tags": ["x"]})
    photo = Photo("p1", payload={"size": 3}, url="u")

    assert hash(a) == hash(same)
    assert {a, same, a.toggled()} == {a, a.toggled()}
    assert {photo: 1}[Photo("p1", payload={"size": 3}, url="u")] == 1
    assert hash(Section("s", items=(a, photo))) == hash(Section("s", items=(same, photo)))


def test_index_orders_by_section_then_item():
    indices = [Index(1, 0), Index(0, 5), Index(0, 1)]
    assert sorted(indices) == [Index(0, 1), Index(0, 5), Index(1, 0)]
    assert {Index(0, 1): "x"}[Index(0, 1)] == "x"


def test_fetch_result_ok_and_fail():
    ok = FetchResult.ok([Section("s")])
    assert ok.success is True
    assert ok.unwrap() == [Section("s")]

    error = FetchError("timeout", page=2)
    failed = FetchResult.fail(error)
    assert failed.success is False
    assert failed.sections == ()
    assert "[Page: 2]" in failed.message
    with pytest.raises(FetchError):
        failed.unwrap()


def test_engine_config_from_mapping_ignores_unknown_keys():
    config = EngineConfig.from_mapping({"retain_deleted_items": True, "first_page": 0, "unknown": 1})
    assert config.retain_deleted_items is True
    assert config.first_page == 0
    assert config.toggle_selection_mode is False


@pytest.mark.parametrize("data", [
    {"retain_deleted_items": "yes"},
    {"first_page": "1"},
    {"first_page": True},
    {"first_page": -1},
])
def test_engine_config_rejects_wrong_types(data):
    with pytest.raises(ConfigurationError) as excinfo:
        EngineConfig.from_mapping(data)
    assert excinfo.value.key == next(iter(data))
