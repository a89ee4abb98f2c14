import pytest

from sectionkit.core.lookup import find
from sectionkit.core.models import Index, Item
from sectionkit.core.services.deletion_cache import DeletionCache
from sectionkit.core.services.mutation_service import MutationService


@pytest.fixture
def service():
    return MutationService()


# ----------------------------------------------------------------- insert

def test_insert_increments_total_and_is_findable(service, sections, ids_of):
    new_item = Item("x")
    result = service.insert({Index(0, 1): new_item}, sections)

    assert ids_of(result[0]) == ["a", "x", "b", "c"]
    assert result[0].total_count == 4
    assert find(Index(0, 1), result) is new_item
    # Input untouched
    assert ids_of(sections[0]) == ["a", "b", "c"]


def test_insert_allows_appending_at_tail(service, sections, ids_of):
    result = service.insert({Index(1, 2): Item("z")}, sections)
    assert ids_of(result[1]) == ["d", "e", "z"]
    assert result[1].total_count == 3


def test_insert_batch_in_same_section_lands_at_final_positions(service, sections, ids_of):
    targets = {Index(0, 3): Item("y"), Index(0, 0): Item("x"), Index(0, 5): Item("z")}
    result = service.insert(targets, sections)

    assert ids_of(result[0]) == ["x", "a", "b", "y", "c", "z"]
    assert result[0].total_count == 6
    for index, item in targets.items():
        assert find(index, result) is item


def test_insert_skips_unknown_section_and_out_of_range(service, sections):
    result = service.insert({Index(7, 0): Item("x"), Index(0, 4): Item("y"), Index(0, -1): Item("z")}, sections)
    assert result == sections


def test_insert_into_empty_section(service, make_section, ids_of):
    result = service.insert({Index(0, 0): Item("x")}, [make_section("s0", [])])
    assert ids_of(result[0]) == ["x"]
    assert result[0].total_count == 1


# ----------------------------------------------------------------- delete

def test_delete_items_by_identity_decrements_total(service, sections, ids_of):
    result = service.delete_items([Item("b", payload={"other": 1}), Item("e")], sections)
    assert ids_of(result[0]) == ["a", "c"]
    assert result[0].total_count == 2
    assert ids_of(result[1]) == ["d"]
    assert result[1].total_count == 1


def test_delete_items_keeps_untouched_sections(service, sections):
    result = service.delete_items([Item("a")], sections)
    assert result[1] is sections[1]


def test_delete_and_insert_are_inverse_on_totals(service, make_section):
    sections = [make_section("s0", ["a", "b", "c"])]
    deleted = service.delete_items([Item("b")], sections)
    assert deleted[0].total_count == 2
    inserted = service.insert({Index(0, 1): Item("b")}, deleted)
    assert inserted[0].total_count == 3
    assert inserted == sections


def test_delete_keeps_server_total_above_held_items(service, make_section):
    sections = [make_section("s0", ["a", "b"], total_count=40)]
    result = service.delete_items([Item("a")], sections)
    assert result[0].total_count == 39


def test_delete_total_never_negative(service, make_section):
    sections = [make_section("s0", ["a", "b"], total_count=0)]
    result = service.delete_items([Item("a"), Item("b")], sections)
    assert result[0].total_count == 0
    assert result[0].items == ()


def test_delete_indices_uses_one_snapshot(service, sections, ids_of):
    # Deleting positions 0 and 1 removes a and b, not a and c
    result = service.delete_indices([Index(0, 0), Index(0, 1), Index(0, 1)], sections)
    assert ids_of(result[0]) == ["c"]
    assert result[0].total_count == 1
    assert result[1] is sections[1]


def test_delete_indices_ignores_out_of_range(service, sections):
    assert service.delete_indices([Index(0, 3), Index(4, 0), Index(-1, 0)], sections) == sections


def test_delete_appends_removed_items_to_cache(service, sections):
    cache = DeletionCache()
    service.delete_items([Item("a")], sections, cache)
    service.delete_indices([Index(1, 1)], sections, cache)
    assert [item.identity for item in cache] == ["a", "e"]


# ----------------------------------------------------------------- update / replace

def test_update_items_in_place_and_idempotent(service, sections):
    updated = Item("b", payload={"title": "B2"})
    once = service.update_items([updated], sections)
    twice = service.update_items([updated], once)

    assert once == twice
    assert once[0].items[1] is updated
    assert once[0].total_count == sections[0].total_count


def test_update_items_ignores_unknown_identities(service, sections):
    result = service.update_items([Item("zzz")], sections)
    assert result == sections


def test_update_sections_swaps_by_identity(service, sections, make_section, ids_of):
    replacement = make_section("s1", ["q"], total_count=10, can_load_more=True)
    result = service.update_sections([replacement, make_section("unknown", ["w"])], sections)
    assert len(result) == 2
    assert result[0] is sections[0]
    assert result[1] is replacement


def test_replace_items_overwrites_position_regardless_of_identity(service, sections, ids_of):
    result = service.replace_items({Index(0, 2): Item("z"), Index(1, 5): Item("w")}, sections)
    assert ids_of(result[0]) == ["a", "b", "z"]
    assert result[0].total_count == 3
    assert result[1] is sections[1]
