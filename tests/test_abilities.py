import pytest

from cave_quest.simulation.abilities import Ability, AbilitySet, ItemKind
from cave_quest.simulation.grid import TerrainKind
from cave_quest.simulation.placement import ALL_TERRAIN, GRASS_AND_MOUNTAIN, GRASS_ONLY


@pytest.mark.parametrize(
    "kind,ability",
    [
        (ItemKind.BOAT, Ability.SAIL),
        (ItemKind.GOAT, Ability.CLIMB),
        (ItemKind.PICKAXE, Ability.MINE),
        (ItemKind.GOAL, None),
    ],
)
def test_item_grants_ability(kind, ability):
    assert kind.ability is ability


def test_walkable_kinds_follow_abilities():
    assert AbilitySet().walkable_kinds() == {TerrainKind.GRASS}
    assert AbilitySet(can_sail=True).walkable_kinds() == {TerrainKind.GRASS, TerrainKind.WATER}
    assert AbilitySet(can_climb=True).walkable_kinds() == {
        TerrainKind.GRASS,
        TerrainKind.MOUNTAIN,
    }
    # Mining does not open any terrain by itself
    assert AbilitySet(can_mine=True).walkable_kinds() == {TerrainKind.GRASS}


def test_placement_stage_kinds():
    assert GRASS_ONLY == {TerrainKind.GRASS}
    assert GRASS_AND_MOUNTAIN == {TerrainKind.GRASS, TerrainKind.MOUNTAIN}
    assert ALL_TERRAIN == {TerrainKind.GRASS, TerrainKind.WATER, TerrainKind.MOUNTAIN}


def test_empty_is_never_enterable():
    everything = AbilitySet(can_sail=True, can_climb=True, can_mine=True)
    assert not everything.can_enter(TerrainKind.EMPTY)
    assert TerrainKind.EMPTY not in everything.walkable_kinds()


def test_grant_reports_new_abilities_only():
    abilities = AbilitySet()
    assert abilities.grant(Ability.SAIL)
    assert not abilities.grant(Ability.SAIL)
    assert abilities.can_sail
    assert not abilities.can_climb
    assert not abilities.can_mine
