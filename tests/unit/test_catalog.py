"""Tests for loading and querying the game catalog."""

from __future__ import annotations

import json
import shutil

import pytest

from warbands.domain.catalog import DEFAULT_CATALOG_DIR, get_catalog, load_catalog
from warbands.domain.enums import LeaderTrait, WarbandAbility, WeaponKind
from warbands.domain.errors import CatalogError


@pytest.fixture
def catalog_dir(tmp_path):
    target = tmp_path / "catalog"
    shutil.copytree(DEFAULT_CATALOG_DIR, target)
    return target


def _rewrite(path, mutate) -> None:
    payload = json.loads(path.read_text())
    path.write_text(json.dumps(mutate(payload)))


class TestBundledCatalog:
    """The packaged catalog loads and answers lookups."""

    def test_every_section_is_populated(self):
        catalog = get_catalog()
        assert catalog.close_combat_weapons
        assert catalog.ranged_weapons
        assert catalog.equipment
        assert catalog.psychic_powers
        assert {info.trait for info in catalog.leader_traits} == set(LeaderTrait)
        assert {info.ability for info in catalog.abilities} == set(WarbandAbility)

    def test_catalog_is_cached(self):
        assert get_catalog() is get_catalog()

    def test_weapon_kinds_partition_the_list(self):
        catalog = get_catalog()
        assert all(w.kind == WeaponKind.CLOSE for w in catalog.close_combat_weapons)
        assert all(w.kind == WeaponKind.RANGED for w in catalog.ranged_weapons)
        assert len(catalog.close_combat_weapons) + len(catalog.ranged_weapons) == len(
            catalog.weapons
        )

    def test_default_close_weapon_is_free(self):
        weapon = get_catalog().default_close_weapon
        assert weapon.name == "Unarmed"
        assert weapon.base_cost == 0

    def test_lookup_by_id_or_name(self):
        catalog = get_catalog()
        assert catalog.weapon("claws-teeth") is catalog.weapon("Claws & Teeth")
        assert catalog.equipment_item("heavy-armor").name == "Heavy Armor"
        assert catalog.psychic_power("Mind Stab").base_cost == 2
        assert catalog.leader_trait(LeaderTrait.HEALER).description
        assert catalog.ability(WarbandAbility.CYBORGS).description

    def test_unknown_lookup_raises_key_error(self):
        with pytest.raises(KeyError):
            get_catalog().weapon("Banana")
        with pytest.raises(KeyError):
            get_catalog().equipment_item("Banana")


class TestCatalogErrors:
    """Malformed catalogs are refused with CatalogError."""

    def test_copy_loads(self, catalog_dir):
        assert load_catalog(catalog_dir).weapons == get_catalog().weapons

    def test_missing_file(self, catalog_dir):
        (catalog_dir / "equipment.json").unlink()
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(catalog_dir)

    def test_invalid_json(self, catalog_dir):
        (catalog_dir / "weapons.json").write_text("{not json")
        with pytest.raises(CatalogError, match="invalid catalog data"):
            load_catalog(catalog_dir)

    def test_unknown_kind(self, catalog_dir):
        def mutate(items):
            items[0]["kind"] = "thrown"
            return items

        _rewrite(catalog_dir / "weapons.json", mutate)
        with pytest.raises(CatalogError):
            load_catalog(catalog_dir)

    def test_duplicate_id(self, catalog_dir):
        _rewrite(catalog_dir / "psychic_powers.json", lambda items: [*items, dict(items[0])])
        with pytest.raises(CatalogError, match="duplicate id"):
            load_catalog(catalog_dir)

    def test_negative_cost(self, catalog_dir):
        def mutate(items):
            items[1]["base_cost"] = -1
            return items

        _rewrite(catalog_dir / "equipment.json", mutate)
        with pytest.raises(CatalogError, match="negative base cost"):
            load_catalog(catalog_dir)

    def test_no_free_close_weapon(self, catalog_dir):
        def mutate(items):
            for item in items:
                if item["kind"] == "close" and item["base_cost"] == 0:
                    item["base_cost"] = 1
            return items

        _rewrite(catalog_dir / "weapons.json", mutate)
        with pytest.raises(CatalogError, match="free close-combat weapon"):
            load_catalog(catalog_dir)
