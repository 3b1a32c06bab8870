"""Read-only game catalog loaded from packaged JSON files."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from .enums import LeaderTrait, WarbandAbility, WeaponKind
from .errors import CatalogError
from .models import AbilityInfo, Equipment, LeaderTraitInfo, PsychicPower, Weapon

DEFAULT_CATALOG_DIR = Path(__file__).resolve().parents[1] / "data"

WEAPONS_FILE = "weapons.json"
EQUIPMENT_FILE = "equipment.json"
PSYCHIC_POWERS_FILE = "psychic_powers.json"
LEADER_TRAITS_FILE = "leader_traits.json"
ABILITIES_FILE = "abilities.json"


class _CatalogItem(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...


ItemT = TypeVar("ItemT", bound=_CatalogItem)


def _find(items: Iterable[ItemT], key: str, label: str) -> ItemT:
    for item in items:
        if item.id == key or item.name == key:
            return item
    raise KeyError(f"{label} '{key}' not in catalog")


@dataclass(frozen=True, slots=True)
class GameCatalog:
    """Immutable lookup tables for every selectable item."""

    weapons: tuple[Weapon, ...]
    equipment: tuple[Equipment, ...]
    psychic_powers: tuple[PsychicPower, ...]
    leader_traits: tuple[LeaderTraitInfo, ...]
    abilities: tuple[AbilityInfo, ...]

    @property
    def close_combat_weapons(self) -> tuple[Weapon, ...]:
        return tuple(weapon for weapon in self.weapons if weapon.kind == WeaponKind.CLOSE)

    @property
    def ranged_weapons(self) -> tuple[Weapon, ...]:
        return tuple(weapon for weapon in self.weapons if weapon.kind == WeaponKind.RANGED)

    @property
    def default_close_weapon(self) -> Weapon:
        """The free close-combat weapon every new weirdo starts with."""

        for weapon in self.close_combat_weapons:
            if weapon.base_cost == 0:
                return weapon
        raise CatalogError("catalog has no free close-combat weapon")

    def weapon(self, key: str) -> Weapon:
        """Look a weapon up by id or name; raises ``KeyError`` when absent."""

        return _find(self.weapons, key, "weapon")

    def equipment_item(self, key: str) -> Equipment:
        return _find(self.equipment, key, "equipment")

    def psychic_power(self, key: str) -> PsychicPower:
        return _find(self.psychic_powers, key, "psychic power")

    def leader_trait(self, trait: LeaderTrait) -> LeaderTraitInfo:
        for info in self.leader_traits:
            if info.trait == trait:
                return info
        raise KeyError(f"leader trait '{trait}' not in catalog")

    def ability(self, ability: WarbandAbility) -> AbilityInfo:
        for info in self.abilities:
            if info.ability == ability:
                return info
        raise KeyError(f"ability '{ability}' not in catalog")


def _read(directory: Path, filename: str, adapter: TypeAdapter) -> list:
    path = directory / filename
    try:
        payload = path.read_bytes()
    except FileNotFoundError as exc:
        raise CatalogError(f"catalog file not found: {path}") from exc
    except OSError as exc:
        raise CatalogError(f"unable to read catalog file: {path}") from exc

    try:
        return adapter.validate_json(payload)
    except ValidationError as exc:
        raise CatalogError(f"invalid catalog data in {path}: {exc}") from exc


def _ensure_unique(items: Iterable[object], key: str, filename: str) -> None:
    seen: set[object] = set()
    for item in items:
        value = getattr(item, key)
        if value in seen:
            raise CatalogError(f"duplicate {key} '{value}' in {filename}")
        seen.add(value)


def load_catalog(directory: Path | None = None) -> GameCatalog:
    """Load and check every catalog file in ``directory``."""

    directory = directory or DEFAULT_CATALOG_DIR

    weapons = _read(directory, WEAPONS_FILE, TypeAdapter(list[Weapon]))
    equipment = _read(directory, EQUIPMENT_FILE, TypeAdapter(list[Equipment]))
    powers = _read(directory, PSYCHIC_POWERS_FILE, TypeAdapter(list[PsychicPower]))
    traits = _read(directory, LEADER_TRAITS_FILE, TypeAdapter(list[LeaderTraitInfo]))
    abilities = _read(directory, ABILITIES_FILE, TypeAdapter(list[AbilityInfo]))

    for items, filename in (
        (weapons, WEAPONS_FILE),
        (equipment, EQUIPMENT_FILE),
        (powers, PSYCHIC_POWERS_FILE),
    ):
        _ensure_unique(items, "id", filename)
        _ensure_unique(items, "name", filename)
        for item in items:
            if item.base_cost < 0:
                raise CatalogError(f"negative base cost for '{item.name}' in {filename}")
    _ensure_unique(traits, "trait", LEADER_TRAITS_FILE)
    _ensure_unique(abilities, "ability", ABILITIES_FILE)

    catalog = GameCatalog(
        weapons=tuple(weapons),
        equipment=tuple(equipment),
        psychic_powers=tuple(powers),
        leader_traits=tuple(traits),
        abilities=tuple(abilities),
    )
    if not any(weapon.base_cost == 0 for weapon in catalog.close_combat_weapons):
        raise CatalogError(f"{WEAPONS_FILE} has no free close-combat weapon")
    return catalog


@lru_cache
def get_catalog(directory: Path | None = None) -> GameCatalog:
    """Return a cached catalog; loaded once per directory."""

    return load_catalog(directory)
