"""Dataclasses describing catalog items, weirdos and warbands.

Catalog records (weapons, equipment, psychic powers, trait and ability
descriptions) are frozen: they are loaded once and shared by every roster.
Weirdos and warbands are plain mutable records whose ``total_cost`` fields
are caches maintained by :mod:`warbands.domain.cascade`.

All of these types round-trip through ``pydantic.TypeAdapter`` so the
repository and the HTTP layer can serialize them without parallel schemas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import NewType
from uuid import uuid4

from .enums import (
    DiceLevel,
    EquipmentKind,
    FirepowerLevel,
    LeaderTrait,
    PowerKind,
    SpeedLevel,
    ValidationCode,
    WarbandAbility,
    WarningCode,
    WeaponKind,
    WeirdoRole,
)

# --- Identifiers ----------------------------------------------------------------

WarbandID = NewType("WarbandID", str)
WeirdoID = NewType("WeirdoID", str)


def new_warband_id() -> WarbandID:
    return WarbandID(uuid4().hex)


def new_weirdo_id() -> WeirdoID:
    return WeirdoID(uuid4().hex)


def _utcnow() -> datetime:
    return datetime.now(UTC)


# --- Catalog records ------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Weapon:
    """Close-combat or ranged weapon (catalog entry)."""

    id: str
    name: str
    kind: WeaponKind
    base_cost: int
    max_actions: int | None = None
    notes: str = ""


@dataclass(frozen=True, slots=True)
class Equipment:
    """Equipment item (catalog entry)."""

    id: str
    name: str
    kind: EquipmentKind
    base_cost: int
    effect: str = ""


@dataclass(frozen=True, slots=True)
class PsychicPower:
    """Psychic power (catalog entry)."""

    id: str
    name: str
    kind: PowerKind
    base_cost: int
    effect: str = ""


@dataclass(frozen=True, slots=True)
class LeaderTraitInfo:
    """Rules text for a leader trait."""

    trait: LeaderTrait
    description: str


@dataclass(frozen=True, slots=True)
class AbilityInfo:
    """Rules text for a warband ability."""

    ability: WarbandAbility
    description: str


# --- Roster records -------------------------------------------------------------


@dataclass(slots=True)
class Attributes:
    """The five weirdo attributes.  ``None`` marks a trait not chosen yet."""

    speed: SpeedLevel | None = SpeedLevel.ONE
    defense: DiceLevel | None = DiceLevel.D6
    firepower: FirepowerLevel | None = FirepowerLevel.NONE
    prowess: DiceLevel | None = DiceLevel.D6
    willpower: DiceLevel | None = DiceLevel.D6

    def missing(self) -> list[str]:
        """Names of the traits that have not been chosen."""

        return [
            name
            for name in ("speed", "defense", "firepower", "prowess", "willpower")
            if getattr(self, name) is None
        ]


@dataclass(slots=True)
class Weirdo:
    """A single character on a warband roster."""

    id: WeirdoID
    name: str
    role: WeirdoRole
    attributes: Attributes | None = field(default_factory=Attributes)
    close_combat_weapons: list[Weapon] = field(default_factory=list)
    ranged_weapons: list[Weapon] = field(default_factory=list)
    equipment: list[Equipment] = field(default_factory=list)
    psychic_powers: list[PsychicPower] = field(default_factory=list)
    leader_trait: LeaderTrait | None = None
    notes: str = ""
    total_cost: int = 0


@dataclass(slots=True)
class Warband:
    """A roster of weirdos built under one ability and point limit."""

    id: WarbandID
    name: str
    ability: WarbandAbility | None
    point_limit: int
    weirdos: list[Weirdo] = field(default_factory=list)
    total_cost: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def find_weirdo(self, weirdo_id: WeirdoID) -> Weirdo | None:
        for weirdo in self.weirdos:
            if weirdo.id == weirdo_id:
                return weirdo
        return None


@dataclass(slots=True)
class WarbandSummary:
    """Listing entry for a stored warband."""

    id: WarbandID
    name: str
    ability: WarbandAbility | None
    point_limit: int
    total_cost: int
    weirdo_count: int
    updated_at: datetime


# --- Engine outputs -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RuleViolation:
    """One broken (or, for warnings, strained) composition rule."""

    field: str
    message: str
    code: ValidationCode | WarningCode


@dataclass(slots=True)
class ValidationResult:
    """Complete validation report for a warband."""

    valid: bool
    errors: list[RuleViolation] = field(default_factory=list)
    warnings: list[RuleViolation] = field(default_factory=list)

    def codes(self) -> list[str]:
        return [str(error.code) for error in self.errors]


@dataclass(frozen=True, slots=True)
class CostBreakdown:
    """Per-category subtotals of a weirdo's cost."""

    attributes: int
    weapons: int
    equipment: int
    psychic_powers: int

    @property
    def total(self) -> int:
        return self.attributes + self.weapons + self.equipment + self.psychic_powers
