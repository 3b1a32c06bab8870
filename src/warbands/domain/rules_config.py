"""Declarative rule configuration for the warband engine.

Every constant the cost and validation rules depend on lives here.  A
``RulesConfig`` value is passed explicitly into the engine, so tests can run
several configurations side by side without touching shared state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import (
    DiceLevel,
    FirepowerLevel,
    SpeedLevel,
    WarbandAbility,
    WeaponKind,
    WeirdoRole,
)


@dataclass(frozen=True, slots=True)
class AbilityCostRule:
    """Item discounts granted by one warband ability."""

    weapon_discount: int = 0
    discounted_weapon_names: frozenset[str] = frozenset()
    discounted_weapon_kinds: frozenset[WeaponKind] = frozenset()
    free_equipment_names: frozenset[str] = frozenset()
    power_discount: int = 0

    def discounts_weapon(self, name: str, kind: WeaponKind) -> bool:
        if self.weapon_discount <= 0:
            return False
        return name in self.discounted_weapon_names or kind in self.discounted_weapon_kinds

    def frees_equipment(self, name: str) -> bool:
        return name in self.free_equipment_names


MUTANT_WEAPONS = frozenset({"Claws & Teeth", "Horrible Claws & Teeth", "Whip/Tail"})
SOLDIER_FREE_EQUIPMENT = frozenset({"Grenade", "Heavy Armor", "Medkit"})


def _default_ability_rules() -> dict[WarbandAbility, AbilityCostRule]:
    return {
        WarbandAbility.MUTANTS: AbilityCostRule(
            weapon_discount=1,
            discounted_weapon_names=MUTANT_WEAPONS,
        ),
        WarbandAbility.HEAVILY_ARMED: AbilityCostRule(
            weapon_discount=1,
            discounted_weapon_kinds=frozenset({WeaponKind.RANGED}),
        ),
        WarbandAbility.SOLDIERS: AbilityCostRule(free_equipment_names=SOLDIER_FREE_EQUIPMENT),
    }


NO_ABILITY_RULE = AbilityCostRule()


@dataclass(frozen=True, slots=True)
class CostRules:
    """Attribute tier costs and ability discount tables."""

    speed: dict[SpeedLevel, int] = field(
        default_factory=lambda: {SpeedLevel.ONE: 0, SpeedLevel.TWO: 1, SpeedLevel.THREE: 3}
    )
    defense: dict[DiceLevel, int] = field(
        default_factory=lambda: {DiceLevel.D6: 2, DiceLevel.D8: 4, DiceLevel.D10: 8}
    )
    firepower: dict[FirepowerLevel, int] = field(
        default_factory=lambda: {
            FirepowerLevel.NONE: 0,
            FirepowerLevel.D8: 2,
            FirepowerLevel.D10: 4,
        }
    )
    prowess: dict[DiceLevel, int] = field(
        default_factory=lambda: {DiceLevel.D6: 2, DiceLevel.D8: 4, DiceLevel.D10: 6}
    )
    willpower: dict[DiceLevel, int] = field(
        default_factory=lambda: {DiceLevel.D6: 2, DiceLevel.D8: 4, DiceLevel.D10: 6}
    )
    ability_rules: dict[WarbandAbility, AbilityCostRule] = field(
        default_factory=_default_ability_rules
    )

    def rule_for(self, ability: WarbandAbility | None) -> AbilityCostRule:
        if ability is None:
            return NO_ABILITY_RULE
        return self.ability_rules.get(ability, NO_ABILITY_RULE)


@dataclass(frozen=True, slots=True)
class EquipmentLimits:
    """Equipment slots per weirdo, keyed on role and the expanding ability."""

    leader_standard: int = 2
    leader_expanded: int = 3
    trooper_standard: int = 1
    trooper_expanded: int = 2
    expanding_ability: WarbandAbility = WarbandAbility.CYBORGS

    def limit_for(self, role: WeirdoRole, ability: WarbandAbility | None) -> int:
        expanded = ability == self.expanding_ability
        if role == WeirdoRole.LEADER:
            return self.leader_expanded if expanded else self.leader_standard
        return self.trooper_expanded if expanded else self.trooper_standard


@dataclass(frozen=True, slots=True)
class PointRules:
    """Roster point limits and the single premium slot."""

    allowed_limits: tuple[int, ...] = (75, 125)
    standard_weirdo_limit: int = 20
    premium_band_min: int = 21
    premium_band_max: int = 25
    warning_threshold: float = 0.9

    def in_premium_band(self, cost: int) -> bool:
        return self.premium_band_min <= cost <= self.premium_band_max


@dataclass(frozen=True, slots=True)
class ValidationMessages:
    """Message templates; ``{placeholder}`` tokens are filled at report time."""

    warband_name_required: str = "Warband name is required"
    warband_ability_required: str = "Warband ability must be selected"
    invalid_point_limit: str = "Point limit must be one of {allowed}"
    weirdo_name_required: str = "Weirdo name is required"
    attributes_incomplete: str = "All five attributes must be selected"
    close_combat_weapon_required: str = "At least one close combat weapon is required"
    ranged_weapon_required: str = "Ranged weapon required when Firepower is {firepower}"
    firepower_required_for_ranged_weapon: str = (
        "Firepower of 2d8 or 2d10 is required to use ranged weapons"
    )
    equipment_limit_exceeded: str = "Equipment limit exceeded: {role} can have {limit} items"
    leader_trait_invalid: str = "Leader trait can only be assigned to leaders"
    weirdo_over_standard_limit: str = "{role} cost ({cost}) exceeds {limit}-point limit"
    weirdo_over_maximum: str = "{role} cost ({cost}) exceeds {maximum}-point maximum"
    multiple_premium_weirdos: str = "Only one weirdo may cost {band_min}-{band_max} points"
    multiple_leaders: str = "A warband may have only one leader"
    warband_point_limit_exceeded: str = (
        "Warband total cost ({cost}) exceeds point limit ({limit})"
    )
    warband_near_point_limit: str = (
        "Warband total cost ({cost}) is close to the point limit ({limit})"
    )


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for the engine."""

    costs: CostRules = field(default_factory=CostRules)
    equipment: EquipmentLimits = EquipmentLimits()
    points: PointRules = PointRules()
    messages: ValidationMessages = ValidationMessages()


DEFAULT_RULES = RulesConfig()
