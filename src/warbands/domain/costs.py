"""Point-cost rules for attributes, items, weirdos and warbands.

Every function here is pure: costs are derived from catalog records, the
warband ability and a :class:`RulesConfig`, never from cached totals.  Each
individual component is clamped at zero before it is summed, so no single
negative contribution can offset another.
"""

from __future__ import annotations

from collections.abc import Iterable

from .enums import WarbandAbility
from .models import Attributes, CostBreakdown, Equipment, PsychicPower, Warband, Weapon, Weirdo
from .rules_config import DEFAULT_RULES, RulesConfig

# ---------------------------------------------------------------------------
# Attributes


def attribute_cost(attributes: Attributes | None, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Sum the tier costs of the chosen attributes.

    Unset traits contribute nothing; validation reports them separately.
    """

    if attributes is None:
        return 0

    tables = rules.costs
    total = 0
    for trait, table in (
        ("speed", tables.speed),
        ("defense", tables.defense),
        ("firepower", tables.firepower),
        ("prowess", tables.prowess),
        ("willpower", tables.willpower),
    ):
        level = getattr(attributes, trait)
        if level is None:
            continue
        try:
            cost = table[level]
        except KeyError:
            raise ValueError(f"unknown {trait} tier: {level!r}") from None
        total += max(0, cost)
    return total


# ---------------------------------------------------------------------------
# Items


def weapon_cost(
    weapon: Weapon,
    ability: WarbandAbility | None,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Base cost less any discount the ability grants for this weapon."""

    rule = rules.costs.rule_for(ability)
    cost = weapon.base_cost
    if rule.discounts_weapon(weapon.name, weapon.kind):
        cost -= rule.weapon_discount
    return max(0, cost)


def equipment_cost(
    equipment: Equipment,
    ability: WarbandAbility | None,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Base cost, or zero when the ability makes the item free."""

    rule = rules.costs.rule_for(ability)
    if rule.frees_equipment(equipment.name):
        return 0
    return max(0, equipment.base_cost)


def psychic_power_cost(
    power: PsychicPower,
    ability: WarbandAbility | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Base cost of a psychic power.

    No shipped ability discounts powers, but a configured rule may.
    """

    rule = rules.costs.rule_for(ability)
    return max(0, power.base_cost - rule.power_discount)


# ---------------------------------------------------------------------------
# Weirdos and warbands


def cost_breakdown(
    weirdo: Weirdo,
    ability: WarbandAbility | None,
    rules: RulesConfig = DEFAULT_RULES,
) -> CostBreakdown:
    """Per-category subtotals for a weirdo under the given ability."""

    weapons: Iterable[Weapon] = (*weirdo.close_combat_weapons, *weirdo.ranged_weapons)
    return CostBreakdown(
        attributes=attribute_cost(weirdo.attributes, rules),
        weapons=sum(weapon_cost(weapon, ability, rules) for weapon in weapons),
        equipment=sum(equipment_cost(item, ability, rules) for item in weirdo.equipment),
        psychic_powers=sum(
            psychic_power_cost(power, ability, rules) for power in weirdo.psychic_powers
        ),
    )


def weirdo_cost(
    weirdo: Weirdo,
    ability: WarbandAbility | None,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Total point cost of a weirdo under the given ability."""

    return cost_breakdown(weirdo, ability, rules).total


def warband_cost(warband: Warband, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Sum of every member's cost under the warband's ability."""

    return sum(weirdo_cost(weirdo, warband.ability, rules) for weirdo in warband.weirdos)
