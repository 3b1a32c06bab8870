"""Unit tests for attribute, item, weirdo and warband pricing."""

from __future__ import annotations

import dataclasses

import pytest

from warbands.domain import models as dm
from warbands.domain.catalog import get_catalog
from warbands.domain.costs import (
    attribute_cost,
    cost_breakdown,
    equipment_cost,
    psychic_power_cost,
    warband_cost,
    weapon_cost,
    weirdo_cost,
)
from warbands.domain.enums import (
    DiceLevel,
    FirepowerLevel,
    SpeedLevel,
    WarbandAbility,
    WeirdoRole,
)
from warbands.domain.rules_config import DEFAULT_RULES, AbilityCostRule, CostRules, RulesConfig

CATALOG = get_catalog()


def _weirdo(
    *,
    attributes: dm.Attributes | None = None,
    close: tuple[str, ...] = ("Unarmed",),
    ranged: tuple[str, ...] = (),
    equipment: tuple[str, ...] = (),
    powers: tuple[str, ...] = (),
) -> dm.Weirdo:
    return dm.Weirdo(
        id=dm.WeirdoID("w1"),
        name="Zed",
        role=WeirdoRole.TROOPER,
        attributes=attributes if attributes is not None else dm.Attributes(),
        close_combat_weapons=[CATALOG.weapon(name) for name in close],
        ranged_weapons=[CATALOG.weapon(name) for name in ranged],
        equipment=[CATALOG.equipment_item(name) for name in equipment],
        psychic_powers=[CATALOG.psychic_power(name) for name in powers],
    )


class TestAttributeCost:
    """Tests for attribute tier pricing."""

    def test_minimum_tiers(self):
        assert attribute_cost(dm.Attributes()) == 6

    def test_maximum_tiers(self):
        attributes = dm.Attributes(
            speed=SpeedLevel.THREE,
            defense=DiceLevel.D10,
            firepower=FirepowerLevel.D10,
            prowess=DiceLevel.D10,
            willpower=DiceLevel.D10,
        )
        assert attribute_cost(attributes) == 3 + 8 + 4 + 6 + 6

    @pytest.mark.parametrize(
        ("trait", "level", "expected"),
        [
            ("speed", SpeedLevel.TWO, 1),
            ("defense", DiceLevel.D8, 4),
            ("firepower", FirepowerLevel.D8, 2),
            ("prowess", DiceLevel.D8, 4),
            ("willpower", DiceLevel.D8, 4),
        ],
    )
    def test_single_tier_increase(self, trait, level, expected):
        baseline = attribute_cost(dm.Attributes())
        attributes = dataclasses.replace(dm.Attributes(), **{trait: level})
        minimum = {"speed": 0, "defense": 2, "firepower": 0, "prowess": 2, "willpower": 2}[trait]
        assert attribute_cost(attributes) == baseline - minimum + expected

    def test_defense_top_tier_costs_more_than_prowess(self):
        defense = dm.Attributes(defense=DiceLevel.D10)
        prowess = dm.Attributes(prowess=DiceLevel.D10)
        assert attribute_cost(defense) - attribute_cost(prowess) == 2

    def test_absent_attributes_cost_nothing(self):
        assert attribute_cost(None) == 0

    def test_unset_traits_are_skipped(self):
        attributes = dm.Attributes(speed=None, defense=None)
        assert attribute_cost(attributes) == 4

    def test_unknown_tier_raises(self):
        rules = RulesConfig(costs=CostRules(speed={SpeedLevel.ONE: 0}))
        with pytest.raises(ValueError, match="unknown speed tier"):
            attribute_cost(dm.Attributes(speed=SpeedLevel.TWO), rules)

    def test_negative_table_entry_is_clamped(self):
        rules = RulesConfig(
            costs=CostRules(speed={SpeedLevel.ONE: -5, SpeedLevel.TWO: 1, SpeedLevel.THREE: 3})
        )
        assert attribute_cost(dm.Attributes(), rules) == 6


class TestWeaponCost:
    """Tests for weapon pricing under abilities."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("Claws & Teeth", 1), ("Horrible Claws & Teeth", 2), ("Whip/Tail", 1)],
    )
    def test_mutants_discount_natural_weapons(self, name, expected):
        assert weapon_cost(CATALOG.weapon(name), WarbandAbility.MUTANTS) == expected

    def test_mutants_do_not_discount_other_weapons(self):
        assert weapon_cost(CATALOG.weapon("Power Weapon"), WarbandAbility.MUTANTS) == 3
        assert weapon_cost(CATALOG.weapon("Laser Rifle"), WarbandAbility.MUTANTS) == 2

    def test_heavily_armed_discounts_ranged_weapons(self):
        assert weapon_cost(CATALOG.weapon("Laser Rifle"), WarbandAbility.HEAVILY_ARMED) == 1
        assert weapon_cost(CATALOG.weapon("Auto Rifle"), WarbandAbility.HEAVILY_ARMED) == 0

    def test_heavily_armed_discount_never_goes_negative(self):
        assert weapon_cost(CATALOG.weapon("Auto Pistol"), WarbandAbility.HEAVILY_ARMED) == 0

    def test_heavily_armed_leaves_close_weapons_alone(self):
        assert weapon_cost(CATALOG.weapon("Claws & Teeth"), WarbandAbility.HEAVILY_ARMED) == 2

    def test_no_ability_uses_base_cost(self):
        for weapon in CATALOG.weapons:
            assert weapon_cost(weapon, None) == weapon.base_cost

    def test_configured_discount_table(self):
        rules = RulesConfig(
            costs=CostRules(
                ability_rules={
                    WarbandAbility.UNDEAD: AbilityCostRule(
                        weapon_discount=2, discounted_weapon_names=frozenset({"Power Weapon"})
                    )
                }
            )
        )
        weapon = CATALOG.weapon("Power Weapon")
        assert weapon_cost(weapon, WarbandAbility.UNDEAD, rules) == 1
        # Mutants no longer discounts anything under this configuration.
        assert weapon_cost(CATALOG.weapon("Claws & Teeth"), WarbandAbility.MUTANTS, rules) == 2


class TestEquipmentCost:
    """Tests for equipment pricing under abilities."""

    @pytest.mark.parametrize("name", ["Grenade", "Heavy Armor", "Medkit"])
    def test_soldiers_get_listed_equipment_free(self, name):
        assert equipment_cost(CATALOG.equipment_item(name), WarbandAbility.SOLDIERS) == 0

    def test_soldiers_pay_for_other_equipment(self):
        assert equipment_cost(CATALOG.equipment_item("Camo Cloak"), WarbandAbility.SOLDIERS) == 2

    def test_other_abilities_pay_base_cost(self):
        grenade = CATALOG.equipment_item("Grenade")
        assert equipment_cost(grenade, WarbandAbility.CYBORGS) == 1
        assert equipment_cost(grenade, None) == 1


class TestPsychicPowerCost:
    """Tests for psychic power pricing."""

    def test_power_cost_ignores_every_shipped_ability(self):
        power = CATALOG.psychic_power("Telekinesis")
        costs = {psychic_power_cost(power, ability) for ability in [None, *WarbandAbility]}
        assert costs == {3}

    def test_configured_power_discount(self):
        rules = RulesConfig(
            costs=CostRules(
                ability_rules={WarbandAbility.FANATICS: AbilityCostRule(power_discount=5)}
            )
        )
        power = CATALOG.psychic_power("Fear")
        assert psychic_power_cost(power, WarbandAbility.FANATICS, rules) == 0


class TestWeirdoCost:
    """Tests for whole-weirdo and warband totals."""

    def test_default_weirdo_costs_six(self):
        assert weirdo_cost(_weirdo(), None) == 6

    def test_breakdown_sums_categories(self):
        weirdo = _weirdo(
            attributes=dm.Attributes(firepower=FirepowerLevel.D8),
            close=("Claws & Teeth",),
            ranged=("Laser Rifle",),
            equipment=("Grenade", "Camo Cloak"),
            powers=("Fear",),
        )
        breakdown = cost_breakdown(weirdo, WarbandAbility.MUTANTS)
        assert breakdown == dm.CostBreakdown(attributes=8, weapons=3, equipment=3, psychic_powers=1)
        assert breakdown.total == weirdo_cost(weirdo, WarbandAbility.MUTANTS) == 15

    def test_cost_ignores_cached_total(self):
        weirdo = _weirdo()
        weirdo.total_cost = 99
        assert weirdo_cost(weirdo, None) == 6

    def test_warband_cost_uses_warband_ability(self):
        member = _weirdo(close=("Claws & Teeth",))
        warband = dm.Warband(
            id=dm.WarbandID("b1"),
            name="Mutant Crew",
            ability=WarbandAbility.MUTANTS,
            point_limit=75,
            weirdos=[member, dataclasses.replace(member, id=dm.WeirdoID("w2"))],
        )
        assert warband_cost(warband) == 2 * 7
        warband.ability = None
        assert warband_cost(warband, DEFAULT_RULES) == 2 * 8

    def test_empty_warband_costs_nothing(self):
        warband = dm.Warband(
            id=dm.WarbandID("b1"), name="Empty", ability=None, point_limit=125
        )
        assert warband_cost(warband) == 0
