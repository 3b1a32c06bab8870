"""Property-based tests for pricing, validation and the cascade.

Tests cover:
- Costs are never negative and never exceed the undiscounted price
- Ability discounts only touch the items they name
- Validation output shape (codes, field ids)
- Stored totals always equal the sum of derived member costs
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from warbands.domain import cascade
from warbands.domain import models as dm
from warbands.domain.catalog import get_catalog
from warbands.domain.costs import (
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
    ValidationCode,
    WarbandAbility,
    WeirdoRole,
)
from warbands.domain.rules_config import MUTANT_WEAPONS, SOLDIER_FREE_EQUIPMENT
from warbands.domain.validation import validate_warband, validate_weirdo

CATALOG = get_catalog()

abilities = st.one_of(st.none(), st.sampled_from(list(WarbandAbility)))


@st.composite
def attribute_sets(draw):
    def maybe(levels):
        return draw(st.one_of(st.sampled_from(list(levels)), st.none()))

    return dm.Attributes(
        speed=maybe(SpeedLevel),
        defense=maybe(DiceLevel),
        firepower=maybe(FirepowerLevel),
        prowess=maybe(DiceLevel),
        willpower=maybe(DiceLevel),
    )


@st.composite
def weirdos(draw, weirdo_id: str | None = None):
    return dm.Weirdo(
        id=dm.WeirdoID(weirdo_id or draw(st.uuids()).hex),
        name=draw(st.text(max_size=12)),
        role=draw(st.sampled_from(list(WeirdoRole))),
        attributes=draw(st.one_of(attribute_sets(), st.none())),
        close_combat_weapons=draw(
            st.lists(st.sampled_from(CATALOG.close_combat_weapons), max_size=2)
        ),
        ranged_weapons=draw(st.lists(st.sampled_from(CATALOG.ranged_weapons), max_size=2)),
        equipment=draw(st.lists(st.sampled_from(CATALOG.equipment), max_size=4)),
        psychic_powers=draw(st.lists(st.sampled_from(CATALOG.psychic_powers), max_size=3)),
    )


@st.composite
def warbands(draw):
    count = draw(st.integers(min_value=0, max_value=6))
    members = [draw(weirdos(weirdo_id=f"w{index}")) for index in range(count)]
    return dm.Warband(
        id=dm.WarbandID("b1"),
        name=draw(st.text(max_size=12)),
        ability=draw(abilities),
        point_limit=draw(st.sampled_from([75, 125, 100])),
        weirdos=members,
    )


class TestCostProperties:
    """Pricing invariants over the shipped catalog."""

    @given(weapon=st.sampled_from(CATALOG.weapons), ability=abilities)
    def test_weapon_cost_bounded(self, weapon, ability):
        cost = weapon_cost(weapon, ability)
        assert 0 <= cost <= weapon.base_cost

    @given(item=st.sampled_from(CATALOG.equipment), ability=abilities)
    def test_equipment_cost_bounded(self, item, ability):
        cost = equipment_cost(item, ability)
        assert 0 <= cost <= item.base_cost

    @given(weapon=st.sampled_from(CATALOG.weapons))
    def test_mutants_only_discount_named_weapons(self, weapon):
        if weapon.name not in MUTANT_WEAPONS:
            assert weapon_cost(weapon, WarbandAbility.MUTANTS) == weapon_cost(weapon, None)

    @given(item=st.sampled_from(CATALOG.equipment))
    def test_soldiers_only_free_listed_equipment(self, item):
        expected = 0 if item.name in SOLDIER_FREE_EQUIPMENT else item.base_cost
        assert equipment_cost(item, WarbandAbility.SOLDIERS) == expected

    @given(power=st.sampled_from(CATALOG.psychic_powers), ability=abilities)
    def test_power_cost_independent_of_ability(self, power, ability):
        assert psychic_power_cost(power, ability) == psychic_power_cost(power, None)

    @given(weirdo=weirdos(), ability=abilities)
    def test_weirdo_cost_never_negative(self, weirdo, ability):
        assert weirdo_cost(weirdo, ability) >= 0


class TestValidationProperties:
    """Shape of validation output."""

    @given(warband=warbands())
    @settings(max_examples=50)
    def test_errors_carry_codes_and_valid_flag(self, warband):
        result = validate_warband(warband)
        assert result.valid == (result.errors == [])
        for error in result.errors:
            assert isinstance(error.code, ValidationCode)
            assert error.message

    @given(weirdo=weirdos())
    def test_weirdo_errors_point_at_the_weirdo(self, weirdo):
        warband = dm.Warband(
            id=dm.WarbandID("b1"), name="Crew", ability=None, point_limit=75, weirdos=[weirdo]
        )
        for error in validate_weirdo(weirdo, warband):
            assert error.field.startswith(f"weirdo.{weirdo.id}.")


class TestCascadeProperties:
    """Stored totals stay consistent through any sequence of edits."""

    @given(warband=warbands())
    @settings(max_examples=50)
    def test_recalculate_is_consistent_and_idempotent(self, warband):
        once = cascade.recalculate(warband).warband
        assert cascade.costs_consistent(once)
        assert once.total_cost == warband_cost(once)
        assert cascade.recalculate(once).warband == once

    @given(
        warband=warbands(),
        ability=abilities,
        newcomer=weirdos(weirdo_id="new"),
    )
    @settings(max_examples=50)
    def test_edits_keep_totals_consistent(self, warband, ability, newcomer):
        result = cascade.add_weirdo(warband, newcomer)
        assert cascade.costs_consistent(result.warband)

        result = cascade.update_warband(result.warband, ability=ability)
        assert cascade.costs_consistent(result.warband)

        result = cascade.remove_weirdo(result.warband, dm.WeirdoID("new"))
        assert cascade.costs_consistent(result.warband)
        assert result.warband.total_cost == warband_cost(result.warband)
