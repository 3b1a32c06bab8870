"""Cost Engine Service.

This module wraps the pure pricing rules in :mod:`warbands.domain.costs`
behind an object constructed with an explicit :class:`RulesConfig`, so
several configurations can coexist in one process.
"""

from warbands.domain import costs
from warbands.domain.enums import WarbandAbility
from warbands.domain.models import (
    Attributes,
    CostBreakdown,
    Equipment,
    PsychicPower,
    Warband,
    Weapon,
    Weirdo,
)
from warbands.domain.rules_config import DEFAULT_RULES, RulesConfig


class CostEngine:
    """Prices attributes, items, weirdos and warbands."""

    def __init__(self, rules: RulesConfig = DEFAULT_RULES):
        self.rules = rules

    def attribute_cost(self, attributes: Attributes | None) -> int:
        return costs.attribute_cost(attributes, self.rules)

    def weapon_cost(self, weapon: Weapon, ability: WarbandAbility | None) -> int:
        return costs.weapon_cost(weapon, ability, self.rules)

    def equipment_cost(self, equipment: Equipment, ability: WarbandAbility | None) -> int:
        return costs.equipment_cost(equipment, ability, self.rules)

    def psychic_power_cost(
        self, power: PsychicPower, ability: WarbandAbility | None = None
    ) -> int:
        return costs.psychic_power_cost(power, ability, self.rules)

    def weirdo_cost(self, weirdo: Weirdo, ability: WarbandAbility | None) -> int:
        """Calculate the total cost of a weirdo.

        Args:
            weirdo: The weirdo to price
            ability: The owning warband's ability (or None)

        Returns:
            Point cost, never negative
        """
        return costs.weirdo_cost(weirdo, ability, self.rules)

    def warband_cost(self, warband: Warband) -> int:
        """Calculate the total cost of a warband under its own ability."""
        return costs.warband_cost(warband, self.rules)

    def cost_breakdown(self, weirdo: Weirdo, ability: WarbandAbility | None) -> CostBreakdown:
        return costs.cost_breakdown(weirdo, ability, self.rules)
