"""Validation Service.

This module exposes the composition rules in
:mod:`warbands.domain.validation` through an object bound to one
:class:`RulesConfig`.  Rule violations are returned, never raised.
"""

from warbands.domain import validation
from warbands.domain.enums import WarbandAbility
from warbands.domain.models import RuleViolation, ValidationResult, Warband, Weirdo
from warbands.domain.rules_config import DEFAULT_RULES, RulesConfig


class ValidationService:
    """Checks weirdos and warbands against the game's composition rules."""

    def __init__(self, rules: RulesConfig = DEFAULT_RULES):
        self.rules = rules

    def validate_weirdo(self, weirdo: Weirdo, warband: Warband) -> list[RuleViolation]:
        """Validate a single weirdo in the context of its warband.

        Args:
            weirdo: The weirdo to check (need not be a member yet)
            warband: The warband providing ability and the other members

        Returns:
            Every violated rule, in check order; empty when the weirdo is legal
        """
        return validation.validate_weirdo(weirdo, warband, self.rules)

    def validate_warband(self, warband: Warband) -> ValidationResult:
        """Validate roster fields, every member and the roster-wide rules."""
        return validation.validate_warband(warband, self.rules)

    def validate_weapon_requirements(self, weirdo: Weirdo) -> list[RuleViolation]:
        return validation.validate_weapon_requirements(weirdo, self.rules)

    def validate_equipment_limit(
        self, weirdo: Weirdo, ability: WarbandAbility | None
    ) -> RuleViolation | None:
        return validation.validate_equipment_limit(weirdo, ability, self.rules)

    def validate_weirdo_point_limit(self, weirdo: Weirdo, warband: Warband) -> RuleViolation | None:
        return validation.validate_weirdo_point_limit(weirdo, warband, self.rules)
