"""Cost and Validation Protocol Interfaces.

This module defines the protocols for the pricing and rule-checking services
so the roster service and the HTTP layer can be exercised with fakes.
"""

from typing import Protocol

from warbands.domain.enums import WarbandAbility
from warbands.domain.models import CostBreakdown, RuleViolation, ValidationResult, Warband, Weirdo


class ICostEngine(Protocol):
    """Protocol for services that price weirdos and warbands."""

    def weirdo_cost(self, weirdo: Weirdo, ability: WarbandAbility | None) -> int:
        """Total cost of a weirdo under an ability."""
        ...

    def warband_cost(self, warband: Warband) -> int:
        """Total cost of a warband under its own ability."""
        ...

    def cost_breakdown(self, weirdo: Weirdo, ability: WarbandAbility | None) -> CostBreakdown:
        """Per-category subtotals for a weirdo."""
        ...


class IValidationService(Protocol):
    """Protocol for services that check composition rules."""

    def validate_weirdo(self, weirdo: Weirdo, warband: Warband) -> list[RuleViolation]:
        """Every weirdo-level violation, evaluated in its warband's context."""
        ...

    def validate_warband(self, warband: Warband) -> ValidationResult:
        """Complete report for a warband, including every member."""
        ...
