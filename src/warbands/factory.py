"""Service Factory for the warband builder.

This module provides factory functions for creating service instances with
proper dependency wiring. Use these functions in production code to ensure
all service dependencies are correctly initialized.

For testing, inject protocol-based fakes instead of using these factories.

Example:
    # Production usage
    from warbands.factory import create_warband_service
    service = create_warband_service(repository)

    # Testing usage
    from warbands.services.warband_service import WarbandService

    class FakeValidation:
        def validate_warband(self, warband):
            return ValidationResult(valid=True)

    service = WarbandService(repository, catalog, validator=FakeValidation())
"""

from warbands.domain.catalog import GameCatalog, get_catalog
from warbands.domain.rules_config import DEFAULT_RULES, RulesConfig
from warbands.interfaces import IWarbandRepository
from warbands.services.cost_engine import CostEngine
from warbands.services.validation_service import ValidationService
from warbands.services.warband_service import WarbandService


def create_cost_engine(rules: RulesConfig = DEFAULT_RULES) -> CostEngine:
    """Create a CostEngine bound to a rules configuration.

    Args:
        rules: Point tables and ability discounts to price with

    Returns:
        Fully initialized CostEngine
    """
    return CostEngine(rules)


def create_validation_service(rules: RulesConfig = DEFAULT_RULES) -> ValidationService:
    """Create a ValidationService bound to a rules configuration.

    Args:
        rules: Limits and message templates to validate with

    Returns:
        Fully initialized ValidationService
    """
    return ValidationService(rules)


def create_warband_service(
    repository: IWarbandRepository,
    *,
    catalog: GameCatalog | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> WarbandService:
    """Create a WarbandService with all dependencies.

    Args:
        repository: Storage for warband snapshots
        catalog: Game catalog; the bundled catalog when omitted
        rules: Rules configuration shared by pricing and validation

    Returns:
        Fully initialized WarbandService with ValidationService dependency
    """
    validator = create_validation_service(rules)
    return WarbandService(
        repository,
        catalog if catalog is not None else get_catalog(),
        rules=rules,
        validator=validator,
    )
