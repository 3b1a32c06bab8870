"""Runtime primitives backing the warband HTTP API."""

from __future__ import annotations

import logging

from warbands.config import Settings, get_settings
from warbands.domain.catalog import get_catalog
from warbands.domain.rules_config import DEFAULT_RULES, RulesConfig
from warbands.factory import create_cost_engine, create_validation_service, create_warband_service
from warbands.interfaces import ICostEngine, IValidationService
from warbands.repository import JsonWarbandRepository

logger = logging.getLogger(__name__)


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        self.catalog = get_catalog(self.settings.catalog_dir)
        self.repository = JsonWarbandRepository(self.settings.data_dir)
        self.costs: ICostEngine = create_cost_engine(rules)
        self.validation: IValidationService = create_validation_service(rules)
        self.warbands = create_warband_service(self.repository, catalog=self.catalog, rules=rules)
        logger.info(
            "API state ready: data_dir=%s catalog=%d weapons, %d equipment, %d powers",
            self.settings.data_dir,
            len(self.catalog.weapons),
            len(self.catalog.equipment),
            len(self.catalog.psychic_powers),
        )

    async def shutdown(self) -> None:
        logger.info("API state shut down")


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
