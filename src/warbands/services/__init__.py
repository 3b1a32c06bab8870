"""Service layer for warband building.

Services bind the pure domain rules to an explicit rules configuration and,
for the roster service, to storage:

- CostEngine: prices attributes, items, weirdos and warbands
- ValidationService: reports every violated composition rule
- WarbandService: load, edit-and-cascade, save; one lock per warband

Production Usage:
    from warbands.factory import create_warband_service
    service = create_warband_service(repository)
    result = service.update_weirdo(warband_id, weirdo_id, name="Zed")

Testing Usage:
    from warbands.services.warband_service import WarbandService

    class FakeRepository:
        def __init__(self):
            self.saved = {}
        def save(self, warband):
            self.saved[warband.id] = warband
        ...

    service = WarbandService(FakeRepository(), catalog)
"""

from warbands.services.cost_engine import CostEngine
from warbands.services.validation_service import ValidationService
from warbands.services.warband_service import WarbandService

__all__ = [
    "CostEngine",
    "ValidationService",
    "WarbandService",
]
