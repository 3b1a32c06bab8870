"""Protocol-based interfaces for warband services.

This module exports the protocols the roster service and HTTP layer depend
on, enabling dependency injection and protocol-based fakes in tests.
"""

from warbands.interfaces.engine import ICostEngine, IValidationService
from warbands.interfaces.repository import IWarbandRepository

__all__ = [
    "ICostEngine",
    "IValidationService",
    "IWarbandRepository",
]
