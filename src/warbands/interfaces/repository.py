"""Warband Repository Protocol Interface.

This module defines the protocol (interface) for warband storage used by the
roster service.
"""

from typing import Protocol

from warbands.domain.models import Warband, WarbandID


class IWarbandRepository(Protocol):
    """Protocol defining the contract for warband persistence.

    Implementations store complete warband snapshots; they never compute
    costs or validate rosters.
    """

    def save(self, warband: Warband) -> None:
        """Persist a warband snapshot, replacing any previous one with the same id.

        Args:
            warband: The warband to store
        """
        ...

    def load(self, warband_id: WarbandID) -> Warband:
        """Load a stored warband.

        Args:
            warband_id: Identifier of the warband

        Returns:
            The stored warband

        Raises:
            FileNotFoundError: If no warband with that id is stored
        """
        ...

    def list_warbands(self) -> list[WarbandID]:
        """Return the ids of every stored warband."""
        ...

    def delete(self, warband_id: WarbandID) -> bool:
        """Remove a stored warband.

        Returns:
            True if a warband was removed, False if none existed
        """
        ...
