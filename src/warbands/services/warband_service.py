"""Warband Service.

This module owns stored warbands: it loads a roster, runs one cascade
operation from :mod:`warbands.domain.cascade`, and saves the result.  Each
load-edit-save sequence for a given warband holds that warband's lock, so two
concurrent edits can never interleave and leave a stored total that disagrees
with its members.  Edits to different warbands do not block each other.
"""

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from warbands.domain import cascade
from warbands.domain.catalog import GameCatalog
from warbands.domain.enums import WarbandAbility, WeirdoRole
from warbands.domain.errors import WarbandNotFoundError
from warbands.domain.models import (
    ValidationResult,
    Warband,
    WarbandID,
    WarbandSummary,
    Weirdo,
    WeirdoID,
)
from warbands.domain.rules_config import DEFAULT_RULES, RulesConfig
from warbands.interfaces import IValidationService, IWarbandRepository
from warbands.services.validation_service import ValidationService

logger = logging.getLogger(__name__)


class WarbandService:
    """Create, edit and delete stored warbands."""

    def __init__(
        self,
        repository: IWarbandRepository,
        catalog: GameCatalog,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        validator: IValidationService | None = None,
    ):
        self._repository = repository
        self.catalog = catalog
        self.rules = rules
        self._validator = validator or ValidationService(rules)
        self._locks: dict[WarbandID, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Locking and storage helpers

    def _lock_for(self, warband_id: WarbandID) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(warband_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[warband_id] = lock
            return lock

    def _forget_lock(self, warband_id: WarbandID) -> None:
        with self._locks_guard:
            lock = self._locks.get(warband_id)
            if lock is not None and not lock.locked():
                del self._locks[warband_id]

    @contextmanager
    def _locked(self, warband_id: WarbandID) -> Iterator[None]:
        with self._lock_for(warband_id):
            yield

    def _load(self, warband_id: WarbandID) -> Warband:
        try:
            return self._repository.load(warband_id)
        except FileNotFoundError as exc:
            raise WarbandNotFoundError(f"warband {warband_id} not found") from exc

    def _apply(
        self,
        warband_id: WarbandID,
        operation: Callable[[Warband], cascade.CascadeResult],
    ) -> cascade.CascadeResult:
        try:
            with self._locked(warband_id):
                result = operation(self._load(warband_id))
                self._repository.save(result.warband)
        except WarbandNotFoundError:
            self._forget_lock(warband_id)
            raise
        logger.debug(
            "warband %s recomputed: total=%d valid=%s",
            warband_id,
            result.warband.total_cost,
            result.validation.valid,
        )
        return result

    # ------------------------------------------------------------------
    # Warbands

    def create_warband(
        self, name: str, ability: WarbandAbility | None, point_limit: int
    ) -> Warband:
        """Create and persist an empty warband.

        Args:
            name: Display name
            ability: Roster-wide ability, or None if not chosen yet
            point_limit: Roster point limit

        Returns:
            The stored warband
        """
        warband = cascade.create_warband(name, ability, point_limit)
        self._repository.save(warband)
        logger.info("created warband %s (%s)", warband.id, name)
        return warband

    def get_warband(self, warband_id: WarbandID) -> Warband:
        """Load a warband or raise ``WarbandNotFoundError``."""
        return self._load(warband_id)

    def list_warbands(self) -> list[WarbandSummary]:
        """Summaries of every stored warband, most recently updated first."""
        summaries: list[WarbandSummary] = []
        for warband_id in self._repository.list_warbands():
            try:
                warband = self._repository.load(warband_id)
            except FileNotFoundError:
                # Deleted between listing and loading.
                continue
            summaries.append(
                WarbandSummary(
                    id=warband.id,
                    name=warband.name,
                    ability=warband.ability,
                    point_limit=warband.point_limit,
                    total_cost=warband.total_cost,
                    weirdo_count=len(warband.weirdos),
                    updated_at=warband.updated_at,
                )
            )
        return sorted(summaries, key=lambda summary: summary.updated_at, reverse=True)

    def update_warband(self, warband_id: WarbandID, **changes: Any) -> cascade.CascadeResult:
        """Edit name, ability or point limit; members are repriced."""
        return self._apply(
            warband_id,
            lambda warband: cascade.update_warband(warband, rules=self.rules, **changes),
        )

    def delete_warband(self, warband_id: WarbandID) -> bool:
        """Remove a stored warband; returns False when it did not exist."""
        with self._locked(warband_id):
            deleted = self._repository.delete(warband_id)
        self._forget_lock(warband_id)
        if deleted:
            logger.info("deleted warband %s", warband_id)
        return deleted

    def validate(self, warband_id: WarbandID) -> ValidationResult:
        return self._validator.validate_warband(self._load(warband_id))

    # ------------------------------------------------------------------
    # Weirdos

    def create_weirdo(
        self, warband_id: WarbandID, name: str, role: WeirdoRole
    ) -> cascade.CascadeResult:
        """Add a weirdo with the cheapest defaults to a warband."""

        def operation(warband: Warband) -> cascade.CascadeResult:
            weirdo = cascade.create_weirdo(
                name, role, self.catalog, ability=warband.ability, rules=self.rules
            )
            return cascade.add_weirdo(warband, weirdo, rules=self.rules)

        return self._apply(warband_id, operation)

    def add_weirdo(self, warband_id: WarbandID, weirdo: Weirdo) -> cascade.CascadeResult:
        """Add a fully specified weirdo to a warband."""
        return self._apply(
            warband_id, lambda warband: cascade.add_weirdo(warband, weirdo, rules=self.rules)
        )

    def update_weirdo(
        self, warband_id: WarbandID, weirdo_id: WeirdoID, **changes: Any
    ) -> cascade.CascadeResult:
        """Apply field edits to one weirdo and recompute the warband."""
        return self._apply(
            warband_id,
            lambda warband: cascade.apply_weirdo_edit(
                warband, weirdo_id, rules=self.rules, **changes
            ),
        )

    def replace_weirdo(self, warband_id: WarbandID, weirdo: Weirdo) -> cascade.CascadeResult:
        return self._apply(
            warband_id, lambda warband: cascade.replace_weirdo(warband, weirdo, rules=self.rules)
        )

    def remove_weirdo(self, warband_id: WarbandID, weirdo_id: WeirdoID) -> cascade.CascadeResult:
        return self._apply(
            warband_id,
            lambda warband: cascade.remove_weirdo(warband, weirdo_id, rules=self.rules),
        )
