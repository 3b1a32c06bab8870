"""Edit-and-recompute cascade for warbands.

Every function takes a warband value and returns a :class:`CascadeResult`
holding a *new* warband whose cached costs agree with its members, together
with a fresh validation report.  The input warband is never modified, so a
reader holding it never sees a half-applied edit.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .catalog import GameCatalog
from .costs import weirdo_cost
from .enums import WarbandAbility, WeirdoRole
from .errors import InvalidEditError, WeirdoNotFoundError
from .models import (
    Attributes,
    ValidationResult,
    Warband,
    WarbandID,
    Weirdo,
    WeirdoID,
    new_warband_id,
    new_weirdo_id,
)
from .rules_config import DEFAULT_RULES, RulesConfig
from .validation import validate_warband

WEIRDO_ADAPTER: TypeAdapter[Weirdo] = TypeAdapter(Weirdo)
ABILITY_ADAPTER: TypeAdapter[WarbandAbility | None] = TypeAdapter(WarbandAbility | None)

EDITABLE_WEIRDO_FIELDS = frozenset(
    {
        "name",
        "role",
        "attributes",
        "close_combat_weapons",
        "ranged_weapons",
        "equipment",
        "psychic_powers",
        "leader_trait",
        "notes",
    }
)
EDITABLE_WARBAND_FIELDS = frozenset({"name", "ability", "point_limit"})


@dataclass(slots=True)
class CascadeResult:
    """Outcome of one edit: the recomputed warband and its validation."""

    warband: Warband
    validation: ValidationResult


# ---------------------------------------------------------------------------
# Construction


def create_weirdo(
    name: str,
    role: WeirdoRole,
    catalog: GameCatalog,
    *,
    ability: WarbandAbility | None = None,
    weirdo_id: WeirdoID | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> Weirdo:
    """New weirdo with minimum attribute tiers and the free close-combat weapon."""

    weirdo = Weirdo(
        id=weirdo_id or new_weirdo_id(),
        name=name,
        role=role,
        attributes=Attributes(),
        close_combat_weapons=[catalog.default_close_weapon],
    )
    weirdo.total_cost = weirdo_cost(weirdo, ability, rules)
    return weirdo


def create_warband(
    name: str,
    ability: WarbandAbility | None,
    point_limit: int,
    *,
    warband_id: WarbandID | None = None,
) -> Warband:
    """Empty warband with zero cost."""

    return Warband(
        id=warband_id or new_warband_id(),
        name=name,
        ability=ability,
        point_limit=point_limit,
    )


# ---------------------------------------------------------------------------
# Internals


def _copy_weirdo(weirdo: Weirdo, **changes: Any) -> Weirdo:
    attributes = weirdo.attributes
    copied = dataclasses.replace(
        weirdo,
        attributes=dataclasses.replace(attributes) if attributes is not None else None,
        close_combat_weapons=list(weirdo.close_combat_weapons),
        ranged_weapons=list(weirdo.ranged_weapons),
        equipment=list(weirdo.equipment),
        psychic_powers=list(weirdo.psychic_powers),
    )
    return dataclasses.replace(copied, **changes) if changes else copied


def _priced(weirdo: Weirdo, ability: WarbandAbility | None, rules: RulesConfig) -> Weirdo:
    return _copy_weirdo(weirdo, total_cost=weirdo_cost(weirdo, ability, rules))


def _finish(
    warband: Warband,
    weirdos: list[Weirdo],
    rules: RulesConfig,
    *,
    touch: bool = True,
    **changes: Any,
) -> CascadeResult:
    ability = changes.get("ability", warband.ability)
    priced = [_priced(weirdo, ability, rules) for weirdo in weirdos]
    if touch:
        changes["updated_at"] = datetime.now(UTC)
    updated = dataclasses.replace(
        warband,
        weirdos=priced,
        total_cost=sum(weirdo.total_cost for weirdo in priced),
        **changes,
    )
    return CascadeResult(warband=updated, validation=validate_warband(updated, rules))


def _index_of(warband: Warband, weirdo_id: WeirdoID) -> int:
    for index, weirdo in enumerate(warband.weirdos):
        if weirdo.id == weirdo_id:
            return index
    raise WeirdoNotFoundError(f"weirdo {weirdo_id} not found in warband {warband.id}")


def _edited_weirdo(weirdo: Weirdo, changes: dict[str, Any]) -> Weirdo:
    unknown = set(changes) - EDITABLE_WEIRDO_FIELDS
    if unknown:
        raise InvalidEditError(f"cannot edit weirdo fields: {', '.join(sorted(unknown))}")

    payload = WEIRDO_ADAPTER.dump_python(weirdo)
    payload.update(changes)
    demoted = (
        "role" in changes
        and weirdo.role == WeirdoRole.LEADER
        and payload["role"] == WeirdoRole.TROOPER
    )
    if demoted and "leader_trait" not in changes:
        payload["leader_trait"] = None
    try:
        return WEIRDO_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise InvalidEditError(f"invalid weirdo edit: {exc}") from exc


# ---------------------------------------------------------------------------
# Public cascade operations


def add_weirdo(
    warband: Warband, weirdo: Weirdo, *, rules: RulesConfig = DEFAULT_RULES
) -> CascadeResult:
    """Append a weirdo, price it under the warband's ability, and revalidate."""

    if warband.find_weirdo(weirdo.id) is not None:
        raise InvalidEditError(f"weirdo {weirdo.id} is already in warband {warband.id}")
    weirdos = [*warband.weirdos, weirdo]
    return _finish(warband, weirdos, rules)


def apply_weirdo_edit(
    warband: Warband,
    weirdo_id: WeirdoID,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    **changes: Any,
) -> CascadeResult:
    """Apply field edits to one weirdo, then recompute and revalidate.

    Switching a leader to trooper drops its leader trait unless the same
    edit sets one explicitly.
    """

    index = _index_of(warband, weirdo_id)
    edited = _edited_weirdo(warband.weirdos[index], changes)
    weirdos = list(warband.weirdos)
    weirdos[index] = edited
    return _finish(warband, weirdos, rules)


def replace_weirdo(
    warband: Warband, weirdo: Weirdo, *, rules: RulesConfig = DEFAULT_RULES
) -> CascadeResult:
    """Swap in a complete weirdo record with the same id."""

    index = _index_of(warband, weirdo.id)
    weirdos = list(warband.weirdos)
    weirdos[index] = weirdo
    return _finish(warband, weirdos, rules)


def remove_weirdo(
    warband: Warband, weirdo_id: WeirdoID, *, rules: RulesConfig = DEFAULT_RULES
) -> CascadeResult:
    index = _index_of(warband, weirdo_id)
    weirdos = [weirdo for position, weirdo in enumerate(warband.weirdos) if position != index]
    return _finish(warband, weirdos, rules)


def update_warband(
    warband: Warband, *, rules: RulesConfig = DEFAULT_RULES, **changes: Any
) -> CascadeResult:
    """Edit roster-level fields; an ability change reprices every member."""

    unknown = set(changes) - EDITABLE_WARBAND_FIELDS
    if unknown:
        raise InvalidEditError(f"cannot edit warband fields: {', '.join(sorted(unknown))}")

    if "ability" in changes:
        try:
            changes["ability"] = ABILITY_ADAPTER.validate_python(changes["ability"])
        except ValidationError as exc:
            raise InvalidEditError(f"unknown warband ability: {changes['ability']!r}") from exc
    point_limit = changes.get("point_limit", 0)
    if isinstance(point_limit, bool) or not isinstance(point_limit, int):
        raise InvalidEditError(f"point limit must be an integer: {changes['point_limit']!r}")
    if "name" in changes and not isinstance(changes["name"], str):
        raise InvalidEditError("warband name must be a string")

    return _finish(warband, list(warband.weirdos), rules, **changes)


def recalculate(warband: Warband, *, rules: RulesConfig = DEFAULT_RULES) -> CascadeResult:
    """Reprice every member from scratch; applying it twice changes nothing."""

    return _finish(warband, list(warband.weirdos), rules, touch=False)


def costs_consistent(warband: Warband, *, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """True when every cached cost matches the derived cost."""

    for weirdo in warband.weirdos:
        if weirdo.total_cost != weirdo_cost(weirdo, warband.ability, rules):
            return False
    return warband.total_cost == sum(weirdo.total_cost for weirdo in warband.weirdos)
