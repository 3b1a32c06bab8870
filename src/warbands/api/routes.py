"""HTTP routes for the warband API.

Routes that read or write stored warbands are plain ``def`` functions so
FastAPI runs them in its worker threads; the per-warband locks in
:class:`~warbands.services.warband_service.WarbandService` serialize edits to
the same roster.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic import BaseModel, Field

from warbands.api.runtime import ApiState
from warbands.domain import models as dm
from warbands.domain.catalog import GameCatalog
from warbands.domain.enums import LeaderTrait, WarbandAbility, WeaponKind, WeirdoRole

router = APIRouter()

ItemT = TypeVar("ItemT")


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class WarbandResponse(BaseModel):
    warband: dm.Warband
    validation: dm.ValidationResult


class CreateWarbandRequest(BaseModel):
    name: str
    ability: WarbandAbility | None = None
    point_limit: int


class UpdateWarbandRequest(BaseModel):
    name: str | None = None
    ability: WarbandAbility | None = None
    point_limit: int | None = None


class CreateWeirdoRequest(BaseModel):
    name: str
    role: WeirdoRole = WeirdoRole.TROOPER


class UpdateWeirdoRequest(BaseModel):
    """Partial weirdo edit; items are catalog ids or names."""

    name: str | None = None
    role: WeirdoRole | None = None
    attributes: dm.Attributes | None = None
    close_combat_weapons: list[str] | None = None
    ranged_weapons: list[str] | None = None
    equipment: list[str] | None = None
    psychic_powers: list[str] | None = None
    leader_trait: LeaderTrait | None = None
    notes: str | None = None


class CostRequest(BaseModel):
    weirdo: dm.Weirdo | None = None
    warband: dm.Warband | None = None
    ability: WarbandAbility | None = None


class CostResponse(BaseModel):
    total_cost: int
    breakdown: dm.CostBreakdown | None = None
    weirdo_costs: dict[str, int] = Field(default_factory=dict)


class ValidateRequest(BaseModel):
    warband: dm.Warband
    weirdo: dm.Weirdo | None = None


def _resolve(lookup: Callable[[str], ItemT], keys: list[str]) -> list[ItemT]:
    items: list[ItemT] = []
    for key in keys:
        try:
            items.append(lookup(key))
        except KeyError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc.args[0])
            ) from exc
    return items


def _resolve_weapons(catalog: GameCatalog, keys: list[str], kind: WeaponKind) -> list[dm.Weapon]:
    weapons = _resolve(catalog.weapon, keys)
    for weapon in weapons:
        if weapon.kind != kind:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"weapon '{weapon.name}' is not a {kind} weapon",
            )
    return weapons


def _weirdo_changes(request: UpdateWeirdoRequest, catalog: GameCatalog) -> dict[str, Any]:
    changes = request.model_dump(exclude_unset=True)
    if "close_combat_weapons" in changes:
        changes["close_combat_weapons"] = _resolve_weapons(
            catalog, request.close_combat_weapons or [], WeaponKind.CLOSE
        )
    if "ranged_weapons" in changes:
        changes["ranged_weapons"] = _resolve_weapons(
            catalog, request.ranged_weapons or [], WeaponKind.RANGED
        )
    if "equipment" in changes:
        changes["equipment"] = _resolve(catalog.equipment_item, request.equipment or [])
    if "psychic_powers" in changes:
        changes["psychic_powers"] = _resolve(catalog.psychic_power, request.psychic_powers or [])
    return changes


# ---------------------------------------------------------------------------
# Health and catalog


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "rules_version": state.settings.rules_version,
        "point_limits": list(state.rules.points.allowed_limits),
    }


@router.get("/catalog/weapons", response_model=list[dm.Weapon])
async def list_weapons(
    state: ApiStateDep, kind: Annotated[WeaponKind | None, Query()] = None
) -> list[dm.Weapon]:
    return [weapon for weapon in state.catalog.weapons if kind is None or weapon.kind == kind]


@router.get("/catalog/equipment", response_model=list[dm.Equipment])
async def list_equipment(state: ApiStateDep) -> list[dm.Equipment]:
    return list(state.catalog.equipment)


@router.get("/catalog/psychic-powers", response_model=list[dm.PsychicPower])
async def list_psychic_powers(state: ApiStateDep) -> list[dm.PsychicPower]:
    return list(state.catalog.psychic_powers)


@router.get("/catalog/leader-traits", response_model=list[dm.LeaderTraitInfo])
async def list_leader_traits(state: ApiStateDep) -> list[dm.LeaderTraitInfo]:
    return list(state.catalog.leader_traits)


@router.get("/catalog/abilities", response_model=list[dm.AbilityInfo])
async def list_abilities(state: ApiStateDep) -> list[dm.AbilityInfo]:
    return list(state.catalog.abilities)


# ---------------------------------------------------------------------------
# Stored warbands


@router.get("/warbands", response_model=list[dm.WarbandSummary])
def list_warbands(state: ApiStateDep) -> list[dm.WarbandSummary]:
    return state.warbands.list_warbands()


@router.post("/warbands", response_model=WarbandResponse, status_code=status.HTTP_201_CREATED)
def create_warband(request: CreateWarbandRequest, state: ApiStateDep) -> WarbandResponse:
    warband = state.warbands.create_warband(request.name, request.ability, request.point_limit)
    return WarbandResponse(warband=warband, validation=state.validation.validate_warband(warband))


@router.get("/warbands/{warband_id}", response_model=WarbandResponse)
def get_warband(warband_id: str, state: ApiStateDep) -> WarbandResponse:
    warband = state.warbands.get_warband(dm.WarbandID(warband_id))
    return WarbandResponse(warband=warband, validation=state.validation.validate_warband(warband))


@router.put("/warbands/{warband_id}", response_model=WarbandResponse)
def update_warband(
    warband_id: str, request: UpdateWarbandRequest, state: ApiStateDep
) -> WarbandResponse:
    result = state.warbands.update_warband(
        dm.WarbandID(warband_id), **request.model_dump(exclude_unset=True)
    )
    return WarbandResponse(warband=result.warband, validation=result.validation)


@router.delete("/warbands/{warband_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_warband(warband_id: str, state: ApiStateDep) -> Response:
    if not state.warbands.delete_warband(dm.WarbandID(warband_id)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="warband not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/warbands/{warband_id}/validation", response_model=dm.ValidationResult)
def validate_stored_warband(warband_id: str, state: ApiStateDep) -> dm.ValidationResult:
    return state.warbands.validate(dm.WarbandID(warband_id))


@router.post(
    "/warbands/{warband_id}/weirdos",
    response_model=WarbandResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_weirdo(
    warband_id: str, request: CreateWeirdoRequest, state: ApiStateDep
) -> WarbandResponse:
    result = state.warbands.create_weirdo(dm.WarbandID(warband_id), request.name, request.role)
    return WarbandResponse(warband=result.warband, validation=result.validation)


@router.put("/warbands/{warband_id}/weirdos/{weirdo_id}", response_model=WarbandResponse)
def update_weirdo(
    warband_id: str, weirdo_id: str, request: UpdateWeirdoRequest, state: ApiStateDep
) -> WarbandResponse:
    changes = _weirdo_changes(request, state.catalog)
    result = state.warbands.update_weirdo(
        dm.WarbandID(warband_id), dm.WeirdoID(weirdo_id), **changes
    )
    return WarbandResponse(warband=result.warband, validation=result.validation)


@router.delete("/warbands/{warband_id}/weirdos/{weirdo_id}", response_model=WarbandResponse)
def remove_weirdo(warband_id: str, weirdo_id: str, state: ApiStateDep) -> WarbandResponse:
    result = state.warbands.remove_weirdo(dm.WarbandID(warband_id), dm.WeirdoID(weirdo_id))
    return WarbandResponse(warband=result.warband, validation=result.validation)


# ---------------------------------------------------------------------------
# Stateless calculations


@router.post("/calculate-cost", response_model=CostResponse)
async def calculate_cost(request: CostRequest, state: ApiStateDep) -> CostResponse:
    if request.weirdo is not None:
        ability = request.ability
        if ability is None and request.warband is not None:
            ability = request.warband.ability
        breakdown = state.costs.cost_breakdown(request.weirdo, ability)
        return CostResponse(total_cost=breakdown.total, breakdown=breakdown)
    if request.warband is not None:
        warband = request.warband
        return CostResponse(
            total_cost=state.costs.warband_cost(warband),
            weirdo_costs={
                weirdo.id: state.costs.weirdo_cost(weirdo, warband.ability)
                for weirdo in warband.weirdos
            },
        )
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="provide a weirdo or a warband"
    )


@router.post("/validate", response_model=dm.ValidationResult)
async def validate(request: ValidateRequest, state: ApiStateDep) -> dm.ValidationResult:
    if request.weirdo is None:
        return state.validation.validate_warband(request.warband)
    errors = state.validation.validate_weirdo(request.weirdo, request.warband)
    return dm.ValidationResult(valid=not errors, errors=errors)
