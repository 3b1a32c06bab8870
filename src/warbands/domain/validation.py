"""Composition rules for weirdos and warbands.

Validation never raises for a broken rule.  Each check returns a
:class:`RuleViolation` (or ``None``) and the public entry points collect every
violation so callers see all problems at once.

Point-limit precedence:

* a weirdo above the premium band maximum (25) is reported with the
  "maximum" message and nothing else;
* a weirdo inside the band (21-25) is reported with the "standard limit"
  message when any *other* member is also inside the band;
* the roster-level ``MULTIPLE_25_POINT_WEIRDOS`` is emitted once by
  :func:`validate_warband` whenever more than one member sits in the band.

These rules apply to leaders and troopers alike.
"""

from __future__ import annotations

from .costs import warband_cost, weirdo_cost
from .enums import (
    FirepowerLevel,
    ValidationCode,
    WarbandAbility,
    WarningCode,
    WeirdoRole,
)
from .models import RuleViolation, ValidationResult, Warband, Weirdo
from .rules_config import DEFAULT_RULES, RulesConfig


def _violation(
    code: ValidationCode | WarningCode, field: str, template: str, **params: object
) -> RuleViolation:
    return RuleViolation(field=field, message=template.format(**params), code=code)


def _weirdo_field(weirdo: Weirdo, name: str) -> str:
    return f"weirdo.{weirdo.id}.{name}"


# ---------------------------------------------------------------------------
# Warband-level fields


def _check_warband_name(warband: Warband, rules: RulesConfig) -> RuleViolation | None:
    if not warband.name or not warband.name.strip():
        return _violation(
            ValidationCode.WARBAND_NAME_REQUIRED, "name", rules.messages.warband_name_required
        )
    return None


def _check_ability(warband: Warband, rules: RulesConfig) -> RuleViolation | None:
    if warband.ability is None:
        return _violation(
            ValidationCode.WARBAND_ABILITY_REQUIRED,
            "ability",
            rules.messages.warband_ability_required,
        )
    return None


def _check_point_limit(warband: Warband, rules: RulesConfig) -> RuleViolation | None:
    allowed = rules.points.allowed_limits
    if warband.point_limit not in allowed:
        return _violation(
            ValidationCode.INVALID_POINT_LIMIT,
            "point_limit",
            rules.messages.invalid_point_limit,
            allowed=" or ".join(str(limit) for limit in allowed),
        )
    return None


# ---------------------------------------------------------------------------
# Weirdo-level checks


def _check_weirdo_name(weirdo: Weirdo, rules: RulesConfig) -> RuleViolation | None:
    if not weirdo.name or not weirdo.name.strip():
        return _violation(
            ValidationCode.WEIRDO_NAME_REQUIRED,
            _weirdo_field(weirdo, "name"),
            rules.messages.weirdo_name_required,
        )
    return None


def _check_attributes(weirdo: Weirdo, rules: RulesConfig) -> RuleViolation | None:
    if weirdo.attributes is None:
        field = _weirdo_field(weirdo, "attributes")
    else:
        missing = weirdo.attributes.missing()
        if not missing:
            return None
        field = _weirdo_field(weirdo, f"attributes.{missing[0]}")
    return _violation(
        ValidationCode.ATTRIBUTES_INCOMPLETE, field, rules.messages.attributes_incomplete
    )


def _check_close_combat_weapon(weirdo: Weirdo, rules: RulesConfig) -> RuleViolation | None:
    if not weirdo.close_combat_weapons:
        return _violation(
            ValidationCode.CLOSE_COMBAT_WEAPON_REQUIRED,
            _weirdo_field(weirdo, "close_combat_weapons"),
            rules.messages.close_combat_weapon_required,
        )
    return None


def _check_ranged_weapon(weirdo: Weirdo, rules: RulesConfig) -> RuleViolation | None:
    # Unset attributes are reported by the completeness check.
    if weirdo.attributes is None or weirdo.attributes.firepower is None:
        return None

    firepower = weirdo.attributes.firepower
    if firepower != FirepowerLevel.NONE and not weirdo.ranged_weapons:
        return _violation(
            ValidationCode.RANGED_WEAPON_REQUIRED,
            _weirdo_field(weirdo, "ranged_weapons"),
            rules.messages.ranged_weapon_required,
            firepower=str(firepower),
        )
    if firepower == FirepowerLevel.NONE and weirdo.ranged_weapons:
        return _violation(
            ValidationCode.FIREPOWER_REQUIRED_FOR_RANGED_WEAPON,
            _weirdo_field(weirdo, "attributes.firepower"),
            rules.messages.firepower_required_for_ranged_weapon,
        )
    return None


def validate_equipment_limit(
    weirdo: Weirdo,
    ability: WarbandAbility | None,
    rules: RulesConfig = DEFAULT_RULES,
) -> RuleViolation | None:
    """Check the equipment count against the (role, ability) limit."""

    limit = rules.equipment.limit_for(weirdo.role, ability)
    if len(weirdo.equipment) > limit:
        return _violation(
            ValidationCode.EQUIPMENT_LIMIT_EXCEEDED,
            _weirdo_field(weirdo, "equipment"),
            rules.messages.equipment_limit_exceeded,
            role=str(weirdo.role),
            limit=limit,
        )
    return None


def _check_leader_trait(weirdo: Weirdo, rules: RulesConfig) -> RuleViolation | None:
    if weirdo.role != WeirdoRole.LEADER and weirdo.leader_trait is not None:
        return _violation(
            ValidationCode.LEADER_TRAIT_INVALID,
            _weirdo_field(weirdo, "leader_trait"),
            rules.messages.leader_trait_invalid,
        )
    return None


def _premium_band_taken_by_other(
    weirdo: Weirdo, warband: Warband, rules: RulesConfig
) -> bool:
    for other in warband.weirdos:
        if other.id == weirdo.id:
            continue
        if rules.points.in_premium_band(weirdo_cost(other, warband.ability, rules)):
            return True
    return False


def validate_weirdo_point_limit(
    weirdo: Weirdo,
    warband: Warband,
    rules: RulesConfig = DEFAULT_RULES,
) -> RuleViolation | None:
    """Apply the 25-point maximum and the single premium slot to one weirdo."""

    points = rules.points
    cost = weirdo_cost(weirdo, warband.ability, rules)
    field = _weirdo_field(weirdo, "total_cost")
    role = str(weirdo.role).capitalize()

    if cost > points.premium_band_max:
        return _violation(
            ValidationCode.TROOPER_POINT_LIMIT_EXCEEDED,
            field,
            rules.messages.weirdo_over_maximum,
            role=role,
            cost=cost,
            maximum=points.premium_band_max,
        )
    if points.in_premium_band(cost) and _premium_band_taken_by_other(weirdo, warband, rules):
        return _violation(
            ValidationCode.TROOPER_POINT_LIMIT_EXCEEDED,
            field,
            rules.messages.weirdo_over_standard_limit,
            role=role,
            cost=cost,
            limit=points.standard_weirdo_limit,
        )
    return None


def validate_weapon_requirements(
    weirdo: Weirdo, rules: RulesConfig = DEFAULT_RULES
) -> list[RuleViolation]:
    """Close-combat and ranged weapon requirements only."""

    checks = (_check_close_combat_weapon(weirdo, rules), _check_ranged_weapon(weirdo, rules))
    return [error for error in checks if error is not None]


def validate_weirdo(
    weirdo: Weirdo,
    warband: Warband,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[RuleViolation]:
    """Every weirdo-level rule, evaluated in the context of its warband."""

    checks = (
        _check_weirdo_name(weirdo, rules),
        _check_attributes(weirdo, rules),
        _check_close_combat_weapon(weirdo, rules),
        _check_ranged_weapon(weirdo, rules),
        validate_equipment_limit(weirdo, warband.ability, rules),
        _check_leader_trait(weirdo, rules),
        validate_weirdo_point_limit(weirdo, warband, rules),
    )
    return [error for error in checks if error is not None]


# ---------------------------------------------------------------------------
# Roster-level checks


def _check_premium_band(warband: Warband, rules: RulesConfig) -> RuleViolation | None:
    points = rules.points
    in_band = [
        weirdo
        for weirdo in warband.weirdos
        if points.in_premium_band(weirdo_cost(weirdo, warband.ability, rules))
    ]
    if len(in_band) > 1:
        return _violation(
            ValidationCode.MULTIPLE_25_POINT_WEIRDOS,
            "warband.weirdos",
            rules.messages.multiple_premium_weirdos,
            band_min=points.premium_band_min,
            band_max=points.premium_band_max,
        )
    return None


def _check_single_leader(warband: Warband, rules: RulesConfig) -> RuleViolation | None:
    leaders = [weirdo for weirdo in warband.weirdos if weirdo.role == WeirdoRole.LEADER]
    if len(leaders) > 1:
        return _violation(
            ValidationCode.MULTIPLE_LEADERS, "warband.weirdos", rules.messages.multiple_leaders
        )
    return None


def _check_total(
    warband: Warband, total: int, rules: RulesConfig
) -> tuple[RuleViolation | None, RuleViolation | None]:
    """Return ``(error, warning)`` for the roster total against its limit."""

    limit = warband.point_limit
    if total > limit:
        error = _violation(
            ValidationCode.WARBAND_POINT_LIMIT_EXCEEDED,
            "warband.total_cost",
            rules.messages.warband_point_limit_exceeded,
            cost=total,
            limit=limit,
        )
        return error, None
    if limit > 0 and total >= limit * rules.points.warning_threshold:
        warning = _violation(
            WarningCode.WARBAND_NEAR_POINT_LIMIT,
            "warband.total_cost",
            rules.messages.warband_near_point_limit,
            cost=total,
            limit=limit,
        )
        return None, warning
    return None, None


def validate_warband(warband: Warband, rules: RulesConfig = DEFAULT_RULES) -> ValidationResult:
    """Validate roster fields, every member, and the roster-wide constraints."""

    errors: list[RuleViolation] = []
    warnings: list[RuleViolation] = []

    for check in (_check_warband_name, _check_point_limit, _check_ability):
        error = check(warband, rules)
        if error is not None:
            errors.append(error)

    for weirdo in warband.weirdos:
        errors.extend(validate_weirdo(weirdo, warband, rules))

    for check in (_check_premium_band, _check_single_leader):
        error = check(warband, rules)
        if error is not None:
            errors.append(error)

    total_error, total_warning = _check_total(warband, warband_cost(warband, rules), rules)
    if total_error is not None:
        errors.append(total_error)
    if total_warning is not None:
        warnings.append(total_warning)

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
