"""Enumerations used across the warband domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class WeirdoRole(StrEnum):
    """A warband has at most one leader; everyone else is a trooper."""

    LEADER = "leader"
    TROOPER = "trooper"


class WarbandAbility(StrEnum):
    """Roster-wide abilities a warband may pick."""

    CYBORGS = "Cyborgs"
    FANATICS = "Fanatics"
    LIVING_WEAPONS = "Living Weapons"
    HEAVILY_ARMED = "Heavily Armed"
    MUTANTS = "Mutants"
    SOLDIERS = "Soldiers"
    UNDEAD = "Undead"


class LeaderTrait(StrEnum):
    """Traits only a leader may take (one at most)."""

    BOUNTY_HUNTER = "Bounty Hunter"
    HEALER = "Healer"
    MAJESTIC = "Majestic"
    MONSTROUS = "Monstrous"
    POLITICAL_OFFICER = "Political Officer"
    SORCERER = "Sorcerer"
    TACTICIAN = "Tactician"


class SpeedLevel(IntEnum):
    """Speed tiers."""

    ONE = 1
    TWO = 2
    THREE = 3


class DiceLevel(StrEnum):
    """Dice tiers shared by defense, prowess and willpower."""

    D6 = "2d6"
    D8 = "2d8"
    D10 = "2d10"


class FirepowerLevel(StrEnum):
    """Firepower tiers; ``NONE`` means the weirdo cannot shoot."""

    NONE = "None"
    D8 = "2d8"
    D10 = "2d10"


class WeaponKind(StrEnum):
    CLOSE = "close"
    RANGED = "ranged"


class EquipmentKind(StrEnum):
    PASSIVE = "passive"
    ACTION = "action"


class PowerKind(StrEnum):
    ATTACK = "attack"
    EFFECT = "effect"
    EITHER = "either"


class ValidationCode(StrEnum):
    """Stable machine-readable codes attached to every rule violation."""

    WARBAND_NAME_REQUIRED = "WARBAND_NAME_REQUIRED"
    WARBAND_ABILITY_REQUIRED = "WARBAND_ABILITY_REQUIRED"
    INVALID_POINT_LIMIT = "INVALID_POINT_LIMIT"
    WEIRDO_NAME_REQUIRED = "WEIRDO_NAME_REQUIRED"
    ATTRIBUTES_INCOMPLETE = "ATTRIBUTES_INCOMPLETE"
    CLOSE_COMBAT_WEAPON_REQUIRED = "CLOSE_COMBAT_WEAPON_REQUIRED"
    RANGED_WEAPON_REQUIRED = "RANGED_WEAPON_REQUIRED"
    FIREPOWER_REQUIRED_FOR_RANGED_WEAPON = "FIREPOWER_REQUIRED_FOR_RANGED_WEAPON"
    EQUIPMENT_LIMIT_EXCEEDED = "EQUIPMENT_LIMIT_EXCEEDED"
    LEADER_TRAIT_INVALID = "LEADER_TRAIT_INVALID"
    TROOPER_POINT_LIMIT_EXCEEDED = "TROOPER_POINT_LIMIT_EXCEEDED"
    MULTIPLE_25_POINT_WEIRDOS = "MULTIPLE_25_POINT_WEIRDOS"
    MULTIPLE_LEADERS = "MULTIPLE_LEADERS"
    WARBAND_POINT_LIMIT_EXCEEDED = "WARBAND_POINT_LIMIT_EXCEEDED"


class WarningCode(StrEnum):
    """Codes for advisory findings that never make a warband invalid."""

    WARBAND_NEAR_POINT_LIMIT = "WARBAND_NEAR_POINT_LIMIT"
