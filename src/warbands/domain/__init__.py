"""Domain model and rule engine for warband building.

This package holds everything needed to price and check a roster in memory:

* Dataclasses for catalog items, weirdos and warbands (see :mod:`models`).
* Enumerations for roles, abilities, attribute tiers and validation codes.
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions: :mod:`costs`, :mod:`validation` and the
  edit-and-recompute :mod:`cascade`.

Nothing here performs I/O except :mod:`catalog`, which reads the packaged
JSON catalog once.
"""

from . import (
    cascade,
    catalog,
    costs,
    enums,
    errors,
    models,
    rules_config,
    validation,
)

__all__ = [
    "cascade",
    "catalog",
    "costs",
    "enums",
    "errors",
    "models",
    "rules_config",
    "validation",
]
