"""Persistence adapters for warbands."""

from warbands.repository.json_store import JsonWarbandRepository

__all__ = ["JsonWarbandRepository"]
