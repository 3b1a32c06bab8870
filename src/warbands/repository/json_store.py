"""JSON-based repository for warbands."""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter

from warbands.domain import models as dm


class JsonWarbandRepository:
    """Persist warbands as JSON snapshots on disk."""

    prefix = "warband_"
    suffix = ".json"

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._adapter: TypeAdapter[dm.Warband] = TypeAdapter(dm.Warband)

    def _path_for(self, warband_id: dm.WarbandID) -> Path:
        if not warband_id or "/" in warband_id or "\\" in warband_id or ".." in warband_id:
            # Path-like ids would escape the data directory; treat them as unknown.
            raise FileNotFoundError(warband_id)
        return self.base_path / f"{self.prefix}{warband_id}{self.suffix}"

    def save(self, warband: dm.Warband) -> Path:
        """Serialize a warband to disk and return the snapshot path."""

        path = self._path_for(warband.id)
        payload = self._adapter.dump_json(warband, indent=2)
        tmp = path.with_suffix(".tmp")
        tmp.write_bytes(payload)
        tmp.replace(path)
        return path

    def load(self, warband_id: dm.WarbandID) -> dm.Warband:
        """Load a previously saved warband snapshot."""

        path = self._path_for(warband_id)
        data = path.read_bytes()
        return self._adapter.validate_json(data)

    def list_warbands(self) -> list[dm.WarbandID]:
        """Return all warband ids currently persisted in the repository."""

        ids: list[dm.WarbandID] = []
        for path in self.base_path.glob(f"{self.prefix}*{self.suffix}"):
            raw = path.name[len(self.prefix) : -len(self.suffix)]
            if raw:
                ids.append(dm.WarbandID(raw))
        return sorted(ids)

    def delete(self, warband_id: dm.WarbandID) -> bool:
        """Remove a warband snapshot if it exists."""

        try:
            path = self._path_for(warband_id)
        except FileNotFoundError:
            return False
        if not path.exists():
            return False
        path.unlink()
        return True
