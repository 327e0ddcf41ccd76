from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from jsonschema import Draft202012Validator

from cardsort.engine.scoring import GameResult
from cardsort.services.telemetry import TelemetryService

DEFAULT_LIMIT = 10


class LeaderboardError(RuntimeError):
    pass


def _as_int(value: object) -> int | None:
    # JSON Schema counts 5.0 and 1e3 as integers.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    score: int
    accuracy: float
    time: int

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "LeaderboardEntry":
        name = d.get("name")
        score = _as_int(d.get("score"))
        acc = d.get("accuracy")
        time = _as_int(d.get("time"))
        if not isinstance(name, str) or score is None or time is None:
            raise LeaderboardError("Invalid leaderboard entry")
        if isinstance(acc, bool) or not isinstance(acc, (int, float)):
            raise LeaderboardError("Invalid leaderboard entry")
        return LeaderboardEntry(name=name, score=score, accuracy=float(acc), time=time)

    @staticmethod
    def from_result(name: str, result: GameResult) -> "LeaderboardEntry":
        return LeaderboardEntry(
            name=name.strip(),
            score=result.score,
            accuracy=result.accuracy,
            time=result.total_time_ms,
        )

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "score": self.score, "accuracy": self.accuracy, "time": self.time}


def rank_entries(entries: Iterable[LeaderboardEntry], limit: int = DEFAULT_LIMIT) -> tuple[LeaderboardEntry, ...]:
    """Best score first, faster time breaks ties. Stable, so earlier entries win exact ties."""
    ranked = sorted(entries, key=lambda e: (-e.score, e.time))
    return tuple(ranked[:limit])


def is_highlighted(entry: LeaderboardEntry, latest: LeaderboardEntry | None) -> bool:
    if latest is None:
        return False
    return entry.name == latest.name and entry.score == latest.score and entry.time == latest.time


def _load_schema(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise LeaderboardError(f"Missing schema file: {path}") from e
    except json.JSONDecodeError as e:
        raise LeaderboardError(f"Invalid JSON in {path}: {e}") from e


class LeaderboardStore:
    """Top-N leaderboard persisted as a JSON array.

    Anything wrong with the stored file (unreadable, not JSON, wrong shape)
    reads as an empty leaderboard. The next recorded game overwrites it.
    """

    def __init__(
        self,
        path: Path,
        schema_path: Path,
        telemetry: TelemetryService | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> None:
        self._path = path
        self._validator = Draft202012Validator(_load_schema(schema_path))
        self._telemetry = telemetry
        self.limit = limit

    @property
    def path(self) -> Path:
        return self._path

    def _log(self, event_type: str, payload: Mapping[str, object]) -> None:
        if self._telemetry is not None:
            self._telemetry.log(event_type, payload)

    def load(self) -> tuple[LeaderboardEntry, ...]:
        if not self._path.exists():
            return ()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            self._log("leaderboard_load_failed", {"path": str(self._path), "error": str(e)})
            return ()

        errors = sorted(self._validator.iter_errors(raw), key=lambda e: [str(p) for p in e.path])
        if errors:
            first = errors[0]
            loc = "/".join(str(p) for p in first.absolute_path)
            self._log(
                "leaderboard_load_failed",
                {"path": str(self._path), "error": f"{loc}: {first.message}"},
            )
            return ()

        assert isinstance(raw, list)
        try:
            entries = [LeaderboardEntry.from_dict(d) for d in raw]
        except LeaderboardError as e:
            self._log("leaderboard_load_failed", {"path": str(self._path), "error": str(e)})
            return ()
        return rank_entries(entries, self.limit)

    def save(self, entries: Iterable[LeaderboardEntry]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = [e.to_dict() for e in entries]
        self._path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def record(self, entry: LeaderboardEntry) -> tuple[LeaderboardEntry, ...]:
        """Insert a finished game and return the ranked top-N."""
        current = self.load()
        if not entry.name.strip():
            return current

        ranked = rank_entries(current + (entry,), self.limit)
        try:
            self.save(ranked)
        except OSError as e:
            self._log("leaderboard_save_failed", {"path": str(self._path), "error": str(e)})
        return ranked
