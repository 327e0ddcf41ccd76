from __future__ import annotations

import random
from pathlib import Path

from cardsort.paths import get_paths
from cardsort.services.leaderboard import LeaderboardStore
from cardsort.services.session import GameSession
from cardsort.services.telemetry import TelemetryService


class FakeClock:
    def __init__(self, start: int = 0) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def _session(tmp_path: Path, clock: FakeClock, seed: int = 1) -> GameSession:
    telemetry = TelemetryService(tmp_path / "telemetry.jsonl")
    store = LeaderboardStore(
        path=tmp_path / "leaderboard.json",
        schema_path=get_paths().schema_dir / "leaderboard.schema.json",
        telemetry=telemetry,
    )
    return GameSession(leaderboard=store, telemetry=telemetry, rng=random.Random(seed), clock=clock)


def _play_all(session: GameSession, clock: FakeClock, step_ms: int = 400, wrong: int = 0) -> None:
    for i in range(len(session.state.deck)):
        clock.advance(step_ms)
        card = session.state.current_card
        assert card is not None
        target = card.suit
        if i < wrong:
            target = "invalid" if card.is_valid else "clubs"
        assert session.resolve_current_card(target).ok


def test_full_session_records_to_leaderboard(tmp_path: Path) -> None:
    clock = FakeClock(10_000)
    session = _session(tmp_path, clock)
    assert session.start_game("Ada").ok
    _play_all(session, clock)

    assert session.state.phase == "completed"
    assert session.result is not None
    assert session.result.passed
    assert session.result.total_time_ms == 6_000
    assert session.result.score == round(100.0 * 1_000_000 / 6_000)

    results = session.results()
    assert results is not None
    assert results["passed"] is True
    assert results["wrong_moves"] == []
    assert results["leaderboard"] == [
        {"name": "Ada", "score": session.result.score, "accuracy": 100.0, "time": 6_000}
    ]
    assert session.latest_entry is not None
    assert session.leaderboard.load() == session.leaderboard_entries


def test_completion_records_exactly_once(tmp_path: Path) -> None:
    clock = FakeClock()
    session = _session(tmp_path, clock)
    session.start_game("Ada")
    _play_all(session, clock)

    clock.advance(100)
    res = session.drop_card(session.state.deck[0].id, "hearts")
    assert not res.ok
    assert session.resolve_current_card("spades").error == "Game already completed."

    assert len(session.leaderboard.load()) == 1
    assert session.telemetry is not None
    assert len(session.telemetry.events("game_completed")) == 1
    assert len(session.telemetry.events("card_dropped")) == 15


def test_failed_game_is_still_ranked_with_zero(tmp_path: Path) -> None:
    clock = FakeClock()
    session = _session(tmp_path, clock)
    session.start_game("Bo")
    _play_all(session, clock, wrong=5)
    results = session.results()
    assert results is not None
    assert results["passed"] is False
    assert results["score"] == 0
    assert results["wrong_count"] == 5
    assert len(results["wrong_moves"]) == 5  # type: ignore[arg-type]
    assert session.leaderboard_entries[0].score == 0


def test_empty_name_is_logged_and_nothing_starts(tmp_path: Path) -> None:
    clock = FakeClock()
    session = _session(tmp_path, clock)
    res = session.start_game("  ")
    assert not res.ok
    assert res.validation
    assert session.state.phase == "setup"
    assert session.state.deck == ()
    assert session.telemetry is not None
    assert len(session.telemetry.events("validation_failed")) == 1
    assert session.telemetry.events("game_started") == []


def test_restart_clears_results_and_keeps_name(tmp_path: Path) -> None:
    clock = FakeClock()
    session = _session(tmp_path, clock)
    session.start_game("Ada")
    _play_all(session, clock)
    assert session.result is not None

    clock.advance(1_000)
    assert session.restart().ok
    assert session.result is None
    assert session.results() is None
    assert session.state.player_name == "Ada"
    assert session.state.phase == "playing"

    _play_all(session, clock, step_ms=800)
    assert len(session.leaderboard.load()) == 2
    # The quicker first game ranks first.
    assert session.leaderboard_entries[0].time < session.leaderboard_entries[1].time


def test_listeners_see_every_accepted_action(tmp_path: Path) -> None:
    clock = FakeClock()
    session = _session(tmp_path, clock)
    seen: list[tuple[str, str]] = []
    session.subscribe(lambda prev, cur: seen.append((prev.phase, cur.phase)))

    session.start_game("")
    session.start_game("Ada")
    session.view_next_card()
    assert seen == [("setup", "playing"), ("playing", "playing")]


def test_view_reports_running_numbers(tmp_path: Path) -> None:
    clock = FakeClock(0)
    session = _session(tmp_path, clock)
    session.start_game("Ada")
    clock.advance(300)
    card = session.state.current_card
    assert card is not None
    session.drop_card(card.id, card.suit)
    clock.advance(200)

    view = session.view()
    assert view["sorted_count"] == 1
    assert view["accuracy"] == 100.0
    assert view["average_time_ms"] == 300
    assert view["elapsed_ms"] == 500
    assert view["current_index"] == 1


def test_corrupt_leaderboard_does_not_break_the_game(tmp_path: Path) -> None:
    clock = FakeClock()
    session = _session(tmp_path, clock)
    session.leaderboard.path.write_text("[{]", encoding="utf-8")
    assert session.load_leaderboard() == ()

    session.start_game("Ada")
    _play_all(session, clock)
    assert [e.name for e in session.leaderboard_entries] == ["Ada"]


def test_float_integers_in_stored_board_do_not_break_completion(tmp_path: Path) -> None:
    clock = FakeClock()
    session = _session(tmp_path, clock)
    session.leaderboard.path.write_text(
        '[{"name": "Old", "score": 5.0, "accuracy": 95, "time": 1e3}]', encoding="utf-8"
    )
    session.start_game("Ada")
    _play_all(session, clock)

    assert session.state.phase == "completed"
    assert [e.name for e in session.leaderboard_entries] == ["Ada", "Old"]
