"""Tests for the timed playback engine — cadence, cancellation, visited sets."""

from algorithms import VisitEvent
from engine import DEFAULT_INTERVAL, MIN_INTERVAL, SPEED_PRESETS, PlaybackEngine, PlaybackState


SEQ = (
    VisitEvent.node("A"),
    VisitEvent.edge("eAB"),
    VisitEvent.node("B"),
    VisitEvent.edge("eAC"),
    VisitEvent.node("C"),
)


class TestLifecycle:
    def test_starts_idle_and_empty(self, playback):
        assert playback.state is PlaybackState.IDLE
        assert playback.visited_node_ids == frozenset()
        assert playback.visited_edge_ids == frozenset()
        assert playback.cursor == 0
        assert not playback.tick()

    def test_start_installs_sequence(self, playback):
        token = playback.start(SEQ)
        assert token == playback.token
        assert playback.is_running
        assert playback.total == 5
        assert playback.cursor == 0

    def test_full_run_ends_idle_with_induced_sets(self, playback, clock):
        playback.start(SEQ)
        for _ in SEQ:
            clock.advance(0.5)
            assert playback.tick()
        assert playback.state is PlaybackState.IDLE
        assert playback.cursor == len(SEQ)
        assert playback.visited_node_ids == {"A", "B", "C"}
        assert playback.visited_edge_ids == {"eAB", "eAC"}
        clock.advance(0.5)
        assert not playback.tick()

    def test_empty_sequence_goes_idle(self, playback):
        playback.start(())
        assert playback.state is PlaybackState.IDLE
        assert playback.total == 0
        assert playback.progress == 0.0

    def test_reset_at_any_cursor(self, playback, clock):
        for stop_at in range(len(SEQ) + 1):
            playback.start(SEQ)
            for _ in range(stop_at):
                playback.advance()
            playback.reset()
            assert playback.state is PlaybackState.IDLE
            assert playback.cursor == 0
            assert playback.total == 0
            assert playback.visited_node_ids == frozenset()
            assert playback.visited_edge_ids == frozenset()

    def test_restart_clears_previous_run(self, playback):
        playback.start(SEQ)
        playback.finish()
        playback.start((VisitEvent.node("Z"),))
        assert playback.visited_node_ids == frozenset()
        playback.advance()
        assert playback.visited_node_ids == {"Z"}


class TestCadence:
    def test_one_event_per_interval(self, playback, clock):
        playback.start(SEQ)
        assert not playback.tick()
        clock.advance(0.25)
        assert not playback.tick()
        clock.advance(0.25)
        assert playback.tick()
        assert playback.cursor == 1
        assert not playback.tick()

    def test_edge_and_node_are_separate_steps(self, playback, clock):
        playback.start(SEQ)
        clock.advance(0.5)
        playback.tick()
        clock.advance(0.5)
        playback.tick()
        assert playback.visited_edge_ids == {"eAB"}
        assert playback.visited_node_ids == {"A"}

    def test_late_tick_applies_only_one_event(self, playback, clock):
        playback.start(SEQ)
        clock.advance(10)
        assert playback.tick()
        assert playback.cursor == 1

    def test_advance_ignores_cadence(self, playback):
        playback.start(SEQ)
        assert playback.advance()
        assert playback.advance()
        assert playback.cursor == 2

    def test_finish_applies_remaining(self, playback):
        playback.start(SEQ)
        playback.advance()
        assert playback.finish() == 4
        assert not playback.is_running
        assert playback.progress == 1.0


class TestCancellation:
    def test_stale_token_dropped_after_restart(self, playback, clock):
        old = playback.start(SEQ)
        new = playback.start(SEQ)
        clock.advance(0.5)
        assert not playback.tick(old)
        assert playback.tick(new)

    def test_tick_after_reset_is_dropped(self, playback, clock):
        token = playback.start(SEQ)
        playback.reset()
        clock.advance(5)
        assert not playback.tick(token)
        assert playback.visited_node_ids == frozenset()

    def test_tokenless_tick_still_works(self, playback, clock):
        playback.start(SEQ)
        clock.advance(0.5)
        assert playback.tick()


class TestSpeedAndEvents:
    def test_speed_presets(self, playback):
        for name, seconds in SPEED_PRESETS.items():
            playback.set_speed(name)
            assert playback.interval == seconds
        playback.set_speed("ludicrous")
        assert playback.interval == DEFAULT_INTERVAL

    def test_interval_floor(self, clock):
        assert PlaybackEngine(interval=0, clock=clock).interval == MIN_INTERVAL
        engine = PlaybackEngine(clock=clock)
        engine.set_interval(0.001)
        assert engine.interval == MIN_INTERVAL

    def test_on_change_fires_per_event_and_reset(self, clock):
        calls = []
        engine = PlaybackEngine(clock=clock, on_change=lambda e: calls.append(e.cursor))
        engine.start(SEQ[:2])
        engine.finish()
        engine.reset()
        assert calls == [1, 2, 0]

    def test_unknown_kinds_and_unhashable_targets_ignored(self, playback):
        playback.start((VisitEvent("x", "banana"), VisitEvent(["A"], "node"), VisitEvent.node("B")))
        assert playback.finish() == 3
        assert playback.visited_node_ids == {"B"}
        assert playback.visited_edge_ids == frozenset()

    def test_to_dict(self, playback):
        playback.start(SEQ)
        playback.advance()
        data = playback.to_dict()
        assert data["state"] == "running"
        assert data["running"] is True
        assert data["cursor"] == 1
        assert data["total"] == 5
        assert data["visited_node_ids"] == ["A"]
        assert data["visited_edge_ids"] == []
        assert data["token"] == playback.token

    def test_to_dict_projects_non_json_targets(self, playback):
        playback.start([VisitEvent(("x", 1), "node"), VisitEvent(frozenset(["e"]), "edge")])
        playback.finish()
        data = playback.to_dict()
        assert data["visited_node_ids"] == ["('x', 1)"]
        assert data["visited_edge_ids"] == ["frozenset({'e'})"]
