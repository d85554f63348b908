"""
playback.py — Timed Playback Engine
====================================
Replays a VisitEvent sequence one event per interval, growing the
visited node / edge sets the renderer styles from.

State machine:
    IDLE     →  start(seq)           →  RUNNING
    RUNNING  →  tick() / advance()   →  RUNNING   (one event applied)
    RUNNING  →  last event applied   →  IDLE      (animation complete)
    any      →  start(seq)           →  RUNNING   (previous run discarded)
    any      →  reset()              →  IDLE      (sequence + sets cleared)

Cancellation:
  Every start() / reset() bumps a run token.  A scheduler that captured
  the token from start() passes it back to tick(); ticks carrying a stale
  token are dropped, so a reset or restart always wins over any advance
  that was scheduled before it.

Thread safety:
  This class is NOT thread-safe.  Drive it from one thread (a request
  handler holding the workspace, a UI timer, or a test).
"""

import logging
import time
from enum import Enum
from typing import Callable, FrozenSet, Iterable, Optional, Set

from algorithms.event import VisitEvent, VisitKind, VisitSequence, json_safe

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE    = "idle"
    RUNNING = "running"


# ---------------------------------------------------------------------------
# Cadence presets (seconds per event)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,
    "medium": 0.5,
    "fast":   0.2,
    "turbo":  0.05,
}

DEFAULT_INTERVAL = SPEED_PRESETS["medium"]
MIN_INTERVAL     = 0.02


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class PlaybackEngine:
    """
    Attributes:
        state     : Current PlaybackState.
        sequence  : The installed VisitEvent sequence (empty when idle after reset).
        cursor    : Index of the next event to apply.
        interval  : Seconds between automatic advances.
        on_change : Optional callback(engine) fired after each applied event
                    and after reset.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        interval: float = DEFAULT_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        on_change: Optional[Callable[["PlaybackEngine"], None]] = None,
    ):
        self.sequence:  VisitSequence = ()
        self.cursor:    int           = 0
        self.state:     PlaybackState = PlaybackState.IDLE
        self.interval:  float         = max(MIN_INTERVAL, interval)
        self.on_change = on_change

        self._clock = clock
        self._visited_nodes: Set[str] = set()
        self._visited_edges: Set[str] = set()
        self._token    = 0
        self._next_due = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, sequence: Iterable[VisitEvent]) -> int:
        """Install a fresh sequence and start running.  Returns the run token."""
        self._token        += 1
        self.sequence       = tuple(sequence)
        self.cursor         = 0
        self._visited_nodes = set()
        self._visited_edges = set()
        self._next_due      = self._clock() + self.interval
        self.state = PlaybackState.RUNNING if self.sequence else PlaybackState.IDLE
        logger.debug("Playback started: %d events (token %d)", len(self.sequence), self._token)
        return self._token

    def reset(self) -> None:
        """Back to IDLE with nothing visited.  Pending ticks become stale."""
        self._token        += 1
        self.sequence       = ()
        self.cursor         = 0
        self._visited_nodes = set()
        self._visited_edges = set()
        self.state          = PlaybackState.IDLE
        logger.debug("Playback reset (token %d)", self._token)
        self._notify()

    # ------------------------------------------------------------------
    # Advancing
    # ------------------------------------------------------------------
    def tick(self, token: Optional[int] = None) -> bool:
        """
        Call periodically from your event loop / timer.  If running and the
        interval has elapsed, applies one event.  Returns True if an event
        was applied.
        """
        if token is not None and token != self._token:
            return False
        if self.state is not PlaybackState.RUNNING:
            return False
        now = self._clock()
        if now < self._next_due:
            return False
        self._next_due = now + self.interval
        return self.advance()

    def advance(self) -> bool:
        """Apply exactly one event now, ignoring the cadence."""
        if self.state is not PlaybackState.RUNNING:
            return False
        self._apply(self.sequence[self.cursor])
        self.cursor += 1
        if self.cursor >= len(self.sequence):
            self.state = PlaybackState.IDLE
            logger.debug("Playback complete after %d events", self.cursor)
        self._notify()
        return True

    def finish(self) -> int:
        """Apply every remaining event.  Returns how many were applied."""
        applied = 0
        while self.advance():
            applied += 1
        return applied

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.interval = SPEED_PRESETS.get(preset, DEFAULT_INTERVAL)

    def set_interval(self, seconds: float) -> None:
        self.interval = max(MIN_INTERVAL, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def token(self) -> int:
        return self._token

    @property
    def visited_node_ids(self) -> FrozenSet[str]:
        return frozenset(self._visited_nodes)

    @property
    def visited_edge_ids(self) -> FrozenSet[str]:
        return frozenset(self._visited_edges)

    @property
    def total(self) -> int:
        return len(self.sequence)

    @property
    def is_running(self) -> bool:
        return self.state is PlaybackState.RUNNING

    @property
    def progress(self) -> float:
        return self.cursor / len(self.sequence) if self.sequence else 0.0

    def to_dict(self) -> dict:
        return {
            "state":            self.state.value,
            "running":          self.is_running,
            "token":            self._token,
            "cursor":           self.cursor,
            "total":            self.total,
            "interval":         self.interval,
            "visited_node_ids": [json_safe(t) for t in sorted(self._visited_nodes, key=str)],
            "visited_edge_ids": [json_safe(t) for t in sorted(self._visited_edges, key=str)],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _apply(self, event: VisitEvent) -> None:
        # custom algorithms may emit anything; unknown kinds are consumed silently
        try:
            if event.kind == VisitKind.NODE:
                self._visited_nodes.add(event.target)
            elif event.kind == VisitKind.EDGE:
                self._visited_edges.add(event.target)
        except TypeError:
            logger.debug("Ignoring unhashable visit target %r", event.target)

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self)
