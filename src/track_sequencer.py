"""
Track Sequencer for the album player.

This module decides which track plays next for a fixed playback context (an
album or a queue) given two independent modes: shuffle and repeat. It holds no
audio state and performs no I/O; the controller applies whatever index the
sequencer hands back and reports direct jumps through sync_to().

All indexing is 0-based. The controller converts to 1-based for display.
"""

import random
import logging
from dataclasses import dataclass, replace
from typing import Optional, List, Tuple

logger = logging.getLogger(__name__)


def generate_shuffle_order(track_count: int, anchor_index: int, rng=None) -> List[int]:
    """
    Build a random play order with the anchor track first.

    Args:
        track_count: Number of tracks in the playback context (>= 1).
        anchor_index: Track that must open the order (0-based).
        rng: Random source with randrange(); defaults to the random module.

    Returns:
        A permutation of range(track_count) whose first entry is anchor_index.

    Raises:
        ValueError: If track_count < 1 or anchor_index is out of range.
    """
    if track_count < 1:
        raise ValueError(f"track_count must be >= 1, got {track_count}")
    if not 0 <= anchor_index < track_count:
        raise ValueError(f"anchor_index {anchor_index} out of range (0-{track_count - 1})")

    rng = rng or random
    rest = [i for i in range(track_count) if i != anchor_index]

    # Fisher-Yates over the non-anchor indices
    for i in range(len(rest) - 1, 0, -1):
        j = rng.randrange(i + 1)
        rest[i], rest[j] = rest[j], rest[i]

    return [anchor_index] + rest


@dataclass
class PlaybackModeState:
    """User-toggled playback modes. Either, both or neither may be on."""
    shuffle_enabled: bool = False
    repeat_enabled: bool = False


class TrackSequencer:
    """
    Shuffle/repeat aware track sequencing for one playback context.

    Two cursors are kept in step: current_index (position in the literal track
    list) and, while shuffle is on, shuffle_position (position in the shuffle
    order). Whenever shuffle is on and the caller has synced,
    shuffle_order[shuffle_position] == current_index.

    Usage:
        sequencer = TrackSequencer(12)  # album with 12 tracks

        next_idx = sequencer.next_track()  # decide, don't apply
        if next_idx is not None:
            sequencer.sync_to(next_idx)  # after the player switched

        sequencer.toggle_shuffle()
        sequencer.toggle_repeat()
    """

    def __init__(self, track_count: int, current_index: int = 0, rng=None,
                 modes: Optional[PlaybackModeState] = None):
        if track_count < 1:
            raise ValueError(f"track_count must be >= 1, got {track_count}")
        if not 0 <= current_index < track_count:
            raise ValueError(f"current_index {current_index} out of range (0-{track_count - 1})")

        self._track_count: int = track_count
        self._current_index: int = current_index
        self._rng = rng or random
        self._modes = PlaybackModeState()
        self._shuffle_order: Optional[List[int]] = None
        self._shuffle_position: int = 0

        if modes is not None:
            if modes.repeat_enabled:
                self.toggle_repeat()
            if modes.shuffle_enabled:
                self.toggle_shuffle()

        logger.debug(f"SEQUENCER: initialized with {track_count} tracks at {current_index}")

    @property
    def track_count(self) -> int:
        return self._track_count

    @property
    def current_index(self) -> int:
        """Current track index (0-based)."""
        return self._current_index

    @property
    def shuffle_position(self) -> int:
        """Position within the shuffle order; 0 while shuffle is off."""
        return self._shuffle_position

    @property
    def shuffle_order(self) -> Optional[Tuple[int, ...]]:
        """Snapshot of the active shuffle order, or None while shuffle is off."""
        if self._shuffle_order is None:
            return None
        return tuple(self._shuffle_order)

    @property
    def shuffle_enabled(self) -> bool:
        return self._modes.shuffle_enabled

    @property
    def repeat_enabled(self) -> bool:
        return self._modes.repeat_enabled

    @property
    def modes(self) -> PlaybackModeState:
        """Copy of the current mode flags."""
        return replace(self._modes)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._track_count:
            raise ValueError(f"track index {index} out of range (0-{self._track_count - 1})")

    def _regenerate(self, anchor_index: int) -> None:
        self._shuffle_order = generate_shuffle_order(self._track_count, anchor_index, self._rng)
        self._shuffle_position = 0
        logger.debug(f"SEQUENCER: shuffle order {[i + 1 for i in self._shuffle_order]}")

    def _wrap_anchor(self) -> int:
        """Pick the track opening the next shuffled cycle."""
        if self._track_count == 1:
            return 0
        finished = self._shuffle_order[self._shuffle_position]
        candidates = [i for i in range(self._track_count) if i != finished]
        return candidates[self._rng.randrange(len(candidates))]

    def toggle_shuffle(self) -> bool:
        """
        Toggle shuffle mode.

        Enabling always builds a fresh order anchored on the current track, so
        the track that is playing keeps playing. Disabling drops the order; the
        literal track list becomes authoritative again.

        Returns:
            New shuffle state (True = enabled).
        """
        self._modes.shuffle_enabled = not self._modes.shuffle_enabled
        if self._modes.shuffle_enabled:
            self._regenerate(self._current_index)
            logger.info("SEQUENCER: shuffle ON")
        else:
            self._shuffle_order = None
            self._shuffle_position = 0
            logger.info("SEQUENCER: shuffle OFF")
        return self._modes.shuffle_enabled

    def toggle_repeat(self) -> bool:
        """
        Toggle repeat mode.

        Returns:
            New repeat state (True = enabled).
        """
        self._modes.repeat_enabled = not self._modes.repeat_enabled
        logger.info(f"SEQUENCER: repeat {'ON' if self._modes.repeat_enabled else 'OFF'}")
        return self._modes.repeat_enabled

    def next_track(self) -> Optional[int]:
        """
        Decide the next track.

        Does NOT modify current_index - the caller applies the result and then
        reports it back through sync_to(). With shuffle on the shuffle cursor
        does move forward, and a wrap under repeat starts a new random cycle.

        Returns:
            Next track index (0-based), or None when playback should stop.
        """
        if not self._modes.shuffle_enabled:
            next_idx = self._current_index + 1
            if next_idx < self._track_count:
                return next_idx
            if self._modes.repeat_enabled:
                return 0
            return None

        next_pos = self._shuffle_position + 1
        if next_pos < self._track_count:
            self._shuffle_position = next_pos
            return self._shuffle_order[next_pos]

        if self._modes.repeat_enabled:
            self._regenerate(self._wrap_anchor())
            logger.debug("SEQUENCER: shuffle cycle complete, starting a new one")
            return self._shuffle_order[0]
        return None

    def peek_next(self) -> Optional[int]:
        """
        Look at the next track without touching any state.

        Returns None at the end of a shuffled cycle even with repeat on, since
        the next cycle's order does not exist yet.
        """
        if not self._modes.shuffle_enabled:
            next_idx = self._current_index + 1
            if next_idx < self._track_count:
                return next_idx
            return 0 if self._modes.repeat_enabled else None

        next_pos = self._shuffle_position + 1
        if next_pos < self._track_count:
            return self._shuffle_order[next_pos]
        return None

    def prev_track(self) -> Optional[int]:
        """
        Decide the previous track.

        With shuffle on this steps the shuffle cursor back one. Never wraps.

        Returns:
            Previous track index (0-based), or None if at the beginning.
        """
        if self._modes.shuffle_enabled:
            if self._shuffle_position == 0:
                return None
            self._shuffle_position -= 1
            return self._shuffle_order[self._shuffle_position]

        if self._current_index > 0:
            return self._current_index - 1
        return None

    def sync_to(self, index: int) -> None:
        """
        Resynchronize after the active track changed.

        Call this whenever the player switches track, including after applying
        a next_track()/prev_track() result and after a direct jump.

        Args:
            index: Track now playing (0-based).

        Raises:
            ValueError: If index is out of range.
        """
        self._check_index(index)
        self._current_index = index

        if not self._modes.shuffle_enabled:
            return

        try:
            self._shuffle_position = self._shuffle_order.index(index)
        except ValueError:
            logger.error(f"SEQUENCER: track {index} missing from shuffle order "
                         f"{self._shuffle_order}, regenerating")
            self._regenerate(index)

    def reset(self, current_index: int = 0) -> None:
        """
        Rewind to a track, keeping modes.

        If shuffle is enabled, regenerates the shuffle order from that track.
        """
        self._check_index(current_index)
        self._current_index = current_index
        self._shuffle_position = 0
        if self._modes.shuffle_enabled:
            self._regenerate(current_index)
        logger.debug(f"SEQUENCER: reset to track {current_index + 1}")
