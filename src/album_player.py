import logging
from typing import Optional, Callable
from audio_transport import AudioTransport, PlayerState
from track_list import Track, TrackList
from track_sequencer import TrackSequencer, PlaybackModeState
import config

logger = logging.getLogger(__name__)


class AlbumPlayerController:
    """
    Drives a transport through one playback context.

    The sequencer decides, the controller applies: every track switch loads the
    track on the transport and then reports the new index back to the
    sequencer with sync_to().
    """

    def __init__(self, transport: AudioTransport, rng=None):
        self.transport = transport
        self.transport.on_track_end = self._on_track_end
        self._rng = rng

        self.track_list: Optional[TrackList] = None
        self.sequencer: Optional[TrackSequencer] = None

        self.on_track_change: Optional[Callable] = None
        self.on_album_loaded: Optional[Callable] = None
        self.on_status_change: Optional[Callable] = None

    @property
    def shuffle_on(self) -> bool:
        return self.sequencer.shuffle_enabled if self.sequencer else False

    @property
    def repeat_on(self) -> bool:
        return self.sequencer.repeat_enabled if self.sequencer else False

    def is_loaded(self) -> bool:
        return self.track_list is not None

    def load(self, track_list: TrackList, start_index: int = 0):
        if not 0 <= start_index < len(track_list):
            raise ValueError(f"start_index {start_index} out of range (0-{len(track_list) - 1})")

        if self.is_loaded():
            self.unload()

        self.track_list = track_list
        self.sequencer = TrackSequencer(
            len(track_list),
            current_index=start_index,
            rng=self._rng,
            modes=PlaybackModeState(
                shuffle_enabled=bool(config.SHUFFLE_ON_LOAD),
                repeat_enabled=bool(config.REPEAT_ON_LOAD),
            ),
        )

        self.transport.load_track(track_list[start_index])
        logger.info(f"album loaded: {len(track_list)} tracks, starting at {start_index + 1}")

        if self.on_album_loaded:
            self.on_album_loaded(len(track_list))

    def unload(self):
        if not self.is_loaded():
            return
        self.transport.stop()
        self.track_list = None
        self.sequencer = None
        logger.info("album unloaded")

    def _switch_to(self, index: int, auto_play: bool):
        self.transport.stop()
        self.transport.load_track(self.track_list[index])
        self.sequencer.sync_to(index)
        if auto_play:
            self.transport.play()
        if self.on_track_change:
            self.on_track_change(index, len(self.track_list))

    def _on_track_end(self):
        if not self.is_loaded():
            return
        logger.info("track finished")
        next_idx = self.sequencer.next_track()
        if next_idx is None:
            self.sequencer.reset(0)
            self._switch_to(0, auto_play=False)
            if self.on_status_change:
                self.on_status_change("album_end")
            return
        self._switch_to(next_idx, auto_play=True)

    def play(self):
        if not self.is_loaded():
            logger.warning("no album loaded")
            return
        state = self.transport.get_state()
        if state == PlayerState.PLAYING:
            logger.debug("already playing")
            return
        self.transport.play()
        logger.info("[>] play (resuming)" if state == PlayerState.PAUSED else "[>] play")

    def pause(self):
        if self.transport.get_state() == PlayerState.PLAYING:
            self.transport.pause()
            logger.info("[||] pause")
        else:
            logger.debug("already paused/stopped")

    def stop(self):
        self.transport.stop()
        logger.info("[stop] stop")

    def next(self) -> Optional[int]:
        if not self.is_loaded():
            return None

        next_idx = self.sequencer.next_track()
        if next_idx is None:
            logger.info("already at last track")
            return None

        self._switch_to(next_idx, auto_play=self.transport.is_playing())
        logger.info(f"[>>] track {next_idx + 1}")
        return next_idx

    def prev(self) -> Optional[int]:
        if not self.is_loaded():
            return None

        was_playing = self.transport.is_playing()
        if self.transport.get_position() > config.PREV_RESTART_SECONDS:
            self.transport.stop()
            if was_playing:
                self.transport.play()
            logger.info("[<<] restarting current track")
            return self.sequencer.current_index

        prev_idx = self.sequencer.prev_track()
        if prev_idx is None:
            logger.info("already at first track")
            self.transport.seek(0)
            return None

        self._switch_to(prev_idx, auto_play=was_playing)
        logger.info(f"[<<] track {prev_idx + 1}")
        return prev_idx

    def goto(self, index: int) -> bool:
        """Jump straight to a track (0-based) and start playing it."""
        if not self.is_loaded():
            return False

        total = len(self.track_list)
        if not 0 <= index < total:
            logger.warning(f"track {index + 1} invalid (1-{total})")
            return False

        self._switch_to(index, auto_play=True)
        logger.info(f"[->] track {index + 1}")
        return True

    def seek(self, position_seconds: float):
        self.transport.seek(position_seconds)

    def shuffle(self) -> bool:
        """Toggle shuffle mode."""
        if not self.is_loaded():
            logger.warning("no album loaded - cannot enable shuffle")
            return False
        return self.sequencer.toggle_shuffle()

    def repeat(self) -> bool:
        """Toggle repeat mode."""
        if not self.is_loaded():
            logger.warning("no album loaded - cannot enable repeat")
            return False
        return self.sequencer.toggle_repeat()

    def get_current_index(self) -> int:
        return self.sequencer.current_index if self.is_loaded() else -1

    def get_current_track(self) -> Optional[Track]:
        if not self.is_loaded():
            return None
        return self.track_list[self.sequencer.current_index]

    def get_total_tracks(self) -> int:
        return len(self.track_list) if self.is_loaded() else 0

    def get_state(self) -> PlayerState:
        return self.transport.get_state()

    def get_position(self) -> float:
        return self.transport.get_position()

    def get_total_duration(self) -> float:
        return self.track_list.total_duration() if self.is_loaded() else 0.0

    def get_track_remaining_time(self) -> float:
        track = self.get_current_track()
        if track is None:
            return 0.0
        return max(0.0, track.duration_seconds - self.get_position())

    def get_album_remaining_time(self) -> float:
        """Remaining time in literal track order; meaningless under shuffle."""
        if not self.is_loaded():
            return 0.0
        return (self.get_track_remaining_time()
                + self.track_list.remaining_duration(self.sequencer.current_index))

    def cleanup(self):
        self.unload()
        self.transport.cleanup()
        logger.info("cleanup complete")
