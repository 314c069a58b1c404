import logging
from typing import Optional, Callable, List
import config
from audio_transport import AudioTransport, PlayerState

logger = logging.getLogger(__name__)


class SimulatedTransport(AudioTransport):
    """
    In-memory transport with a manual clock.

    Nothing is played; time moves only through advance_time() and a track ends
    only through finish_track() or by running past its duration. Restricted
    tracks stop after the preview window.
    """

    def __init__(self):
        self.state = PlayerState.STOPPED
        self.current_track = None
        self.loaded: List = []
        self._position: float = 0.0
        self.on_track_end: Optional[Callable] = None

    def load_track(self, track) -> bool:
        if track is None:
            return False
        self.current_track = track
        self.loaded.append(track)
        self._position = 0.0
        logger.debug(f"SimulatedTransport: loaded track {track.number}")
        return True

    def play(self) -> None:
        if self.current_track is None:
            logger.debug("SimulatedTransport: nothing loaded")
            return
        self.state = PlayerState.PLAYING

    def pause(self) -> None:
        if self.state == PlayerState.PLAYING:
            self.state = PlayerState.PAUSED

    def stop(self) -> None:
        self.state = PlayerState.STOPPED
        self._position = 0.0

    def seek(self, position_seconds: float) -> None:
        self._position = max(0.0, min(position_seconds, self._play_limit()))

    def get_position(self) -> float:
        return self._position

    def get_state(self) -> PlayerState:
        return self.state

    def _play_limit(self) -> float:
        if self.current_track is None:
            return 0.0
        duration = self.current_track.duration_seconds
        if self.current_track.restricted:
            if duration <= 0:
                return config.PREVIEW_DURATION_SECONDS
            return min(duration, config.PREVIEW_DURATION_SECONDS)
        return duration

    def advance_time(self, seconds: float) -> None:
        """Move the clock forward; ends the track if it runs out."""
        if self.state != PlayerState.PLAYING or seconds <= 0:
            return
        self._position += seconds
        limit = self._play_limit()
        if limit > 0 and self._position >= limit:
            self._position = limit
            self.finish_track()

    def finish_track(self) -> None:
        """Pretend the loaded track played to its end."""
        if self.current_track is None:
            return
        logger.info(f"SimulatedTransport: track {self.current_track.number} ended")
        self.state = PlayerState.STOPPED
        self._position = 0.0
        if self.on_track_end:
            self.on_track_end()

    def cleanup(self) -> None:
        self.stop()
        self.current_track = None
        self.on_track_end = None
