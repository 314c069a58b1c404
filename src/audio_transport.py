"""
Audio Transport Interface for the album player.

This module defines the common interface (AudioTransport) that every playback
backend follows, so the controller can drive any of them without knowing how
audio is actually produced.

The PlayerState enum provides unified state representation across all transports.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Callable
import logging

logger = logging.getLogger(__name__)


class PlayerState(Enum):
    """Unified player state enum for all transport implementations."""
    STOPPED = 0
    PLAYING = 1
    PAUSED = 2


class AudioTransport(ABC):
    """
    Abstract base class for audio playback transports.

    All implementations must:
    - Use PlayerState enum for state representation
    - Play exactly one loaded track at a time
    - Call on_track_end when the loaded track finishes on its own

    Track selection belongs to the controller; a transport never advances by
    itself.
    """

    on_track_end: Optional[Callable[[], None]] = None

    @abstractmethod
    def load_track(self, track) -> bool:
        """
        Load a track for playback, replacing the current one.

        Args:
            track: Track from the active TrackList.

        Returns:
            True if the track loaded, False otherwise.
        """
        pass

    @abstractmethod
    def play(self) -> None:
        """
        Start or resume playback.

        If paused, resumes from current position.
        If stopped, starts from beginning of loaded track.
        """
        pass

    @abstractmethod
    def pause(self) -> None:
        """Pause playback, maintaining current position."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """
        Stop playback and reset position to beginning.

        After stop(), get_position() should return 0.
        """
        pass

    @abstractmethod
    def seek(self, position_seconds: float) -> None:
        """Seek to absolute position within current track."""
        pass

    @abstractmethod
    def get_position(self) -> float:
        """Position in seconds from start of current track, 0.0 if none."""
        pass

    @abstractmethod
    def get_state(self) -> PlayerState:
        pass

    def is_playing(self) -> bool:
        return self.get_state() == PlayerState.PLAYING

    @abstractmethod
    def cleanup(self) -> None:
        """
        Release all resources held by the transport.

        After cleanup(), the transport should not be used.
        """
        pass
