import json
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

logger = logging.getLogger(__name__)


class TrackListError(Exception):
    pass


@dataclass(frozen=True)
class Track:
    number: int
    title: str = ""
    artist: str = ""
    duration_seconds: float = 0.0
    stream_url: str = ""
    restricted: bool = False

    def __str__(self):
        mins = int(self.duration_seconds // 60)
        secs = int(self.duration_seconds % 60)
        if self.title:
            return f"Track {self.number:02d} - {self.title} ({mins:02d}:{secs:02d})"
        return f"Track {self.number:02d} - {mins:02d}:{secs:02d}"


class TrackList:
    """
    Ordered, immutable set of tracks for one playback context.

    Position in the list is the track's 0-based index; Track.number is the
    1-based display number.
    """

    def __init__(self, tracks: Iterable[Track], title: str = ""):
        self._tracks: Tuple[Track, ...] = tuple(tracks)
        if not self._tracks:
            raise TrackListError("track list is empty")
        self.title = title

    def __len__(self) -> int:
        return len(self._tracks)

    def __getitem__(self, index: int) -> Track:
        return self._tracks[index]

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def total_duration(self) -> float:
        return sum(t.duration_seconds for t in self._tracks)

    def remaining_duration(self, after_index: int) -> float:
        """Duration of the tracks listed after after_index (literal order)."""
        return sum(t.duration_seconds for t in self._tracks[after_index + 1:])

    @classmethod
    def from_titles(cls, titles: Iterable[str], title: str = "") -> "TrackList":
        return cls((Track(number=i + 1, title=t) for i, t in enumerate(titles)), title=title)

    @classmethod
    def from_count(cls, count: int) -> "TrackList":
        if count < 1:
            raise TrackListError(f"track count must be >= 1, got {count}")
        return cls(Track(number=i + 1) for i in range(count))

    @classmethod
    def load(cls, path: str) -> "TrackList":
        """
        Load a track list from JSON.

        Accepts either {"title": ..., "tracks": [...]} or a bare array. Each
        entry is a title string or an object with title, artist,
        duration_seconds, stream_url and restricted keys.

        Raises:
            TrackListError: If the file is unreadable or malformed.
        """
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise TrackListError(f"cannot read track list {path}: {e}") from e

        title = ""
        if isinstance(data, dict):
            title = data.get("title", "")
            data = data.get("tracks")
        if not isinstance(data, list):
            raise TrackListError(f"{path}: expected a list of tracks")

        tracks = []
        for i, entry in enumerate(data):
            if isinstance(entry, str):
                tracks.append(Track(number=i + 1, title=entry))
            elif isinstance(entry, dict):
                try:
                    tracks.append(Track(
                        number=i + 1,
                        title=str(entry.get("title", "")),
                        artist=str(entry.get("artist", "")),
                        duration_seconds=float(entry.get("duration_seconds", 0.0)),
                        stream_url=str(entry.get("stream_url", "")),
                        restricted=bool(entry.get("restricted", False)),
                    ))
                except (TypeError, ValueError) as e:
                    raise TrackListError(f"{path}: bad track entry {i + 1}: {e}") from e
            else:
                raise TrackListError(f"{path}: bad track entry {i + 1}: {entry!r}")

        track_list = cls(tracks, title=title)
        logger.info(f"track list loaded: {len(track_list)} tracks from {path}")
        return track_list
