import random
import pytest

import config
from album_player import AlbumPlayerController
from simulated_transport import SimulatedTransport
from track_list import Track, TrackList

_CONFIG_KEYS = [
    'SHUFFLE_ON_LOAD',
    'REPEAT_ON_LOAD',
    'PREV_RESTART_SECONDS',
    'PREVIEW_DURATION_SECONDS',
    'LOG_LEVEL',
    'LOG_FILE',
]


@pytest.fixture(autouse=True)
def restore_config():
    saved = {key: getattr(config, key) for key in _CONFIG_KEYS}
    yield
    for key, val in saved.items():
        setattr(config, key, val)


@pytest.fixture
def album():
    return TrackList(
        [Track(number=i + 1, title=f"Song {i + 1}", duration_seconds=180.0 + i) for i in range(5)],
        title="Test Album",
    )


@pytest.fixture
def transport():
    return SimulatedTransport()


@pytest.fixture
def controller(transport, album):
    c = AlbumPlayerController(transport, rng=random.Random(1234))
    c.load(album)
    return c
