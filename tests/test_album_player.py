"""
python3 -m pytest tests/test_album_player.py -v
"""

import random
import pytest

import config
from album_player import AlbumPlayerController
from audio_transport import PlayerState
from simulated_transport import SimulatedTransport
from track_list import TrackList


class TestLoad:

    def test_load(self, transport, album):
        c = AlbumPlayerController(transport)
        loaded = []
        c.on_album_loaded = loaded.append
        c.load(album)
        assert c.is_loaded()
        assert loaded == [5]
        assert c.get_current_index() == 0
        assert transport.current_track.number == 1
        assert c.get_state() == PlayerState.STOPPED

    def test_load_start_index(self, transport, album):
        c = AlbumPlayerController(transport)
        c.load(album, start_index=3)
        assert c.get_current_track().number == 4
        assert transport.current_track.number == 4

    @pytest.mark.parametrize("start", [-1, 5])
    def test_load_invalid_start(self, transport, album, start):
        c = AlbumPlayerController(transport)
        with pytest.raises(ValueError):
            c.load(album, start_index=start)
        assert not c.is_loaded()

    def test_modes_from_config(self, transport, album):
        config.SHUFFLE_ON_LOAD = True
        config.REPEAT_ON_LOAD = True
        c = AlbumPlayerController(transport, rng=random.Random(3))
        c.load(album, start_index=2)
        assert c.shuffle_on is True
        assert c.repeat_on is True
        assert c.sequencer.shuffle_order[0] == 2

    def test_reload_replaces_context(self, controller):
        controller.shuffle()
        controller.load(TrackList.from_titles(["a", "b"]))
        assert controller.get_total_tracks() == 2
        assert controller.shuffle_on is False

    def test_not_loaded(self, transport):
        c = AlbumPlayerController(transport)
        assert c.get_current_index() == -1
        assert c.get_current_track() is None
        assert c.get_total_tracks() == 0
        assert c.next() is None
        assert c.prev() is None
        assert c.goto(0) is False
        assert c.shuffle() is False
        assert c.repeat() is False
        assert c.get_album_remaining_time() == 0.0


class TestTransportControl:

    def test_play_pause_resume(self, controller, transport):
        controller.play()
        assert transport.is_playing()
        controller.pause()
        assert controller.get_state() == PlayerState.PAUSED
        controller.play()
        assert controller.get_state() == PlayerState.PLAYING

    def test_stop(self, controller, transport):
        controller.play()
        transport.advance_time(12)
        controller.stop()
        assert controller.get_state() == PlayerState.STOPPED
        assert controller.get_position() == 0.0

    def test_seek(self, controller):
        controller.seek(42)
        assert controller.get_position() == 42


class TestNavigation:

    def test_next_while_stopped(self, controller, transport):
        assert controller.next() == 1
        assert controller.get_current_index() == 1
        assert transport.current_track.number == 2
        assert controller.get_state() == PlayerState.STOPPED

    def test_next_while_playing(self, controller):
        controller.play()
        controller.next()
        assert controller.get_state() == PlayerState.PLAYING

    def test_next_at_end(self, controller):
        controller.goto(4)
        assert controller.next() is None
        assert controller.get_current_index() == 4

    def test_track_change_callback(self, controller):
        changes = []
        controller.on_track_change = lambda idx, total: changes.append((idx, total))
        controller.next()
        controller.goto(3)
        assert changes == [(1, 5), (3, 5)]

    def test_goto(self, controller):
        assert controller.goto(3) is True
        assert controller.get_current_index() == 3
        assert controller.get_state() == PlayerState.PLAYING

    @pytest.mark.parametrize("index", [-1, 5])
    def test_goto_invalid(self, controller, index):
        assert controller.goto(index) is False
        assert controller.get_current_index() == 0

    def test_prev_goes_back(self, controller):
        controller.goto(2)
        assert controller.prev() == 1
        assert controller.get_current_index() == 1

    def test_prev_restarts_track(self, controller, transport):
        config.PREV_RESTART_SECONDS = 2.0
        controller.goto(2)
        transport.advance_time(30)
        assert controller.prev() == 2
        assert controller.get_current_index() == 2
        assert controller.get_position() == 0.0
        assert controller.get_state() == PlayerState.PLAYING

    def test_prev_at_first_track(self, controller):
        assert controller.prev() is None
        assert controller.get_current_index() == 0


class TestTrackEnd:

    def test_advances_and_keeps_playing(self, controller, transport):
        controller.play()
        transport.finish_track()
        assert controller.get_current_index() == 1
        assert controller.get_state() == PlayerState.PLAYING

    def test_album_end(self, controller, transport):
        statuses = []
        controller.on_status_change = statuses.append
        controller.goto(4)
        transport.finish_track()
        assert statuses == ["album_end"]
        assert controller.get_current_index() == 0
        assert controller.get_state() == PlayerState.STOPPED
        assert transport.current_track.number == 1

    def test_repeat_wraps(self, controller, transport):
        controller.repeat()
        controller.goto(4)
        transport.finish_track()
        assert controller.get_current_index() == 0
        assert controller.get_state() == PlayerState.PLAYING

    def test_plays_whole_album_by_time(self, controller, transport):
        statuses = []
        controller.on_status_change = statuses.append
        controller.play()
        played = [transport.current_track.number]
        while not statuses:
            transport.advance_time(1000)
            if not statuses:
                played.append(transport.current_track.number)
        assert played == [1, 2, 3, 4, 5]


class TestShuffleSession:

    def test_shuffle_plays_every_track_once(self, controller, transport):
        statuses = []
        controller.on_status_change = statuses.append
        controller.play()
        controller.goto(2)
        assert controller.shuffle() is True

        played = [controller.get_current_index()]
        for _ in range(4):
            transport.finish_track()
            played.append(controller.get_current_index())
        assert played[0] == 2
        assert sorted(played) == [0, 1, 2, 3, 4]

        transport.finish_track()
        assert statuses == ["album_end"]

    def test_goto_under_shuffle_resyncs(self, controller):
        controller.shuffle()
        order = controller.sequencer.shuffle_order
        controller.goto(order[3])
        assert controller.sequencer.shuffle_position == 3
        assert controller.next() == order[4]

    def test_shuffle_repeat_keeps_going(self, controller, transport):
        controller.shuffle()
        controller.repeat()
        controller.play()
        played = [controller.get_current_index()]
        for _ in range(14):
            transport.finish_track()
            played.append(controller.get_current_index())
        for cycle in range(3):
            assert sorted(played[cycle * 5:(cycle + 1) * 5]) == [0, 1, 2, 3, 4]
        assert controller.get_state() == PlayerState.PLAYING

    def test_prev_under_shuffle(self, controller):
        controller.shuffle()
        order = controller.sequencer.shuffle_order
        controller.next()
        controller.next()
        assert controller.prev() == order[1]
        assert controller.get_current_index() == order[1]

    def test_shuffle_off_keeps_track(self, controller):
        controller.shuffle()
        idx = controller.next()
        controller.shuffle()
        assert controller.get_current_index() == idx


class TestTimes:

    def test_total_duration(self, controller, album):
        assert controller.get_total_duration() == album.total_duration()

    def test_remaining(self, controller, transport):
        controller.goto(3)
        transport.advance_time(60)
        assert controller.get_track_remaining_time() == pytest.approx(123.0)
        assert controller.get_album_remaining_time() == pytest.approx(123.0 + 184.0)


class TestCleanup:

    def test_cleanup(self, controller, transport):
        controller.play()
        controller.cleanup()
        assert not controller.is_loaded()
        assert transport.current_track is None

    def test_unload_twice(self, transport, album):
        c = AlbumPlayerController(SimulatedTransport())
        c.load(album)
        c.unload()
        c.unload()
        assert not c.is_loaded()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
