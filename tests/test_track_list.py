import json
import pytest

from track_list import Track, TrackList, TrackListError


class TestTrack:

    def test_str_with_title(self):
        assert str(Track(number=3, title="Intro", duration_seconds=95)) == "Track 03 - Intro (01:35)"

    def test_str_without_title(self):
        assert str(Track(number=12, duration_seconds=61)) == "Track 12 - 01:01"


class TestTrackList:

    def test_empty_rejected(self):
        with pytest.raises(TrackListError):
            TrackList([])

    def test_sequence_access(self, album):
        assert len(album) == 5
        assert album[0].number == 1
        assert [t.number for t in album] == [1, 2, 3, 4, 5]

    def test_immutable(self, album):
        with pytest.raises(TypeError):
            album[0] = Track(number=9)

    def test_durations(self, album):
        assert album.total_duration() == pytest.approx(910.0)
        assert album.remaining_duration(2) == pytest.approx(183.0 + 184.0)
        assert album.remaining_duration(4) == 0

    def test_from_titles(self):
        tl = TrackList.from_titles(["a", "b", "c"], title="abc")
        assert tl.title == "abc"
        assert [t.title for t in tl] == ["a", "b", "c"]
        assert [t.number for t in tl] == [1, 2, 3]

    def test_from_count(self):
        assert len(TrackList.from_count(4)) == 4
        with pytest.raises(TrackListError):
            TrackList.from_count(0)


class TestLoad:

    def test_object_form(self, tmp_path):
        path = tmp_path / "album.json"
        path.write_text(json.dumps({
            "title": "Night Drive",
            "tracks": [
                {"title": "One", "artist": "A", "duration_seconds": 200, "stream_url": "https://x/1"},
                {"title": "Two", "duration_seconds": "150.5", "restricted": True},
                "Three",
            ],
        }))
        tl = TrackList.load(str(path))
        assert tl.title == "Night Drive"
        assert len(tl) == 3
        assert tl[0].artist == "A"
        assert tl[0].stream_url == "https://x/1"
        assert tl[1].duration_seconds == 150.5
        assert tl[1].restricted is True
        assert tl[2].title == "Three"
        assert tl[2].number == 3

    def test_bare_array(self, tmp_path):
        path = tmp_path / "album.json"
        path.write_text(json.dumps(["a", "b"]))
        assert len(TrackList.load(str(path))) == 2

    @pytest.mark.parametrize("content", [
        "not json",
        json.dumps({"tracks": "nope"}),
        json.dumps([]),
        json.dumps([42]),
        json.dumps([{"duration_seconds": "long"}]),
    ])
    def test_malformed(self, tmp_path, content):
        path = tmp_path / "album.json"
        path.write_text(content)
        with pytest.raises(TrackListError):
            TrackList.load(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(TrackListError):
            TrackList.load(str(tmp_path / "nope.json"))
