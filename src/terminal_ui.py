import logging
from typing import Callable, Optional
from album_player import AlbumPlayerController
from audio_transport import PlayerState
from simulated_transport import SimulatedTransport
from track_list import TrackList

logger = logging.getLogger(__name__)

NO_ALBUM = "\033[0;31m✗\033[0m no album loaded"


class TerminalUI:

    def __init__(self, track_list: TrackList, start_index: int = 0,
                 input_func: Optional[Callable[[str], str]] = None, rng=None):
        self.transport = SimulatedTransport()
        self.controller = AlbumPlayerController(self.transport, rng=rng)
        self.running = False
        self._input = input_func or input

        self.controller.on_track_change = self._on_track_change
        self.controller.on_album_loaded = self._on_album_loaded
        self.controller.on_status_change = self._on_status_change

        self.controller.load(track_list, start_index)

    def _on_track_change(self, index, total_tracks):
        logger.info(f"TRACK: {index + 1}/{total_tracks}")
        print(f"\033[0;34m→\033[0m {self.controller.track_list[index]}")

    def _on_album_loaded(self, total_tracks):
        print(f"\n\033[0;32m✓\033[0m album ready \033[2m({total_tracks} tracks)\033[0m\n")

    def _on_status_change(self, status):
        if status == "album_end":
            print("\033[2m○\033[0m end of album")

    def status_line(self) -> str:
        state = self.controller.get_state()
        state_symbol = {
            PlayerState.PLAYING: "\033[0;32m▸\033[0m",
            PlayerState.PAUSED: "\033[1;33m▍▍\033[0m",
            PlayerState.STOPPED: "\033[0;31m■\033[0m"
        }.get(state, "?")

        indicators = []
        if self.controller.repeat_on:
            indicators.append("\033[0;36m⟳\033[0m")
        if self.controller.shuffle_on:
            indicators.append("\033[0;36m⤮\033[0m")
        indicator_str = " " + " ".join(indicators) if indicators else ""

        track = self.controller.get_current_track()
        position = self.controller.get_position()
        pos_min, pos_sec = divmod(int(position), 60)
        dur_min, dur_sec = divmod(int(track.duration_seconds), 60)

        return (
            f"{state_symbol}  "
            f"track {track.number:02d}/{self.controller.get_total_tracks():02d}  "
            f"{pos_min:02d}:{pos_sec:02d} \033[2m/\033[0m {dur_min:02d}:{dur_sec:02d}"
            f"{indicator_str}"
        )

    def print_help(self):
        print()
        print("  \033[2mcommands\033[0m")
        print()
        print("    play           start/resume playback")
        print("    pause          pause playback")
        print("    stop           stop playback")
        print("    next           next track")
        print("    prev           previous track")
        print()
        print("    goto N         jump to track N")
        print("    seek N         seek to N seconds")
        print()
        print("    repeat         toggle repeat")
        print("    shuffle        toggle shuffle")
        print()
        print("    end            finish current track")
        print("    tick N         let N seconds play")
        print()
        print("    tracks         list all tracks")
        print("    status         show player status")
        print("    help           show help")
        print("    quit           exit")
        print()

    def print_tracks(self):
        total_duration = self.controller.get_total_duration()
        total_min, total_sec = divmod(int(total_duration), 60)

        print()
        print(f"  \033[2malbum\033[0m   {self.controller.get_total_tracks()} tracks   {total_min:02d}:{total_sec:02d}")
        print()

        current = self.controller.get_current_index()
        for i, track in enumerate(self.controller.track_list):
            marker = "\033[0;32m▸\033[0m" if i == current else " "
            print(f"  {marker} {track}")

        print()

    def handle_command(self, cmd_input: str) -> bool:
        """Run one command line. Returns False once the user quits."""
        parts = cmd_input.strip().lower().split()
        if not parts:
            return True

        cmd = parts[0]
        args = parts[1:]

        if cmd in ["quit", "exit", "q"]:
            print("\n\033[2m—\033[0m")
            return False

        if cmd == "help":
            self.print_help()
            return True

        if not self.controller.is_loaded():
            print(NO_ALBUM)
            return True

        if cmd == "play":
            self.controller.play()
        elif cmd == "pause":
            self.controller.pause()
        elif cmd == "stop":
            self.controller.stop()
        elif cmd == "next":
            if self.controller.next() is None:
                print("\033[2m○\033[0m no next track")
        elif cmd == "prev":
            self.controller.prev()
        elif cmd in ["goto", "seek", "tick"]:
            if not args:
                print(f"\033[2m{cmd} N\033[0m")
                return True
            try:
                value = float(args[0]) if cmd != "goto" else int(args[0])
            except ValueError:
                print("\033[0;31m✗\033[0m invalid")
                return True
            if cmd == "goto":
                if not self.controller.goto(value - 1):
                    print(f"\033[0;31m✗\033[0m track {value} invalid")
            elif cmd == "seek":
                self.controller.seek(value)
            else:
                self.transport.advance_time(value)
        elif cmd == "repeat":
            status = "on" if self.controller.repeat() else "off"
            print(f"\033[0;36mrepeat:\033[0m {status}")
        elif cmd == "shuffle":
            status = "on" if self.controller.shuffle() else "off"
            print(f"\033[0;36mshuffle:\033[0m {status}")
        elif cmd == "end":
            self.transport.finish_track()
        elif cmd == "tracks":
            self.print_tracks()
        elif cmd == "status":
            print(self.status_line())
        else:
            print(f"\033[0;31m✗\033[0m unknown \033[2m'{cmd}'\033[0m")
        return True

    def run(self):
        self.running = True

        print()
        print("  albumplayer")
        print("  \033[2msimulated transport\033[0m")
        print("  \033[2mtype 'help' for commands\033[0m")
        print()

        try:
            while self.running:
                try:
                    cmd_input = self._input("> ")
                except EOFError:
                    break
                except KeyboardInterrupt:
                    print("\n\n\033[2m(use 'quit' to exit)\033[0m")
                    continue

                try:
                    self.running = self.handle_command(cmd_input)
                except ValueError as e:
                    logger.error(f"command failed: {e}")
                    print(f"\n\033[0;31m✗\033[0m {e}")
        finally:
            self.cleanup()

    def cleanup(self):
        self.running = False
        self.controller.cleanup()
