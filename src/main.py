#!/usr/bin/env python3

import sys
import random
import logging
import argparse
from typing import List, Optional
from track_list import TrackList, TrackListError
from track_sequencer import TrackSequencer, PlaybackModeState
import config


def setup_logging(debug: bool = False):
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    use_debug = debug or config.LOG_LEVEL == 'DEBUG'
    log_level = logging.DEBUG if use_debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    root_logger.handlers.clear()

    if config.LOG_FILE:
        try:
            file_handler = logging.FileHandler(config.LOG_FILE)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(log_format))
            root_logger.addHandler(file_handler)
        except OSError as e:
            print(f"\033[1;33m~\033[0m cannot open log file {config.LOG_FILE}: {e}", file=sys.stderr)

    if debug:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(console_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())


def play_order(track_count: int, count: int, start_index: int = 0,
               shuffle: bool = False, repeat: bool = False, rng=None) -> List[int]:
    """
    Dry-run the sequencer.

    Returns the 0-based indices that would play, starting with start_index,
    stopping after count tracks or when the sequence ends.
    """
    if count < 1:
        return []
    sequencer = TrackSequencer(
        track_count,
        current_index=start_index,
        rng=rng,
        modes=PlaybackModeState(shuffle_enabled=shuffle, repeat_enabled=repeat),
    )
    order = [start_index]
    while len(order) < count:
        next_idx = sequencer.next_track()
        if next_idx is None:
            break
        sequencer.sync_to(next_idx)
        order.append(next_idx)
    return order


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='albumplayer',
        description='albumplayer - shuffle/repeat aware album sequencing',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s album.json               interactive player for album.json
  %(prog)s --tracks 8 --shuffle     interactive player, 8 untitled tracks
  %(prog)s --tracks 5 --order 12 --shuffle --repeat
                                    print the next 12 tracks and exit
        """
    )

    parser.add_argument(
        'tracklist',
        nargs='?',
        help='json track list (object with "tracks" or a bare array)'
    )
    parser.add_argument(
        '--tracks',
        type=int,
        metavar='N',
        help='use N untitled tracks instead of a track list file'
    )
    parser.add_argument(
        '--start',
        type=int,
        default=1,
        metavar='K',
        help='first track to play (1-based, default 1)'
    )
    parser.add_argument(
        '--shuffle',
        action='store_true',
        default=None,
        help='start with shuffle on'
    )
    parser.add_argument(
        '--repeat',
        action='store_true',
        default=None,
        help='start with repeat on'
    )
    parser.add_argument(
        '--order',
        type=int,
        metavar='M',
        help='print the next M track numbers and exit'
    )
    parser.add_argument(
        '--seed',
        type=int,
        help='seed the shuffle for reproducible orders'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='enable debug logging'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug)
    logger = logging.getLogger(__name__)

    if args.shuffle is not None:
        config.SHUFFLE_ON_LOAD = args.shuffle
    if args.repeat is not None:
        config.REPEAT_ON_LOAD = args.repeat

    try:
        if args.tracklist:
            track_list = TrackList.load(args.tracklist)
        elif args.tracks is not None:
            track_list = TrackList.from_count(args.tracks)
        else:
            parser.error('give a track list file or --tracks N')
    except TrackListError as e:
        print(f"\033[0;31m✗\033[0m {e}", file=sys.stderr)
        return 1

    start_index = args.start - 1
    if not 0 <= start_index < len(track_list):
        print(f"\033[0;31m✗\033[0m start track {args.start} invalid (1-{len(track_list)})", file=sys.stderr)
        return 1

    rng = random.Random(args.seed) if args.seed is not None else None

    if args.order is not None:
        order = play_order(
            len(track_list), args.order, start_index,
            shuffle=bool(config.SHUFFLE_ON_LOAD),
            repeat=bool(config.REPEAT_ON_LOAD),
            rng=rng,
        )
        for index in order:
            print(track_list[index])
        return 0

    from terminal_ui import TerminalUI
    try:
        ui = TerminalUI(track_list, start_index, rng=rng)
        ui.run()
    except KeyboardInterrupt:
        print("\n\n\033[2minterrupted\033[0m\n")
    except Exception as e:
        logger.exception(f"fatal error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
