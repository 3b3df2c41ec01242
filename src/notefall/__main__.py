"""Entry point for `python -m notefall` or the `notefall` console script."""

import argparse
import logging
from pathlib import Path

from notefall.app import App
from notefall.config import DEFAULT_DB_PATH, DEFAULT_SOUNDFONT


def main() -> None:
    parser = argparse.ArgumentParser(description="Notefall - piano rhythm game")
    parser.add_argument("--songs-dir", default="", help="Directory with extra .json/.mid songs")
    parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="High score database")
    parser.add_argument("--soundfont", default=DEFAULT_SOUNDFONT, help="SoundFont (.sf2) file")
    parser.add_argument("--instrument", choices=["piano", "xylophone", "synth"], default="piano")
    parser.add_argument("--volume", type=float, default=0.5, help="0.0 to 1.0")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = App(
        songs_dir=args.songs_dir,
        db_path=args.db,
        soundfont=args.soundfont,
        instrument=args.instrument,
        volume=args.volume,
    )
    app.run()


if __name__ == "__main__":
    main()
