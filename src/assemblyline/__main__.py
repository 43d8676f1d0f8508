"""Entry point for `python -m assemblyline` or the `assemblyline` console script."""

import argparse
import logging

from assemblyline.app import App, settings_overrides


def main() -> None:
    parser = argparse.ArgumentParser(description="Assembly Line — conveyor sorting game")
    parser.add_argument("--difficulty", choices=["easy", "medium", "hard"], help="Override the saved difficulty")
    parser.add_argument("--mute", action="store_true", help="Start with sound off")
    parser.add_argument("--soundfont", default="", help="SoundFont (.sf2) used for sound cues")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = App(overrides=settings_overrides(args.difficulty, args.mute), soundfont=args.soundfont or None)
    app.run()


if __name__ == "__main__":
    main()
