"""Command-line front end.

Usage::

    chordkit describe "Cm7b5"
    chordkit describe "C9/E^1" --octave 3
    chordkit guess C E G Bb
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from chordkit.chord import Chord
from chordkit.errors import ChordError
from chordkit.guesser import guess
from chordkit.octave import Octave
from chordkit.parser import parse, parse_note

logger = logging.getLogger(__name__)


def describe(chord: Chord) -> str:
    """Format a chord, its tones and their frequencies for display.

    Examples
    --------
    >>> print(describe(parse("Am")))
    Am
      tones: A4 C5 E5
      frequencies: 440.00 523.25 659.26
    """
    pitches = chord.derive()
    tones = " ".join(str(pitch) for pitch in pitches)
    frequencies = " ".join(f"{pitch.frequency:.2f}" for pitch in pitches)
    return f"{chord}\n  tones: {tones}\n  frequencies: {frequencies}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chordkit",
        description="Describe chord symbols and guess chords from notes",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parser and guesser details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    describe_parser = subparsers.add_parser(
        "describe",
        help="Describe a chord symbol",
        description=(
            "Describe a chord symbol: root (C, D#, Eb, F##, B♭), modifiers (7, m7b5, maj9, dim, +), "
            "extensions (sus4, add9), slash note (/E), octave (@3), inversion (^1) and a trailing "
            "crunch marker (#) that folds every tone into the root's octave."
        ),
    )
    describe_parser.add_argument("symbol", help="Chord symbol to parse")
    describe_parser.add_argument(
        "-o",
        "--octave",
        type=int,
        default=None,
        help="Override the octave of the root (default: from the symbol, else 4)",
    )

    guess_parser = subparsers.add_parser(
        "guess",
        help="Guess chords from a set of notes (ordered by simplicity)",
    )
    guess_parser.add_argument("notes", nargs="+", help="Notes without octaves, e.g. C Eb G")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "describe":
            chord = parse(args.symbol)
            if args.octave is not None:
                chord = chord.with_octave(Octave.from_int(args.octave))
            print(describe(chord))
        elif args.command == "guess":
            notes = [parse_note(name) for name in args.notes]
            candidates = guess(notes)
            if not candidates:
                logger.info("No chord matches %s", " ".join(args.notes))
            for candidate in candidates:
                print(describe(candidate))
    except ChordError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
