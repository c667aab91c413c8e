"""Tests for pychord and Harte conversions."""

import pytest

from chordkit.converter import PYCHORD_QUALITY_TO_SHAPE, from_pychord, to_harte, to_pychord
from chordkit.modifier import Modifier
from chordkit.note import Letter, Note
from chordkit.parser import parse


class TestFromPychord:
    def test_simple_major(self):
        chord = from_pychord("C")
        assert chord.root == Note(Letter.C)
        assert chord.modifiers == frozenset()
        assert chord.slash is None

    def test_minor_seventh(self):
        chord = from_pychord("Gm7")
        assert chord.root == Note(Letter.G)
        assert chord.modifiers == frozenset({Modifier.MINOR, Modifier.DOMINANT7})

    def test_flat_root(self):
        chord = from_pychord("Bbm7")
        assert chord.root == Note(Letter.B, -1)
        assert str(chord) == "B♭m7"

    def test_sharp_root(self):
        chord = from_pychord("F#dim7")
        assert chord.root == Note(Letter.F, 1)
        assert chord.modifiers == frozenset({Modifier.DIMINISHED})

    def test_slash_chord(self):
        chord = from_pychord("C/E")
        assert chord.slash == Note(Letter.E)

    def test_triad_diminished(self):
        chord = from_pychord("Bdim")
        assert chord.pitch_classes() == frozenset({11, 2, 5})

    def test_unmapped_quality_falls_back_to_guess(self):
        chord = from_pychord("C7+5")
        assert "7+5" not in PYCHORD_QUALITY_TO_SHAPE
        assert str(chord) == "C+7"

    def test_no_equivalent(self):
        with pytest.raises(ValueError):
            from_pychord("C5")


class TestToPychord:
    def test_minor_seventh(self):
        assert to_pychord(parse("Gm7")) == "Gm7"

    def test_half_diminished(self):
        assert to_pychord(parse("Bbm7b5")) == "Bbm7-5"

    def test_slash_chord(self):
        assert to_pychord(parse("C/E")) == "C/E"

    def test_register_is_dropped(self):
        assert to_pychord(parse("D7@2^1")) == "D7"

    def test_unmapped(self):
        with pytest.raises(ValueError, match="No pychord quality"):
            to_pychord(parse("C7b9#11"))

    @pytest.mark.parametrize("symbol", ["C", "Am", "G7", "Fmaj7", "Ebm7", "F#dim7", "Dsus4", "A6", "E9", "C/G"])
    def test_round_trip(self, symbol):
        assert to_pychord(from_pychord(symbol)) == symbol


class TestToHarte:
    @pytest.mark.parametrize(
        ("symbol", "expected"),
        [
            ("C", "C:(3,5)"),
            ("Cm", "C:(b3,5)"),
            ("C7", "C:(3,5,b7)"),
            ("Cmaj7", "C:(3,5,7)"),
            ("Cm7b5", "C:(b3,b5,b7)"),
            ("Cdim", "C:(b3,b5,bb7)"),
            ("C9", "C:(3,5,b7,9)"),
            ("C7#11", "C:(3,5,b7,#11)"),
            ("Csus4", "C:(4,5)"),
            ("Bb7", "Bb:(3,5,b7)"),
        ],
    )
    def test_intervals(self, symbol, expected):
        assert to_harte(parse(symbol)) == expected

    def test_slash_as_degree(self):
        assert to_harte(parse("Eb/G")) == "Eb:(3,5)/3"

    def test_slash_outside_chord(self):
        assert to_harte(parse("C/Bb")) == "C:(3,5)/b7"
