"""Tests for the chord model and derivation engine."""

import dataclasses

import pytest

from chordkit.chord import Chord, find_conflict, interval_table
from chordkit.errors import ConflictingModifiers, DerivationError, InvalidInversion, OctaveRangeError
from chordkit.modifier import Extension, Modifier
from chordkit.note import Letter, Note
from chordkit.octave import Octave
from chordkit.parser import parse


def tones(symbol: str) -> list[str]:
    """Derive a symbol and render its pitches."""
    return [str(pitch) for pitch in parse(symbol).derive()]


class TestDerive:
    """Test chord tone derivation."""

    def test_major_triad(self) -> None:
        """Test the default chord is a major triad in octave 4."""
        assert tones("C") == ["C4", "E4", "G4"]

    def test_half_diminished(self) -> None:
        """Test m7b5 yields the half-diminished seventh."""
        assert tones("Cm7b5") == ["C4", "E♭4", "G♭4", "B♭4"]

    def test_minor_seventh_spelling(self) -> None:
        """Test flats are spelled from the root letter."""
        assert tones("F#m7") == ["F♯4", "A4", "C♯5", "E5"]

    def test_octave_follows_spelled_note(self) -> None:
        """Test tones above B land in the next octave."""
        assert tones("A") == ["A4", "C♯5", "E5"]

    def test_diminished_adds_diminished_seventh(self) -> None:
        """Test dim is the diminished seventh chord."""
        assert tones("Cdim") == ["C4", "E♭4", "G♭4", "B♭♭4"]
        assert parse("Cdim") == parse("Cdim7") == parse("C°")

    def test_diminished_with_explicit_seventh(self) -> None:
        """Test an explicit seventh replaces the diminished seventh."""
        chord = Chord(Note(Letter.C), modifiers={Modifier.DIMINISHED, Modifier.DOMINANT7})
        assert [str(p) for p in chord.derive()] == ["C4", "E♭4", "G♭4", "B♭4"]

    def test_augmented(self) -> None:
        """Test + raises the fifth."""
        assert tones("C+") == ["C4", "E4", "G♯4"]

    def test_dominant_tower(self) -> None:
        """Test each dominant degree includes the lower ones."""
        assert tones("C7") == ["C4", "E4", "G4", "B♭4"]
        assert tones("C9") == ["C4", "E4", "G4", "B♭4", "D5"]
        assert tones("C11") == ["C4", "E4", "G4", "B♭4", "D5", "F5"]
        assert tones("C13") == ["C4", "E4", "G4", "B♭4", "D5", "F5", "A5"]

    def test_major_seventh_with_tower(self) -> None:
        """Test maj9 keeps the ninth and raises the seventh."""
        assert tones("Cmaj7") == ["C4", "E4", "G4", "B4"]
        assert tones("Cmaj9") == ["C4", "E4", "G4", "B4", "D5"]

    def test_altered_ninths(self) -> None:
        """Test b9 and #9 replace or insert the ninth."""
        assert tones("C7b9") == ["C4", "E4", "G4", "B♭4", "D♭5"]
        assert tones("C7#9") == ["C4", "E4", "G4", "B♭4", "D♯5"]
        assert tones("C9b9") == ["C4", "E4", "G4", "B♭4", "D♭5"]

    def test_sharp_eleven(self) -> None:
        """Test #11 overrides the eleventh."""
        assert tones("C11#11") == ["C4", "E4", "G4", "B♭4", "D5", "F♯5"]

    def test_suspensions_replace_third(self) -> None:
        """Test sus chords drop the third, even against minor."""
        assert tones("Csus2") == ["C4", "D4", "G4"]
        assert tones("Csus4") == ["C4", "F4", "G4"]
        assert tones("Cmsus4") == ["C4", "F4", "G4"]
        assert tones("Csus2sus4") == ["C4", "D4", "F4", "G4"]

    def test_added_tones_keep_existing_tones(self) -> None:
        """Test add tokens insert without removing."""
        assert tones("Cadd2") == ["C4", "D4", "E4", "G4"]
        assert tones("Cadd9") == ["C4", "E4", "G4", "D5"]
        assert tones("C6") == ["C4", "E4", "G4", "A4"]

    def test_sixth_and_thirteenth_keep_their_octaves(self) -> None:
        """Test shared pitch classes are not collapsed across octaves."""
        assert tones("Cadd6add13") == ["C4", "E4", "G4", "A4", "A5"]

    def test_same_stacked_tone_appears_once(self) -> None:
        """Test add9 on a ninth chord does not double the ninth."""
        assert tones("C9add9") == tones("C9")

    def test_upper_alteration_extensions(self) -> None:
        """Test b13 and #13 set the thirteenth."""
        assert tones("C13b13") == ["C4", "E4", "G4", "B♭4", "D5", "F5", "A♭5"]
        assert tones("C7#13") == ["C4", "E4", "G4", "B♭4", "A♯5"]

    def test_slash_below_root(self) -> None:
        """Test the slash bass is prepended one octave below the root."""
        assert tones("C/E") == ["E3", "C4", "E4", "G4"]
        assert tones("Am/G") == ["G3", "A4", "C5", "E5"]

    def test_octave_marker(self) -> None:
        """Test @ moves the root register."""
        assert tones("C@2") == ["C2", "E2", "G2"]


class TestInversion:
    """Test rotating the lowest tones up an octave."""

    def test_first_inversion(self) -> None:
        """Test C@3^1 moves C3 to the end as C4."""
        assert tones("C@3^1") == ["E3", "G3", "C4"]

    def test_second_inversion(self) -> None:
        """Test two tones move up, keeping their order."""
        assert tones("C^2") == ["G4", "C5", "E5"]

    def test_inversion_counts_slash(self) -> None:
        """Test the slash bass is the first tone to rotate."""
        assert tones("C/E^1") == ["C4", "E4", "G4", "E4"]

    def test_overflow(self) -> None:
        """Test a triad cannot be inverted five times."""
        with pytest.raises(InvalidInversion):
            parse("C^5").derive()

    def test_inversion_equal_to_tone_count(self) -> None:
        """Test N equal to the tone count also fails."""
        with pytest.raises(InvalidInversion):
            parse("C^3").derive()

    def test_negative_inversion_rejected(self) -> None:
        """Test negative inversions fail at construction."""
        with pytest.raises(InvalidInversion):
            Chord(Note(Letter.C), inversion=-1)

    def test_inversion_error_is_derivation_error(self) -> None:
        """Test the taxonomy."""
        with pytest.raises(DerivationError):
            parse("C7^4").derive()


class TestCrunch:
    """Test collapsing tones into the root's octave."""

    def test_every_tone_in_root_octave(self) -> None:
        """Test C9# keeps all tones in octave 4."""
        chord = parse("C9#")
        assert {pitch.octave for pitch in chord.derive()} == {Octave.FOUR}

    def test_pitch_classes_unchanged(self) -> None:
        """Test crunch keeps pitch classes and order."""
        crunched = parse("C9#").notes()
        plain = parse("C9").notes()
        assert crunched == plain

    def test_crunch_after_inversion(self) -> None:
        """Test crunch applies after the inversion."""
        assert tones("Cmaj7b9@3^2#") == ["G3", "B3", "D♭3", "C3", "E3"]


class TestRegisterLimits:
    """Test octave arithmetic during derivation."""

    def test_tower_above_octave_ten(self) -> None:
        """Test a thirteenth above octave 10 fails loudly."""
        with pytest.raises(OctaveRangeError):
            parse("C13@10").derive()

    def test_slash_below_octave_zero(self) -> None:
        """Test a slash bass below octave 0 fails loudly."""
        with pytest.raises(OctaveRangeError):
            parse("C/E@0").derive()


class TestConflicts:
    """Test rejection of ambiguous interval tables."""

    @pytest.mark.parametrize(
        ("modifiers", "extensions"),
        [
            ({Modifier.FLAT5, Modifier.AUGMENTED5}, set()),
            ({Modifier.DIMINISHED, Modifier.AUGMENTED5}, set()),
            ({Modifier.FLAT9, Modifier.SHARP9}, set()),
            ({Modifier.SHARP11}, {Extension.FLAT11}),
            (set(), {Extension.FLAT13, Extension.SHARP13}),
            ({Modifier.DOMINANT7, Modifier.DOMINANT9}, set()),
        ],
    )
    def test_conflicting_construction(self, modifiers: set, extensions: set) -> None:
        """Test conflicting members raise at construction."""
        assert find_conflict(modifiers, extensions) is not None
        with pytest.raises(ConflictingModifiers):
            Chord(Note(Letter.C), modifiers=modifiers, extensions=extensions)

    def test_conflict_from_symbol(self) -> None:
        """Test the parser surfaces conflicts."""
        with pytest.raises(ConflictingModifiers):
            parse("C+b5")

    def test_redundant_members_allowed(self) -> None:
        """Test overlapping but consistent members are legal."""
        assert find_conflict({Modifier.MINOR, Modifier.DIMINISHED}, set()) is None
        assert find_conflict({Modifier.MAJOR7, Modifier.DOMINANT13}, {Extension.SUS2, Extension.SUS4}) is None


class TestIntervalTable:
    """Test the interval table directly."""

    def test_sorted_by_semitones(self) -> None:
        """Test ascending order."""
        table = interval_table({Modifier.DOMINANT9}, {Extension.ADD4, Extension.SUS2})
        assert [i.semitones for i in table] == sorted(i.semitones for i in table)

    def test_empty_is_major_triad(self) -> None:
        """Test the starting table."""
        assert [i.semitones for i in interval_table(set(), set())] == [0, 4, 7]


class TestChordModel:
    """Test value semantics and helpers."""

    def test_chord_is_immutable(self) -> None:
        """Test frozen dataclass."""
        chord = parse("C")
        with pytest.raises(AttributeError):
            chord.root = Note(Letter.D)  # type: ignore[misc]

    def test_sets_are_frozen(self) -> None:
        """Test modifier collections are normalised to frozensets."""
        chord = Chord(Note(Letter.C), modifiers=[Modifier.MINOR])
        assert chord.modifiers == frozenset({Modifier.MINOR})

    def test_builders(self) -> None:
        """Test with_* methods return new chords."""
        chord = (
            Chord(Note(Letter.C))
            .with_modifiers(Modifier.MINOR, Modifier.DOMINANT7)
            .with_extensions(Extension.ADD11)
            .with_slash(Note(Letter.B, -1))
            .with_octave(3)
            .with_inversion(1)
            .with_crunch()
        )
        assert chord == parse("Cm7add11/Bb@3^1#")

    def test_with_octave_checks_range(self) -> None:
        """Test with_octave rejects out-of-range registers."""
        with pytest.raises(OctaveRangeError):
            parse("C").with_octave(11)

    def test_frequencies(self) -> None:
        """Test frequencies follow the derived tones."""
        assert parse("A").frequencies()[0] == pytest.approx(440.0)
        assert parse("Am").frequencies()[1] == pytest.approx(523.2511, rel=1e-5)

    def test_pitch_classes_include_slash(self) -> None:
        """Test slash notes count towards pitch classes."""
        assert parse("C/D").pitch_classes() == frozenset({0, 2, 4, 7})

    def test_replace_revalidates(self) -> None:
        """Test dataclasses.replace goes through validation."""
        with pytest.raises(ConflictingModifiers):
            dataclasses.replace(parse("C+"), modifiers=frozenset({Modifier.AUGMENTED5, Modifier.FLAT5}))


class TestSymbolRendering:
    """Test canonical symbol text."""

    @pytest.mark.parametrize(
        ("symbol", "expected"),
        [
            ("C", "C"),
            ("Cm7b5", "Cm7♭5"),
            ("Bbmaj9", "B♭maj9"),
            ("F#dim", "F♯°"),
            ("C-maj7", "Cmmaj7"),
            ("C7sus4", "C7sus4"),
            ("C7(b5)", "C7♭5"),
            ("C(b5)", "C(♭5)"),
            ("C/E@3^1", "C/E@3^1"),
            ("C9#", "C9@4#"),
        ],
    )
    def test_str(self, symbol: str, expected: str) -> None:
        """Test rendering of parsed symbols."""
        assert str(parse(symbol)) == expected

    @pytest.mark.parametrize(
        "symbol",
        [
            "C",
            "Cm7b5",
            "C(b5)",
            "C(#13)",
            "Bb13#11",
            "F#m7b5/E@3^2",
            "C9#",
            "C#@4#",
            "Eb+7",
            "Gsus4add9",
            "Dm6",
            "Db-maj7",
            "Abmaj13b13",
            "C7b9#11/Gb@5",
            "Cdim(7)",
            "Cdim(9)",
        ],
    )
    def test_round_trip_preserves_pitches(self, symbol: str) -> None:
        """Test rendered symbols parse back to the same pitches."""
        chord = parse(symbol)
        assert parse(str(chord)).derive() == chord.derive()

    def test_diminished_with_dominant_renders_parenthesized(self) -> None:
        """Test ° with a dominant seventh renders so it reads back with B♭, not B♭♭."""
        chord = Chord(Note(Letter.C), modifiers={Modifier.DIMINISHED, Modifier.DOMINANT7})
        assert str(chord) == "C°(7)"
        assert parse(str(chord)) == chord
        assert parse(str(chord)).derive() == chord.derive()
