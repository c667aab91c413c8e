"""Octave independent note spellings.

A :class:`Note` is a letter plus an accidental offset. Two equality
notions are needed: ``==`` compares spelling (``C♯ != D♭``) while
:meth:`Note.same_pitch` compares pitch class (``C♯`` sounds as ``D♭``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from chordkit.errors import InvalidAccidental

MAX_ACCIDENTALS = 2

SHARP = "♯"
FLAT = "♭"

# Pitch class to simplest spelling, by accidental preference
SHARP_SPELLINGS: tuple[tuple[str, int], ...] = (
    ("C", 0),
    ("C", 1),
    ("D", 0),
    ("D", 1),
    ("E", 0),
    ("F", 0),
    ("F", 1),
    ("G", 0),
    ("G", 1),
    ("A", 0),
    ("A", 1),
    ("B", 0),
)
FLAT_SPELLINGS: tuple[tuple[str, int], ...] = (
    ("C", 0),
    ("D", -1),
    ("D", 0),
    ("E", -1),
    ("E", 0),
    ("F", 0),
    ("G", -1),
    ("G", 0),
    ("A", -1),
    ("A", 0),
    ("B", -1),
    ("B", 0),
)


class Letter(Enum):
    """The seven natural note letters, valued by natural semitone above C."""

    C = 0
    D = 2
    E = 4
    F = 5
    G = 7
    A = 9
    B = 11

    @property
    def natural(self) -> int:
        """Semitones above C for the natural letter."""
        return self.value

    @property
    def index(self) -> int:
        """Position of the letter in C-D-E-F-G-A-B order."""
        return _LETTERS.index(self)

    def shifted(self, steps: int) -> Letter:
        """Return the letter ``steps`` diatonic steps above this one.

        Examples
        --------
        >>> Letter.A.shifted(2)
        <Letter.C: 0>
        """
        return _LETTERS[(self.index + steps) % len(_LETTERS)]


_LETTERS: tuple[Letter, ...] = tuple(Letter)


class Interval(NamedTuple):
    """A spelled interval above a root.

    Parameters
    ----------
    steps : int
        Diatonic letter steps (a third is 2, a ninth is 8).
    semitones : int
        Chromatic distance in semitones.
    """

    steps: int
    semitones: int

    @property
    def degree_name(self) -> str:
        """Harte style degree name, e.g. ``b3``, ``#11``, ``bb7``.

        Examples
        --------
        >>> Interval(2, 3).degree_name
        'b3'
        >>> Interval(10, 18).degree_name
        '#11'
        """
        degree = self.steps + 1
        octaves, step = divmod(self.steps, 7)
        natural = Letter.C.shifted(step).natural + 12 * octaves
        offset = (self.semitones - natural + 6) % 12 - 6
        # Perfect and major degrees are the reference, so minor is one flat
        marker = "#" * offset if offset > 0 else "b" * -offset
        return f"{marker}{degree}"


@dataclass(frozen=True)
class Note:
    """A pitch name without octave.

    Parameters
    ----------
    letter : Letter
        The natural letter.
    accidental : int
        Semitone offset; negative for flats, positive for sharps.
        Magnitude is at most two.

    Examples
    --------
    >>> str(Note(Letter.E, -1))
    'E♭'
    >>> Note(Letter.C, 1).same_pitch(Note(Letter.D, -1))
    True
    """

    letter: Letter
    accidental: int = 0

    def __post_init__(self) -> None:
        if abs(self.accidental) > MAX_ACCIDENTALS:
            msg = f"Accidental {self.accidental} exceeds {MAX_ACCIDENTALS} for {self.letter.name}"
            raise InvalidAccidental(msg, fragment=self.letter.name)

    @classmethod
    def parse(cls, text: str) -> Note:
        """Parse a note spelling such as ``"Eb"`` or ``"F♯"``."""
        from chordkit.parser import parse_note

        return parse_note(text)

    @classmethod
    def from_pitch_class(cls, pitch_class: int, *, prefer_flats: bool = False) -> Note:
        """Return the simplest spelling of a pitch class.

        Examples
        --------
        >>> str(Note.from_pitch_class(10, prefer_flats=True))
        'B♭'
        """
        spellings = FLAT_SPELLINGS if prefer_flats else SHARP_SPELLINGS
        name, accidental = spellings[pitch_class % 12]
        return cls(Letter[name], accidental)

    @property
    def semitone(self) -> int:
        """Semitones above C, not reduced (``B♯`` is 12, ``C♭`` is -1)."""
        return self.letter.natural + self.accidental

    @property
    def pitch_class(self) -> int:
        """Semitone reduced modulo 12."""
        return self.semitone % 12

    def same_pitch(self, other: Note) -> bool:
        """Return True if both notes share a pitch class."""
        return self.pitch_class == other.pitch_class

    def transpose(self, semitones: int) -> Note:
        """Transpose by semitones, keeping this note's sharp/flat preference.

        Examples
        --------
        >>> str(Note(Letter.B, -1).transpose(2))
        'C'
        >>> str(Note(Letter.F, 1).transpose(1))
        'G'
        """
        return Note.from_pitch_class(self.semitone + semitones, prefer_flats=self.accidental < 0)

    def transpose_interval(self, interval: Interval) -> Note:
        """Spell the note ``interval`` above this one.

        The letter moves by ``interval.steps`` so a minor third above C is
        E♭, not D♯. When the spelled result would need more than two
        accidentals, the simplest enharmonic spelling is used instead.

        Examples
        --------
        >>> str(Note(Letter.C).transpose_interval(Interval(2, 3)))
        'E♭'
        >>> str(Note(Letter.C).transpose_interval(Interval(6, 9)))
        'B♭♭'
        """
        letter = self.letter.shifted(interval.steps)
        target = (self.semitone + interval.semitones) % 12
        accidental = (target - letter.natural + 6) % 12 - 6
        if abs(accidental) > MAX_ACCIDENTALS:
            return self.transpose(interval.semitones)
        return Note(letter, accidental)

    def __str__(self) -> str:
        marker = SHARP if self.accidental > 0 else FLAT
        return self.letter.name + marker * abs(self.accidental)
