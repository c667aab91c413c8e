"""Chord symbol parsing, chord tone derivation and chord guessing.

This library models chords as immutable values that can be parsed from
compact symbols, expanded into pitches and frequencies, and inferred back
from an unordered set of notes.

Examples
--------
>>> from chordkit import guess, parse, parse_note

>>> # Parse a symbol and derive its tones
>>> chord = parse("Cm7b5")
>>> [str(p) for p in chord.derive()]
['C4', 'E♭4', 'G♭4', 'B♭4']

>>> # Slash bass, octave and inversion
>>> [str(p) for p in parse("C@3^1").derive()]
['E3', 'G3', 'C4']

>>> # Guess chords from notes, simplest first
>>> str(guess([parse_note(n) for n in ("C", "E", "G")])[0])
'C'
"""

from chordkit.chord import Chord
from chordkit.converter import from_pychord, to_harte, to_pychord
from chordkit.errors import (
    ChordError,
    ConflictingModifiers,
    DerivationError,
    InvalidAccidental,
    InvalidInversion,
    InvalidOctave,
    InvalidSlashNote,
    MalformedInversion,
    OctaveRangeError,
    ParseError,
    TrailingGarbage,
    UnrecognizedModifierToken,
    UnrecognizedRoot,
)
from chordkit.guesser import guess
from chordkit.labels import chord_label, label_to_multi_hot, multi_hot_to_label, pitch_class_vector
from chordkit.modifier import Degree, Extension, Modifier
from chordkit.note import Interval, Letter, Note
from chordkit.octave import Octave
from chordkit.parser import parse, parse_note
from chordkit.pitch import Pitch

__all__ = [
    "Chord",
    "ChordError",
    "ConflictingModifiers",
    "Degree",
    "DerivationError",
    "Extension",
    "Interval",
    "InvalidAccidental",
    "InvalidInversion",
    "InvalidOctave",
    "InvalidSlashNote",
    "Letter",
    "MalformedInversion",
    "Modifier",
    "Note",
    "Octave",
    "OctaveRangeError",
    "ParseError",
    "Pitch",
    "TrailingGarbage",
    "UnrecognizedModifierToken",
    "UnrecognizedRoot",
    "chord_label",
    "from_pychord",
    "guess",
    "label_to_multi_hot",
    "multi_hot_to_label",
    "parse",
    "parse_note",
    "pitch_class_vector",
    "to_harte",
    "to_pychord",
]
