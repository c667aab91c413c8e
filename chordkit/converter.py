"""Conversion between chordkit chords and other chord notations.

- pychord notation (e.g. ``"Gm7"``, ``"F#dim7/A"``), through the pychord
  library.
- Harte interval-list notation (e.g. ``"C:(b3,b5,b7)"``), rendered from
  the interval table.

Neither notation carries a register, an inversion or the crunch flag, so
those are dropped on export and defaulted on import.
"""

from __future__ import annotations

from chordkit.chord import Chord
from chordkit.guesser import guess
from chordkit.modifier import Extension, Modifier
from chordkit.note import Interval, Note
from chordkit.parser import parse_note

Shape = tuple[frozenset[Modifier], frozenset[Extension]]


def _shape(*members: Modifier | Extension) -> Shape:
    modifiers = frozenset(m for m in members if isinstance(m, Modifier))
    extensions = frozenset(m for m in members if isinstance(m, Extension))
    return modifiers, extensions


# Mapping from pychord quality names to modifier/extension sets
PYCHORD_QUALITY_TO_SHAPE: dict[str, Shape] = {
    "": _shape(),
    "m": _shape(Modifier.MINOR),
    "7": _shape(Modifier.DOMINANT7),
    "m7": _shape(Modifier.MINOR, Modifier.DOMINANT7),
    "maj7": _shape(Modifier.MAJOR7),
    "M7": _shape(Modifier.MAJOR7),
    "mmaj7": _shape(Modifier.MINOR, Modifier.MAJOR7),
    "mM7": _shape(Modifier.MINOR, Modifier.MAJOR7),
    "dim": _shape(Modifier.MINOR, Modifier.FLAT5),
    "dim7": _shape(Modifier.DIMINISHED),
    "m7-5": _shape(Modifier.MINOR, Modifier.DOMINANT7, Modifier.FLAT5),
    "m7b5": _shape(Modifier.MINOR, Modifier.DOMINANT7, Modifier.FLAT5),
    "aug": _shape(Modifier.AUGMENTED5),
    "aug7": _shape(Modifier.AUGMENTED5, Modifier.DOMINANT7),
    "7-5": _shape(Modifier.DOMINANT7, Modifier.FLAT5),
    "7b5": _shape(Modifier.DOMINANT7, Modifier.FLAT5),
    "sus2": _shape(Extension.SUS2),
    "sus4": _shape(Extension.SUS4),
    "7sus4": _shape(Modifier.DOMINANT7, Extension.SUS4),
    "6": _shape(Extension.ADD6),
    "m6": _shape(Modifier.MINOR, Extension.ADD6),
    "add9": _shape(Extension.ADD9),
    "9": _shape(Modifier.DOMINANT9),
    "m9": _shape(Modifier.MINOR, Modifier.DOMINANT9),
    "maj9": _shape(Modifier.MAJOR7, Modifier.DOMINANT9),
    "7-9": _shape(Modifier.DOMINANT7, Modifier.FLAT9),
    "7b9": _shape(Modifier.DOMINANT7, Modifier.FLAT9),
    "7+9": _shape(Modifier.DOMINANT7, Modifier.SHARP9),
    "7#9": _shape(Modifier.DOMINANT7, Modifier.SHARP9),
    "11": _shape(Modifier.DOMINANT11),
    "m11": _shape(Modifier.MINOR, Modifier.DOMINANT11),
    "13": _shape(Modifier.DOMINANT13),
    "maj13": _shape(Modifier.MAJOR7, Modifier.DOMINANT13),
}

# Reverse mapping; the first spelling listed above wins
SHAPE_TO_PYCHORD_QUALITY: dict[Shape, str] = {}
for _quality, _members in PYCHORD_QUALITY_TO_SHAPE.items():
    SHAPE_TO_PYCHORD_QUALITY.setdefault(_members, _quality)


def _ascii(note: Note) -> str:
    """Spell a note with ASCII accidentals (``Bb``, ``F#``)."""
    marker = "#" if note.accidental > 0 else "b"
    return note.letter.name + marker * abs(note.accidental)


def _normalize_bass(bass: str | None) -> str | None:
    """Normalize bass note, converting empty strings to None."""
    return bass if bass else None


def from_pychord(chord_str: str) -> Chord:
    """Parse a pychord notation string into a Chord.

    Qualities listed in :data:`PYCHORD_QUALITY_TO_SHAPE` map directly.
    Any other quality pychord understands is resolved by guessing from its
    component notes, keeping the candidate on pychord's root.

    Parameters
    ----------
    chord_str : str
        Chord in pychord notation (e.g., "Gm7", "C", "F#dim7/A").

    Returns
    -------
    Chord
        The equivalent chord in octave 4.

    Raises
    ------
    ValueError
        If pychord rejects the symbol, or no chordkit chord has the same
        notes on the same root.

    Examples
    --------
    >>> str(from_pychord("Gm7"))
    'Gm7'
    >>> str(from_pychord("C/E"))
    'C/E'
    """
    from pychord import Chord as PyChord

    pc = PyChord(chord_str)
    quality_name = str(pc.quality)
    root = parse_note(pc.root)
    bass = _normalize_bass(pc.on)
    slash = parse_note(bass) if bass else None

    if quality_name in PYCHORD_QUALITY_TO_SHAPE:
        modifiers, extensions = PYCHORD_QUALITY_TO_SHAPE[quality_name]
        return Chord(root=root, modifiers=modifiers, extensions=extensions, slash=slash)

    components = PyChord(f"{pc.root}{quality_name}").components()
    for candidate in guess(parse_note(name) for name in components):
        if candidate.root.same_pitch(root):
            return candidate.with_slash(slash)
    msg = f"No chordkit equivalent for pychord chord: {chord_str}"
    raise ValueError(msg)


def to_pychord(chord: Chord) -> str:
    """Render a chord in pychord notation.

    Raises
    ------
    ValueError
        If the modifier/extension combination has no pychord quality.

    Examples
    --------
    >>> from chordkit.parser import parse
    >>> to_pychord(parse("Bbm7b5"))
    'Bbm7-5'
    >>> to_pychord(parse("C/E@3"))
    'C/E'
    """
    shape = (chord.modifiers, chord.extensions)
    if shape not in SHAPE_TO_PYCHORD_QUALITY:
        msg = f"No pychord quality for chord: {chord}"
        raise ValueError(msg)
    result = f"{_ascii(chord.root)}{SHAPE_TO_PYCHORD_QUALITY[shape]}"
    if chord.slash is not None:
        result = f"{result}/{_ascii(chord.slash)}"
    return result


def to_harte(chord: Chord) -> str:
    """Render a chord in Harte interval-list notation.

    The bass, if any, is written as a degree above the root.

    Examples
    --------
    >>> from chordkit.parser import parse
    >>> to_harte(parse("Cm7b5"))
    'C:(b3,b5,b7)'
    >>> to_harte(parse("Eb/G"))
    'Eb:(3,5)/3'
    """
    degrees = ",".join(interval.degree_name for interval in chord.intervals() if interval.semitones)
    result = f"{_ascii(chord.root)}:({degrees})"
    if chord.slash is not None:
        steps = (chord.slash.letter.index - chord.root.letter.index) % 7
        semitones = (chord.slash.semitone - chord.root.semitone) % 12
        result = f"{result}/{Interval(steps, semitones).degree_name}"
    return result
