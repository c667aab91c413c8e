"""Chord symbol parser.

Grammar, consumed left to right; every stage but the root is optional::

    symbol     := root modifier* extension* slash? octave? inversion? crunch?
    root       := letter accidental{0,2}
    slash      := "/" root
    octave     := "@" [+-]? digits          (0-10)
    inversion  := "^" digits                (positive)
    crunch     := "#"                       (only as the last character)

Modifier and extension tokens are matched longest first, so ``maj7`` is
never read as ``m`` followed by ``aj7``. Parentheses and commas between
tokens are ignored, which allows ``C7(♭9,♯11)`` and ``C(♭5)``.

Accidentals directly after a letter belong to the note: ``Cb9`` is a C♭
ninth chord, and ``C#`` is C♯ rather than a crunched C (write ``C@4#``).
"""

from __future__ import annotations

import logging
import re

from chordkit.chord import CRUNCH_MARKER, Chord
from chordkit.errors import (
    InvalidAccidental,
    InvalidOctave,
    InvalidSlashNote,
    MalformedInversion,
    ParseError,
    TrailingGarbage,
    UnrecognizedModifierToken,
    UnrecognizedRoot,
)
from chordkit.modifier import Extension, Modifier
from chordkit.note import MAX_ACCIDENTALS, Letter, Note
from chordkit.octave import DEFAULT_OCTAVE, MAX_OCTAVE, MIN_OCTAVE, Octave

logger = logging.getLogger(__name__)

SHARP_MARKERS = "#♯"
FLAT_MARKERS = "b♭"
SEPARATORS = "(),"
DELIMITERS = "/@^"

OCTAVE_RE = re.compile(r"[+-]?\d+")
INVERSION_RE = re.compile(r"\d+")

MODIFIER_TOKENS: dict[str, tuple[Modifier, ...]] = {
    # Major and minor
    "M": (),
    "maj": (),
    "m": (Modifier.MINOR,),
    "min": (Modifier.MINOR,),
    "-": (Modifier.MINOR,),
    # Sevenths and dominant towers
    "maj7": (Modifier.MAJOR7,),
    "M7": (Modifier.MAJOR7,),
    "Δ": (Modifier.MAJOR7,),
    "Δ7": (Modifier.MAJOR7,),
    "maj9": (Modifier.MAJOR7, Modifier.DOMINANT9),
    "M9": (Modifier.MAJOR7, Modifier.DOMINANT9),
    "maj11": (Modifier.MAJOR7, Modifier.DOMINANT11),
    "M11": (Modifier.MAJOR7, Modifier.DOMINANT11),
    "maj13": (Modifier.MAJOR7, Modifier.DOMINANT13),
    "M13": (Modifier.MAJOR7, Modifier.DOMINANT13),
    "7": (Modifier.DOMINANT7,),
    "9": (Modifier.DOMINANT9,),
    "11": (Modifier.DOMINANT11,),
    "13": (Modifier.DOMINANT13,),
    # Minor major seventh
    "-maj7": (Modifier.MINOR, Modifier.MAJOR7),
    "mmaj7": (Modifier.MINOR, Modifier.MAJOR7),
    "mM7": (Modifier.MINOR, Modifier.MAJOR7),
    # Half diminished
    "m7b5": (Modifier.MINOR, Modifier.DOMINANT7, Modifier.FLAT5),
    "m7♭5": (Modifier.MINOR, Modifier.DOMINANT7, Modifier.FLAT5),
    "ø": (Modifier.MINOR, Modifier.DOMINANT7, Modifier.FLAT5),
    "ø7": (Modifier.MINOR, Modifier.DOMINANT7, Modifier.FLAT5),
    # Diminished (seventh unless a seventh is given explicitly)
    "dim": (Modifier.DIMINISHED,),
    "dim7": (Modifier.DIMINISHED,),
    "°": (Modifier.DIMINISHED,),
    "°7": (Modifier.DIMINISHED,),
    # Fifths
    "+": (Modifier.AUGMENTED5,),
    "aug": (Modifier.AUGMENTED5,),
    "#5": (Modifier.AUGMENTED5,),
    "♯5": (Modifier.AUGMENTED5,),
    "b5": (Modifier.FLAT5,),
    "♭5": (Modifier.FLAT5,),
    # Altered tensions
    "b9": (Modifier.FLAT9,),
    "♭9": (Modifier.FLAT9,),
    "#9": (Modifier.SHARP9,),
    "♯9": (Modifier.SHARP9,),
    "#11": (Modifier.SHARP11,),
    "♯11": (Modifier.SHARP11,),
}

EXTENSION_TOKENS: dict[str, Extension] = {
    "sus2": Extension.SUS2,
    "sus4": Extension.SUS4,
    "sus": Extension.SUS4,
    "b11": Extension.FLAT11,
    "♭11": Extension.FLAT11,
    "b13": Extension.FLAT13,
    "♭13": Extension.FLAT13,
    "#13": Extension.SHARP13,
    "♯13": Extension.SHARP13,
    "add2": Extension.ADD2,
    "add4": Extension.ADD4,
    "6": Extension.ADD6,
    "add6": Extension.ADD6,
    "add9": Extension.ADD9,
    "add11": Extension.ADD11,
    "add13": Extension.ADD13,
}

# Longest first, so compound tokens win over their prefixes
_MODIFIER_ORDER = sorted(MODIFIER_TOKENS, key=len, reverse=True)
_EXTENSION_ORDER = sorted(EXTENSION_TOKENS, key=len, reverse=True)


def parse(text: str) -> Chord:
    """Parse a chord symbol into a :class:`Chord`.

    Parameters
    ----------
    text : str
        Chord symbol, e.g. ``"Cm7b5"``, ``"F#9/E@3^1"``, ``"C9#"``.

    Returns
    -------
    Chord
        The chord described by the symbol. No tones are derived.

    Raises
    ------
    ParseError
        If the symbol is malformed; the subclass names the failing stage.
    ConflictingModifiers
        If the tokens claim the same chord tone twice (``C+b5``).

    Examples
    --------
    >>> str(parse("Cm7b5"))
    'Cm7♭5'
    >>> parse("C@3^1").inversion
    1
    """
    source = text
    text = text.strip()

    root, pos = _read_note(text, 0, UnrecognizedRoot, "root")
    modifiers, pos = _read_modifiers(text, pos)
    extensions, pos = _read_extensions(text, pos)

    slash = None
    if text.startswith("/", pos):
        slash, pos = _read_note(text, pos + 1, InvalidSlashNote, "slash note")

    octave = DEFAULT_OCTAVE
    if text.startswith("@", pos):
        octave, pos = _read_octave(text, pos + 1)

    inversion = 0
    if text.startswith("^", pos):
        inversion, pos = _read_inversion(text, pos + 1)

    crunch = text[pos:] == CRUNCH_MARKER
    if crunch:
        pos += len(CRUNCH_MARKER)

    if pos < len(text):
        fragment = text[pos:]
        msg = f"Unexpected trailing characters {fragment!r} in chord symbol {source!r}"
        raise TrailingGarbage(msg, text=text, position=pos, fragment=fragment)

    chord = Chord(
        root=root,
        octave=octave,
        modifiers=modifiers,
        extensions=extensions,
        slash=slash,
        inversion=inversion,
        crunch=crunch,
    )
    logger.debug("Parsed %r as %s", source, chord)
    return chord


def parse_note(text: str) -> Note:
    """Parse a single note spelling such as ``"C"``, ``"Eb"`` or ``"F##"``.

    Raises
    ------
    ParseError
        If the text is not exactly one note spelling.

    Examples
    --------
    >>> str(parse_note("eb"))
    'E♭'
    """
    text = text.strip()
    note, pos = _read_note(text, 0, UnrecognizedRoot, "note")
    if pos < len(text):
        fragment = text[pos:]
        msg = f"Unexpected trailing characters {fragment!r} in note {text!r}"
        raise TrailingGarbage(msg, text=text, position=pos, fragment=fragment)
    return note


def _read_note(text: str, pos: int, error: type[ParseError], what: str) -> tuple[Note, int]:
    """Read a letter and its accidentals starting at ``pos``."""
    if pos >= len(text) or text[pos].upper() not in Letter.__members__:
        fragment = text[pos : pos + 1]
        msg = f"Expected a {what} letter A-G at position {pos} of {text!r}, found {fragment!r}"
        raise error(msg, text=text, position=pos, fragment=fragment)

    letter = Letter[text[pos].upper()]
    start = pos
    pos += 1

    accidental = 0
    while pos < len(text) and text[pos] in SHARP_MARKERS + FLAT_MARKERS:
        step = 1 if text[pos] in SHARP_MARKERS else -1
        # A marker the note cannot take is left for a token (C#b5, Gb#9) or the crunch (Bb#)
        unusable = accidental * step < 0 or abs(accidental) == MAX_ACCIDENTALS
        if unusable and (_starts_token(text, pos) or text[pos:] == CRUNCH_MARKER):
            break
        if accidental * step < 0:
            fragment = text[start : pos + 1]
            msg = f"Note {fragment!r} mixes sharps and flats"
            raise InvalidAccidental(msg, text=text, position=start, fragment=fragment)
        if abs(accidental) == MAX_ACCIDENTALS:
            fragment = text[start : pos + 1]
            msg = f"Note {fragment!r} has more than {MAX_ACCIDENTALS} accidentals"
            raise InvalidAccidental(msg, text=text, position=start, fragment=fragment)
        accidental += step
        pos += 1

    return Note(letter, accidental), pos


def _starts_token(text: str, pos: int) -> bool:
    return any(text.startswith(token, pos) for token in _MODIFIER_ORDER + _EXTENSION_ORDER)


def _skip_separators(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in SEPARATORS:
        pos += 1
    return pos


def _at_boundary(text: str, pos: int) -> bool:
    """True at the end, at a stage delimiter, or at a trailing crunch marker."""
    return pos >= len(text) or text[pos] in DELIMITERS or text[pos:] == CRUNCH_MARKER


def _read_modifiers(text: str, pos: int) -> tuple[frozenset[Modifier], int]:
    modifiers: set[Modifier] = set()
    while True:
        pos = _skip_separators(text, pos)
        if _at_boundary(text, pos):
            break
        token = next((t for t in _MODIFIER_ORDER if text.startswith(t, pos)), None)
        if token is None:
            break
        modifiers.update(MODIFIER_TOKENS[token])
        pos += len(token)
    return frozenset(modifiers), pos


def _read_extensions(text: str, pos: int) -> tuple[frozenset[Extension], int]:
    extensions: set[Extension] = set()
    while True:
        pos = _skip_separators(text, pos)
        if _at_boundary(text, pos):
            break
        token = next((t for t in _EXTENSION_ORDER if text.startswith(t, pos)), None)
        if token is None:
            end = pos
            while end < len(text) and not _at_boundary(text, end):
                end += 1
            fragment = text[pos:end]
            msg = f"Unrecognized modifier or extension {fragment!r} in chord symbol {text!r}"
            raise UnrecognizedModifierToken(msg, text=text, position=pos, fragment=fragment)
        extensions.add(EXTENSION_TOKENS[token])
        pos += len(token)
    return frozenset(extensions), pos


def _read_octave(text: str, pos: int) -> tuple[Octave, int]:
    match = OCTAVE_RE.match(text, pos)
    if match is None:
        fragment = text[pos - 1 : pos + 1]
        msg = f"Expected an octave number after '@' in {text!r}"
        raise InvalidOctave(msg, text=text, position=pos - 1, fragment=fragment)
    value = int(match.group())
    if not MIN_OCTAVE <= value <= MAX_OCTAVE:
        fragment = match.group()
        msg = f"Octave {value} in {text!r} is outside {MIN_OCTAVE}-{MAX_OCTAVE}"
        raise InvalidOctave(msg, text=text, position=pos, fragment=fragment)
    return Octave(value), match.end()


def _read_inversion(text: str, pos: int) -> tuple[int, int]:
    match = INVERSION_RE.match(text, pos)
    if match is None or int(match.group()) == 0:
        fragment = text[pos - 1 : match.end() if match else pos + 1]
        msg = f"Expected a positive inversion after '^' in {text!r}"
        raise MalformedInversion(msg, text=text, position=pos - 1, fragment=fragment)
    return int(match.group()), match.end()
