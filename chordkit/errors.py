"""Exception taxonomy for chordkit.

Every failure raised by the library derives from :class:`ChordError`,
which is itself a :class:`ValueError`, so callers that only care about
"bad input" can catch ``ValueError`` as they would for any converter.
"""

from __future__ import annotations


class ChordError(ValueError):
    """Base class for all chordkit errors."""


class ParseError(ChordError):
    """A chord or note symbol could not be parsed.

    Parameters
    ----------
    message : str
        Human readable description of the failure.
    text : str
        The full input that was being parsed.
    position : int
        Index into ``text`` where the offending fragment starts.
    fragment : str
        The offending substring.
    """

    def __init__(self, message: str, *, text: str = "", position: int = 0, fragment: str = "") -> None:
        super().__init__(message)
        self.text = text
        self.position = position
        self.fragment = fragment


class UnrecognizedRoot(ParseError):
    """The symbol does not start with a note letter A-G."""


class InvalidAccidental(ParseError):
    """Sharps and flats were mixed, or too many accidentals were given."""


class UnrecognizedModifierToken(ParseError):
    """A modifier or extension token is not part of the vocabulary."""


class InvalidSlashNote(ParseError):
    """The note after ``/`` is not a valid note spelling."""


class InvalidOctave(ParseError):
    """The octave after ``@`` is missing or outside 0-10."""


class MalformedInversion(ParseError):
    """The inversion after ``^`` is not a positive integer."""


class TrailingGarbage(ParseError):
    """Characters remained after every grammar stage was consumed."""


class DerivationError(ChordError):
    """A chord cannot produce a well defined set of tones."""


class ConflictingModifiers(DerivationError):
    """Two modifiers or extensions claim the same chord tone."""


class InvalidInversion(DerivationError):
    """The inversion count is not smaller than the number of chord tones."""


class OctaveRangeError(ChordError):
    """Octave arithmetic left the 0-10 range."""
