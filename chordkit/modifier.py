"""Closed vocabulary of chord modifiers and extensions.

Modifiers alter the core chord (third, fifth, seventh tower); extensions
suspend or add single tones. Both vocabularies are closed enumerations
whose members carry their canonical display token.
"""

from __future__ import annotations

from enum import Enum


class Degree(Enum):
    """Highest stacked degree of a dominant chord."""

    SEVEN = 7
    NINE = 9
    ELEVEN = 11
    THIRTEEN = 13

    @property
    def static_name(self) -> str:
        return str(self.value)


class Modifier(Enum):
    """Alterations of the core chord.

    ``DOMINANT7`` through ``DOMINANT13`` are the dominant family; each
    implies the lower tower degrees.

    Examples
    --------
    >>> Modifier.DOMINANT9.is_dominant
    True
    >>> Modifier.dominant(Degree.ELEVEN)
    <Modifier.DOMINANT11: '11'>
    """

    MINOR = "m"

    FLAT5 = "♭5"
    AUGMENTED5 = "+"

    MAJOR7 = "maj7"
    DOMINANT7 = "7"
    DOMINANT9 = "9"
    DOMINANT11 = "11"
    DOMINANT13 = "13"

    FLAT9 = "♭9"
    SHARP9 = "♯9"

    SHARP11 = "♯11"

    DIMINISHED = "°"

    @classmethod
    def dominant(cls, degree: Degree) -> Modifier:
        """Return the dominant modifier for ``degree``."""
        return _DOMINANTS[degree]

    @property
    def is_dominant(self) -> bool:
        return self in _DOMINANT_DEGREES

    @property
    def degree(self) -> Degree | None:
        """The dominant degree, or None for non-dominant modifiers."""
        return _DOMINANT_DEGREES.get(self)

    @property
    def static_name(self) -> str:
        """Canonical display token."""
        return self.value


class Extension(Enum):
    """Suspensions, added tones and upper alterations."""

    SUS2 = "sus2"
    SUS4 = "sus4"

    FLAT11 = "♭11"

    FLAT13 = "♭13"
    SHARP13 = "♯13"

    ADD2 = "add2"
    ADD4 = "add4"
    ADD6 = "add6"

    ADD9 = "add9"
    ADD11 = "add11"
    ADD13 = "add13"

    @property
    def is_suspension(self) -> bool:
        return self in (Extension.SUS2, Extension.SUS4)

    @property
    def static_name(self) -> str:
        """Canonical display token."""
        return self.value


_DOMINANTS: dict[Degree, Modifier] = {
    Degree.SEVEN: Modifier.DOMINANT7,
    Degree.NINE: Modifier.DOMINANT9,
    Degree.ELEVEN: Modifier.DOMINANT11,
    Degree.THIRTEEN: Modifier.DOMINANT13,
}
_DOMINANT_DEGREES: dict[Modifier, Degree] = {modifier: degree for degree, modifier in _DOMINANTS.items()}

# Declaration order, used for stable rendering and ranking
MODIFIER_ORDER: dict[Modifier, int] = {modifier: i for i, modifier in enumerate(Modifier)}
EXTENSION_ORDER: dict[Extension, int] = {extension: i for i, extension in enumerate(Extension)}
