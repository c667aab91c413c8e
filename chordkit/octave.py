"""Bounded octave register.

Octaves are ordinals from 0 to 10. Arithmetic is checked: leaving the
range raises :class:`~chordkit.errors.OctaveRangeError` instead of
wrapping or clamping.
"""

from __future__ import annotations

from enum import IntEnum

from chordkit.errors import OctaveRangeError

MIN_OCTAVE = 0
MAX_OCTAVE = 10


class Octave(IntEnum):
    """A register from 0 to 10.

    Examples
    --------
    >>> Octave.FOUR + 1
    <Octave.FIVE: 5>
    >>> Octave.THREE - 3
    <Octave.ZERO: 0>
    """

    ZERO = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10

    @classmethod
    def from_int(cls, value: int) -> Octave:
        """Return the octave for ``value``.

        Raises
        ------
        OctaveRangeError
            If ``value`` is outside 0-10.
        """
        if not MIN_OCTAVE <= value <= MAX_OCTAVE:
            direction = "overflow" if value > MAX_OCTAVE else "underflow"
            msg = f"Octave {direction}: {value} is outside {MIN_OCTAVE}-{MAX_OCTAVE}"
            raise OctaveRangeError(msg)
        return cls(value)

    def __add__(self, other: object) -> Octave:
        if not isinstance(other, int):
            return NotImplemented
        return Octave.from_int(int(self) + int(other))

    __radd__ = __add__

    def __sub__(self, other: object) -> Octave:
        if not isinstance(other, int):
            return NotImplemented
        return Octave.from_int(int(self) - int(other))

    def __str__(self) -> str:
        return str(int(self))


DEFAULT_OCTAVE = Octave.FOUR
