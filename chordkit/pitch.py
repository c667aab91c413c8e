"""Notes placed in a register, and their equal-tempered frequencies."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chordkit.note import Note
from chordkit.octave import Octave

A4_FREQUENCY = 440.0
A4_MIDI = 69


@dataclass(frozen=True)
class Pitch:
    """A note in a specific octave.

    The octave follows the spelled letter, as in scientific pitch
    notation, so ``B♯4`` sounds as C5 and ``C♭4`` sounds as B3.

    Parameters
    ----------
    note : Note
        The spelled note.
    octave : Octave
        The register of the note's letter.

    Examples
    --------
    >>> from chordkit.note import Letter
    >>> Pitch(Note(Letter.A), Octave.FOUR).frequency
    440.0
    >>> Pitch(Note(Letter.C), Octave.FOUR).midi
    60
    """

    note: Note
    octave: Octave

    @property
    def midi(self) -> int:
        """MIDI note number (C4 = 60)."""
        return 12 * (int(self.octave) + 1) + self.note.semitone

    @property
    def frequency(self) -> float:
        """Frequency in Hz under twelve-tone equal temperament, A4 = 440 Hz."""
        return A4_FREQUENCY * 2 ** ((self.midi - A4_MIDI) / 12)

    @property
    def pitch_class(self) -> int:
        return self.note.pitch_class

    def with_octave(self, octave: Octave) -> Pitch:
        """Return the same note in another octave."""
        return replace(self, octave=octave)

    def __str__(self) -> str:
        return f"{self.note}{int(self.octave)}"
