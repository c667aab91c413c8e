"""Label encodings for chord classifiers.

Training pipelines consume a chord as a multi-hot vector: one class per
MIDI pitch (128 classes) for voiced labels, or one per pitch class (12)
for octave-free labels. The compact form is an integer bitmask.
"""

from __future__ import annotations

import numpy as np

from chordkit.chord import Chord

NUM_CLASSES = 128
NUM_PITCH_CLASSES = 12


def chord_label(chord: Chord) -> int:
    """Encode the derived pitches of a chord as a bitmask over MIDI numbers.

    Raises
    ------
    ValueError
        If a derived pitch lies outside MIDI 0-127.

    Examples
    --------
    >>> from chordkit.parser import parse
    >>> bin(chord_label(parse("C")) >> 60)
    '0b10010001'
    """
    label = 0
    for pitch in chord.derive():
        if not 0 <= pitch.midi < NUM_CLASSES:
            msg = f"Pitch {pitch} (MIDI {pitch.midi}) is outside the {NUM_CLASSES} label classes"
            raise ValueError(msg)
        label |= 1 << pitch.midi
    return label


def label_to_multi_hot(label: int, num_classes: int = NUM_CLASSES) -> np.ndarray:
    """Expand a bitmask into a float32 multi-hot vector of shape ``(num_classes,)``."""
    if label < 0 or label >> num_classes:
        msg = f"Label does not fit in {num_classes} classes"
        raise ValueError(msg)
    bits = [(label >> i) & 1 for i in range(num_classes)]
    return np.array(bits, dtype=np.float32)


def multi_hot_to_label(vector: np.ndarray, threshold: float = 0.5) -> int:
    """Collapse a (possibly soft) multi-hot vector back into a bitmask.

    Entries strictly above ``threshold`` are treated as set, so model
    outputs after a sigmoid can be passed directly.
    """
    indices = np.flatnonzero(np.asarray(vector) > threshold)
    return sum(1 << int(i) for i in indices)


def pitch_class_vector(chord: Chord) -> np.ndarray:
    """Octave-free multi-hot vector of shape ``(12,)``, C at index 0.

    Examples
    --------
    >>> from chordkit.parser import parse
    >>> pitch_class_vector(parse("Am")).nonzero()[0].tolist()
    [0, 4, 9]
    """
    vector = np.zeros(NUM_PITCH_CLASSES, dtype=np.float32)
    vector[sorted(chord.pitch_classes())] = 1.0
    return vector
