"""Chord model and derivation engine.

A :class:`Chord` is an immutable description (root, register, modifiers,
extensions, slash bass, inversion, crunch). :meth:`Chord.derive` turns it
into the ordered list of sounding pitches.

Derivation order
----------------
1. Build the interval table from the major triad, then apply modifiers,
   then extensions (see :func:`interval_table`).
2. Place each interval above the root; octaves follow the spelled note.
3. Prepend the slash bass one octave below the root.
4. Rotate the lowest ``inversion`` tones up an octave to the end.
5. If crunched, pull every tone into the root's octave.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from chordkit.errors import ConflictingModifiers, InvalidInversion
from chordkit.modifier import EXTENSION_ORDER, Extension, Modifier
from chordkit.note import FLAT, SHARP, Interval, Note
from chordkit.octave import DEFAULT_OCTAVE, Octave
from chordkit.pitch import Pitch

CRUNCH_MARKER = "#"

ROOT = Interval(0, 0)
MAJOR_THIRD = Interval(2, 4)
MINOR_THIRD = Interval(2, 3)
PERFECT_FIFTH = Interval(4, 7)
DIMINISHED_FIFTH = Interval(4, 6)
AUGMENTED_FIFTH = Interval(4, 8)
DIMINISHED_SEVENTH = Interval(6, 9)
MINOR_SEVENTH = Interval(6, 10)
MAJOR_SEVENTH = Interval(6, 11)
NINTH = Interval(8, 14)
FLAT_NINTH = Interval(8, 13)
SHARP_NINTH = Interval(8, 15)
ELEVENTH = Interval(10, 17)
FLAT_ELEVENTH = Interval(10, 16)
SHARP_ELEVENTH = Interval(10, 18)
THIRTEENTH = Interval(12, 21)
FLAT_THIRTEENTH = Interval(12, 20)
SHARP_THIRTEENTH = Interval(12, 22)

# Dominant degree to the tower entries it adds
DOMINANT_TOWER: dict[Modifier, tuple[tuple[str, Interval], ...]] = {
    Modifier.DOMINANT7: (("seventh", MINOR_SEVENTH),),
    Modifier.DOMINANT9: (("seventh", MINOR_SEVENTH), ("ninth", NINTH)),
    Modifier.DOMINANT11: (("seventh", MINOR_SEVENTH), ("ninth", NINTH), ("eleventh", ELEVENTH)),
    Modifier.DOMINANT13: (
        ("seventh", MINOR_SEVENTH),
        ("ninth", NINTH),
        ("eleventh", ELEVENTH),
        ("thirteenth", THIRTEENTH),
    ),
}

# Extensions that insert or override a tower entry
EXTENSION_SLOTS: dict[Extension, tuple[str, Interval]] = {
    Extension.FLAT11: ("eleventh", FLAT_ELEVENTH),
    Extension.FLAT13: ("thirteenth", FLAT_THIRTEENTH),
    Extension.SHARP13: ("thirteenth", SHARP_THIRTEENTH),
}

SUSPENSIONS: dict[Extension, Interval] = {
    Extension.SUS2: Interval(1, 2),
    Extension.SUS4: Interval(3, 5),
}

ADDED_TONES: dict[Extension, Interval] = {
    Extension.ADD2: Interval(1, 2),
    Extension.ADD4: Interval(3, 5),
    Extension.ADD6: Interval(5, 9),
    Extension.ADD9: NINTH,
    Extension.ADD11: ELEVENTH,
    Extension.ADD13: THIRTEENTH,
}

# Pairs that would claim the same chord tone with different intervals
CONFLICTS: tuple[tuple[frozenset[Modifier | Extension], str], ...] = (
    (frozenset({Modifier.FLAT5, Modifier.AUGMENTED5}), "fifth"),
    (frozenset({Modifier.DIMINISHED, Modifier.AUGMENTED5}), "fifth"),
    (frozenset({Modifier.FLAT9, Modifier.SHARP9}), "ninth"),
    (frozenset({Modifier.SHARP11, Extension.FLAT11}), "eleventh"),
    (frozenset({Extension.FLAT13, Extension.SHARP13}), "thirteenth"),
)


def find_conflict(modifiers: Iterable[Modifier], extensions: Iterable[Extension]) -> str | None:
    """Describe the first conflict in a modifier/extension combination.

    Returns
    -------
    str | None
        A description of the conflict, or None if the combination is legal.

    Examples
    --------
    >>> find_conflict({Modifier.FLAT5, Modifier.AUGMENTED5}, set())
    '+ and ♭5 both set the fifth'
    >>> find_conflict({Modifier.MINOR}, {Extension.SUS4}) is None
    True
    """
    modifiers = frozenset(modifiers)
    members = modifiers | frozenset(extensions)
    dominants = sorted(m.static_name for m in modifiers if m.is_dominant)
    if len(dominants) > 1:
        return f"dominant degrees {', '.join(dominants)} are ambiguous"
    for pair, slot in CONFLICTS:
        if pair <= members:
            first, second = sorted(member.static_name for member in pair)
            return f"{first} and {second} both set the {slot}"
    return None


def interval_table(modifiers: Iterable[Modifier], extensions: Iterable[Extension]) -> tuple[Interval, ...]:
    """Compute the intervals above the root for a modifier/extension set.

    The result is sorted by semitones and holds each stacked offset once.
    Octave-spaced duplicates (a sixth and a thirteenth) are both kept.

    Examples
    --------
    >>> [i.semitones for i in interval_table({Modifier.MINOR, Modifier.DOMINANT7}, set())]
    [0, 3, 7, 10]
    >>> [i.semitones for i in interval_table({Modifier.DOMINANT9}, {Extension.SUS4})]
    [0, 5, 7, 10, 14]
    """
    modifiers = frozenset(modifiers)
    extensions = frozenset(extensions)

    slots: dict[str, Interval] = {"root": ROOT, "third": MAJOR_THIRD, "fifth": PERFECT_FIFTH}
    has_seventh = Modifier.MAJOR7 in modifiers or any(m.is_dominant for m in modifiers)

    if Modifier.MINOR in modifiers:
        slots["third"] = MINOR_THIRD
    if Modifier.DIMINISHED in modifiers:
        slots["third"] = MINOR_THIRD
        slots["fifth"] = DIMINISHED_FIFTH
        if not has_seventh:
            slots["seventh"] = DIMINISHED_SEVENTH
    if Modifier.FLAT5 in modifiers:
        slots["fifth"] = DIMINISHED_FIFTH
    if Modifier.AUGMENTED5 in modifiers:
        slots["fifth"] = AUGMENTED_FIFTH
    for modifier in modifiers:
        slots.update(DOMINANT_TOWER.get(modifier, ()))
    if Modifier.MAJOR7 in modifiers:
        slots["seventh"] = MAJOR_SEVENTH
    if Modifier.FLAT9 in modifiers:
        slots["ninth"] = FLAT_NINTH
    if Modifier.SHARP9 in modifiers:
        slots["ninth"] = SHARP_NINTH
    if Modifier.SHARP11 in modifiers:
        slots["eleventh"] = SHARP_ELEVENTH

    suspensions = [SUSPENSIONS[e] for e in extensions if e.is_suspension]
    if suspensions:
        del slots["third"]
    for extension in extensions:
        if extension in EXTENSION_SLOTS:
            slot, interval = EXTENSION_SLOTS[extension]
            slots[slot] = interval

    intervals: dict[int, Interval] = {}
    candidates = [*slots.values(), *suspensions, *(ADDED_TONES[e] for e in extensions if e in ADDED_TONES)]
    for interval in sorted(candidates):
        intervals.setdefault(interval.semitones, interval)
    return tuple(sorted(intervals.values(), key=lambda i: i.semitones))


@dataclass(frozen=True)
class Chord:
    """A fully specified chord.

    Parameters
    ----------
    root : Note
        The harmonic root.
    octave : Octave
        Register of the root (default 4).
    modifiers : frozenset[Modifier]
        Alterations of the core chord.
    extensions : frozenset[Extension]
        Suspensions, added tones and upper alterations.
    slash : Note | None
        Bass note sounded one octave below the root.
    inversion : int
        Number of lowest tones moved up an octave.
    crunch : bool
        Collapse every tone into the root's octave.

    Raises
    ------
    ConflictingModifiers
        If two members claim the same chord tone.

    Examples
    --------
    >>> from chordkit.note import Letter
    >>> chord = Chord(Note(Letter.C), modifiers={Modifier.MINOR, Modifier.DOMINANT7})
    >>> [str(p) for p in chord.derive()]
    ['C4', 'E♭4', 'G4', 'B♭4']
    >>> str(chord)
    'Cm7'
    """

    root: Note
    octave: Octave = DEFAULT_OCTAVE
    modifiers: frozenset[Modifier] = field(default_factory=frozenset)
    extensions: frozenset[Extension] = field(default_factory=frozenset)
    slash: Note | None = None
    inversion: int = 0
    crunch: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "octave", Octave.from_int(int(self.octave)))
        object.__setattr__(self, "modifiers", frozenset(self.modifiers))
        object.__setattr__(self, "extensions", frozenset(self.extensions))
        if self.inversion < 0:
            msg = f"Inversion must not be negative, got {self.inversion}"
            raise InvalidInversion(msg)
        conflict = find_conflict(self.modifiers, self.extensions)
        if conflict is not None:
            msg = f"Conflicting modifiers: {conflict}"
            raise ConflictingModifiers(msg)

    @classmethod
    def parse(cls, text: str) -> Chord:
        """Parse a chord symbol; see :func:`chordkit.parser.parse`."""
        from chordkit.parser import parse

        return parse(text)

    def with_octave(self, octave: Octave | int) -> Chord:
        return replace(self, octave=Octave.from_int(int(octave)))

    def with_modifiers(self, *modifiers: Modifier) -> Chord:
        return replace(self, modifiers=self.modifiers | frozenset(modifiers))

    def with_extensions(self, *extensions: Extension) -> Chord:
        return replace(self, extensions=self.extensions | frozenset(extensions))

    def with_slash(self, slash: Note | None) -> Chord:
        return replace(self, slash=slash)

    def with_inversion(self, inversion: int) -> Chord:
        return replace(self, inversion=inversion)

    def with_crunch(self, crunch: bool = True) -> Chord:
        return replace(self, crunch=crunch)

    def intervals(self) -> tuple[Interval, ...]:
        """Intervals above the root, ascending."""
        return interval_table(self.modifiers, self.extensions)

    def derive(self) -> tuple[Pitch, ...]:
        """Derive the ordered chord tones.

        Returns
        -------
        tuple[Pitch, ...]
            Tones in construction order (slash bass, stacked tones, then
            inverted tones); not re-sorted by pitch.

        Raises
        ------
        InvalidInversion
            If the inversion is not smaller than the number of tones.
        OctaveRangeError
            If a tone would fall outside octaves 0-10.
        """
        root = Pitch(self.root, self.octave)
        tones = [_place(root, interval) for interval in self.intervals()]

        if self.slash is not None:
            tones.insert(0, Pitch(self.slash, self.octave - 1))

        if self.inversion >= len(tones):
            msg = f"Inversion {self.inversion} needs more than the {len(tones)} tones of {self}"
            raise InvalidInversion(msg)
        if self.inversion:
            lowest = tones[: self.inversion]
            tones = tones[self.inversion :] + [tone.with_octave(tone.octave + 1) for tone in lowest]

        if self.crunch:
            tones = [tone.with_octave(self.octave) for tone in tones]

        return tuple(tones)

    def notes(self) -> tuple[Note, ...]:
        """Spelled notes of :meth:`derive`, without octaves."""
        return tuple(pitch.note for pitch in self.derive())

    def frequencies(self) -> list[float]:
        """Frequencies in Hz of :meth:`derive`, in tone order."""
        return [pitch.frequency for pitch in self.derive()]

    def pitch_classes(self) -> frozenset[int]:
        """Pitch classes sounded by the chord, including the slash bass."""
        classes = {(self.root.semitone + interval.semitones) % 12 for interval in self.intervals()}
        if self.slash is not None:
            classes.add(self.slash.pitch_class)
        return frozenset(classes)

    @property
    def quality(self) -> str:
        """The modifier and extension part of the symbol, e.g. ``m7♭5``."""
        modifiers = self.modifiers
        parts: list[str] = []
        if Modifier.MINOR in modifiers:
            parts.append(Modifier.MINOR.static_name)
        if Modifier.DIMINISHED in modifiers:
            parts.append(Modifier.DIMINISHED.static_name)
        if Modifier.AUGMENTED5 in modifiers:
            parts.append(Modifier.AUGMENTED5.static_name)

        dominant = next((m for m in modifiers if m.is_dominant), None)
        if Modifier.MAJOR7 in modifiers and dominant is not None and dominant.degree is not None:
            parts.append(f"maj{dominant.degree.static_name}")
        elif Modifier.MAJOR7 in modifiers:
            parts.append(Modifier.MAJOR7.static_name)
        elif dominant is not None and Modifier.DIMINISHED in modifiers:
            # °7 alone reads as the diminished seventh
            parts.append(f"({dominant.static_name})")
        elif dominant is not None:
            parts.append(dominant.static_name)

        for modifier in (Modifier.FLAT5, Modifier.FLAT9, Modifier.SHARP9, Modifier.SHARP11):
            if modifier in modifiers:
                parts.append(modifier.static_name)
        parts.extend(e.static_name for e in sorted(self.extensions, key=EXTENSION_ORDER.__getitem__))

        quality = "".join(parts)
        # Right after a note an accidental glyph would be read as part of it
        if quality[:1] in (SHARP, FLAT):
            quality = f"({quality})"
        return quality

    def __str__(self) -> str:
        symbol = f"{self.root}{self.quality}"
        if self.slash is not None:
            symbol += f"/{self.slash}"
        if self.octave != DEFAULT_OCTAVE or self.crunch:
            symbol += f"@{int(self.octave)}"
        if self.inversion:
            symbol += f"^{self.inversion}"
        if self.crunch:
            symbol += CRUNCH_MARKER
        return symbol


def _place(root: Pitch, interval: Interval) -> Pitch:
    """Place ``interval`` above ``root``, picking the octave of the spelled note."""
    note = root.note.transpose_interval(interval)
    midi = root.midi + interval.semitones
    octave = (midi - note.semitone) // 12 - 1
    return Pitch(note, Octave.from_int(octave))
