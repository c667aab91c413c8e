"""Infer chord symbols from an unordered set of notes.

Every input note is tried as the root. For each root the relative pitch
class set (semitones above the root, mod 12) is looked up in a table of
every legal modifier/extension combination within the search caps. Only
exact matches count; there is no fuzzy fallback.

Ranking
-------
Candidates are ordered by a simplicity key:

1. number of modifiers plus extensions,
2. tier: triad qualities and suspensions (0), plus a plain seventh (1),
   anything else (2),
3. vocabulary order of the members,
4. position of the root in the input.

Each root contributes at most its simplest match.

The default caps allow one extension, so shapes that need two (``C7sus4♭13``,
``Cmadd9add11``) are only found when ``max_extensions`` is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import lru_cache
from itertools import combinations

from chordkit.chord import Chord, find_conflict, interval_table
from chordkit.modifier import EXTENSION_ORDER, MODIFIER_ORDER, Extension, Modifier
from chordkit.note import Note
from chordkit.octave import DEFAULT_OCTAVE

logger = logging.getLogger(__name__)

MAX_MODIFIERS = 3
MAX_EXTENSIONS = 1

TRIAD_MEMBERS: frozenset[Modifier | Extension] = frozenset(
    {
        Modifier.MINOR,
        Modifier.FLAT5,
        Modifier.AUGMENTED5,
        Modifier.DIMINISHED,
        Extension.SUS2,
        Extension.SUS4,
    }
)
SEVENTH_MEMBERS: frozenset[Modifier | Extension] = frozenset({Modifier.MAJOR7, Modifier.DOMINANT7})

Shape = tuple[tuple[Modifier, ...], tuple[Extension, ...]]
RankKey = tuple[int, int, tuple[int, ...]]


def rank_key(modifiers: Iterable[Modifier], extensions: Iterable[Extension]) -> RankKey:
    """Simplicity key of a modifier/extension combination; lower is simpler.

    Examples
    --------
    >>> rank_key([], [])
    (0, 0, ())
    >>> rank_key([Modifier.MINOR, Modifier.DOMINANT7], [])
    (2, 1, (0, 4))
    """
    modifiers = sorted(modifiers, key=MODIFIER_ORDER.__getitem__)
    extensions = sorted(extensions, key=EXTENSION_ORDER.__getitem__)
    members = frozenset([*modifiers, *extensions])
    if members <= TRIAD_MEMBERS:
        tier = 0
    elif members <= TRIAD_MEMBERS | SEVENTH_MEMBERS:
        tier = 1
    else:
        tier = 2
    order = tuple(MODIFIER_ORDER[m] for m in modifiers) + tuple(
        len(MODIFIER_ORDER) + EXTENSION_ORDER[e] for e in extensions
    )
    return len(members), tier, order


@lru_cache(maxsize=None)
def shape_table(
    max_modifiers: int = MAX_MODIFIERS,
    max_extensions: int = MAX_EXTENSIONS,
) -> dict[frozenset[int], Shape]:
    """Map relative pitch class sets to their simplest modifier/extension shape.

    The table is independent of the root, so it is built once per cap.
    """
    best: dict[frozenset[int], tuple[RankKey, Shape]] = {}
    rejected = 0
    for n_modifiers in range(max_modifiers + 1):
        for modifiers in combinations(Modifier, n_modifiers):
            for n_extensions in range(max_extensions + 1):
                for extensions in combinations(Extension, n_extensions):
                    if find_conflict(modifiers, extensions) is not None:
                        rejected += 1
                        continue
                    classes = frozenset(i.semitones % 12 for i in interval_table(modifiers, extensions))
                    key = rank_key(modifiers, extensions)
                    if classes not in best or key < best[classes][0]:
                        best[classes] = (key, (modifiers, extensions))
    logger.debug(
        "Built shape table for caps (%d, %d): %d pitch class sets, %d conflicting combinations skipped",
        max_modifiers,
        max_extensions,
        len(best),
        rejected,
    )
    return {classes: shape for classes, (_, shape) in best.items()}


def guess(
    notes: Iterable[Note],
    *,
    max_modifiers: int = MAX_MODIFIERS,
    max_extensions: int = MAX_EXTENSIONS,
) -> list[Chord]:
    """Guess the chords whose pitch classes are exactly ``notes``.

    Parameters
    ----------
    notes : Iterable[Note]
        The sounding notes, without octaves. Order sets the root
        tie-break; enharmonic repeats are ignored.
    max_modifiers : int
        Largest number of modifiers in a candidate (default 3).
    max_extensions : int
        Largest number of extensions in a candidate (default 1).

    Returns
    -------
    list[Chord]
        Matching chords, simplest first, one per root. Empty if nothing
        matches.

    Examples
    --------
    >>> from chordkit.parser import parse_note
    >>> [str(c) for c in guess([parse_note(n) for n in ("C", "E", "G")])]
    ['C', 'Em+']
    """
    roots: list[Note] = []
    for note in notes:
        if not any(note.same_pitch(root) for root in roots):
            roots.append(note)
    if not roots:
        return []

    table = shape_table(max_modifiers, max_extensions)
    ranked: list[tuple[RankKey, int, Chord]] = []
    for position, root in enumerate(roots):
        relative = frozenset((note.pitch_class - root.pitch_class) % 12 for note in roots)
        shape = table.get(relative)
        if shape is None:
            continue
        modifiers, extensions = shape
        chord = Chord(
            root=root,
            octave=DEFAULT_OCTAVE,
            modifiers=frozenset(modifiers),
            extensions=frozenset(extensions),
        )
        ranked.append((rank_key(modifiers, extensions), position, chord))

    ranked.sort(key=lambda item: (item[0], item[1]))
    logger.debug("Guessed %d candidates for %s", len(ranked), ", ".join(str(r) for r in roots))
    return [chord for _, _, chord in ranked]
