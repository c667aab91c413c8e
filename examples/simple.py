import sys

from chordkit import guess, parse, parse_note

chord = parse("Cmaj7b9@3^2#")

# Derived tones, in construction order
for pitch in chord.derive():
    sys.stdout.write(f"{pitch} {pitch.frequency:.2f}\n")

# Rendered symbol
sys.stdout.write(str(chord) + "\n")  # "Cmaj7♭9@3^2#"

# Guess chords from notes, simplest first
for candidate in guess(parse_note(name) for name in ("A", "C", "E", "G")):
    sys.stdout.write(str(candidate) + "\n")  # "Cadd6", "Am7"
