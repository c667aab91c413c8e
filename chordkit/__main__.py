import sys

from chordkit.cli import main

sys.exit(main())
