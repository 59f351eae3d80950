"""
Play a CHIP-8 ROM in a pygame window.

    python main.py path/to/rom.ch8 --scale 10 --ipf 10
"""

import sys

from chipcore.player import main

if __name__ == "__main__":
    sys.exit(main())
