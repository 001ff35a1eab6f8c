#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine

Examples:

    # Two players in one terminal
    python run.py play --p1 red --p2 yellow

    # A bigger board with debug logging
    python run.py play --height 7 --width 9 --debug

    # Time 5000 random games
    python run.py benchmark --iterations 5000
"""

import sys

from connect4_engine.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
