"""
connect4_engine - Rules engine and turn state machine for Connect Four

This package provides the authoritative board state, move validation, win
and tie detection, and turn alternation for two-player Connect Four on a
board of any size, plus terminal and Gymnasium front ends that drive it.
"""

# Version number
__version__ = '0.1.0'
