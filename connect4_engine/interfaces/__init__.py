"""
connect4_engine.interfaces - Front ends for the Connect Four engine

This package contains the terminal interface and the Gymnasium environment.
"""

# Don't import anything here; env.py needs gymnasium
__all__ = []
