"""fretchord — guitar chord voicing generator and fretboard viewer."""

__version__ = "0.1.0"
