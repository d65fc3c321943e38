"""WordFinder — interactive prefix search over a static word list."""

__version__ = "0.1.0"
