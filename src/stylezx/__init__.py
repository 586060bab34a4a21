"""stylezx - build-time compiler for static style objects."""

__version__ = "0.1.0"
