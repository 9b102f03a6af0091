"""Black market naira exchange rates in the terminal."""

__version__ = "1.0.1"
