"""Ice Lure Notes - a journal for ice-fishing bait effectiveness."""

__version__ = "0.1.0"
