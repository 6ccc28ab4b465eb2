"""234 WKND event ticketing backend."""

__version__ = "1.0.0"
