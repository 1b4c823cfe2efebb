"""tdlite: a local task tracker backed by SQLite."""

__version__ = "0.3.0"
