"""Client-side task-list view over a remote task store."""

__version__ = "0.1.0"
