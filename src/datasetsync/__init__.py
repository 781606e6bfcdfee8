"""datasetsync - Keep Dataset status in sync with cache filesystem metadata."""

__version__ = "0.1.0"
