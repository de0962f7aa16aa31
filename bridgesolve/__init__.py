"""Deal grouping, thread-slot management, timing statistics and quick-trick estimates for a bridge double dummy solver."""

__version__ = "0.1.0"