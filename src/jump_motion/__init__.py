"""Label-driven jump navigation for text editors."""

__all__ = [
    "adapters",
    "errors",
    "host",
    "labels",
    "runtime",
    "session",
]

__version__ = "0.1.0"
