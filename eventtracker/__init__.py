"""In-memory event tracking service with a rate-limited HTTP interface."""

__version__ = "0.1.0"