"""Quick-capture content detection for Later."""

__version__ = "0.1.0"
