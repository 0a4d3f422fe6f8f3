"""Local audio library indexer with classical composer detection."""

__version__ = "0.1.0"
