"""Normalization of government procurement and transparency records."""

__version__ = "0.1.0"
