"""Stratizen Hub: university resource-sharing portal backend."""

__version__ = "0.1.0"
