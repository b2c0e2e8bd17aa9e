"""Marks Scaler: scale and round exam marks across a student roster."""

__version__ = "1.0.0"
