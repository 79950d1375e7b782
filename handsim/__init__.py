"""Arkham opening-hand and early-draw probability engine."""

__version__ = "0.1.0"
