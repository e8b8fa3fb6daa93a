"""Floaty - small local note keeper."""

__version__ = "0.1.0"
