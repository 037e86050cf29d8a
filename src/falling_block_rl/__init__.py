"""Falling block puzzle engine with pygame front end and a gymnasium env."""

__version__ = "0.1.0"
