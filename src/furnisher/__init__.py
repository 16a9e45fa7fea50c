"""Furniture placement for rectangular rooms."""

__version__ = "0.1.0"
