"""Bundled fitting database and reference placement request."""
