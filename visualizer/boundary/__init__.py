"""Boundary adapters for external systems (diagram engine)."""
