"""Diagram renderers."""
