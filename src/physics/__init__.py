"""Geometry helpers used by the scoring layer."""
