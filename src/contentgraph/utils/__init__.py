"""Utility helpers for contentgraph."""
