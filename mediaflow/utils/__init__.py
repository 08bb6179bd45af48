"""Utility helpers shared across mediaflow."""
