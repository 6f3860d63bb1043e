"""Utility helpers for specdeck."""
