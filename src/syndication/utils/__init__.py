"""Utility helpers for syndication."""
