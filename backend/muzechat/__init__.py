"""Muze Chat backend package."""
