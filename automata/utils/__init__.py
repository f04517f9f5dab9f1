"""Shared helpers: logging and fixed constants."""
