"""Utility modules: constants and config loading."""
