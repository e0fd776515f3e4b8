"""Test helper modules for the fml test suite."""
