"""Tools for working with declared tables."""
