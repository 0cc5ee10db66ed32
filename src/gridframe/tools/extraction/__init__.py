"""Extraction tools for getting data from tables."""

from .table_extractor import TableExtractor

__all__ = ["TableExtractor"]
