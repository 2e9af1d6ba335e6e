"""Plate inventory ingestion: spreadsheet + model-folder tree -> validated inventory JSON."""

__version__ = "0.1.0"
