"""Patentability review — retrieval-augmented opinions and PDF reports."""

__version__ = "0.1.0"
