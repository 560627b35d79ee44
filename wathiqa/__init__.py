"""Wathiqa legal-document archive service."""

__version__ = "0.1.0"
