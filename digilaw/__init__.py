"""Digilaw — text extraction from the latest Moroccan Bulletin Officiel."""

__version__ = "1.0.0"
