"""Cukai - Malaysian SME tax computation tools."""

__version__ = "0.3.0"
