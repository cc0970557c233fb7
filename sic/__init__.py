"""Argument parsing, batch path mirroring and output format selection for image conversion."""

__version__ = "0.1.0"