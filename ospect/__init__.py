"""Inspection of filesystems, network interfaces and connections."""

__version__ = "0.1.0"