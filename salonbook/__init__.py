"""Salon slot-availability and booking service."""

__version__ = "0.1.0"
