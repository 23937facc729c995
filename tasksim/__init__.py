"""Concurrent task simulator driven by line commands on standard input."""

__version__ = "0.1.0"
