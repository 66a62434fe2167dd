"""Alignment graph to visualization document export."""

__version__ = "0.1.0"
