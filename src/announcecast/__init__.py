"""Announcecast: podcast episode announcements for chat channels."""

__version__ = "0.1.0"
