"""Roster: a proxy and aggregation service for a mock employee API."""

__version__ = "0.1.0"
