"""Integration tests for adapter implementations.

These tests exercise adapters against mocked upstream services and local sockets
to validate correct translation between core domain models and
external formats.
"""
