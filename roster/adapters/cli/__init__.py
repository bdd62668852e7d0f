"""Command-line interface adapters.

Provides CLI commands for querying and managing employees:
- list / search / get: Read employees
- highest / top: Salary aggregations
- create / delete: Write through to the upstream store
"""
