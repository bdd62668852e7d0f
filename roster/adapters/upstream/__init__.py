"""Upstream store adapters for reaching the backing employee API.

Implementations:
- UpstreamEmployeeClient (httpx, retry with backoff and jitter)
"""
