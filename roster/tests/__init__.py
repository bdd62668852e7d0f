"""Test suite for the Roster employee proxy.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - Upstream client against an httpx mock transport
   - REST server over a real local socket

3. fakes/: Port implementations for testing
   - In-memory implementations of EmployeeStorePort and EmployeeQueryPort
"""
