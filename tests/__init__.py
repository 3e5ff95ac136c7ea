"""Test package for the Verse Point client.

Structure:
    - unit/: Individual classes with mocked gateways and in-memory storage
    - integration/: The wired application against an in-memory FastAPI backend
    - fake_backend.py: The backend stand-in used by integration tests
"""
