"""Integration tests for the client working against a backend.

Requests travel through httpx.ASGITransport to the FastAPI app in
tests/fake_backend.py, so no network or external service is needed.

Coverage:
    - Login, registration, reload and logout
    - Uploads, questions and model selection
    - Preference and theme commands
    - Results that arrive after the session changed
"""
