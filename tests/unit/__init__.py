"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation and the tagged message union
    - preferences/: Defaults, persistence and theme sync
    - session/: Session state, epochs and the answering guard
    - api/: Error normalization and upload progress via httpx.MockTransport
    - documents/ and chat/: Manager behaviour with a mocked gateway
    - ui/: Presenters
"""
