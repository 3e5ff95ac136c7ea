"""Verse Point - client-side session orchestration for a RAG Q&A backend.

Owns the client's session state and the sequencing rules around it, talking
to the backend over httpx and reporting outcomes to a pluggable presenter.

Components:
    - api: HTTP gateway with bearer auth and error normalization
    - session: session state and authentication
    - documents: upload validation and document sync
    - chat: single-flight question answering
    - preferences: durable UI settings and theme flag
    - ui: presentation adapters (logging, NiceGUI notifications)
    - models: schemas, commands, events and the model catalog
"""

__version__ = "0.1.0"
