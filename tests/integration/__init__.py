"""Integration tests for components working together.

Coverage:
    - Relay endpoint over real HTTP semantics (ASGI transport)
    - Chat controller send cycle against the in-process relay
    - Upload batches through the real PDF extractor
"""
