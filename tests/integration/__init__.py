"""Integration tests for components working together.

Coverage:
    - BackendClient against a stubbed AgriGPT backend
    - ChatSession submit pipeline, call ordering and failure handling
    - Composer events flowing into the session
    - FastAPI health endpoint via ASGITransport
"""
