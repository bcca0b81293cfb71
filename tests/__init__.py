"""Test package for Ask ZOLA.

Structure:
    - unit/: Individual function and class tests
    - integration/: Relay endpoint and chat client workflows

The Gemini SDK is never called: the relay service is replaced through FastAPI
dependency overrides or ``unittest.mock``. PDFs are generated in fixtures.
Leverages pytest with pytest-check for soft assertions.
"""
