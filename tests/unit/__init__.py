"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: PDF validation and page-labelled extraction
    - relay/: Configuration and Gemini request construction
    - client/: Session state, prompt composition, notifications
"""
