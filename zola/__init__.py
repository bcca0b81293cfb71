"""Ask ZOLA - streaming chat assistant backed by Gemini.

Combines FastAPI for the streaming relay, google-genai for the upstream model,
NiceGUI for the chat interface, pypdf for document text, and Pydantic for
data validation.

Components:
    - api: HTTP relay endpoint streaming plain text
    - relay: Gemini client configuration and stream adapter
    - client: Conversation state, send cycle, uploads and notifications
    - parsing: PDF text extraction
    - ui: Web interface for chat interactions
    - models: Request and state schemas
"""

__version__ = "0.1.0"
