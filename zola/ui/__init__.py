"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with streaming updates
    - PDF attachment picker and pending-file chips
    - Typing indicator, error bubbles with retry, upload banner

Contains no business logic; delegates to zola.client.
"""

from pathlib import Path

STATIC_DIR = Path(__file__).parent / "static"
