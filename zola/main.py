"""Main application entry point.

Runs FastAPI (port 8000) with NiceGUI mounted for the chat interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI serves the relay and static assets, NiceGUI serves the page.
    Both accessible on port 8000.
    """
    import uvicorn
    from nicegui import ui

    from zola.api.app import create_app
    from zola.parsing.pdf_parser import get_pdf_extractor
    from zola.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    get_pdf_extractor()

    ui.run_with(
        app,
        title="Ask ZOLA",
        favicon="🤖",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "ask-zola-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"Relay endpoint at http://localhost:{port}/api/gemini")
    logger.info(f"Chat UI available at http://localhost:{port}/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the relay API and the chat UI as two child processes.

    Relay API on PORT (default 8000), NiceGUI on 8080. The UI inherits
    PORT, so its default API_BASE_URL points at the relay. When either
    child exits the other is stopped too.
    """
    import asyncio

    api_port = os.getenv("PORT", "8000")
    commands = {
        "relay API": [
            sys.executable, "-m", "uvicorn", "zola.api.app:app",
            "--host", os.getenv("HOST", "0.0.0.0"), "--port", api_port,
        ],
        "chat UI": [sys.executable, "-c", "from zola.ui.chat_page import main; main()"],
    }

    async def supervise() -> None:
        logger.info(f"Starting relay API on http://localhost:{api_port}")
        logger.info("Starting chat UI on http://localhost:8080")
        procs = {
            name: await asyncio.create_subprocess_exec(*cmd)
            for name, cmd in commands.items()
        }
        waiters = {asyncio.create_task(proc.wait()): name for name, proc in procs.items()}
        try:
            done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                logger.warning(f"{waiters[task]} exited with code {task.result()}")
        finally:
            for proc in procs.values():
                if proc.returncode is None:
                    proc.terminate()
            await asyncio.gather(*waiters)

    try:
        asyncio.run(supervise())
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode (both on port 8000).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Ask ZOLA in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
