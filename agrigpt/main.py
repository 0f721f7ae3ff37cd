"""Main application entry point.

Runs FastAPI with the NiceGUI chat pages mounted on the same server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    Serves the chat UI and /health on HOST:PORT (default 0.0.0.0:8080).
    """
    import uvicorn
    from nicegui import ui

    from agrigpt.api.app import create_app
    from agrigpt.config import get_client_config
    from agrigpt.ui import chat_page, login_page  # noqa: F401 - Registers the pages

    config = get_client_config()
    app = create_app()

    ui.run_with(
        app,
        title="AgriGPT",
        favicon="🌱",
        storage_secret=config.storage_secret,
    )

    port = int(os.getenv("PORT", "8080"))
    logger.info(f"Chat UI available at http://localhost:{port}/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
