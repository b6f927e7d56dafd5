"""Start the development server.

Usage:
    python backend/scripts/runserver.py
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# backend/scripts/runserver.py -> backend -> project root
load_dotenv(Path(__file__).resolve().parents[2] / ".env")

from app.core.config import get_settings  # noqa: E402
from app.core.logging import setup_logging  # noqa: E402


def main() -> None:
    settings = get_settings()
    logger = setup_logging(settings.log_level)
    logger.info(f"Starting development server at http://{settings.host}:{settings.port}/")
    logger.info("Quit the server with CONTROL-C.")
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=False)


if __name__ == "__main__":
    main()
