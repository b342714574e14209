"""Main entry point for the stream archiver."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from sim import Sim
from stream_archive import Application
from stream_archive.api import create_fastapi_app
from stream_archive.logging_config import setup_logging


def main():
    """Run the archiver API."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    # Get configuration from environment
    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))
    api_url = f"http://{api_host}:{api_port}"

    application = Application()
    sim = Sim(api_url=api_url)
    app = create_fastapi_app(application, sim=sim)

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
