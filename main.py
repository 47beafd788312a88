"""
Main Application Entry Point

FastAPI application exposing the MonkeyTalk emoji translation API.
"""

# Standard library
import os

# Third-party
import uvicorn

# Local application
from core.app_factory import create_app

app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )
