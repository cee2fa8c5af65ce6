"""
Application entry point.

Runs the replay search proxy with uvicorn:
    python -m packages.api.src.main
"""

import os

from uvicorn import run

if __name__ == "__main__":
    run(
        "packages.api.src.app:create_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
