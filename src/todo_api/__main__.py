"""
Run the Todo API with uvicorn.

Usage:
    python -m todo_api
    todo-api

Host and port come from the HOST and PORT environment variables.
"""
from __future__ import annotations

import uvicorn

from .settings import get_settings


# PUBLIC_INTERFACE
def main() -> None:
    """Start the uvicorn server for todo_api.main:app."""
    settings = get_settings()
    uvicorn.run("todo_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
