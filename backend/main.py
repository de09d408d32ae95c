"""ASGI entry point: ``uvicorn main:app`` from the backend directory."""

import uvicorn

from potluck.core.config import settings
from potluck.main import create_app

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=3001, reload=settings.DEBUG)
