"""ASGI entry point.

Run with:
    uvicorn api_main:app --port 3001
"""

import os

from library_transfer.api.fastapi_app import app

__all__ = ["app"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "3001")))
