"""One-route HTTP server that hands back the finished GIF."""

from __future__ import annotations

import logging
import pathlib

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from .config import Settings

logger = logging.getLogger(__name__)


def create_app(artifact_path: pathlib.Path) -> FastAPI:
    app = FastAPI(title="earthgif", docs_url=None, redoc_url=None, openapi_url=None)

    @app.api_route("/gif", methods=["GET", "POST"])
    def get_gif() -> Response:
        """Return the GIF bytes; re-read on every request."""
        try:
            data = pathlib.Path(artifact_path).read_bytes()
        except OSError as exc:
            logger.warning("Cannot serve %s: %s", artifact_path, exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return Response(content=data, media_type="image/gif")

    return app


def serve(settings: Settings) -> None:
    logger.info("Now you can go to http://localhost:%d/gif and see the result!", settings.port)
    logger.info(
        "Or use this command to download GIF: 'curl -v -X POST http://localhost:%d/gif > temp.gif'",
        settings.port,
    )
    logger.info("(Ctrl+C to quit)")
    uvicorn.run(create_app(settings.output), host=settings.host, port=settings.port)
