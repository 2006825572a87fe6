from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    load_dotenv("local.env")

    from endpoints.store_endpoints import SETTINGS, router as store_router

    app = FastAPI(title="nopedb")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok", "file": str(SETTINGS.file), "separator": SETTINGS.separator}

    app.include_router(store_router)

    logger.info("APP: serving %s", SETTINGS.file)
    return app


app = create_app()
