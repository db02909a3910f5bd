import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import config
from app.database import Database
from app.errors import register_exception_handlers
from app.routers import logs

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting up...")

    database = await Database().connect()
    await database.ensure_indexes()
    app.state.database = database

    yield

    logger.info("🛑 Shutting down...")
    database.close()


def create_app() -> FastAPI:
    app = FastAPI(title="User Action Log API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(logs.router, prefix="/api", tags=["Logs"])

    @app.get("/")
    def root():
        return {"message": "API is running!"}

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("Server running on port %s", config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)
