import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.errors import register_exception_handlers
from src.api.router import api_router
from src.db.init import initialize
from src.db.session import Database
from src.messaging.producers import stop_audit_producer

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.database_file.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Initializing database at: {settings.database_file}")

    database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    await initialize(database.engine)
    app.state.db = database
    yield
    await stop_audit_producer()
    await database.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    docs_url="/api-docs",
    openapi_url="/api-docs/swagger.json",
    lifespan=lifespan,
)

# Set CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    return {"message": "Welcome to User Role Management API"}


if __name__ == "__main__":
    uvicorn.run("src.main:app", host=settings.API_HOST, port=settings.API_PORT)
