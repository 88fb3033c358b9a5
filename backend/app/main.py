import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import health
from app.api.errors import register_exception_handlers
from app.api.v1.endpoints import teams
from app.core.config import settings
from app.core.init_db import init_db
from app.db.mongodb import close_mongo_connection, connect_to_mongo

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    SportsBro Teams API for forming local sports teams.

    ## Features
    * **Team Discovery**: Filter teams by sport, location and skill level, or search them.
    * **Team Management**: Owners edit and delete their teams.
    * **Join Requests**: Players ask to join public teams; owners accept or reject.
    * **Membership**: Join directly, leave, or be removed by the owner.

    """,
    version="0.1.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_BASE_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    await connect_to_mongo()
    await init_db()
    logger.info(f"{settings.PROJECT_NAME} started")


@app.on_event("shutdown")
async def shutdown_event():
    await close_mongo_connection()


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(teams.router, prefix=f"{settings.API_PREFIX}/teams", tags=["teams"])


@app.get("/")
async def root():
    return {"message": "Welcome to SportsBro Teams API"}
