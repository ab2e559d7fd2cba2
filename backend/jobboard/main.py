import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobboard.config import settings
from jobboard.database import init_db
from jobboard.routers import applications, geocode, installers, jobs
from jobboard.services.city_index import load_city_index

logger = logging.getLogger("jobboard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(settings.db_path)
    logger.info("Database ready at %s", settings.db_path)
    # Read-only for the life of the process; handlers get it via get_city_index.
    app.state.city_index = load_city_index(settings.city_data_path)
    yield


app = FastAPI(
    title="Trade Job Board",
    description="Job postings and installer directory with radius search",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(applications.router, prefix=settings.api_prefix)
app.include_router(installers.router, prefix=settings.api_prefix)
app.include_router(geocode.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
