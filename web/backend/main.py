from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from kmusic.core.config import load_config
from kmusic.core.output import setup_from_config
from kmusic.domain.streaming import StreamError


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = load_config()
    setup_from_config(config.logging)
    logger.info(f"Serving music library from {config.music.library_path}")
    yield


app = FastAPI(title="kmusic Web API", version="0.1.0", lifespan=lifespan)

# CORS: ALLOWED_ORIGINS env var overrides the [web] config section
allowed_origins = load_config().web.allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Range", "Content-Length", "Accept-Ranges"],
)


@app.exception_handler(StreamError)
async def stream_error_handler(request: Request, exc: StreamError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc)},
        headers=exc.headers,
    )


# Include routers
from web.backend.routers import music

app.include_router(music.router, prefix="/api", tags=["music"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
