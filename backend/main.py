import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.config import settings
from backend.dependencies import _init_firebase
from backend.errors import InvalidSearchRequest, UpstreamUnavailable
from backend.routers import health, search


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    _init_firebase()
    yield


app = FastAPI(
    title="Worker Search API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidSearchRequest)
async def invalid_search_request_handler(request: Request, exc: InvalidSearchRequest):
    return JSONResponse(status_code=422, content={"detail": str(exc), "code": exc.code})


@app.exception_handler(UpstreamUnavailable)
async def upstream_unavailable_handler(request: Request, exc: UpstreamUnavailable):
    return JSONResponse(status_code=503, content={"detail": str(exc), "code": exc.code})


app.include_router(health.router)
app.include_router(search.router)
