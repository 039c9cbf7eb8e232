"""FastAPI application entry - markdown pages to HTML."""

import sys

from . import config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .api.routes import router

logger.remove()
logger.add(sys.stderr, level=config.LOG_LEVEL)

app = FastAPI(
    title="webdotmd",
    description="Render markdown-like pages into HTML templates",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


@app.get("/")
async def root():
    return {"service": "webdotmd", "docs": "/docs"}
