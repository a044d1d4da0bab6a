"""FastAPI application: single status route."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown."""
    logger.info("Microservice One is running")
    yield
    logger.info("Microservice One stopped")


app = FastAPI(title="ValidForge", lifespan=lifespan)


def status_message(now: datetime) -> str:
    """Build the status line; time parts are not zero-padded."""
    time = f"{now.hour}:{now.minute}:{now.second}"
    return f"Response From MicroService  , current time is {time}"


@app.get("/", response_class=PlainTextResponse)
async def status() -> str:
    return status_message(datetime.now())
