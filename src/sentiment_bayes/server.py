"""HTTP API serving predictions from a trained classifier."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .classifier import NaiveBayesClassifier

logger = logging.getLogger(__name__)


class ClassifyRequest(BaseModel):
    """Request body for classification."""
    text: str = ""


class ClassifyResponse(BaseModel):
    """Response body for classification."""
    label: str
    probabilities: dict[str, float]


class HealthResponse(BaseModel):
    """Response body for health check."""
    status: str
    model_version: str
    classes: list[str]
    total_docs: int
    uptime_seconds: float


def create_app(classifier: NaiveBayesClassifier) -> FastAPI:
    """Build the API around an already trained classifier.

    Request handlers only read the classifier, so it must not be trained
    again once the app is serving.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.startup_time = time.time()
        logger.info("Serving %d classes", len(classifier.classes))
        yield

    app = FastAPI(
        title="Sentiment Bayes",
        description="Naive Bayes sentiment classification service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.classifier = classifier
    app.state.startup_time = None

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": "invalid JSON body"})

    @app.post("/classify", response_model=ClassifyResponse)
    def classify(request: ClassifyRequest) -> ClassifyResponse:
        """Classify a single text."""
        if not request.text:
            raise HTTPException(status_code=400, detail="text is required")
        label, probabilities = app.state.classifier.predict(request.text)
        return ClassifyResponse(label=label, probabilities=probabilities)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        """Health check endpoint."""
        started = app.state.startup_time
        uptime = time.time() - started if started else 0
        return HealthResponse(
            status="healthy",
            model_version=__version__,
            classes=app.state.classifier.classes,
            total_docs=app.state.classifier.total_docs,
            uptime_seconds=uptime,
        )

    return app
