"""
sentibench Server - Main FastAPI Application

Sentiment classification and CPU / GPU latency benchmarks over HTTP.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sentibench import __version__
from sentibench.services.sentiment_service import reset_sentiment_service
from .constants import APIPrefix, EndpointPath
from .routes import benchmark, cases, classify, health, system_info

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown"""
    logger.info("sentibench server starting...")

    yield

    logger.info("sentibench server shutting down...")
    reset_sentiment_service()


app = FastAPI(
    title="sentibench Server",
    description="""
    Runs a DistilBERT sentiment model through ONNX Runtime and compares
    inference latency on CPU (int8) against GPU execution providers (fp32).

    ### Quick Start
    ```bash
    # 1. Load the default CPU model
    curl -X POST http://localhost:8000/api/v1/load

    # 2. Classify a sentence
    curl -X POST http://localhost:8000/api/v1/classify \\
      -H "Content-Type: application/json" \\
      -d '{"text": "I love this!"}'

    # 3. Run the benchmark suite
    curl -X POST http://localhost:8000/api/v1/benchmark
    ```
    """,
    version=__version__,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "health", "description": "Health check and latency statistics"},
        {"name": "system", "description": "GPU capabilities, engine info and diagnostics"},
        {"name": "inference", "description": "Model loading and sentiment classification"},
        {"name": "benchmark", "description": "Per-device latency benchmarks"},
        {"name": "test-cases", "description": "LLM-generated test sentences"},
    ],
)

# Allow all origins for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=APIPrefix.V1.value, tags=["health"])
app.include_router(system_info.router, prefix=APIPrefix.V1.value, tags=["system"])
app.include_router(classify.router, prefix=APIPrefix.V1.value, tags=["inference"])
app.include_router(benchmark.router, prefix=APIPrefix.V1.value, tags=["benchmark"])
app.include_router(cases.router, prefix=APIPrefix.V1.value, tags=["test-cases"])


@app.get("/")
async def root():
    """Server info and endpoint index"""
    prefix = APIPrefix.V1.value
    return {
        "name": "sentibench Server",
        "version": __version__,
        "status": "running",
        "documentation": {
            "swagger_ui": "/docs",
            "openapi_json": "/openapi.json",
        },
        "endpoints": {path.name.lower(): f"{prefix}{path.value}" for path in EndpointPath},
    }
