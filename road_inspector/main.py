import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from road_inspector import __version__
from road_inspector.config import settings
from road_inspector.dependencies import verify_api_key
from road_inspector.routers.analysis import router as analysis_router
from road_inspector.utils.exceptions import register_exception_handlers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.openai_api_key:
        logger.error("OPENAI_API_KEY not configured: every analysis request will fail with 500")
    else:
        logger.info("Road inspector relay ready (model=%s)", settings.openai_model)
    yield


app = FastAPI(
    title="Road Inspector API",
    description="Relay between the road inspector client and a vision-capable language model",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(analysis_router, prefix="/api", dependencies=[Depends(verify_api_key)])


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "road-inspector-relay", "version": __version__}
