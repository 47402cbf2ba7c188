from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from starlette.background import BackgroundTask, BackgroundTasks
import time
import logging
from typing import Any, Callable, List, Optional

from . import schemas
from .config import Settings, get_settings
from .crud import ClipNotFound
from .database import create_database_engine, create_session_factory
from .metrics import Metrics
from .service import ClipService

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


# Database dependency
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_service(request: Request, db: Session = Depends(get_db)) -> ClipService:
    return ClipService(db, clock=request.app.state.clock)


router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root():
    return "Welcome to the Soundverse!"


@router.get("/clips", response_model=List[schemas.Clip])
def list_clips(service: ClipService = Depends(get_service)):
    return service.list_clips()


@router.get("/clips/{clip_id}/stream")
def stream_clip(clip_id: str, service: ClipService = Depends(get_service)):
    audio_url = service.record_play(clip_id)
    return RedirectResponse(url=audio_url, status_code=302)


@router.get("/clips/{clip_id}/stats", response_model=schemas.Clip)
def get_clip_stats(clip_id: str, service: ClipService = Depends(get_service)):
    return service.get_stats(clip_id)


@router.post("/clips", response_model=schemas.Clip, status_code=201)
def create_clip(clip: schemas.ClipCreate, service: ClipService = Depends(get_service)):
    return service.create_clip(clip)


@router.get("/metrics")
def get_metrics(request: Request):
    """Prometheus metrics endpoint"""
    metrics: Metrics = request.app.state.metrics
    return Response(metrics.render(), media_type=metrics.content_type)


@router.get("/health")
def health_check():
    return {"status": "healthy", "timestamp": time.time()}


async def clip_not_found_handler(request: Request, exc: ClipNotFound):
    return PlainTextResponse("Clip not found", status_code=404)


async def record_request(metrics: Metrics, method: str, path: str, status_code: int, start_time: float):
    process_time = time.time() - start_time
    metrics.observe(method, path, status_code, process_time)

    status_emoji = "✅" if status_code < 400 else "❌"
    logger.info("%s %s %s - %s - %.3fs", status_emoji, method, path, status_code, process_time)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    metrics: Optional[Metrics] = None,
    clock: Optional[Callable[[], Any]] = None,
) -> FastAPI:
    settings = settings or get_settings()
    if engine is None:
        engine = create_database_engine(settings.database_url, echo=settings.echo_sql)

    app = FastAPI(
        title="Clips API",
        description="Catalog and playback tracking for short audio clips",
        version="1.0.0",
    )
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.metrics = metrics or Metrics()
    app.state.clock = clock

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=600,
    )

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("💥 %s %s - unhandled error", request.method, request.url.path)
            response = PlainTextResponse("Internal Server Error", status_code=500)

        response.headers["X-Process-Time"] = str(time.time() - start_time)

        # counted once the body has been sent and the status is final
        finished = BackgroundTask(
            record_request, app.state.metrics, request.method, request.url.path,
            response.status_code, start_time,
        )
        if response.background is None:
            response.background = finished
        else:
            response.background = BackgroundTasks([response.background, finished])
        return response

    app.add_exception_handler(ClipNotFound, clip_not_found_handler)
    app.include_router(router)
    return app
