"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.api.characters import router as characters_router
from src.api.health import router as health_router
from src.api.relics import router as relics_router
from src.api.scores import router as scores_router
from src.config import settings
from src.core.event_bus import EventBus
from src.core.logging import get_logger, setup_logging
from src.core.relic.catalog import CharacterCatalog
from src.core.relic.stat_config import load_stat_config
from src.db.database import SessionLocal, engine as db_engine
from src.db.models import Base
from src.services.character_service import CharacterService
from src.services.relic_service import RelicService
from src.services.scoring_service import ScoringService

setup_logging(settings.LOG_LEVEL, sql_echo=settings.DEBUG)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    # 정적 게임 데이터
    config = load_stat_config(settings.RELIC_DATA_PATH, settings.STAT_CONSTANTS_PATH)
    catalog = CharacterCatalog()
    catalog.load_from_json(settings.CHARACTER_DATA_PATH)
    app.state.stat_config = config
    app.state.catalog = catalog

    # Service 초기화
    logger.info("Initializing services...")
    event_bus = EventBus()
    db_session = SessionLocal()
    app.state.event_bus = event_bus
    app.state.relic_service = RelicService(db_session, event_bus, config)
    app.state.character_service = CharacterService(db_session, event_bus, catalog)
    app.state.scoring_service = ScoringService(db_session, config)
    logger.info(
        "Services initialized (%d characters in catalog, %d handlers).",
        catalog.count(),
        event_bus.handler_count,
    )

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    event_bus.clear()
    db_session.close()


app = FastAPI(title="Relic Scorer", lifespan=lifespan)

app.include_router(health_router)
app.include_router(relics_router)
app.include_router(characters_router)
app.include_router(scores_router)
