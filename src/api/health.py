"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.logging import get_logger
from src.db.database import get_db
from src.db.models import CharacterModel, RelicModel

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health_check(db: Session = Depends(get_db)) -> dict[str, str | int]:
    """Report database connectivity and the size of the relic store."""
    try:
        relics = db.scalar(select(func.count()).select_from(RelicModel)) or 0
        characters = db.scalar(select(func.count()).select_from(CharacterModel)) or 0
    except SQLAlchemyError as e:
        logger.warning("Health check failed: %s", e)
        return {"status": "error", "database": "disconnected"}
    return {
        "status": "ok",
        "database": "connected",
        "relics": relics,
        "characters": characters,
    }
