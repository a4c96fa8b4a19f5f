"""Scoring endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from src.api.schemas import (
    ErrorResponse,
    RelicResponse,
    ScoredRelicResponse,
    ScoreResponse,
    relic_response,
    score_response,
    scored_relic_response,
)
from src.core.logging import get_logger
from src.core.relic.models import RelicType
from src.services.scoring_service import ScoringService

logger = get_logger(__name__)

router = APIRouter(prefix="/scores", tags=["scores"])


def get_scoring_service(request: Request) -> ScoringService:
    """ScoringService 인스턴스 반환 (의존성 주입)"""
    service: ScoringService = request.app.state.scoring_service
    return service


def _character_not_found(character_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Character not found: {character_id}")


@router.get(
    "/{character_id}/relics/{relic_id}",
    response_model=ScoreResponse,
    responses={404: {"model": ErrorResponse}},
)
def score_relic(
    character_id: str,
    relic_id: str,
    service: ScoringService = Depends(get_scoring_service),
) -> ScoreResponse:
    """캐릭터 활성 프리셋 기준 유물 점수 + 등급"""
    score = service.score_relic(character_id, relic_id)
    if score is None:
        raise HTTPException(
            status_code=404,
            detail=f"Character or relic not found: {character_id}, {relic_id}",
        )
    return score_response(score)


@router.get(
    "/{character_id}/perfect/{slot}",
    response_model=RelicResponse,
    responses={404: {"model": ErrorResponse}},
)
def perfect_relic(
    character_id: str,
    slot: RelicType,
    service: ScoringService = Depends(get_scoring_service),
) -> RelicResponse:
    """채점 기준이 되는 완벽 유물"""
    relic = service.perfect_relic(character_id, slot)
    if relic is None:
        raise _character_not_found(character_id)
    return relic_response(relic)


@router.get(
    "/{character_id}/ranking",
    response_model=list[ScoredRelicResponse],
    responses={404: {"model": ErrorResponse}},
)
def rank_relics(
    character_id: str,
    slot: Optional[RelicType] = None,
    limit: Optional[int] = Query(default=None, ge=1),
    service: ScoringService = Depends(get_scoring_service),
) -> list[ScoredRelicResponse]:
    """보유 유물 점수 순위 (slot 필터, 상위 limit개)"""
    try:
        ranked = service.rank_relics(character_id, slot, limit)
    except Exception as e:
        logger.error("Failed to rank relics for %s: %s", character_id, e)
        raise HTTPException(status_code=500, detail=str(e))

    if ranked is None:
        raise _character_not_found(character_id)
    return [scored_relic_response(s.relic, s.score) for s in ranked]


@router.get(
    "/{character_id}/equipped",
    response_model=dict[str, ScoredRelicResponse],
    responses={404: {"model": ErrorResponse}},
)
def score_equipped(
    character_id: str,
    service: ScoringService = Depends(get_scoring_service),
) -> dict[str, ScoredRelicResponse]:
    """장착 유물 슬롯별 점수"""
    equipped = service.score_equipped(character_id)
    if equipped is None:
        raise _character_not_found(character_id)
    return {
        slot: scored_relic_response(s.relic, s.score) for slot, s in equipped.items()
    }
