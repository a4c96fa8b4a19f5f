"""Relic inventory endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from src.api.schemas import (
    ErrorResponse,
    ImportResponse,
    RelicCreateRequest,
    RelicResponse,
    relic_response,
)
from src.core.logging import get_logger
from src.core.relic.identity import RelicValidationError, make_relic
from src.core.relic.models import RelicType, Stat
from src.services.relic_service import RelicService

logger = get_logger(__name__)

router = APIRouter(prefix="/relics", tags=["relics"])


def get_relic_service(request: Request) -> RelicService:
    """RelicService 인스턴스 반환 (의존성 주입)"""
    service: RelicService = request.app.state.relic_service
    return service


@router.get("", response_model=list[RelicResponse])
def list_relics(
    relic_type: Optional[RelicType] = None,
    service: RelicService = Depends(get_relic_service),
) -> list[RelicResponse]:
    """보유 유물 목록 (relic_type으로 슬롯 필터)"""
    return [relic_response(r) for r in service.list_relics(relic_type)]


@router.post(
    "",
    response_model=RelicResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_relic(
    request: RelicCreateRequest,
    service: RelicService = Depends(get_relic_service),
) -> RelicResponse:
    """
    유물 수동 등록

    ID는 속성으로 결정되므로 같은 유물을 두 번 등록하면 409.
    """
    relic = make_relic(
        request.type,
        request.set,
        Stat(request.main_stat.name, request.main_stat.value),
        [Stat(s.name, s.value) for s in request.sub_stats],
    )
    try:
        added = service.add_relic(relic)
    except RelicValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Failed to add relic: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    if not added:
        raise HTTPException(status_code=409, detail=f"Relic already exists: {relic.id}")
    return relic_response(relic)


@router.post("/import", response_model=ImportResponse)
def import_relics(
    data: Any = Body(...),
    service: RelicService = Depends(get_relic_service),
) -> ImportResponse:
    """스캐너 JSON 가져오기. 잘못된 항목과 중복은 건너뛴다."""
    if not isinstance(data, dict) or not isinstance(data.get("relics"), list):
        raise HTTPException(status_code=400, detail="Expected {\"relics\": [...]}")

    try:
        result = service.import_from_json(data)
    except Exception as e:
        logger.error("Relic import failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    logger.info("Imported %d relics via API", result.added)
    return ImportResponse(
        added=result.added,
        duplicates=result.duplicates,
        invalid=result.invalid,
        relic_ids=result.relic_ids,
    )


@router.get(
    "/{relic_id}",
    response_model=RelicResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_relic(
    relic_id: str,
    service: RelicService = Depends(get_relic_service),
) -> RelicResponse:
    relic = service.get_relic(relic_id)
    if relic is None:
        raise HTTPException(status_code=404, detail=f"Relic not found: {relic_id}")
    return relic_response(relic)


@router.delete(
    "/{relic_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
def delete_relic(
    relic_id: str,
    service: RelicService = Depends(get_relic_service),
) -> None:
    """유물 삭제. 장착 중이던 캐릭터에서도 해제된다."""
    if not service.delete_relic(relic_id):
        raise HTTPException(status_code=404, detail=f"Relic not found: {relic_id}")
