"""Owned character endpoints: roster, equipment and weight presets."""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.schemas import (
    CatalogEntryResponse,
    CharacterAddRequest,
    CharacterResponse,
    EquipRequest,
    ErrorResponse,
    PresetRequest,
    RelicResponse,
    character_response,
    relic_response,
)
from src.core.logging import get_logger
from src.core.relic.catalog import CharacterCatalog
from src.core.relic.models import Character, RelicType, WeightPreset
from src.services.character_service import CharacterService

logger = get_logger(__name__)

router = APIRouter(prefix="/characters", tags=["characters"])


def get_character_service(request: Request) -> CharacterService:
    """CharacterService 인스턴스 반환 (의존성 주입)"""
    service: CharacterService = request.app.state.character_service
    return service


def get_catalog(request: Request) -> CharacterCatalog:
    """CharacterCatalog 인스턴스 반환 (의존성 주입)"""
    catalog: CharacterCatalog = request.app.state.catalog
    return catalog


def _require_character(service: CharacterService, character_id: str) -> Character:
    character = service.get_character(character_id)
    if character is None:
        raise HTTPException(
            status_code=404, detail=f"Character not found: {character_id}"
        )
    return character


# === 카탈로그 / 보유 목록 ===


@router.get("/catalog", response_model=list[CatalogEntryResponse])
def list_catalog(
    catalog: CharacterCatalog = Depends(get_catalog),
) -> list[CatalogEntryResponse]:
    """등록 가능한 캐릭터 목록"""
    return [
        CatalogEntryResponse(
            character_id=e.character_id,
            name=e.name,
            alias=e.alias,
            rarity=e.rarity,
            path=e.path,
            element=e.element,
        )
        for e in catalog.get_all()
    ]


@router.get("", response_model=list[CharacterResponse])
def list_characters(
    service: CharacterService = Depends(get_character_service),
) -> list[CharacterResponse]:
    return [character_response(c) for c in service.list_characters()]


@router.post(
    "",
    response_model=CharacterResponse,
    status_code=201,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def add_character(
    request: CharacterAddRequest,
    service: CharacterService = Depends(get_character_service),
) -> CharacterResponse:
    """
    캐릭터 보유 등록

    카탈로그 기본 가중치로 "Default" 프리셋이 만들어지고 활성화된다.
    """
    try:
        character = service.add_character(request.character_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("Failed to register character: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    if character is None:
        raise HTTPException(
            status_code=409,
            detail=f"Character already owned: {request.character_id}",
        )
    logger.info("Character registered via API: %s", request.character_id)
    return character_response(character)


@router.get(
    "/{character_id}",
    response_model=CharacterResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_character(
    character_id: str,
    service: CharacterService = Depends(get_character_service),
) -> CharacterResponse:
    return character_response(_require_character(service, character_id))


@router.delete(
    "/{character_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
def delete_character(
    character_id: str,
    service: CharacterService = Depends(get_character_service),
) -> None:
    if not service.delete_character(character_id):
        raise HTTPException(
            status_code=404, detail=f"Character not found: {character_id}"
        )


# === 장착 ===


@router.put(
    "/{character_id}/equipped/{slot}",
    response_model=CharacterResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def equip_relic(
    character_id: str,
    slot: RelicType,
    request: EquipRequest,
    service: CharacterService = Depends(get_character_service),
) -> CharacterResponse:
    """유물 장착. 다른 캐릭터가 끼고 있던 유물이면 옮겨온다."""
    _require_character(service, character_id)
    try:
        character = service.equip_relic(character_id, request.relic_id, slot)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if character is None:
        raise HTTPException(
            status_code=404, detail=f"Relic not found: {request.relic_id}"
        )
    return character_response(character)


@router.delete(
    "/{character_id}/equipped/{slot}",
    response_model=CharacterResponse,
    responses={404: {"model": ErrorResponse}},
)
def unequip_relic(
    character_id: str,
    slot: RelicType,
    service: CharacterService = Depends(get_character_service),
) -> CharacterResponse:
    character = service.unequip_relic(character_id, slot)
    if character is None:
        raise HTTPException(
            status_code=404, detail=f"Character not found: {character_id}"
        )
    return character_response(character)


@router.get(
    "/{character_id}/available-relics/{slot}",
    response_model=list[RelicResponse],
    responses={404: {"model": ErrorResponse}},
)
def available_relics(
    character_id: str,
    slot: RelicType,
    service: CharacterService = Depends(get_character_service),
) -> list[RelicResponse]:
    """해당 슬롯에서 장착 가능한 유물 (다른 캐릭터 장착분 제외)"""
    _require_character(service, character_id)
    return [relic_response(r) for r in service.available_relics(character_id, slot)]


# === 프리셋 ===


@router.post(
    "/{character_id}/presets",
    response_model=CharacterResponse,
    status_code=201,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def add_preset(
    character_id: str,
    request: PresetRequest,
    service: CharacterService = Depends(get_character_service),
) -> CharacterResponse:
    _require_character(service, character_id)
    character = service.add_preset(
        character_id, request.name, request.weights, request.main_stats, request.sets
    )
    if character is None:
        raise HTTPException(
            status_code=409, detail=f"Preset name already used: {request.name}"
        )
    return character_response(character)


@router.put(
    "/{character_id}/presets/{preset_id}",
    response_model=CharacterResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def update_preset(
    character_id: str,
    preset_id: str,
    request: PresetRequest,
    service: CharacterService = Depends(get_character_service),
) -> CharacterResponse:
    """프리셋 수정. 기본 프리셋도 수정 가능."""
    current = _require_character(service, character_id)
    known = {current.default_weights.id, *(p.id for p in current.weight_presets)}
    if preset_id not in known:
        raise HTTPException(status_code=404, detail=f"Preset not found: {preset_id}")

    preset = WeightPreset(
        id=preset_id,
        name=request.name,
        is_default=preset_id == current.default_weights.id,
        weights=dict(request.weights),
        main_stats={k: list(v) for k, v in request.main_stats.items()},
        sets={k: list(v) for k, v in request.sets.items()},
    )
    character = service.update_preset(character_id, preset)
    if character is None:
        raise HTTPException(
            status_code=409, detail=f"Preset name already used: {request.name}"
        )
    return character_response(character)


@router.delete(
    "/{character_id}/presets/{preset_id}",
    response_model=CharacterResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def remove_preset(
    character_id: str,
    preset_id: str,
    service: CharacterService = Depends(get_character_service),
) -> CharacterResponse:
    """프리셋 삭제. 기본 프리셋은 삭제할 수 없다 (409)."""
    current = _require_character(service, character_id)
    if preset_id == current.default_weights.id:
        raise HTTPException(status_code=409, detail="Default preset cannot be removed")

    character = service.remove_preset(character_id, preset_id)
    if character is None:
        raise HTTPException(status_code=404, detail=f"Preset not found: {preset_id}")
    return character_response(character)


@router.post(
    "/{character_id}/presets/{preset_id}/activate",
    response_model=CharacterResponse,
    responses={404: {"model": ErrorResponse}},
)
def activate_preset(
    character_id: str,
    preset_id: str,
    service: CharacterService = Depends(get_character_service),
) -> CharacterResponse:
    _require_character(service, character_id)
    character = service.activate_preset(character_id, preset_id)
    if character is None:
        raise HTTPException(status_code=404, detail=f"Preset not found: {preset_id}")
    return character_response(character)
