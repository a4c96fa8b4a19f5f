"""가중치 프리셋 관리 — 순수 함수

모든 변경 함수는 스냅샷을 수정하지 않고 갱신된 Character 사본을 반환한다.
예상 가능한 실패(중복 이름, 기본 프리셋 삭제, 없는 프리셋 활성화)는
예외 대신 None. 사용자 메시지 처리는 호출자 몫.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Optional

from .models import AppStore, Character, WeightPreset

logger = logging.getLogger(__name__)

DEFAULT_PRESET_NAME = "Default"


class InvalidCharacterError(LookupError):
    """활성 프리셋을 해석할 수 없는 캐릭터 (조회 전용 함수에서만 발생)."""


def create_weight_preset(
    name: str,
    weights: dict[str, float],
    main_stats: dict[str, list[str]],
    sets: dict[str, list[str]],
    is_default: bool = False,
) -> WeightPreset:
    """새 프리셋 생성. id는 UUID."""
    return WeightPreset(
        id=str(uuid.uuid4()),
        name=name,
        is_default=is_default,
        weights=dict(weights),
        main_stats={slot: list(stats) for slot, stats in main_stats.items()},
        sets={family: list(names) for family, names in sets.items()},
    )


def get_character_by_id(character_id: str, store: AppStore) -> Optional[Character]:
    return next((c for c in store.characters if c.id == character_id), None)


def get_current_weight_from_character(character: Character) -> Optional[WeightPreset]:
    """활성 프리셋. 기본 프리셋 or weight_presets 중 하나, 없으면 None."""
    if character.active_preset_id == character.default_weights.id:
        return character.default_weights
    return next(
        (p for p in character.weight_presets if p.id == character.active_preset_id),
        None,
    )


def get_current_weight_preset(
    character_id: str, store: AppStore
) -> Optional[WeightPreset]:
    character = get_character_by_id(character_id, store)
    if character is None:
        return None
    return get_current_weight_from_character(character)


def require_current_weight_preset(character_id: str, store: AppStore) -> WeightPreset:
    """get_current_weight_preset의 예외 버전. "캐릭터 없음"과 "점수 0" 구분용."""
    preset = get_current_weight_preset(character_id, store)
    if preset is None:
        raise InvalidCharacterError(f"Invalid character ID: {character_id}")
    return preset


def _name_taken(character: Character, name: str, exclude_id: str = "") -> bool:
    presets = [character.default_weights, *character.weight_presets]
    return any(p.name == name and p.id != exclude_id for p in presets)


def add_weight_preset(
    character_id: str, preset: WeightPreset, store: AppStore
) -> Optional[Character]:
    """추가 프리셋 등록. 기본 플래그 프리셋, 이름 중복은 실패."""
    character = get_character_by_id(character_id, store)
    if character is None or preset.is_default:
        return None
    if _name_taken(character, preset.name):
        logger.info("Preset name already used: %s (%s)", preset.name, character_id)
        return None

    return replace(character, weight_presets=[*character.weight_presets, preset])


def remove_weight_preset(
    character_id: str, preset_id: str, store: AppStore
) -> Optional[Character]:
    """프리셋 삭제. 기본 프리셋은 삭제 불가.
    활성 프리셋이 삭제되면 기본 프리셋으로 복귀.
    """
    character = get_character_by_id(character_id, store)
    if character is None or preset_id == character.default_weights.id:
        return None

    remaining = [p for p in character.weight_presets if p.id != preset_id]
    if len(remaining) == len(character.weight_presets):
        return None

    active_id = character.active_preset_id
    if active_id == preset_id:
        active_id = character.default_weights.id

    return replace(character, weight_presets=remaining, active_preset_id=active_id)


def set_active_preset(
    character_id: str, preset_id: str, store: AppStore
) -> Optional[Character]:
    character = get_character_by_id(character_id, store)
    if character is None:
        return None

    is_default = preset_id == character.default_weights.id
    exists = any(p.id == preset_id for p in character.weight_presets)
    if not is_default and not exists:
        return None

    return replace(character, active_preset_id=preset_id)


def update_weight_preset(
    character_id: str, preset: WeightPreset, store: AppStore
) -> Optional[Character]:
    """id가 같은 프리셋을 교체. 기본 프리셋도 수정 가능 (is_default 유지).
    다른 프리셋 이름으로 변경하면 실패.
    """
    character = get_character_by_id(character_id, store)
    if character is None:
        return None
    if _name_taken(character, preset.name, exclude_id=preset.id):
        return None

    if preset.id == character.default_weights.id:
        return replace(character, default_weights=replace(preset, is_default=True))

    index = next(
        (i for i, p in enumerate(character.weight_presets) if p.id == preset.id), -1
    )
    if index == -1:
        return None

    presets = list(character.weight_presets)
    presets[index] = replace(preset, is_default=False)
    return replace(character, weight_presets=presets)
