"""API request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from src.core.relic.models import (
    Character,
    Relic,
    RelicGrade,
    RelicType,
    Score,
    WeightPreset,
)


# === Request Schemas ===


class StatSchema(BaseModel):
    """스탯 (이름 + 수치)"""

    name: str = Field(..., min_length=1)
    value: float


class RelicCreateRequest(BaseModel):
    """유물 수동 등록 요청. ID는 서버에서 생성."""

    type: RelicType
    set: str = Field(..., min_length=1, description="세트 내부 이름")
    main_stat: StatSchema
    sub_stats: list[StatSchema] = Field(default_factory=list, max_length=4)


class CharacterAddRequest(BaseModel):
    """캐릭터 보유 등록 요청"""

    character_id: str = Field(..., min_length=1, description="카탈로그 캐릭터 ID")


class EquipRequest(BaseModel):
    relic_id: str = Field(..., min_length=1)


class PresetRequest(BaseModel):
    """가중치 프리셋 생성/수정 요청"""

    name: str = Field(..., min_length=1, max_length=50)
    weights: dict[str, float] = Field(default_factory=dict)
    main_stats: dict[str, list[str]] = Field(default_factory=dict)
    sets: dict[str, list[str]] = Field(default_factory=dict)


# === Response Schemas ===


class RelicResponse(BaseModel):
    id: str
    type: RelicType
    set: str
    main_stat: StatSchema
    sub_stats: list[StatSchema] = []


class ImportResponse(BaseModel):
    """가져오기 결과"""

    added: int
    duplicates: int
    invalid: int
    relic_ids: list[str] = []


class PresetResponse(BaseModel):
    id: str
    name: str
    is_default: bool
    weights: dict[str, float] = {}
    main_stats: dict[str, list[str]] = {}
    sets: dict[str, list[str]] = {}


class BaseStatsResponse(BaseModel):
    hp: float
    atk: float
    def_: float
    spd: float
    crit_rate: float
    crit_dmg: float


class CharacterResponse(BaseModel):
    """보유 캐릭터 정보"""

    id: str
    name: str
    alias: Optional[str] = None
    rarity: int
    path: str
    element: str
    base_stats: BaseStatsResponse
    default_weights: PresetResponse
    weight_presets: list[PresetResponse] = []
    active_preset_id: str
    equipped_relics: dict[str, str] = {}


class CatalogEntryResponse(BaseModel):
    """카탈로그 캐릭터 요약"""

    character_id: str
    name: str
    alias: Optional[str] = None
    rarity: int
    path: str
    element: str


class ScoreResponse(BaseModel):
    score: float
    grade: RelicGrade


class ScoredRelicResponse(BaseModel):
    relic: RelicResponse
    score: float
    grade: RelicGrade


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = False
    error: str
    detail: Optional[str] = None


# === Builders ===


def relic_response(relic: Relic) -> RelicResponse:
    return RelicResponse(
        id=relic.id,
        type=relic.type,
        set=relic.set,
        main_stat=StatSchema(name=relic.main_stat.name, value=relic.main_stat.value),
        sub_stats=[StatSchema(name=s.name, value=s.value) for s in relic.sub_stats],
    )


def preset_response(preset: WeightPreset) -> PresetResponse:
    return PresetResponse(
        id=preset.id,
        name=preset.name,
        is_default=preset.is_default,
        weights=dict(preset.weights),
        main_stats={k: list(v) for k, v in preset.main_stats.items()},
        sets={k: list(v) for k, v in preset.sets.items()},
    )


def character_response(character: Character) -> CharacterResponse:
    stats = character.base_stats
    return CharacterResponse(
        id=character.id,
        name=character.name,
        alias=character.alias,
        rarity=character.rarity,
        path=character.path,
        element=character.element,
        base_stats=BaseStatsResponse(
            hp=stats.hp,
            atk=stats.atk,
            def_=stats.def_,
            spd=stats.spd,
            crit_rate=stats.crit_rate,
            crit_dmg=stats.crit_dmg,
        ),
        default_weights=preset_response(character.default_weights),
        weight_presets=[preset_response(p) for p in character.weight_presets],
        active_preset_id=character.active_preset_id,
        equipped_relics=dict(character.equipped_relics),
    )


def score_response(score: Score) -> ScoreResponse:
    return ScoreResponse(score=score.score, grade=score.grade)


def scored_relic_response(relic: Relic, score: Score) -> ScoredRelicResponse:
    return ScoredRelicResponse(
        relic=relic_response(relic), score=score.score, grade=score.grade
    )

