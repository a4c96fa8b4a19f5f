"""유물(Relic) 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

FLAT_STATS: tuple[str, ...] = ("HP", "ATK", "DEF")


class RelicType(str, Enum):
    """장비 슬롯 6종. Head/Hand는 주옵션 고정, Orb/Rope는 차원 장신구."""

    HEAD = "Head"
    HAND = "Hand"
    CHEST = "Chest"
    FEET = "Feet"
    ORB = "Orb"
    ROPE = "Rope"

    @property
    def has_fixed_main_stat(self) -> bool:
        return self in (RelicType.HEAD, RelicType.HAND)

    @property
    def is_ornament(self) -> bool:
        return self in (RelicType.ORB, RelicType.ROPE)


class RelicGrade(str, Enum):
    """점수 비율 등급. 높은 순."""

    WTF = "WTF"
    SSS = "SSS"
    SS = "SS"
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"


@dataclass(frozen=True)
class Stat:
    name: str
    value: float


@dataclass
class Relic:
    """유물 1개. id는 identity.generate_relic_id로 결정론적으로 생성."""

    id: str
    type: RelicType
    set: str
    main_stat: Stat
    sub_stats: list[Stat] = field(default_factory=list)  # 최대 4개


@dataclass(frozen=True)
class BaseStats:
    """캐릭터 기본 능력치 (Lv.80 기준)"""

    hp: float = 0
    atk: float = 0
    def_: float = 0
    spd: float = 0
    crit_rate: float = 0
    crit_dmg: float = 0

    def flat(self, stat_name: str) -> float:
        """고정 수치 스탯(HP/ATK/DEF) 기본값. 그 외 0."""
        return {"HP": self.hp, "ATK": self.atk, "DEF": self.def_}.get(stat_name, 0)


@dataclass
class WeightPreset:
    """캐릭터별 채점 설정.

    weights: 스탯 → 가중치 (없으면 0)
    main_stats: 가변 슬롯 → 추천 주옵션 목록 (순서 = 동점 처리 우선순위)
    sets: {"relic": [...], "ornament": [...]}
    """

    id: str
    name: str
    is_default: bool
    weights: dict[str, float] = field(default_factory=dict)
    main_stats: dict[str, list[str]] = field(default_factory=dict)
    sets: dict[str, list[str]] = field(default_factory=dict)

    def weight(self, stat_name: str) -> float:
        return self.weights.get(stat_name) or 0

    def preferred_main_stats(self, relic_type: RelicType) -> list[str]:
        return self.main_stats.get(relic_type.value) or []

    def preferred_sets(self, ornament: bool) -> list[str]:
        return self.sets.get("ornament" if ornament else "relic") or []


@dataclass
class Character:
    id: str
    name: str
    rarity: int
    path: str
    element: str
    base_stats: BaseStats
    default_weights: WeightPreset
    weight_presets: list[WeightPreset] = field(default_factory=list)
    active_preset_id: str = ""
    equipped_relics: dict[str, str] = field(default_factory=dict)  # slot → relic id
    alias: Optional[str] = None


@dataclass
class AppStore:
    """엔진 입력용 전체 상태 스냅샷. 엔진은 절대 수정하지 않는다."""

    characters: list[Character] = field(default_factory=list)
    relics: list[Relic] = field(default_factory=list)


@dataclass(frozen=True)
class Score:
    score: float
    grade: RelicGrade
