"""정적 스탯 설정 — JSON 로드, 엔진에 주입되는 불변 객체

전역 싱글턴을 두지 않는다. 테스트는 합성 설정을 직접 만들어 넘긴다.
누락된 항목은 중립값(가중치 0, 정규화 1, 수치 0)으로 처리.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .models import RelicType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatRange:
    min: float
    max: float


@dataclass(frozen=True)
class RelicSet:
    set_id: int
    internal_name: str
    name: str = ""


@dataclass(frozen=True)
class StatConfig:
    """유물 데이터 테이블 + 정규화 상수"""

    main_stats: dict[str, tuple[str, ...]]  # slot → 허용 주옵션
    sub_stats: tuple[str, ...]
    main_stat_values: dict[str, float]  # +15 최대 주옵션 수치
    sub_stat_ranges: dict[str, StatRange]  # 부옵션 누적 범위
    sub_stat_rolls: dict[str, StatRange]  # 강화 1회 수치 범위
    normalization_factors: dict[str, float] = field(default_factory=dict)
    percent_stat_low_rolls: dict[str, float] = field(default_factory=dict)
    flat_stat_low_rolls: dict[str, float] = field(default_factory=dict)
    flat_stat_high_rolls: dict[str, float] = field(default_factory=dict)
    relic_sets: tuple[RelicSet, ...] = ()
    ornament_sets: tuple[RelicSet, ...] = ()

    @classmethod
    def from_dict(
        cls, relic_data: dict[str, Any], stat_constants: dict[str, Any]
    ) -> StatConfig:
        """relic_data.json + stat_constants.json 구조를 변환."""

        def _ranges(raw: dict[str, Any]) -> dict[str, StatRange]:
            return {
                name: StatRange(float(r["min"]), float(r["max"]))
                for name, r in raw.items()
            }

        def _sets(raw: list[dict[str, Any]]) -> tuple[RelicSet, ...]:
            return tuple(
                RelicSet(
                    set_id=int(s["set_id"]),
                    internal_name=s["internal_name"],
                    name=s.get("name", ""),
                )
                for s in raw
            )

        def _floats(raw: dict[str, Any]) -> dict[str, float]:
            return {k: float(v) for k, v in raw.items()}

        return cls(
            main_stats={
                slot: tuple(stats)
                for slot, stats in relic_data.get("main_stats", {}).items()
            },
            sub_stats=tuple(relic_data.get("sub_stats", [])),
            main_stat_values=_floats(relic_data.get("main_stat_values", {})),
            sub_stat_ranges=_ranges(relic_data.get("sub_stat_ranges", {})),
            sub_stat_rolls=_ranges(relic_data.get("sub_stat_rolls", {})),
            normalization_factors=_floats(
                stat_constants.get("normalization_factors", {})
            ),
            percent_stat_low_rolls=_floats(
                stat_constants.get("percent_stat_low_rolls", {})
            ),
            flat_stat_low_rolls=_floats(stat_constants.get("flat_stat_low_rolls", {})),
            flat_stat_high_rolls=_floats(
                stat_constants.get("flat_stat_high_rolls", {})
            ),
            relic_sets=_sets(relic_data.get("relic_sets", [])),
            ornament_sets=_sets(relic_data.get("ornament_sets", [])),
        )

    # ── 조회 (누락 시 중립값) ──────────────────────────────

    def normalization(self, stat_name: str) -> float:
        return self.normalization_factors.get(stat_name) or 1.0

    def main_stat_value(self, stat_name: str) -> float:
        return self.main_stat_values.get(stat_name) or 0.0

    def sub_stat_max(self, stat_name: str) -> float:
        r = self.sub_stat_ranges.get(stat_name)
        return r.max if r else 0.0

    def roll_max(self, stat_name: str) -> float:
        r = self.sub_stat_rolls.get(stat_name)
        return r.max if r else 0.0

    def legal_main_stats(self, relic_type: RelicType) -> tuple[str, ...]:
        return self.main_stats.get(relic_type.value, ())

    def is_ornament_set(self, set_name: str) -> bool:
        return any(s.internal_name == set_name for s in self.ornament_sets)

    def find_set(self, set_id: int) -> Optional[RelicSet]:
        for s in self.relic_sets + self.ornament_sets:
            if s.set_id == set_id:
                return s
        return None


def load_stat_config(
    relic_data_path: str | Path, stat_constants_path: str | Path
) -> StatConfig:
    """두 JSON 파일을 읽어 StatConfig 생성."""
    relic_data_path = Path(relic_data_path)
    stat_constants_path = Path(stat_constants_path)
    with relic_data_path.open("r", encoding="utf-8") as f:
        relic_data = json.load(f)
    with stat_constants_path.open("r", encoding="utf-8") as f:
        stat_constants = json.load(f)

    config = StatConfig.from_dict(relic_data, stat_constants)
    logger.info(
        "Loaded stat config: %d substats, %d slots, %d relic sets, %d ornament sets",
        len(config.sub_stats),
        len(config.main_stats),
        len(config.relic_sets),
        len(config.ornament_sets),
    )
    return config
