"""Core 모델 ↔ JSON 호환 dict 변환 (DB JSON 컬럼 저장용)

왕복 변환은 무손실이어야 한다.
"""

from __future__ import annotations

from typing import Any

from .models import BaseStats, Stat, WeightPreset


def stat_to_dict(stat: Stat) -> dict[str, Any]:
    return {"name": stat.name, "value": stat.value}


def stat_from_dict(raw: dict[str, Any]) -> Stat:
    return Stat(name=raw["name"], value=float(raw["value"]))


def preset_to_dict(preset: WeightPreset) -> dict[str, Any]:
    return {
        "id": preset.id,
        "name": preset.name,
        "is_default": preset.is_default,
        "weights": dict(preset.weights),
        "main_stats": {k: list(v) for k, v in preset.main_stats.items()},
        "sets": {k: list(v) for k, v in preset.sets.items()},
    }


def preset_from_dict(raw: dict[str, Any]) -> WeightPreset:
    return WeightPreset(
        id=raw["id"],
        name=raw["name"],
        is_default=bool(raw.get("is_default", False)),
        weights={k: float(v) for k, v in raw.get("weights", {}).items()},
        main_stats={k: list(v) for k, v in raw.get("main_stats", {}).items()},
        sets={k: list(v) for k, v in raw.get("sets", {}).items()},
    )


def base_stats_to_dict(stats: BaseStats) -> dict[str, float]:
    return {
        "HP": stats.hp,
        "ATK": stats.atk,
        "DEF": stats.def_,
        "SPD": stats.spd,
        "CRITRate": stats.crit_rate,
        "CRITDMG": stats.crit_dmg,
    }


def base_stats_from_dict(raw: dict[str, Any]) -> BaseStats:
    return BaseStats(
        hp=float(raw.get("HP", 0)),
        atk=float(raw.get("ATK", 0)),
        def_=float(raw.get("DEF", 0)),
        spd=float(raw.get("SPD", 0)),
        crit_rate=float(raw.get("CRITRate", 0)),
        crit_dmg=float(raw.get("CRITDMG", 0)),
    )
