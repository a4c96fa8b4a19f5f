"""스캐너 JSON → Relic 변환

입력 형식:
    {"relics": [{"set_id": "101", "slot": "Hands", "mainstat": "ATK",
                 "substats": [{"key": "CRIT Rate_", "value": 3.2}, ...]}, ...]}

키 끝의 "_"는 % 스탯 표시 ("HP_" → "HP%", "HP" → 고정 HP).
주옵션 수치는 +15 최대치로 채운다.
"""

from __future__ import annotations

import logging
from typing import Any

from .identity import make_relic
from .models import Relic, RelicType, Stat
from .stat_config import StatConfig

logger = logging.getLogger(__name__)

UNKNOWN_SET = "relic_unknown"

SLOT_MAP: dict[str, RelicType] = {
    "Head": RelicType.HEAD,
    "Hands": RelicType.HAND,
    "Body": RelicType.CHEST,
    "Feet": RelicType.FEET,
    "Planar Sphere": RelicType.ORB,
    "Link Rope": RelicType.ROPE,
}

# 접미사 "_" 제거 후 이름 기준
_STAT_KEY_MAP: dict[str, str] = {
    "CRIT Rate": "Crit Rate%",
    "CRIT DMG": "Crit DMG%",
    "Effect Hit Rate": "Effect Hit Rate%",
    "Effect RES": "Effect RES%",
    "Break Effect": "Break Effect%",
    "Energy Regeneration Rate": "Energy Regen Rate%",
    "Outgoing Healing Boost": "Outgoing Healing Boost%",
}


def map_slot_to_relic_type(slot: str) -> RelicType:
    """알 수 없는 슬롯은 Head."""
    return SLOT_MAP.get(slot, RelicType.HEAD)


def map_set_id_to_internal_name(set_id: Any, config: StatConfig) -> str:
    try:
        relic_set = config.find_set(int(set_id))
    except (TypeError, ValueError):
        relic_set = None
    return relic_set.internal_name if relic_set else UNKNOWN_SET


def clean_stat_key(key: str) -> str:
    """스캐너 스탯 키 → 내부 스탯 이름."""
    is_percent = key.endswith("_")
    name = key.rstrip("_")

    if name in ("HP", "ATK", "DEF"):
        return f"{name}%" if is_percent else name
    if name.endswith(" DMG Boost"):
        return name[: -len(" Boost")]
    return _STAT_KEY_MAP.get(name, name)


def _parse_relic(raw: dict[str, Any], config: StatConfig) -> Relic:
    relic_type = map_slot_to_relic_type(raw["slot"])
    set_name = map_set_id_to_internal_name(raw["set_id"], config)

    main_name = clean_stat_key(raw["mainstat"])
    main_stat = Stat(main_name, config.main_stat_value(main_name))

    sub_stats = [
        Stat(clean_stat_key(s["key"]), float(s["value"]))
        for s in raw.get("substats", [])
    ]
    return make_relic(relic_type, set_name, main_stat, sub_stats)


def import_relics_from_json(data: Any, config: StatConfig) -> list[Relic]:
    """유효한 항목만 변환. 잘못된 항목은 로그 후 건너뛴다."""
    if not isinstance(data, dict) or not isinstance(data.get("relics"), list):
        logger.error("Invalid JSON data format for relics import")
        return []

    relics: list[Relic] = []
    for raw in data["relics"]:
        try:
            relics.append(_parse_relic(raw, config))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Error importing relic: %s — %s", raw, e)

    logger.info("Parsed %d/%d relics from import", len(relics), len(data["relics"]))
    return relics
