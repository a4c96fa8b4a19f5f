"""캐릭터 카탈로그 — character_data.json 로드 + Character 생성"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .models import BaseStats, Character
from .presets import DEFAULT_PRESET_NAME, create_weight_preset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    """정적 캐릭터 데이터 (게임 수치 + 기본 추천 설정)"""

    character_id: str
    name: str
    rarity: int
    path: str
    element: str
    base_stats: BaseStats
    weights: dict[str, float]
    main_stats: dict[str, list[str]]
    sets: dict[str, list[str]]
    alias: Optional[str] = None


class CharacterCatalog:
    """캐릭터 원형 저장소."""

    def __init__(self) -> None:
        self._entries: dict[str, CatalogEntry] = {}

    def load_from_json(self, path: str | Path) -> int:
        """character_data.json 로드. 반환: 로드된 수량.

        형식 오류 항목은 경고 후 건너뛴다.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw_map: dict[str, dict] = json.load(f).get("characters", {})

        count = 0
        for character_id, raw in raw_map.items():
            try:
                stats = raw["base_stats"]
                entry = CatalogEntry(
                    character_id=str(character_id),
                    name=raw["name"],
                    rarity=int(raw["rarity"]),
                    path=raw["path"],
                    element=raw["element"],
                    base_stats=BaseStats(
                        hp=float(stats["HP"]),
                        atk=float(stats["ATK"]),
                        def_=float(stats["DEF"]),
                        spd=float(stats["SPD"]),
                        crit_rate=float(stats.get("CRIT Rate", 0)),
                        crit_dmg=float(stats.get("CRIT DMG", 0)),
                    ),
                    weights={k: float(v) for k, v in raw.get("weights", {}).items()},
                    main_stats=dict(raw.get("main_stats", {})),
                    sets=dict(raw.get("sets", {})),
                    alias=raw.get("alias"),
                )
                self._entries[entry.character_id] = entry
                count += 1
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Failed to load character: %s — %s", character_id, e)

        logger.info("Loaded %d characters from %s", count, path)
        return count

    def register(self, entry: CatalogEntry) -> None:
        if entry.character_id in self._entries:
            logger.warning("Overwriting existing character: %s", entry.character_id)
        self._entries[entry.character_id] = entry

    def get(self, character_id: str) -> Optional[CatalogEntry]:
        return self._entries.get(character_id)

    def get_all(self) -> list[CatalogEntry]:
        return list(self._entries.values())

    def count(self) -> int:
        return len(self._entries)

    def create_character(self, character_id: str) -> Character:
        """카탈로그 기반 Character 생성. 기본 프리셋이 활성, 장착 없음."""
        entry = self._entries.get(character_id)
        if entry is None:
            raise ValueError("Invalid character ID")

        default = create_weight_preset(
            DEFAULT_PRESET_NAME,
            entry.weights,
            entry.main_stats,
            entry.sets,
            is_default=True,
        )
        return Character(
            id=entry.character_id,
            name=entry.name,
            rarity=entry.rarity,
            path=entry.path,
            element=entry.element,
            base_stats=entry.base_stats,
            default_weights=default,
            weight_presets=[],
            active_preset_id=default.id,
            equipped_relics={},
            alias=entry.alias,
        )
