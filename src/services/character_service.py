"""캐릭터 Service — 보유 캐릭터 CRUD, 장착, 가중치 프리셋 관리

Service → Core, Service → DB 허용
Service → Service 금지, EventBus 경유
"""

from typing import Optional

from sqlalchemy.orm import Session

from src.core.event_bus import EventBus, StoreEvent
from src.core.event_types import EventTypes
from src.core.logging import get_logger
from src.core.relic.catalog import CharacterCatalog
from src.core.relic.models import AppStore, Character, Relic, RelicType, WeightPreset
from src.core.relic.presets import (
    add_weight_preset,
    create_weight_preset,
    remove_weight_preset,
    set_active_preset,
    update_weight_preset,
)
from src.db.mappers import apply_character_to_orm, character_from_orm, relic_from_orm
from src.db.models import CharacterModel, RelicModel

logger = get_logger(__name__)


class CharacterService:
    """캐릭터 CRUD + 장착 + 프리셋

    프리셋 변경은 Core 순수 함수에 위임하고 결과만 저장한다.
    Core가 None을 반환하면 그대로 None.
    """

    def __init__(self, db: Session, event_bus: EventBus, catalog: CharacterCatalog):
        self._db = db
        self._bus = event_bus
        self._catalog = catalog
        self._register_event_handlers()

    def _register_event_handlers(self) -> None:
        self._bus.subscribe(EventTypes.RELIC_DELETED, self._on_relic_deleted)

    # ── 조회 ─────────────────────────────────────────────────

    def get_character(self, character_id: str) -> Optional[Character]:
        row = self._db.get(CharacterModel, character_id)
        if row is None:
            return None
        return character_from_orm(row)

    def list_characters(self) -> list[Character]:
        rows = self._db.query(CharacterModel).order_by(CharacterModel.created_at).all()
        return [character_from_orm(r) for r in rows]

    # ── 생성/삭제 ───────────────────────────────────────────

    def add_character(self, character_id: str) -> Optional[Character]:
        """카탈로그에서 캐릭터 생성 + 저장.
        카탈로그에 없으면 ValueError, 이미 보유 중이면 None.
        """
        if self._db.get(CharacterModel, character_id) is not None:
            logger.info("Character already owned: %s", character_id)
            return None

        character = self._catalog.create_character(character_id)
        self._db.add(apply_character_to_orm(character, CharacterModel()))
        self._db.commit()

        self._bus.emit(
            StoreEvent(
                event_type=EventTypes.CHARACTER_ADDED,
                data={"character_id": character_id},
                source="character_service",
            )
        )
        logger.info("Character added: %s (%s)", character.name, character_id)
        return character

    def delete_character(self, character_id: str) -> bool:
        row = self._db.get(CharacterModel, character_id)
        if row is None:
            return False
        self._db.delete(row)
        self._db.commit()

        self._bus.emit(
            StoreEvent(
                event_type=EventTypes.CHARACTER_DELETED,
                data={"character_id": character_id},
                source="character_service",
            )
        )
        logger.info("Character deleted: %s", character_id)
        return True

    # ── 장착 ─────────────────────────────────────────────────

    def equip_relic(
        self,
        character_id: str,
        relic_id: str,
        relic_type: Optional[RelicType] = None,
    ) -> Optional[Character]:
        """유물 장착. 슬롯은 유물 타입으로 결정.
        다른 캐릭터가 장착 중이면 그쪽에서 해제한다.
        relic_type이 주어졌는데 유물 슬롯과 다르면 ValueError.
        """
        row = self._db.get(CharacterModel, character_id)
        relic_row = self._db.get(RelicModel, relic_id)
        if row is None or relic_row is None:
            logger.warning(
                "Equip failed: character=%s relic=%s", character_id, relic_id
            )
            return None

        slot = relic_row.relic_type
        if relic_type is not None and relic_type.value != slot:
            raise ValueError(f"Relic {relic_id} does not fit slot {relic_type.value}")
        for other in self._db.query(CharacterModel).all():
            if other.character_id != character_id and (
                (other.equipped_relics or {}).get(slot) == relic_id
            ):
                other.equipped_relics = {
                    k: v for k, v in other.equipped_relics.items() if k != slot
                }
                logger.info("Relic %s moved off %s", relic_id, other.character_id)

        row.equipped_relics = {**(row.equipped_relics or {}), slot: relic_id}
        self._db.commit()

        self._bus.emit(
            StoreEvent(
                event_type=EventTypes.RELIC_EQUIPPED,
                data={"character_id": character_id, "relic_id": relic_id},
                source="character_service",
            )
        )
        return character_from_orm(row)

    def unequip_relic(
        self, character_id: str, relic_type: RelicType
    ) -> Optional[Character]:
        row = self._db.get(CharacterModel, character_id)
        if row is None:
            return None

        equipped = dict(row.equipped_relics or {})
        relic_id = equipped.pop(relic_type.value, None)
        row.equipped_relics = equipped
        self._db.commit()

        if relic_id is not None:
            self._bus.emit(
                StoreEvent(
                    event_type=EventTypes.RELIC_UNEQUIPPED,
                    data={"character_id": character_id, "relic_id": relic_id},
                    source="character_service",
                )
            )
        return character_from_orm(row)

    def available_relics(
        self, character_id: str, relic_type: RelicType
    ) -> list[Relic]:
        """해당 슬롯 유물 중 다른 캐릭터가 장착하지 않은 것."""
        taken = {
            (r.equipped_relics or {}).get(relic_type.value)
            for r in self._db.query(CharacterModel).all()
            if r.character_id != character_id
        }
        rows = (
            self._db.query(RelicModel)
            .filter(RelicModel.relic_type == relic_type.value)
            .order_by(RelicModel.created_at)
            .all()
        )
        return [relic_from_orm(r) for r in rows if r.relic_id not in taken]

    def _on_relic_deleted(self, event: StoreEvent) -> None:
        """삭제된 유물을 모든 캐릭터에서 해제."""
        relic_id = event.data["relic_id"]
        changed = 0
        for row in self._db.query(CharacterModel).all():
            equipped = row.equipped_relics or {}
            if relic_id in equipped.values():
                row.equipped_relics = {
                    k: v for k, v in equipped.items() if v != relic_id
                }
                changed += 1
        if changed:
            self._db.commit()
            logger.info("Unequipped deleted relic %s from %d characters", relic_id, changed)

    # ── 프리셋 ───────────────────────────────────────────────

    def _apply(self, character_id: str, op, *args) -> Optional[Character]:
        """Core 프리셋 함수 실행 후 결과 저장."""
        row = self._db.get(CharacterModel, character_id)
        if row is None:
            return None

        snapshot = AppStore(characters=[character_from_orm(row)])
        updated = op(character_id, *args, snapshot)
        if updated is None:
            logger.info("Preset operation %s rejected for %s", op.__name__, character_id)
            return None

        apply_character_to_orm(updated, row)
        self._db.commit()
        return updated

    def add_preset(
        self,
        character_id: str,
        name: str,
        weights: dict[str, float],
        main_stats: dict[str, list[str]],
        sets: dict[str, list[str]],
    ) -> Optional[Character]:
        preset = create_weight_preset(name, weights, main_stats, sets, is_default=False)
        updated = self._apply(character_id, add_weight_preset, preset)
        if updated is not None:
            self._emit_preset(EventTypes.PRESET_CHANGED, character_id, preset.id)
        return updated

    def update_preset(
        self, character_id: str, preset: WeightPreset
    ) -> Optional[Character]:
        updated = self._apply(character_id, update_weight_preset, preset)
        if updated is not None:
            self._emit_preset(EventTypes.PRESET_CHANGED, character_id, preset.id)
        return updated

    def remove_preset(self, character_id: str, preset_id: str) -> Optional[Character]:
        updated = self._apply(character_id, remove_weight_preset, preset_id)
        if updated is not None:
            self._emit_preset(EventTypes.PRESET_CHANGED, character_id, preset_id)
        return updated

    def activate_preset(self, character_id: str, preset_id: str) -> Optional[Character]:
        updated = self._apply(character_id, set_active_preset, preset_id)
        if updated is not None:
            self._emit_preset(EventTypes.PRESET_ACTIVATED, character_id, preset_id)
        return updated

    def _emit_preset(self, event_type: str, character_id: str, preset_id: str) -> None:
        self._bus.emit(
            StoreEvent(
                event_type=event_type,
                data={"character_id": character_id, "preset_id": preset_id},
                source="character_service",
            )
        )
