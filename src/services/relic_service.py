"""유물 Service — Core↔DB 연결, EventBus 통신

Service → Core, Service → DB 허용
Service → Service 금지, EventBus 경유
"""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from src.core.event_bus import EventBus, StoreEvent
from src.core.event_types import EventTypes
from src.core.logging import get_logger
from src.core.relic.identity import RelicValidationError, validate_relic
from src.core.relic.importer import import_relics_from_json
from src.core.relic.models import Relic, RelicType
from src.core.relic.stat_config import StatConfig
from src.db.mappers import relic_from_orm, relic_to_orm
from src.db.models import RelicModel

logger = get_logger(__name__)


@dataclass
class ImportResult:
    """일괄 추가 결과"""

    added: int = 0
    duplicates: int = 0
    invalid: int = 0
    relic_ids: list[str] = field(default_factory=list)


class RelicService:
    """유물 CRUD + 가져오기"""

    def __init__(self, db: Session, event_bus: EventBus, config: StatConfig):
        self._db = db
        self._bus = event_bus
        self._config = config

    # === 조회 ===

    def get_relic(self, relic_id: str) -> Relic | None:
        row = self._db.get(RelicModel, relic_id)
        if row is None:
            return None
        return relic_from_orm(row)

    def list_relics(self, relic_type: RelicType | None = None) -> list[Relic]:
        q = self._db.query(RelicModel)
        if relic_type is not None:
            q = q.filter(RelicModel.relic_type == relic_type.value)
        return [relic_from_orm(r) for r in q.order_by(RelicModel.created_at).all()]

    def exists(self, relic_id: str) -> bool:
        return self._db.get(RelicModel, relic_id) is not None

    # === 추가 ===

    def add_relic(self, relic: Relic) -> bool:
        """유물 1개 추가. 검증 실패 시 RelicValidationError.
        같은 ID가 이미 있으면 False (중복 제거).
        """
        validate_relic(relic, self._config)

        if self.exists(relic.id):
            logger.info("Relic already stored: %s", relic.id)
            return False

        self._db.add(relic_to_orm(relic))
        self._db.commit()

        self._bus.emit(
            StoreEvent(
                event_type=EventTypes.RELIC_ADDED,
                data={"relic_id": relic.id},
                source="relic_service",
            )
        )
        logger.debug("Added relic %s", relic.id)
        return True

    def add_relics(self, relics: list[Relic], validate: bool = True) -> ImportResult:
        """일괄 추가. 기존 ID + 배치 내 중복은 건너뛴다."""
        result = ImportResult()
        seen: set[str] = set()

        for relic in relics:
            if validate:
                try:
                    validate_relic(relic, self._config)
                except RelicValidationError as e:
                    logger.warning("Skipping invalid relic %s: %s", relic.id, e)
                    result.invalid += 1
                    continue

            if relic.id in seen or self.exists(relic.id):
                result.duplicates += 1
                continue

            seen.add(relic.id)
            self._db.add(relic_to_orm(relic))
            result.added += 1
            result.relic_ids.append(relic.id)

        if result.added:
            self._db.commit()
            self._bus.emit(
                StoreEvent(
                    event_type=EventTypes.RELICS_IMPORTED,
                    data={"count": result.added},
                    source="relic_service",
                )
            )

        logger.info(
            "Added %d relics (%d duplicates, %d invalid)",
            result.added,
            result.duplicates,
            result.invalid,
        )
        return result

    def import_from_json(self, data: Any) -> ImportResult:
        """스캐너 JSON 가져오기. 스캐너 수치는 반올림되어 있어 범위 검증은 생략."""
        relics = import_relics_from_json(data, self._config)
        return self.add_relics(relics, validate=False)

    # === 삭제 ===

    def delete_relic(self, relic_id: str) -> bool:
        """삭제 + relic_deleted 발행 (장착 해제는 구독자 몫)."""
        row = self._db.get(RelicModel, relic_id)
        if row is None:
            logger.warning("Delete failed: relic %s not found", relic_id)
            return False

        self._db.delete(row)
        self._db.commit()

        self._bus.emit(
            StoreEvent(
                event_type=EventTypes.RELIC_DELETED,
                data={"relic_id": relic_id},
                source="relic_service",
            )
        )
        logger.info("Deleted relic %s", relic_id)
        return True
