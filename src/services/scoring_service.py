"""채점 Service — DB 상태를 스냅샷으로 만들어 Core 엔진에 전달

엔진은 순수 함수. 이 Service는 읽기 전용이며 이벤트를 발행하지 않는다.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from src.core.logging import get_logger
from src.core.relic.models import AppStore, Character, Relic, RelicType, Score
from src.core.relic.presets import InvalidCharacterError
from src.core.relic.scoring import calculate_relic_score
from src.core.relic.stat_config import StatConfig
from src.core.relic.synthesizer import generate_perfect_relic
from src.db.mappers import character_from_orm, relic_from_orm
from src.db.models import CharacterModel, RelicModel

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScoredRelic:
    relic: Relic
    score: Score


class ScoringService:
    def __init__(self, db: Session, config: StatConfig):
        self._db = db
        self._config = config

    def snapshot(self, relic_type: Optional[RelicType] = None) -> AppStore:
        """현재 DB 상태 → AppStore. relic_type 지정 시 해당 슬롯 유물만."""
        characters = [
            character_from_orm(r) for r in self._db.query(CharacterModel).all()
        ]
        q = self._db.query(RelicModel)
        if relic_type is not None:
            q = q.filter(RelicModel.relic_type == relic_type.value)
        relics = [relic_from_orm(r) for r in q.order_by(RelicModel.created_at).all()]
        return AppStore(characters=characters, relics=relics)

    def _character(self, character_id: str, store: AppStore) -> Optional[Character]:
        return next((c for c in store.characters if c.id == character_id), None)

    def score_relic(self, character_id: str, relic_id: str) -> Optional[Score]:
        row = self._db.get(RelicModel, relic_id)
        if row is None:
            return None
        store = self.snapshot(RelicType(row.relic_type))
        character = self._character(character_id, store)
        if character is None:
            return None
        return calculate_relic_score(relic_from_orm(row), character, store, self._config)

    def perfect_relic(
        self, character_id: str, relic_type: RelicType
    ) -> Optional[Relic]:
        """캐릭터 활성 프리셋 기준 완벽 유물. 캐릭터가 없으면 None."""
        store = AppStore(
            characters=[c for c in self.snapshot().characters if c.id == character_id]
        )
        character = self._character(character_id, store)
        if character is None:
            return None
        try:
            return generate_perfect_relic(relic_type, character, store, self._config)
        except InvalidCharacterError:
            logger.warning("Active preset missing for %s", character_id)
            return None

    def perfect_relics(self, character_id: str) -> Optional[dict[RelicType, Relic]]:
        result: dict[RelicType, Relic] = {}
        for relic_type in RelicType:
            relic = self.perfect_relic(character_id, relic_type)
            if relic is None:
                return None
            result[relic_type] = relic
        return result

    def rank_relics(
        self,
        character_id: str,
        relic_type: Optional[RelicType] = None,
        limit: Optional[int] = None,
    ) -> Optional[list[ScoredRelic]]:
        """보유 유물을 점수 내림차순으로. 동점은 저장 순서 유지."""
        store = self.snapshot(relic_type)
        character = self._character(character_id, store)
        if character is None:
            return None

        scored = [
            ScoredRelic(r, calculate_relic_score(r, character, store, self._config))
            for r in store.relics
        ]
        scored.sort(key=lambda s: s.score.score, reverse=True)
        logger.debug("Ranked %d relics for %s", len(scored), character_id)
        return scored[:limit] if limit is not None else scored

    def score_equipped(self, character_id: str) -> Optional[dict[str, ScoredRelic]]:
        """장착 유물 슬롯별 점수."""
        store = self.snapshot()
        character = self._character(character_id, store)
        if character is None:
            return None

        by_id = {r.id: r for r in store.relics}
        result: dict[str, ScoredRelic] = {}
        for slot, relic_id in character.equipped_relics.items():
            relic = by_id.get(relic_id)
            if relic is None:
                logger.warning("Equipped relic %s missing from store", relic_id)
                continue
            result[slot] = ScoredRelic(
                relic, calculate_relic_score(relic, character, store, self._config)
            )
        return result
