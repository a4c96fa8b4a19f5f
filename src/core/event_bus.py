"""EventBus - 서비스 간 이벤트 통신

규칙:
- 서비스는 다른 서비스를 직접 import하지 않는다
- 이벤트는 식별자(ID)만 전달한다
- 전파 깊이 최대 MAX_DEPTH 단계
- 한 전파 체인 안에서 같은 (source, event_type, data) 재발행 금지
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Set

from src.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5


@dataclass
class StoreEvent:
    """이벤트 데이터 컨테이너

    Args:
        event_type: 이벤트 유형 (예: "relic_deleted")
        data: 이벤트 데이터 (ID 위주)
        source: 발행한 서비스 이름
    """

    event_type: str
    data: Dict[str, Any]
    source: str

    _depth: int = field(default=0, repr=False)

    @property
    def chain_key(self) -> str:
        payload = ",".join(f"{k}={self.data[k]}" for k in sorted(self.data))
        return f"{self.source}:{self.event_type}:{payload}"


EventHandler = Callable[[StoreEvent], None]


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe(EventTypes.RELIC_DELETED, character_service.on_relic_deleted)
        bus.emit(StoreEvent(event_type="relic_deleted", data={"relic_id": "..."}, source="relic_service"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._current_depth: int = 0
        self._emitted_in_chain: Set[str] = set()

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)
        logger.debug(f"EventBus 구독: {event_type} → {handler.__qualname__}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        try:
            self._handlers[event_type].remove(handler)
        except ValueError:
            logger.warning(f"핸들러 미등록: {event_type} → {handler.__qualname__}")

    def emit(self, event: StoreEvent) -> None:
        """이벤트 발행. 등록된 핸들러를 동기 호출.

        핸들러 예외는 로그만 남기고 발행자에게 전파하지 않는다.
        최상위 발행이 끝나면 체인 추적을 비운다.
        """
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 전파 깊이 초과 ({MAX_DEPTH}): "
                f"{event.source}:{event.event_type} 무시됨"
            )
            return

        if event.chain_key in self._emitted_in_chain:
            logger.warning(f"EventBus 중복 이벤트 차단: {event.chain_key}")
            return

        handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            logger.debug(f"EventBus: {event.event_type} 구독자 없음")
            return

        self._emitted_in_chain.add(event.chain_key)
        event._depth = self._current_depth
        logger.info(
            f"EventBus 전파: {event.event_type} (source={event.source}, "
            f"depth={self._current_depth}, handlers={len(handlers)})"
        )

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus 핸들러 에러: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._current_depth -= 1
            if self._current_depth == 0:
                self._emitted_in_chain.clear()

    def clear(self) -> None:
        """모든 구독 해제 (테스트용)"""
        self._handlers.clear()
        self._emitted_in_chain.clear()
        self._current_depth = 0

    @property
    def handler_count(self) -> int:
        return sum(len(h) for h in self._handlers.values())
