"""이벤트 유형 상수

서비스 간 통신은 EventBus 경유. 이벤트 data에는 ID만 담는다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # relic
    RELIC_ADDED = "relic_added"
    RELIC_DELETED = "relic_deleted"
    RELICS_IMPORTED = "relics_imported"

    # character
    CHARACTER_ADDED = "character_added"
    CHARACTER_DELETED = "character_deleted"
    RELIC_EQUIPPED = "relic_equipped"
    RELIC_UNEQUIPPED = "relic_unequipped"

    # weight preset
    PRESET_CHANGED = "preset_changed"
    PRESET_ACTIVATED = "preset_activated"
