"""유물 식별자 생성 + 구조 검증"""

from __future__ import annotations

from .models import Relic, RelicType, Stat
from .stat_config import StatConfig

MAX_SUB_STATS = 4


class RelicValidationError(ValueError):
    """유물 구성이 설정 테이블과 맞지 않음."""


def _format_number(value: float) -> str:
    # 정수값은 ".0" 없이 ("3.0" → "3")
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def generate_relic_id(
    relic_type: RelicType,
    set_name: str,
    main_stat: Stat,
    sub_stats: list[Stat],
) -> str:
    """속성 기반 결정론적 ID. 부옵션은 이름순 정렬.

    동일 속성 유물은 같은 ID → 추가/가져오기 시 중복 제거에 사용.
    """
    sorted_subs = sorted(sub_stats, key=lambda s: s.name)
    subs_part = "-".join(f"{s.name}:{_format_number(s.value)}" for s in sorted_subs)
    return (
        f"{relic_type.value}-{set_name}-"
        f"{main_stat.name}:{_format_number(main_stat.value)}-{subs_part}"
    )


def make_relic(
    relic_type: RelicType,
    set_name: str,
    main_stat: Stat,
    sub_stats: list[Stat],
) -> Relic:
    return Relic(
        id=generate_relic_id(relic_type, set_name, main_stat, sub_stats),
        type=relic_type,
        set=set_name,
        main_stat=main_stat,
        sub_stats=list(sub_stats),
    )


def validate_relic(relic: Relic, config: StatConfig) -> None:
    """유물 구성 검증. 실패 시 RelicValidationError.

    - 주옵션이 슬롯에서 허용되는 스탯인지, 수치 > 0
    - 부옵션 최대 4개, 이름 중복 없음, 주옵션과 겹치지 않음
    - 부옵션 수치가 설정된 [min, max] 범위 안인지
    """
    main = relic.main_stat
    if main.name not in config.legal_main_stats(relic.type):
        raise RelicValidationError(
            f'"{main.name}" is not a valid main stat for {relic.type.value} relics'
        )
    if main.value <= 0:
        raise RelicValidationError("Main stat value must be positive")

    if len(relic.sub_stats) > MAX_SUB_STATS:
        raise RelicValidationError(
            f"A relic has at most {MAX_SUB_STATS} sub stats, got {len(relic.sub_stats)}"
        )

    names = [s.name for s in relic.sub_stats]
    if len(set(names)) != len(names) or main.name in names:
        raise RelicValidationError("A relic cannot have duplicate stats")

    for sub in relic.sub_stats:
        if sub.name not in config.sub_stats:
            raise RelicValidationError(f"Unknown sub stat: {sub.name}")
        if sub.value <= 0:
            raise RelicValidationError(f"Sub stat {sub.name} must be positive")
        r = config.sub_stat_ranges.get(sub.name)
        if r is not None and not (r.min <= sub.value <= r.max):
            raise RelicValidationError(
                f"Sub stat {sub.name}={sub.value} outside range [{r.min}, {r.max}]"
            )
