"""완벽 유물 합성 — 채점 분모

슬롯 + 프리셋 기준으로 이론상 최고 유물을 만든다.
1. 주옵션: 추천 목록 첫 항목, 없으면 가중치 × 정규화 × 최대치 최댓값
2. 부옵션: 가중치 × 정규화 × 누적 최대치 상위 4개 (고정 스탯은 %가중치 × 0.5)
3. 강화 횟수 분배: 각 1회 보장 → 순위 순으로 상한까지 몰아주기

분배는 의도적으로 앞쪽 우선 탐욕 방식이다. 최적 분배로 바꾸면 등급이 달라진다.
"""

from __future__ import annotations

import logging

from .identity import make_relic
from .models import AppStore, Character, Relic, RelicType, Stat, WeightPreset
from .presets import require_current_weight_preset
from .stat_config import StatConfig
from .stat_score import is_flat_stat

logger = logging.getLogger(__name__)

MAX_SUB_STATS = 4
RELIC_ROLL_BUDGET = 9  # 초기 4 + 강화 5
ORNAMENT_ROLL_BUDGET = 8
FLAT_SUBSTAT_RANKING_PENALTY = 0.5


def roll_budget(relic_type: RelicType) -> int:
    return ORNAMENT_ROLL_BUDGET if relic_type.is_ornament else RELIC_ROLL_BUDGET


def best_main_stat_for_preset(
    relic_type: RelicType, preset: WeightPreset, config: StatConfig
) -> str:
    """슬롯 최적 주옵션. 후보가 없으면 ""."""
    legal = config.legal_main_stats(relic_type)
    if relic_type.has_fixed_main_stat:
        return legal[0] if legal else ""
    if not legal:
        return ""

    recommended = preset.preferred_main_stats(relic_type)
    if recommended:
        return recommended[0]

    best_stat = ""
    highest = -1.0
    for stat_name in legal:
        # 추천이 없으면 고정 스탯은 자동 선택 대상이 아님
        if is_flat_stat(stat_name):
            continue
        score = (
            preset.weight(stat_name)
            * config.normalization(stat_name)
            * config.main_stat_value(stat_name)
        )
        if score > highest:
            highest = score
            best_stat = stat_name
    return best_stat


def rank_substats(
    main_stat_name: str, preset: WeightPreset, config: StatConfig
) -> list[tuple[str, float]]:
    """주옵션 제외 부옵션 후보를 순위 점수 내림차순으로 (안정 정렬).

    고정 스탯(HP/ATK/DEF)은 대응 %스탯 가중치 × 0.5 로 순위를 매긴다.
    채점용 환산 가중치와는 다르다.
    """
    ranked: list[tuple[str, float]] = []
    for stat_name in config.sub_stats:
        if stat_name == main_stat_name:
            continue
        if is_flat_stat(stat_name):
            weight = preset.weight(f"{stat_name}%") * FLAT_SUBSTAT_RANKING_PENALTY
        else:
            weight = preset.weight(stat_name)
        score = (
            weight
            * config.normalization(stat_name)
            * config.sub_stat_max(stat_name)
        )
        ranked.append((stat_name, score))
    ranked.sort(key=lambda item: item[1], reverse=True)
    return ranked


def allocate_rolls(
    stat_names: list[str], relic_type: RelicType, config: StatConfig
) -> list[Stat]:
    """2단계 강화 분배.

    1단계: 순위 순으로 1회씩 (1회 = 해당 스탯 1회 최대치)
    2단계: 같은 순서로, 누적치 + 1회가 상한을 넘지 않는 동안 계속 추가
    인덱스는 위치 기준으로 추적 (동점 점수여도 안전).
    """
    values = [0.0] * len(stat_names)
    remaining = roll_budget(relic_type)

    for i, name in enumerate(stat_names):
        if remaining <= 0:
            break
        values[i] = config.roll_max(name)
        remaining -= 1

    for i, name in enumerate(stat_names):
        if remaining <= 0:
            break
        cap = config.sub_stat_max(name)
        unit = config.roll_max(name)
        while remaining > 0:
            candidate = values[i] + unit
            if candidate > cap:
                break
            values[i] = candidate
            remaining -= 1

    return [Stat(name, value) for name, value in zip(stat_names, values)]


def best_substats_for_preset(
    main_stat_name: str,
    relic_type: RelicType,
    preset: WeightPreset,
    config: StatConfig,
) -> list[Stat]:
    ranked = rank_substats(main_stat_name, preset, config)
    top = [name for name, _ in ranked[:MAX_SUB_STATS]]
    return allocate_rolls(top, relic_type, config)


def perfect_relic_for_preset(
    relic_type: RelicType, preset: WeightPreset, config: StatConfig
) -> Relic:
    main_name = best_main_stat_for_preset(relic_type, preset, config)
    substats = best_substats_for_preset(main_name, relic_type, preset, config)
    preferred_sets = preset.preferred_sets(relic_type.is_ornament)
    set_name = preferred_sets[0] if preferred_sets else ""
    main_stat = Stat(main_name, config.main_stat_value(main_name))
    return make_relic(relic_type, set_name, main_stat, substats)


def generate_perfect_relics_for_preset(
    preset: WeightPreset, config: StatConfig
) -> dict[RelicType, Relic]:
    """프리셋의 6개 슬롯 목표 유물."""
    return {
        relic_type: perfect_relic_for_preset(relic_type, preset, config)
        for relic_type in RelicType
    }


# ── 캐릭터/스냅샷 기준 조회 (활성 프리셋 없으면 InvalidCharacterError) ──


def find_best_main_stat(
    relic_type: RelicType, character: Character, store: AppStore, config: StatConfig
) -> str:
    # Head/Hand 는 프리셋과 무관
    if relic_type.has_fixed_main_stat:
        legal = config.legal_main_stats(relic_type)
        return legal[0] if legal else ""
    preset = require_current_weight_preset(character.id, store)
    return best_main_stat_for_preset(relic_type, preset, config)


def find_best_substats(
    main_stat_name: str,
    relic_type: RelicType,
    character: Character,
    store: AppStore,
    config: StatConfig,
) -> list[Stat]:
    preset = require_current_weight_preset(character.id, store)
    return best_substats_for_preset(main_stat_name, relic_type, preset, config)


def generate_perfect_relic(
    relic_type: RelicType, character: Character, store: AppStore, config: StatConfig
) -> Relic:
    preset = require_current_weight_preset(character.id, store)
    relic = perfect_relic_for_preset(relic_type, preset, config)
    logger.debug(
        "Perfect %s for %s (preset=%s): %s",
        relic_type.value,
        character.id,
        preset.name,
        relic.id,
    )
    return relic
