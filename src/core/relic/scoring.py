"""유물 점수 집계 + 공개 진입점

raw = (부옵션 점수 합 + 주옵션 점수) × 세트 배율
최종 점수 = raw / 완벽 유물 raw × 100
"""

from __future__ import annotations

import logging

from .grading import get_relic_grade
from .models import AppStore, BaseStats, Character, Relic, RelicGrade, Score, WeightPreset
from .presets import get_character_by_id, get_current_weight_from_character
from .stat_config import StatConfig
from .stat_score import calculate_mainstat_score, calculate_set_score, calculate_substat_score
from .synthesizer import perfect_relic_for_preset

logger = logging.getLogger(__name__)


def raw_relic_score(
    relic: Relic,
    preset: WeightPreset,
    base_stats: BaseStats,
    config: StatConfig,
) -> float:
    substat_score = sum(
        calculate_substat_score(s.name, s.value, preset, base_stats, config)
        for s in relic.sub_stats
    )
    main_score = calculate_mainstat_score(relic, preset, config)
    set_score = calculate_set_score(relic.set, preset, config)
    return (substat_score + main_score) * set_score


def _resolve(
    character: Character, store: AppStore
) -> tuple[WeightPreset, Character] | None:
    stored = get_character_by_id(character.id, store)
    if stored is None:
        return None
    preset = get_current_weight_from_character(stored)
    if preset is None:
        return None
    return preset, stored


def calculate_relic(
    relic: Relic, character: Character, store: AppStore, config: StatConfig
) -> float:
    """활성 프리셋 기준 raw 점수. 프리셋을 해석할 수 없으면 0."""
    resolved = _resolve(character, store)
    if resolved is None:
        return 0.0
    preset, stored = resolved
    return raw_relic_score(relic, preset, stored.base_stats, config)


def calculate_relic_score(
    relic: Relic, character: Character, store: AppStore, config: StatConfig
) -> Score:
    """유물 점수(완벽 유물 대비 %) + 등급.

    활성 프리셋이 없거나 이상 점수가 0 이하면 Score(0, F).
    """
    resolved = _resolve(character, store)
    if resolved is None:
        logger.debug("No active preset for character %s", character.id)
        return Score(score=0.0, grade=RelicGrade.F)
    preset, stored = resolved

    actual = raw_relic_score(relic, preset, stored.base_stats, config)
    perfect = perfect_relic_for_preset(relic.type, preset, config)
    ideal = raw_relic_score(perfect, preset, stored.base_stats, config)

    grade = get_relic_grade(ideal, actual)
    if ideal <= 0:
        return Score(score=0.0, grade=grade)
    return Score(score=actual / ideal * 100, grade=grade)
