"""스탯/세트 점수 계산

부옵션·주옵션 1개의 기여도, 세트 일치 배율.
고정 수치 스탯(HP/ATK/DEF)은 대응 % 스탯 기준으로 가중치와 정규화를 환산한다.
"""

from __future__ import annotations

from .models import FLAT_STATS, BaseStats, Relic, WeightPreset
from .stat_config import StatConfig

# +15 % 주옵션 최대 수치 (Crit DMG% / Break Effect% 기준)
MAX_MAIN_STAT_SCORE = 64.8

SET_MATCH_MULTIPLIER = 1.0
SET_PENALTY_MULTIPLIER = 0.6  # 추천 세트 아님 → 유물 점수 전체 40% 감점


def is_flat_stat(stat_name: str) -> bool:
    return stat_name in FLAT_STATS


def flat_stat_weight(
    stat_name: str,
    preset: WeightPreset,
    base_stats: BaseStats,
    config: StatConfig,
) -> float:
    """고정 스탯 가중치 = %스탯 가중치 × 고정 최저롤 / (기본치 × 2 × %최저롤).

    참조값이나 기본치가 없으면 0.
    """
    percent_name = f"{stat_name}%"
    percent_weight = preset.weight(percent_name)
    flat_low = config.flat_stat_low_rolls.get(stat_name) or 0
    percent_low = config.percent_stat_low_rolls.get(percent_name) or 0
    base = base_stats.flat(stat_name)
    if not flat_low or not percent_low or base <= 0:
        return 0.0
    return percent_weight * flat_low / (base * 2 * percent_low)


def flat_stat_normalization(stat_name: str, config: StatConfig) -> float:
    """고정 스탯 정규화 = (64.8 / %주옵션 최대치) × (%부옵션 최대치 / 고정 최고롤).

    참조값이 없으면 1.
    """
    percent_name = f"{stat_name}%"
    percent_main = config.main_stat_value(percent_name)
    percent_high = config.sub_stat_max(percent_name)
    flat_high = config.flat_stat_high_rolls.get(stat_name) or 0
    if not percent_main or not percent_high or not flat_high:
        return 1.0
    return (MAX_MAIN_STAT_SCORE / percent_main) * (percent_high / flat_high)


def stat_coefficients(
    stat_name: str,
    preset: WeightPreset,
    base_stats: BaseStats,
    config: StatConfig,
) -> tuple[float, float]:
    """(가중치, 정규화) 쌍. 고정 스탯은 기본치 기준 환산값."""
    if is_flat_stat(stat_name):
        return (
            flat_stat_weight(stat_name, preset, base_stats, config),
            flat_stat_normalization(stat_name, config),
        )
    return preset.weight(stat_name), config.normalization(stat_name)


def calculate_substat_score(
    stat_name: str,
    stat_value: float,
    preset: WeightPreset,
    base_stats: BaseStats,
    config: StatConfig,
) -> float:
    weight, normalization = stat_coefficients(stat_name, preset, base_stats, config)
    return weight * normalization * stat_value


def calculate_mainstat_score(
    relic: Relic, preset: WeightPreset, config: StatConfig
) -> float:
    """Head/Hand → 0 (선택지 없음).
    추천 주옵션 → 64.8, 아니면 64.8 × 가중치 × 정규화 / 10.
    """
    if relic.type.has_fixed_main_stat:
        return 0.0

    name = relic.main_stat.name
    if name in preset.preferred_main_stats(relic.type):
        return MAX_MAIN_STAT_SCORE

    return MAX_MAIN_STAT_SCORE * (preset.weight(name) * config.normalization(name)) / 10


def calculate_set_score(set_name: str, preset: WeightPreset, config: StatConfig) -> float:
    """1.0 또는 0.6만 반환."""
    ornament = config.is_ornament_set(set_name)
    if set_name in preset.preferred_sets(ornament):
        return SET_MATCH_MULTIPLIER
    return SET_PENALTY_MULTIPLIER
