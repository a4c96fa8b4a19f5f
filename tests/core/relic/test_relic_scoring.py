"""유물 채점 + 등급 테스트"""

from dataclasses import replace
from itertools import combinations

import pytest

from src.core.relic.grading import get_relic_grade
from src.core.relic.identity import make_relic
from src.core.relic.models import (
    AppStore,
    RelicGrade,
    RelicType,
    Score,
    Stat,
    WeightPreset,
)
from src.core.relic.scoring import calculate_relic, calculate_relic_score, raw_relic_score
from src.core.relic.synthesizer import perfect_relic_for_preset

# 완벽 신발: ATK 120 / Crit Rate% 3 / Crit DMG% 6 / ATK% 4 + SPD 주옵션
# 순위에서는 ATK 가 1위지만 채점 환산 가중치는 0.00375 × 1.944
IDEAL_FEET_RAW = 0.00375 * 1.944 * 120 + 6 + 6 + 4.5 + 64.8


def _feet(set_name="relic_a", subs=None):
    subs = subs or [
        Stat("Crit Rate%", 9.0),
        Stat("Crit DMG%", 12.0),
        Stat("ATK%", 8.0),
        Stat("HP", 40.0),
    ]
    return make_relic(RelicType.FEET, set_name, Stat("SPD", 25.0), subs)


class TestGrade:
    @pytest.mark.parametrize(
        "actual, expected",
        [
            (100, RelicGrade.WTF),
            (95, RelicGrade.WTF),
            (94.9, RelicGrade.SSS),
            (80, RelicGrade.SSS),
            (79.9, RelicGrade.SS),
            (70, RelicGrade.SS),
            (60, RelicGrade.S),
            (50, RelicGrade.A),
            (40, RelicGrade.B),
            (30, RelicGrade.C),
            (20, RelicGrade.D),
            (10, RelicGrade.E),
            (9.9, RelicGrade.F),
        ],
    )
    def test_thresholds(self, actual, expected) -> None:
        assert get_relic_grade(100, actual) == expected

    def test_over_ideal_is_wtf(self) -> None:
        assert get_relic_grade(50, 80) == RelicGrade.WTF

    @pytest.mark.parametrize("ideal, actual", [(0, 10), (-1, 10), (10, 0), (10, -3)])
    def test_non_positive_is_f(self, ideal, actual) -> None:
        assert get_relic_grade(ideal, actual) == RelicGrade.F


class TestRawScore:
    def test_perfect_feet_raw(self, crit_preset, base_stats, synthetic_config) -> None:
        perfect = perfect_relic_for_preset(
            RelicType.FEET, crit_preset, synthetic_config
        )
        raw = raw_relic_score(perfect, crit_preset, base_stats, synthetic_config)
        assert raw == pytest.approx(IDEAL_FEET_RAW)

    def test_set_penalty_scales_everything(
        self, crit_preset, base_stats, synthetic_config
    ) -> None:
        on_set = raw_relic_score(_feet(), crit_preset, base_stats, synthetic_config)
        off_set = raw_relic_score(
            _feet("relic_b"), crit_preset, base_stats, synthetic_config
        )
        assert off_set == pytest.approx(on_set * 0.6)

    def test_calculate_relic(self, dps_character, synthetic_config) -> None:
        store = AppStore(characters=[dps_character])
        # 18 + 12 + 9 + 0 (HP% 가중치 없음) + 64.8
        assert calculate_relic(_feet(), dps_character, store, synthetic_config) == pytest.approx(103.8)

    def test_calculate_relic_unknown_character(
        self, dps_character, synthetic_config
    ) -> None:
        assert calculate_relic(_feet(), dps_character, AppStore(), synthetic_config) == 0.0


class TestRelicScore:
    def test_example_feet_beats_flat_heavy_ideal(
        self, dps_character, synthetic_config
    ) -> None:
        store = AppStore(characters=[dps_character])
        score = calculate_relic_score(_feet(), dps_character, store, synthetic_config)
        assert score.score == pytest.approx(103.8 / IDEAL_FEET_RAW * 100)
        assert score.score > 100
        assert score.grade == RelicGrade.WTF

    def test_off_set_example(self, dps_character, synthetic_config) -> None:
        store = AppStore(characters=[dps_character])
        score = calculate_relic_score(
            _feet("relic_b"), dps_character, store, synthetic_config
        )
        assert score.score == pytest.approx(0.6 * 103.8 / IDEAL_FEET_RAW * 100)
        assert score.grade == RelicGrade.SS

    @pytest.mark.parametrize("relic_type", list(RelicType))
    def test_perfect_relic_scores_100(
        self, dps_character, crit_preset, synthetic_config, relic_type
    ) -> None:
        store = AppStore(characters=[dps_character])
        perfect = perfect_relic_for_preset(
            relic_type, crit_preset, synthetic_config
        )
        score = calculate_relic_score(perfect, dps_character, store, synthetic_config)
        assert score.score == pytest.approx(100)
        assert score.grade == RelicGrade.WTF

    def test_unknown_character_scores_zero(
        self, dps_character, synthetic_config
    ) -> None:
        score = calculate_relic_score(_feet(), dps_character, AppStore(), synthetic_config)
        assert score == Score(score=0.0, grade=RelicGrade.F)

    def test_dangling_active_preset_scores_zero(
        self, dps_character, synthetic_config
    ) -> None:
        dps_character.active_preset_id = "deleted"
        store = AppStore(characters=[dps_character])
        score = calculate_relic_score(_feet(), dps_character, store, synthetic_config)
        assert score == Score(score=0.0, grade=RelicGrade.F)

    def test_useless_head_is_f(self, dps_character, synthetic_config) -> None:
        store = AppStore(characters=[dps_character])
        head = make_relic(
            RelicType.HEAD,
            "relic_a",
            Stat("HP", 700.0),
            [Stat("DEF%", 5.0), Stat("Break Effect%", 6.0)],
        )
        score = calculate_relic_score(head, dps_character, store, synthetic_config)
        assert score.score == 0.0
        assert score.grade == RelicGrade.F

    def test_uses_stored_character(self, dps_character, synthetic_config) -> None:
        """스냅샷 안의 캐릭터 상태(활성 프리셋)를 기준으로 채점"""
        store = AppStore(characters=[dps_character])
        stale = replace(dps_character, active_preset_id="x")
        score = calculate_relic_score(_feet(), stale, store, synthetic_config)
        assert score.grade == RelicGrade.WTF

    def test_ideal_dominates_without_flat_coupling(
        self, dps_character, synthetic_config
    ) -> None:
        """HP%/ATK%/DEF% 가중치가 없으면 9회 강화 안의 신발은 100점을 넘지 않는다"""
        preset = WeightPreset(
            id="preset-pure-crit",
            name="Default",
            is_default=True,
            weights={"Crit Rate%": 1.0, "Crit DMG%": 1.0, "SPD": 1.0},
            main_stats={"Feet": ["SPD"]},
            sets={"relic": ["relic_a"]},
        )
        character = replace(
            dps_character, default_weights=preset, active_preset_id=preset.id
        )
        store = AppStore(characters=[character])
        candidates = [n for n in synthetic_config.sub_stats if n != "SPD"]

        for combo in combinations(candidates, 4):
            for heavy in combo:
                subs = [
                    Stat(n, synthetic_config.roll_max(n) * (6 if n == heavy else 1))
                    for n in combo
                ]
                score = calculate_relic_score(
                    _feet(subs=subs), character, store, synthetic_config
                )
                assert score.score <= 100 + 1e-9, combo
