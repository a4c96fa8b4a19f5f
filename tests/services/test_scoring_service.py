"""ScoringService 통합 테스트 (실제 게임 데이터)"""

import pytest

from src.core.relic.identity import make_relic
from src.core.relic.models import RelicGrade, RelicType, Stat


@pytest.fixture()
def setup(services, seele_feet, seele_head):
    relic_service, character_service, scoring_service, _ = services
    character_service.add_character("1102")
    off_set = make_relic(
        RelicType.FEET,
        "musketeer_of_wild_wheat",
        seele_feet.main_stat,
        seele_feet.sub_stats,
    )
    for relic in (seele_feet, seele_head, off_set):
        relic_service.add_relic(relic)
    return scoring_service, character_service, off_set


class TestScoreRelic:
    def test_score_in_range(self, setup, seele_feet) -> None:
        scoring_service, _, _ = setup
        score = scoring_service.score_relic("1102", seele_feet.id)
        assert score.score > 0
        assert score.grade != RelicGrade.F

    def test_off_set_penalty(self, setup, seele_feet) -> None:
        scoring_service, _, off_set = setup
        on = scoring_service.score_relic("1102", seele_feet.id)
        off = scoring_service.score_relic("1102", off_set.id)
        assert off.score == pytest.approx(on.score * 0.6)

    def test_unknown_ids(self, setup, seele_feet) -> None:
        scoring_service, _, _ = setup
        assert scoring_service.score_relic("0000", seele_feet.id) is None
        assert scoring_service.score_relic("1102", "nope") is None

    def test_active_preset_drives_score(self, setup, seele_feet) -> None:
        scoring_service, character_service, _ = setup
        before = scoring_service.score_relic("1102", seele_feet.id)

        seele = character_service.add_preset(
            "1102", "HP only", {"HP%": 1.0}, {}, {"relic": ["genius_of_brilliant_stars"]}
        )
        character_service.activate_preset("1102", seele.weight_presets[0].id)
        after = scoring_service.score_relic("1102", seele_feet.id)

        assert after.score != pytest.approx(before.score)


class TestPerfectRelic:
    def test_seele_feet(self, setup) -> None:
        scoring_service, _, _ = setup
        relic = scoring_service.perfect_relic("1102", RelicType.FEET)
        # 추천 목록 첫 항목
        assert relic.main_stat == Stat("ATK%", 43.2)
        assert relic.set == "genius_of_brilliant_stars"
        assert len(relic.sub_stats) == 4

    def test_seele_orb_uses_ornament_set(self, setup) -> None:
        scoring_service, _, _ = setup
        relic = scoring_service.perfect_relic("1102", RelicType.ORB)
        assert relic.main_stat.name == "Quantum DMG"
        assert relic.set == "rutilant_arena"

    def test_all_slots(self, setup) -> None:
        scoring_service, _, _ = setup
        relics = scoring_service.perfect_relics("1102")
        assert set(relics) == set(RelicType)
        assert relics[RelicType.HEAD].main_stat.name == "HP"

    def test_unknown_character(self, setup) -> None:
        scoring_service, _, _ = setup
        assert scoring_service.perfect_relic("0000", RelicType.FEET) is None
        assert scoring_service.perfect_relics("0000") is None


class TestRanking:
    def test_sorted_descending(self, setup) -> None:
        scoring_service, _, _ = setup
        ranked = scoring_service.rank_relics("1102")
        scores = [r.score.score for r in ranked]
        assert len(ranked) == 3
        assert scores == sorted(scores, reverse=True)

    def test_slot_filter_and_limit(self, setup, seele_feet) -> None:
        scoring_service, _, _ = setup
        ranked = scoring_service.rank_relics("1102", RelicType.FEET, limit=1)
        assert [r.relic.id for r in ranked] == [seele_feet.id]

    def test_unknown_character(self, setup) -> None:
        scoring_service, _, _ = setup
        assert scoring_service.rank_relics("0000") is None


class TestEquipped:
    def test_scores_equipped_slots(self, setup, seele_feet, seele_head) -> None:
        scoring_service, character_service, _ = setup
        character_service.equip_relic("1102", seele_feet.id)
        character_service.equip_relic("1102", seele_head.id)

        equipped = scoring_service.score_equipped("1102")
        assert set(equipped) == {"Feet", "Head"}
        assert equipped["Feet"].score == scoring_service.score_relic("1102", seele_feet.id)

    def test_nothing_equipped(self, setup) -> None:
        scoring_service, _, _ = setup
        assert scoring_service.score_equipped("1102") == {}
