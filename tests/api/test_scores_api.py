"""채점 API 통합 테스트

TestClient + in-memory SQLite.
"""

from urllib.parse import quote

import pytest


@pytest.fixture()
def setup(client, services, seele_feet, seele_head):
    relic_service, character_service, _, _ = services
    character_service.add_character("1102")
    relic_service.add_relic(seele_feet)
    relic_service.add_relic(seele_head)
    return client


class TestScore:
    def test_score_relic(self, setup, seele_feet) -> None:
        response = setup.get(f"/scores/1102/relics/{quote(seele_feet.id, safe='')}")
        assert response.status_code == 200
        body = response.json()
        assert body["score"] > 0
        assert body["grade"] in {"WTF", "SSS", "SS", "S", "A", "B", "C", "D", "E", "F"}

    def test_unknown_character(self, setup, seele_feet) -> None:
        response = setup.get(f"/scores/0000/relics/{quote(seele_feet.id, safe='')}")
        assert response.status_code == 404

    def test_unknown_relic(self, setup) -> None:
        assert setup.get("/scores/1102/relics/nope").status_code == 404


class TestPerfect:
    def test_perfect_feet(self, setup) -> None:
        response = setup.get("/scores/1102/perfect/Feet")
        assert response.status_code == 200
        body = response.json()
        assert body["main_stat"]["name"] == "ATK%"
        assert len(body["sub_stats"]) == 4

    def test_unknown_slot(self, setup) -> None:
        assert setup.get("/scores/1102/perfect/Tail").status_code == 422

    def test_unknown_character(self, setup) -> None:
        assert setup.get("/scores/0000/perfect/Feet").status_code == 404


class TestRanking:
    def test_ranking(self, setup) -> None:
        body = setup.get("/scores/1102/ranking").json()
        assert len(body) == 2
        assert body[0]["score"] >= body[1]["score"]

    def test_ranking_filter(self, setup, seele_head) -> None:
        body = setup.get("/scores/1102/ranking", params={"slot": "Head", "limit": 5}).json()
        assert [r["relic"]["id"] for r in body] == [seele_head.id]

    def test_bad_limit(self, setup) -> None:
        assert setup.get("/scores/1102/ranking", params={"limit": 0}).status_code == 422

    def test_unknown_character(self, setup) -> None:
        assert setup.get("/scores/0000/ranking").status_code == 404


class TestEquipped:
    def test_equipped(self, setup, seele_feet) -> None:
        setup.put("/characters/1102/equipped/Feet", json={"relic_id": seele_feet.id})
        body = setup.get("/scores/1102/equipped").json()
        assert list(body) == ["Feet"]
        assert body["Feet"]["relic"]["id"] == seele_feet.id

    def test_unknown_character(self, setup) -> None:
        assert setup.get("/scores/0000/equipped").status_code == 404
