"""Shared test fixtures."""

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.characters import router as characters_router
from src.api.health import router as health_router
from src.api.relics import router as relics_router
from src.api.scores import router as scores_router
from src.core.event_bus import EventBus
from src.core.relic.catalog import CharacterCatalog
from src.core.relic.models import (
    BaseStats,
    Character,
    Relic,
    RelicType,
    Stat,
    WeightPreset,
)
from src.core.relic.identity import make_relic
from src.core.relic.stat_config import StatConfig, load_stat_config
from src.db.database import get_db
from src.db.models import Base
from src.services.character_service import CharacterService
from src.services.relic_service import RelicService
from src.services.scoring_service import ScoringService

DATA_DIR = Path("src/data")
RELIC_DATA_PATH = DATA_DIR / "relic_data.json"
STAT_CONSTANTS_PATH = DATA_DIR / "stat_constants.json"
CHARACTER_DATA_PATH = DATA_DIR / "character_data.json"


# ── 합성 설정: 이진 표현이 정확한 수치만 사용 ───────────────────


SYNTHETIC_RELIC_DATA = {
    "main_stats": {
        "Head": ["HP"],
        "Hand": ["ATK"],
        "Chest": ["HP%", "ATK%", "Crit Rate%", "Crit DMG%"],
        "Feet": ["HP%", "ATK%", "SPD"],
        "Orb": ["HP%", "ATK%", "Fire DMG"],
        "Rope": ["HP%", "ATK%", "Break Effect%"],
    },
    "sub_stats": [
        "HP", "ATK", "DEF", "HP%", "ATK%", "DEF%",
        "SPD", "Crit Rate%", "Crit DMG%", "Break Effect%",
    ],
    "main_stat_values": {
        "HP": 700.0,
        "ATK": 350.0,
        "HP%": 40.0,
        "ATK%": 40.0,
        "DEF%": 50.0,
        "SPD": 25.0,
        "Crit Rate%": 30.0,
        "Crit DMG%": 64.8,
        "Fire DMG": 40.0,
        "Break Effect%": 64.8,
    },
    "sub_stat_ranges": {
        "HP": {"min": 20.0, "max": 240.0},
        "ATK": {"min": 10.0, "max": 120.0},
        "DEF": {"min": 10.0, "max": 120.0},
        "HP%": {"min": 2.0, "max": 24.0},
        "ATK%": {"min": 2.0, "max": 24.0},
        "DEF%": {"min": 2.5, "max": 30.0},
        "SPD": {"min": 1.0, "max": 12.0},
        "Crit Rate%": {"min": 1.5, "max": 18.0},
        "Crit DMG%": {"min": 3.0, "max": 36.0},
        "Break Effect%": {"min": 3.0, "max": 36.0},
    },
    "sub_stat_rolls": {
        "HP": {"min": 20.0, "max": 40.0},
        "ATK": {"min": 10.0, "max": 20.0},
        "DEF": {"min": 10.0, "max": 20.0},
        "HP%": {"min": 2.0, "max": 4.0},
        "ATK%": {"min": 2.0, "max": 4.0},
        "DEF%": {"min": 2.5, "max": 5.0},
        "SPD": {"min": 1.0, "max": 2.0},
        "Crit Rate%": {"min": 1.5, "max": 3.0},
        "Crit DMG%": {"min": 3.0, "max": 6.0},
        "Break Effect%": {"min": 3.0, "max": 6.0},
    },
    "relic_sets": [
        {"set_id": 101, "internal_name": "relic_a", "name": "Relic A"},
        {"set_id": 102, "internal_name": "relic_b", "name": "Relic B"},
    ],
    "ornament_sets": [
        {"set_id": 301, "internal_name": "orn_a", "name": "Ornament A"},
        {"set_id": 302, "internal_name": "orn_b", "name": "Ornament B"},
    ],
}

SYNTHETIC_STAT_CONSTANTS = {
    "normalization_factors": {
        "HP%": 1.5,
        "ATK%": 1.5,
        "DEF%": 1.25,
        "SPD": 2.5,
        "Crit Rate%": 2.0,
        "Crit DMG%": 1.0,
        "Break Effect%": 1.0,
        "Fire DMG": 1.5,
    },
    "percent_stat_low_rolls": {"HP%": 2.0, "ATK%": 2.0, "DEF%": 2.5},
    "flat_stat_low_rolls": {"HP": 20.0, "ATK": 10.0, "DEF": 10.0},
    "flat_stat_high_rolls": {"HP": 40.0, "ATK": 20.0, "DEF": 20.0},
}


@pytest.fixture()
def synthetic_config() -> StatConfig:
    return StatConfig.from_dict(SYNTHETIC_RELIC_DATA, SYNTHETIC_STAT_CONSTANTS)


@pytest.fixture()
def crit_preset() -> WeightPreset:
    """치명 위주 딜러 프리셋 (합성 설정용)"""
    return WeightPreset(
        id="preset-crit",
        name="Default",
        is_default=True,
        weights={"Crit Rate%": 1.0, "Crit DMG%": 1.0, "SPD": 1.0, "ATK%": 0.75},
        main_stats={"Chest": ["Crit DMG%"], "Feet": ["SPD"]},
        sets={"relic": ["relic_a"], "ornament": ["orn_a"]},
    )


@pytest.fixture()
def base_stats() -> BaseStats:
    return BaseStats(hp=1000.0, atk=500.0, def_=400.0, spd=100.0)


@pytest.fixture()
def dps_character(crit_preset, base_stats) -> Character:
    return Character(
        id="9001",
        name="Tester",
        rarity=5,
        path="The Hunt",
        element="Fire",
        base_stats=base_stats,
        default_weights=crit_preset,
        active_preset_id=crit_preset.id,
    )


# ── 실제 게임 데이터 ──────────────────────────────────────────


@pytest.fixture(scope="session")
def stat_config() -> StatConfig:
    return load_stat_config(RELIC_DATA_PATH, STAT_CONSTANTS_PATH)


@pytest.fixture()
def catalog() -> CharacterCatalog:
    catalog = CharacterCatalog()
    catalog.load_from_json(CHARACTER_DATA_PATH)
    return catalog


@pytest.fixture()
def seele_feet() -> Relic:
    """실제 데이터 범위 안의 Seele용 신발"""
    return make_relic(
        RelicType.FEET,
        "genius_of_brilliant_stars",
        Stat("SPD", 25.032),
        [
            Stat("Crit Rate%", 6.48),
            Stat("Crit DMG%", 12.96),
            Stat("ATK%", 8.64),
            Stat("HP", 38.1),
        ],
    )


@pytest.fixture()
def seele_head() -> Relic:
    return make_relic(
        RelicType.HEAD,
        "genius_of_brilliant_stars",
        Stat("HP", 705.6),
        [
            Stat("ATK%", 4.32),
            Stat("SPD", 2.3),
            Stat("Crit Rate%", 3.24),
        ],
    )


# ── DB + Service ─────────────────────────────────────────────


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture()
def db_session(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def services(db_session, stat_config, catalog):
    """인메모리 DB + EventBus + 전체 Service"""
    bus = EventBus()
    relic_service = RelicService(db_session, bus, stat_config)
    character_service = CharacterService(db_session, bus, catalog)
    scoring_service = ScoringService(db_session, stat_config)
    return relic_service, character_service, scoring_service, bus


@pytest.fixture()
def client(session_factory, services, catalog, stat_config) -> TestClient:
    """TestClient + 인메모리 환경 세팅"""
    relic_service, character_service, scoring_service, bus = services

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app = FastAPI()
    app.include_router(health_router)
    app.include_router(relics_router)
    app.include_router(characters_router)
    app.include_router(scores_router)
    app.dependency_overrides[get_db] = _override_get_db
    app.state.stat_config = stat_config
    app.state.catalog = catalog
    app.state.event_bus = bus
    app.state.relic_service = relic_service
    app.state.character_service = character_service
    app.state.scoring_service = scoring_service

    return TestClient(app)
