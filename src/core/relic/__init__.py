"""유물 채점 Core — 순수 Python, DB 무관"""

from .catalog import CatalogEntry, CharacterCatalog
from .grading import get_relic_grade
from .identity import RelicValidationError, generate_relic_id, make_relic, validate_relic
from .importer import import_relics_from_json
from .models import (
    AppStore,
    BaseStats,
    Character,
    Relic,
    RelicGrade,
    RelicType,
    Score,
    Stat,
    WeightPreset,
)
from .presets import (
    InvalidCharacterError,
    add_weight_preset,
    create_weight_preset,
    get_character_by_id,
    get_current_weight_from_character,
    get_current_weight_preset,
    remove_weight_preset,
    set_active_preset,
    update_weight_preset,
)
from .scoring import calculate_relic, calculate_relic_score, raw_relic_score
from .stat_config import RelicSet, StatConfig, StatRange, load_stat_config
from .synthesizer import (
    find_best_main_stat,
    find_best_substats,
    generate_perfect_relic,
    generate_perfect_relics_for_preset,
)

__all__ = [
    "AppStore",
    "BaseStats",
    "CatalogEntry",
    "Character",
    "CharacterCatalog",
    "InvalidCharacterError",
    "Relic",
    "RelicGrade",
    "RelicSet",
    "RelicType",
    "RelicValidationError",
    "Score",
    "Stat",
    "StatConfig",
    "StatRange",
    "WeightPreset",
    "add_weight_preset",
    "calculate_relic",
    "calculate_relic_score",
    "create_weight_preset",
    "find_best_main_stat",
    "find_best_substats",
    "generate_perfect_relic",
    "generate_perfect_relics_for_preset",
    "generate_relic_id",
    "get_character_by_id",
    "get_current_weight_from_character",
    "get_current_weight_preset",
    "get_relic_grade",
    "import_relics_from_json",
    "load_stat_config",
    "make_relic",
    "raw_relic_score",
    "remove_weight_preset",
    "set_active_preset",
    "update_weight_preset",
    "validate_relic",
]
