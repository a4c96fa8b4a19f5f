"""ORM row ↔ Core model conversion shared by the services."""

from src.core.relic.codec import (
    base_stats_from_dict,
    base_stats_to_dict,
    preset_from_dict,
    preset_to_dict,
    stat_from_dict,
    stat_to_dict,
)
from src.core.relic.models import Character, Relic, RelicType
from src.db.models import CharacterModel, RelicModel


def relic_to_orm(relic: Relic) -> RelicModel:
    return RelicModel(
        relic_id=relic.id,
        relic_type=relic.type.value,
        set_name=relic.set,
        main_stat=stat_to_dict(relic.main_stat),
        sub_stats=[stat_to_dict(s) for s in relic.sub_stats],
    )


def relic_from_orm(row: RelicModel) -> Relic:
    return Relic(
        id=row.relic_id,
        type=RelicType(row.relic_type),
        set=row.set_name,
        main_stat=stat_from_dict(row.main_stat),
        sub_stats=[stat_from_dict(s) for s in row.sub_stats or []],
    )


def character_from_orm(row: CharacterModel) -> Character:
    return Character(
        id=row.character_id,
        name=row.name,
        alias=row.alias,
        rarity=row.rarity,
        path=row.path,
        element=row.element,
        base_stats=base_stats_from_dict(row.base_stats),
        default_weights=preset_from_dict(row.default_weights),
        weight_presets=[preset_from_dict(p) for p in row.weight_presets or []],
        active_preset_id=row.active_preset_id,
        equipped_relics=dict(row.equipped_relics or {}),
    )


def apply_character_to_orm(character: Character, row: CharacterModel) -> CharacterModel:
    """Copy every mutable field onto the row.

    JSON columns are reassigned with fresh containers so SQLAlchemy
    detects the change.
    """
    row.character_id = character.id
    row.name = character.name
    row.alias = character.alias
    row.rarity = character.rarity
    row.path = character.path
    row.element = character.element
    row.base_stats = base_stats_to_dict(character.base_stats)
    row.default_weights = preset_to_dict(character.default_weights)
    row.weight_presets = [preset_to_dict(p) for p in character.weight_presets]
    row.active_preset_id = character.active_preset_id
    row.equipped_relics = dict(character.equipped_relics)
    return row
