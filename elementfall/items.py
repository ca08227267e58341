"""Item kinds, the item database and loot dropped by defeated mobs."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, Optional, Union

PLAYER_DETECTION_RADIUS = 64.0
HEALTH_TANK_HP = 15
EXP_TANK_ORBS = 6
LOOT_ROLL_RANGE = 255


class ItemType(Enum):
    """Every collectable item; the value is its row in the item database.

    Members stay in alphabetical order so that values match database rows.
    """

    AMULET = 0
    AQUARIUS = 1
    BACON = 2
    BLANK = 3
    BLIND_RAGE = 4
    BLOOD_GOBLET = 5
    ELEMENT_WHEEL = 6
    FAN = 7
    FIERY_SHARD = 8
    GHOST_IN_THE_SHELL = 9
    GLIDER = 10
    HEART = 11
    LIZARD_TAIL = 12
    MINERAL = 13
    NOTCHED_PICKAXE = 14
    SHIELD = 15
    SPEED_POTION = 16
    VALVE = 17
    VAMPIRE_TOOTH = 18
    WATERBENDING_SCROLL = 19
    WISP_IN_A_JAR = 20


def item_type_from_index(index: int) -> ItemType:
    """The item with the given database row; unknown rows give the amulet."""
    try:
        return ItemType(index)
    except ValueError:
        return ItemType.AMULET


def random_item_type(rng: Optional[random.Random] = None) -> ItemType:
    """Pick one of the items uniformly."""
    rng = rng or random.Random()
    return item_type_from_index(rng.randint(0, len(ItemType) - 1))


@dataclass(frozen=True)
class ItemInfo:
    """Display data of one item as stored in the database."""

    name: str
    texture_name: str
    description: str

    @property
    def texture_path(self) -> str:
        return f"textures/items/{self.texture_name}"


def _text_field(row: dict[str, Any], key: str, item_type: ItemType) -> str:
    value = row.get(key)
    if not isinstance(value, str):
        raise ValueError(f"item {item_type.name} has no text field {key!r}")
    return value


@dataclass
class ItemDatabase:
    """Rows of item data, indexed by ``ItemType`` value."""

    items: list[dict[str, Any]] = field(default_factory=list)

    def entry(self, item_type: ItemType) -> ItemInfo:
        """Name, texture and description of ``item_type``."""
        if item_type.value >= len(self.items):
            raise KeyError(f"no database entry for item {item_type.name}")
        row = self.items[item_type.value]
        return ItemInfo(
            name=_text_field(row, "name", item_type),
            texture_name=_text_field(row, "texture_name", item_type),
            description=_text_field(row, "description", item_type),
        )


def load_item_database(path: Union[str, Path]) -> ItemDatabase:
    """Read a JSON document of the form ``{"items": [{...}, ...]}``."""
    with open(path, encoding="utf-8") as handle:
        document = json.load(handle)
    if not isinstance(document, dict) or not isinstance(document.get("items"), list):
        raise ValueError(f"{path}: expected an object with an 'items' list")
    rows = document["items"]
    if not all(isinstance(row, dict) for row in rows):
        raise ValueError(f"{path}: every item must be an object")
    return ItemDatabase(items=rows)


class LootKind(Enum):
    """What a defeated mob leaves behind."""

    HEALTH_TANK = auto()
    EXP_TANK = auto()
    ITEM = auto()
    NOTHING = auto()


def roll_loot(roll: int) -> LootKind:
    """Map a roll in ``0..254`` to the kind of loot it yields."""
    if not 0 <= roll < LOOT_ROLL_RANGE:
        raise ValueError(f"loot roll must be in 0..{LOOT_ROLL_RANGE - 1}, got {roll}")
    if roll <= 63:
        return LootKind.HEALTH_TANK
    if roll <= 95:
        return LootKind.EXP_TANK
    if roll <= 112:
        return LootKind.ITEM
    return LootKind.NOTHING


@dataclass(frozen=True)
class LootDrop:
    """Loot to spawn at a position."""

    kind: LootKind
    pos: tuple[float, float, float]
    hp: Optional[int] = None
    orbs: Optional[int] = None
    item_type: Optional[ItemType] = None
    item: Optional[ItemInfo] = None


def drop_loot(
    pos: tuple[float, ...],
    database: ItemDatabase,
    rng: Optional[random.Random] = None,
) -> Optional[LootDrop]:
    """Roll the loot for a mob that died at ``pos``; None when nothing drops.

    The drop lies at the mob's x and y with z fixed to 1.
    """
    rng = rng or random.Random()
    where = (float(pos[0]), float(pos[1]), 1.0)
    kind = roll_loot(rng.randrange(LOOT_ROLL_RANGE))

    if kind is LootKind.HEALTH_TANK:
        return LootDrop(kind, where, hp=HEALTH_TANK_HP)
    if kind is LootKind.EXP_TANK:
        return LootDrop(kind, where, orbs=EXP_TANK_ORBS)
    if kind is LootKind.ITEM:
        item_type = random_item_type(rng)
        return LootDrop(kind, where, item_type=item_type, item=database.entry(item_type))
    return None