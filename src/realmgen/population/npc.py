# src/realmgen/population/npc.py
# Single-NPC generation. Every draw comes from an RNG seeded with the NPC's
# own seed, in a fixed order: gender, role, title, age, name, stats, hp,
# alignment, inventory.

import random
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..grid import Point
from ..names import HUMAN_LAST_NAMES, HUMAN_NAMES_FEMALE, HUMAN_NAMES_MALE
from ..rng import SeededRNG
from .roles import ALIGNMENTS, COINS, DEFAULT_COINS, NOBLE_CHILD, ROLES, STAT_NAMES, TRINKETS, VILLAGER, Role

MALE, FEMALE = "Male", "Female"
TRINKET_CHANCE = 0.3
FALLBACK_TITLE = "Citizen"


@dataclass
class Location:
    x: int
    y: int
    building_name: str
    building_type: str
    home_coords: Optional[Point] = None

    def to_dict(self) -> Dict[str, Any]:
        home = self.home_coords
        return {
            "x": self.x,
            "y": self.y,
            "buildingName": self.building_name,
            "buildingType": self.building_type,
            "homeCoords": {"x": home.x, "y": home.y} if home is not None else None,
        }


@dataclass
class NPC:
    id: str
    seed: int
    name: str
    last_name: str
    age: int
    gender: str
    race: str
    role: str
    title: str
    npc_class: str
    level: int
    alignment: str
    stats: Dict[str, int]
    hp: Dict[str, int]
    inventory: List[str]
    selected_title_index: int
    is_npc: bool = True
    job: Optional[str] = None
    location: Optional[Location] = None

    @property
    def first_name(self) -> str:
        return self.name.split(" ", 1)[0]

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "seed": self.seed,
            "name": self.name,
            "lastName": self.last_name,
            "age": self.age,
            "gender": self.gender,
            "race": self.race,
            "role": self.role,
            "title": self.title,
            "class": self.npc_class,
            "level": self.level,
            "alignment": self.alignment,
            "stats": dict(self.stats),
            "hp": dict(self.hp),
            "inventory": list(self.inventory),
            "selectedTitleIndex": self.selected_title_index,
            "isNPC": self.is_npc,
        }
        if self.job is not None:
            out["job"] = self.job
        if self.location is not None:
            out["location"] = self.location.to_dict()
        return out


def ability_modifier(score: int) -> int:
    return (score - 10) // 2


def draw_name(gender: Optional[str], rng: SeededRNG,
              last_name: Optional[str] = None, first_name: Optional[str] = None) -> Tuple[str, str]:
    """(first, last). A given first or last name skips its draw."""
    if first_name is None:
        if gender == MALE:
            first_name = rng.pick(HUMAN_NAMES_MALE)
        elif gender == FEMALE:
            first_name = rng.pick(HUMAN_NAMES_FEMALE)
        else:
            first_name = rng.pick(HUMAN_NAMES_MALE + HUMAN_NAMES_FEMALE)
    if last_name is None:
        last_name = rng.pick(HUMAN_LAST_NAMES)
    return first_name, last_name


def _title(role: Role, gender: str, rng: SeededRNG,
           title: Optional[str], title_index: Optional[int]) -> Tuple[str, int]:
    if title:
        return title, -1
    titles = role.title_list(gender)
    idx = title_index if title_index is not None else rng.range(0, len(titles) - 1)
    if 0 <= idx < len(titles):
        return titles[idx], idx
    return FALLBACK_TITLE, idx


def _age(role_key: str, title: str, rng: SeededRNG) -> int:
    if role_key == NOBLE_CHILD:
        return rng.range(6, 15)
    if "Elder" in title:
        return rng.range(60, 90)
    roll = rng.random()
    if roll < 0.6:
        return rng.range(18, 35)
    if roll < 0.9:
        return rng.range(36, 55)
    return rng.range(56, 75)


def _inventory(role: Role, role_key: str, rng: SeededRNG) -> List[str]:
    items = [rng.pick(slot) if isinstance(slot, tuple) else slot for slot in role.inventory]
    lo, hi, unit = COINS.get(role_key, DEFAULT_COINS)
    items.append(f"{rng.range(lo, hi)} {unit}")
    if rng.random() < TRINKET_CHANCE:
        items.append(rng.pick(TRINKETS))
    return items


def generate_npc(
    seed: Optional[int] = None,
    *,
    race: Optional[str] = None,
    gender: Optional[str] = None,
    role: Optional[str] = None,
    level: Optional[int] = None,
    title: Optional[str] = None,
    title_index: Optional[int] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    no_evil: bool = False,
    npc_id: Optional[str] = None,
) -> NPC:
    """Build one NPC. Options that are given skip the matching draw."""
    if seed is None:
        seed = random.randrange(1_000_000)
    rng = SeededRNG(seed)

    race = race or "Human"
    if not gender:
        gender = MALE if rng.random() > 0.5 else FEMALE

    role_key = role if role in ROLES else rng.pick(list(ROLES))
    template = ROLES.get(role_key, ROLES[VILLAGER])

    title, title_idx = _title(template, gender, rng, title, title_index)
    age = _age(role_key, title, rng)
    first, last = draw_name(gender, rng, last_name, first_name)

    stats = {}
    for stat, base in zip(STAT_NAMES, template.base_stats):
        stats[stat] = max(1, base + rng.range(-1, 2))

    level = level or 1
    lo, hi = template.hp_range
    max_hp = max(1, rng.range(lo, hi) + ability_modifier(stats["Constitution"]) * level)

    alignments = [a for a in ALIGNMENTS if "Evil" not in a] if no_evil else list(ALIGNMENTS)
    alignment = rng.pick(alignments)

    inventory = _inventory(template, role_key, rng)

    return NPC(
        id=npc_id or str(uuid.uuid4()),
        seed=seed,
        name=f"{first} {last}",
        last_name=last,
        age=age,
        gender=gender,
        race=race,
        role=role_key,
        title=title,
        npc_class=template.npc_class,
        level=level,
        alignment=alignment,
        stats=stats,
        hp={"current": max_hp, "max": max_hp},
        inventory=inventory,
        selected_title_index=title_idx,
    )
