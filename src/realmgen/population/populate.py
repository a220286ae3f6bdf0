# src/realmgen/population/populate.py
"""
Town population.

Scans a town map into homes, service buildings and work sites, then fills
them: the ruling household first, then shop and temple staff, then ordinary
families in every home still empty.

Each NPC's seed is a hash of (town seed, building x, building y, slot), where
slot counts the NPCs already created at that building. The shared stream only
drives town-level choices (family names, sizes, jobs).
"""

import hashlib
import logging
import re
import uuid
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

from ..grid import Point
from ..names import HUMAN_LAST_NAMES, HUMAN_NAMES_FEMALE, HUMAN_NAMES_MALE, NOBLE_LAST_NAMES
from ..rng import SeededRNG
from ..tiles import BUILDING, FARM_FIELD, HAMLET, TOWN_SIZE, VILLAGE
from ..towngen.generator import TownMap
from .npc import FEMALE, MALE, NPC, Location, generate_npc
from .roles import CHILD_ACTIVITIES, DOMESTIC_ACTIVITIES, FARMER, NOBLE, NOBLE_CHILD, TAVERN_KEEPER, VILLAGER, vocation_slots

RESIDENTIAL = ("house", "manor", "keep")
SEATS = ("keep", "manor")
FIELD = "field"
BARN = "barn"
FARMING_SIZES = (HAMLET, VILLAGE, TOWN_SIZE)

NPC_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "https://realmgen.invalid/npc")
_NOBLE_SUFFIX = re.compile(r"(?:ton|burg|shire|hold|wick|stead)$")


class Site(NamedTuple):
    x: int
    y: int
    type: str
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or self.type


def npc_seed(seed: int, x: int, y: int, slot: int) -> int:
    digest = hashlib.blake2b(f"{seed}:{x}:{y}:{slot}".encode(), digest_size=8).digest()
    return int.from_bytes(digest, "big") & 0x7FFFFFFF


def npc_id(town_name: str, seed: int, x: int, y: int, slot: int) -> str:
    return str(uuid.uuid5(NPC_NAMESPACE, f"{town_name}:{seed}:{x}:{y}:{slot}"))


def scan_sites(town_map: TownMap) -> Tuple[List[Site], List[Site], List[Site]]:
    """(residential, service, work) sites in row-major order."""
    homes: List[Site] = []
    services: List[Site] = []
    work: List[Site] = []
    for row in town_map.map_data:
        for tile in row:
            if tile.type == BUILDING:
                site = Site(tile.x, tile.y, tile.building_type or "unknown", tile.building_name)
                if site.type in RESIDENTIAL:
                    homes.append(site)
                elif site.type == BARN:
                    work.append(site)
                else:
                    services.append(site)
            elif tile.type == FARM_FIELD:
                work.append(Site(tile.x, tile.y, FIELD))
    return homes, services, work


def opposite(gender: str) -> str:
    return FEMALE if gender == MALE else MALE


@dataclass
class _Census:
    town_name: str
    seed: int
    rng: SeededRNG
    no_evil: bool = True
    npcs: List[NPC] = field(default_factory=list)
    slots: Counter = field(default_factory=Counter)

    def add(self, role: str, workplace: Site, home: Optional[Site], **options) -> NPC:
        key = (workplace.x, workplace.y)
        slot = self.slots[key]
        self.slots[key] += 1
        npc = generate_npc(
            npc_seed(self.seed, workplace.x, workplace.y, slot),
            role=role,
            no_evil=self.no_evil,
            npc_id=npc_id(self.town_name, self.seed, workplace.x, workplace.y, slot),
            **options,
        )
        npc.location = Location(
            x=workplace.x,
            y=workplace.y,
            building_name=workplace.label,
            building_type=workplace.type,
            home_coords=Point(home.x, home.y) if home is not None else None,
        )
        self.npcs.append(npc)
        return npc

    def add_partner(self, primary: NPC, role: str, site: Site) -> NPC:
        """Opposite-gender partner sharing the primary's surname and title rank."""
        options = {"gender": opposite(primary.gender), "last_name": primary.last_name}
        if primary.selected_title_index >= 0:
            options["title_index"] = primary.selected_title_index
        return self.add(role, site, site, **options)


# ---------- Leadership ----------

def noble_family_name(seat: Site, town_name: str, rng: SeededRNG) -> str:
    if seat.name and seat.name not in ("Manor", "Keep"):
        return seat.name.split(" ")[0]
    if rng.random() < 0.4:
        return _NOBLE_SUFFIX.sub("", town_name)
    return rng.pick(NOBLE_LAST_NAMES)


def add_leaders(census: _Census, homes: List[Site], town_size: str, log: logging.Logger) -> None:
    seat = next((h for h in homes if h.type in SEATS), None)
    if seat is not None:
        family = noble_family_name(seat, census.town_name, census.rng)
        head = census.add(NOBLE, seat, seat, last_name=family)
        head.job = f"{head.title} of {census.town_name}"
        spouse = census.add_partner(head, NOBLE, seat)
        spouse.job = f"{spouse.title} of {census.town_name}"
        children = census.rng.range(1, 3)
        for _ in range(children):
            child = census.add(NOBLE_CHILD, seat, seat, last_name=family)
            child.job = f"{child.title} of the House {family}"
        log.debug("House %s rules from %s with %d children", family, seat.label, children)
    elif homes:
        home = homes[0]
        elder = census.add(VILLAGER, home, home, title="Headman" if town_size == HAMLET else "Elder")
        elder.job = f"Leader of {census.town_name}"
        log.debug("%s leads from (%d,%d)", elder.name, home.x, home.y)


# ---------- Services ----------

def staff_tavern(census: _Census, b: Site) -> None:
    name = b.name or "the tavern"
    keeper = census.add(TAVERN_KEEPER, b, b, title="Owner")
    keeper.job = f"Owner of {name}"
    partner = census.add_partner(keeper, TAVERN_KEEPER, b)
    partner.job = f"Co-Owner of {name}"


def shopkeeper_from_sign(sign: Optional[str]) -> Dict[str, str]:
    """First name and gender forced by an "X's Goods" style sign, when X is a known name."""
    if not sign or "'s " not in sign:
        return {}
    candidate = sign.split("'s ", 1)[0]
    if candidate in HUMAN_NAMES_MALE:
        return {"first_name": candidate, "gender": MALE}
    if candidate in HUMAN_NAMES_FEMALE:
        return {"first_name": candidate, "gender": FEMALE}
    return {}


def staff_shop(census: _Census, b: Site) -> None:
    name = b.name or "the shop"
    merchant = census.add("Merchant", b, b, **shopkeeper_from_sign(b.name))
    merchant.job = f"Proprietor of {name}"
    partner = census.add_partner(merchant, "Merchant", b)
    partner.job = f"Merchant at {name}"


def staff_temple(census: _Census, b: Site) -> None:
    name = b.name or "the temple"
    priest = census.add("Priest", b, b)
    priest.job = f"{priest.title} of {name}"
    acolyte = census.add_partner(priest, "Acolyte", b)
    acolyte.job = f"{acolyte.title} of {name}"


def staff_smithy(census: _Census, b: Site) -> None:
    name = b.name or "the smithy"
    smith = census.add("Blacksmith", b, b)
    smith.job = f"Master Smith of {name}"
    assistant = census.add_partner(smith, "Blacksmith", b)
    assistant.job = f"Assistant Smith at {name}"


def staff_guild(census: _Census, b: Site) -> None:
    master = census.add("Guild Master", b, b)
    master.job = f"Master of {b.name or 'the guild'}"


STAFFERS = {
    "tavern": staff_tavern,
    "inn": staff_tavern,
    "shop": staff_shop,
    "market": staff_shop,
    "temple": staff_temple,
    "blacksmith": staff_smithy,
    "guild": staff_guild,
}


# ---------- Households ----------

def send_to_work(npc: NPC, site: Site) -> None:
    npc.location.x = site.x
    npc.location.y = site.y
    npc.location.building_type = site.type
    npc.location.building_name = site.label
    npc.job = "Tilling the fields" if site.type == FIELD else "Tending to the barn"


def assign_vocation(npc: NPC, slots: Dict[str, int], rng: SeededRNG) -> None:
    open_slots = [v for v, n in slots.items() if n > 0]
    if open_slots:
        vocation = rng.pick(open_slots)
        slots[vocation] -= 1
        npc.job = vocation
    else:
        npc.job = rng.pick(DOMESTIC_ACTIVITIES)


def add_family(census: _Census, home: Site, town_size: str, work: List[Site], slots: Dict[str, int]) -> None:
    rng = census.rng
    surname = rng.pick(HUMAN_LAST_NAMES)
    size = rng.range(3, 6)
    farming = bool(work) and town_size in FARMING_SIZES
    for i in range(size):
        if i >= 2:
            child = census.add(VILLAGER, home, home, last_name=surname, title="Child")
            child.job = rng.pick(CHILD_ACTIVITIES)
        elif farming:
            farmer = census.add(FARMER, home, home, last_name=surname, title="Farmer")
            send_to_work(farmer, work[rng.range(0, len(work) - 1)])
        else:
            adult = census.add(VILLAGER, home, home, last_name=surname, title="Citizen")
            assign_vocation(adult, slots, rng)


def populate_town(
    town_map: TownMap,
    seed: int,
    logger: Optional[logging.Logger] = None,
    no_evil: bool = True,
) -> List[NPC]:
    """Generate the residents and workers of *town_map*."""
    log = logger or logging.getLogger(__name__)
    seed = int(seed)
    homes, services, work = scan_sites(town_map)
    log.debug("%s: %d homes, %d service buildings, %d work sites",
              town_map.town_name, len(homes), len(services), len(work))

    census = _Census(town_map.town_name, seed, SeededRNG(seed), no_evil=no_evil)
    add_leaders(census, homes, town_map.town_size, log)

    for b in services:
        staffer = STAFFERS.get(b.type)
        if staffer is not None:
            staffer(census, b)

    occupied = {n.location.home_coords for n in census.npcs if n.location.home_coords is not None}
    slots = vocation_slots(town_map.town_size)
    for home in homes:
        if Point(home.x, home.y) not in occupied:
            add_family(census, home, town_map.town_size, work, slots)

    log.info("Populated %s with %d NPCs", town_map.town_name, len(census.npcs))
    return census.npcs
