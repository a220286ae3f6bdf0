# src/realmgen/population/roles.py
# Role templates and flavour tables for townsfolk.

from typing import Dict, NamedTuple, Sequence, Tuple, Union

from ..tiles import CITY, HAMLET, TOWN_SIZE, VILLAGE

STAT_NAMES = ("Strength", "Dexterity", "Constitution", "Intelligence", "Wisdom", "Charisma")

Titles = Union[Tuple[str, ...], Dict[str, Tuple[str, ...]]]
# A tuple slot in an inventory is a choice between alternatives.
InventorySlot = Union[str, Tuple[str, ...]]


class Role(NamedTuple):
    titles: Titles
    npc_class: str
    base_stats: Tuple[int, int, int, int, int, int]
    inventory: Tuple[InventorySlot, ...]
    hp_range: Tuple[int, int]

    def title_list(self, gender: str) -> Sequence[str]:
        if isinstance(self.titles, dict):
            return self.titles.get(gender) or self.titles.get("Male", ())
        return self.titles


FINE_CLOTHES = "Fine Clothes"

NOBLE = "Noble"
NOBLE_CHILD = "Noble Child"
TAVERN_KEEPER = "Tavern Keeper"
VILLAGER = "Villager"
FARMER = "Farmer"

ROLES: Dict[str, Role] = {
    VILLAGER: Role(
        ("Citizen", "Peasant", "Farmer", "Laborer", "Elder"),
        "Commoner", (10, 10, 10, 10, 10, 10),
        ("Simple Clothes", "Bread"), (4, 8),
    ),
    "Guard": Role(
        ("Sentry", "Watchman", "Constable", "Captain", "Sergeant", "Lieutenant"),
        "Fighter", (14, 12, 13, 10, 11, 10),
        ("Chain Shirt", ("Spear", "Longsword", "Halberd"), "Shield", "Whistle"), (12, 20),
    ),
    "Merchant": Role(
        ("Shopkeeper", "Trader", "Vendor", "Master", "Supplier"),
        "Expert", (10, 11, 10, 13, 12, 14),
        (FINE_CLOTHES, "Ledger", "Ink & Quill"), (6, 10),
    ),
    NOBLE: Role(
        {
            "Male": ("Lord", "Baron", "Duke", "Earl", "Count", "Viscount", "Sir"),
            "Female": ("Lady", "Baroness", "Duchess", "Countess", "Countess", "Viscountess", "Dame"),
        },
        "Aristocrat", (9, 12, 9, 12, 11, 15),
        ("Silk Clothes", "Signet Ring", "Jewelry"), (6, 12),
    ),
    NOBLE_CHILD: Role(
        {"Male": ("Young Lord", "Master"), "Female": ("Young Lady", "Miss")},
        "Aristocrat", (6, 10, 8, 10, 8, 12),
        (FINE_CLOTHES, "Toy Sword", "Doll"), (4, 6),
    ),
    "Criminal": Role(
        ("Thief", "Bandit", "Cutpurse", "Thug", "Smuggler"),
        "Rogue", (12, 15, 12, 10, 10, 11),
        (("Leather Armor", "Padded Armor"), ("Dagger", "Shortsword"), "Thieves' Tools", "Stolen Goods"), (10, 16),
    ),
    TAVERN_KEEPER: Role(
        {
            "Male": ("Innkeeper", "Barkeep", "Owner", "Host"),
            "Female": ("Innkeeper", "Barkeep", "Owner", "Hostess"),
        },
        "Expert", (10, 10, 10, 12, 13, 14),
        ("Apron", "Keys to the Cellar", "Tankard", "Towel"), (6, 12),
    ),
    "Tavern Worker": Role(
        {
            "Male": ("Server", "Cook", "Stablehand", "Potboy"),
            "Female": ("Server", "Cook", "Maid", "Hostess"),
        },
        "Commoner", (11, 12, 11, 9, 10, 10),
        ("Simple Clothes", "Dirty Apron", ("Broom", "Tray", "Bucket")), (4, 8),
    ),
    "Guild Master": Role(
        ("Grandmaster", "High Artisan", "Guildmaster", "Director", "Foreman"),
        "Expert", (12, 12, 12, 14, 14, 14),
        ("Guild Badge", "Masterwork Tool", FINE_CLOTHES, "Ledger"), (10, 20),
    ),
    "Guild Member": Role(
        ("Journeyman", "Apprentice", "Member", "Initiate", "Adept"),
        "Expert", (11, 12, 11, 12, 10, 10),
        ("Guild Badge", "Tools", "Apron"), (6, 12),
    ),
    "Priest": Role(
        {
            "Male": ("Father", "High Priest", "Curate", "Bishop", "Elder"),
            "Female": ("Mother", "High Priestess", "Bishop", "Elder"),
        },
        "Cleric", (10, 10, 12, 12, 16, 14),
        ("Holy Symbol", "Vestments", "Prayer Book", "Incense"), (12, 24),
    ),
    "Acolyte": Role(
        {
            "Male": ("Brother", "Novice", "Initiate", "Deacon"),
            "Female": ("Sister", "Novice", "Initiate", "Deacon"),
        },
        "Adept", (10, 10, 10, 11, 13, 12),
        ("Holy Symbol", "Simple Robes", "Candle"), (6, 12),
    ),
    "Blacksmith": Role(
        {
            "Male": ("Smith", "Blacksmith", "Armorer", "Ironwright", "Master Smith"),
            "Female": ("Smith", "Blacksmith", "Armorer", "Ironwright", "Master Smith"),
        },
        "Expert", (15, 10, 14, 10, 11, 10),
        ("Leather Apron", "Hammer", "Tongs", "Iron Scraps"), (10, 18),
    ),
    FARMER: Role(
        ("Farmer", "Crofter", "Husbandman", "Harvester", "Plowman"),
        "Commoner", (13, 11, 12, 10, 11, 10),
        ("Rough Clothes", ("Pitchfork", "Scythe", "Sickle"), "Straw Hat"), (6, 10),
    ),
}

ALIGNMENTS = (
    "Lawful Good", "Neutral Good", "Chaotic Good",
    "Lawful Neutral", "True Neutral", "Chaotic Neutral",
    "Lawful Evil", "Neutral Evil", "Chaotic Evil",
)

TRINKETS = (
    "Brass Key", "Carved Wooden Duck", "Silver Locket", "Strange Coin", "Dice Set",
    "Dried Rabbit's Foot", "Letter from home", "Map fragment", "Shiny rock", "Bone whistle",
    "Copper Ring", "Old pipe", "Deck of cards", "Small mirror", "Bag of marbles",
)

# role -> (low, high, unit); everyone else gets copper
COINS = {
    NOBLE_CHILD: (2, 10, "Silver Pieces (Allowance)"),
    NOBLE: (20, 100, "Gold Places"),
    "Merchant": (20, 100, "Gold Places"),
    "Guard": (5, 20, "Silver Pieces"),
    TAVERN_KEEPER: (5, 20, "Silver Pieces"),
}
DEFAULT_COINS = (2, 15, "Copper Pieces")

CHILD_ACTIVITIES = (
    "Playing in the street",
    "Helping parents",
    "Exploring nearby",
    "Playing tag",
)

DOMESTIC_ACTIVITIES = (
    "Tending the hearth",
    "Cleaning the house",
    "Resting in the square",
    "Trading at the market",
    "Mending nets",
    "Preparing a meal",
    "Helping neighbors",
    "Running errands",
    "Fetching water",
)

VOCATION_SLOTS = {
    HAMLET: {"Cloth Weaver": 1, "Tool Mender": 1},
    VILLAGE: {"Cloth Weaver": 1, "Tool Mender": 1, "Tanner": 1, "Tailor": 1, "Carpenter": 1},
    TOWN_SIZE: {
        "Cloth Weaver": 2, "Tool Mender": 2, "Tanner": 2, "Tailor": 2,
        "Carpenter": 2, "Ale Brewer": 2, "Baker": 2,
    },
    CITY: {
        "Cloth Weaver": 5, "Tool Mender": 4, "Tanner": 4, "Tailor": 5,
        "Carpenter": 4, "Ale Brewer": 3, "Baker": 4,
    },
}


def vocation_slots(town_size: str) -> Dict[str, int]:
    """Fresh, mutable slot counts; unknown sizes use the village table."""
    return dict(VOCATION_SLOTS.get(town_size, VOCATION_SLOTS[VILLAGE]))
