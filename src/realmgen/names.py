# src/realmgen/names.py
# Name data and the naming functions used by the world, town and population
# generators. Every generator draws from the caller's SeededRNG, so the order
# of draws below is part of the seed contract.

from typing import Dict, List, Sequence, Set

from .rng import SeededRNG

HUMAN_NAMES_MALE = (
    "Aelar", "Albert", "Alfred", "Alexander", "Cael", "Darius", "Edgar",
    "Edward", "Finnian", "Gareth", "Joric", "Kaelen", "Marius", "Orion",
    "Peregrine", "Ronan", "Tavish", "Warrick", "Alden", "Bram", "Cedric",
    "Doran", "Adric", "Balin", "Corin", "Davik", "Eldrin", "Faelan",
    "Garrik", "Hadrian", "Ivar", "Kegan", "Lorien", "Mylo", "Osric",
    "Phelan", "Quinn", "Roric", "Silas", "Thoren", "Ulric", "Valen",
    "Wyatt", "Yoric",
)

HUMAN_NAMES_FEMALE = (
    "Brynn", "Elara", "Isolde", "Lyra", "Nadia", "Quilla", "Seraphina",
    "Vanya", "Xylia", "Yarrow", "Anya", "Fiona", "Genevieve", "Helena",
    "Rowan", "Adela", "Beatrix", "Cora", "Dahlia", "Elise", "Aria",
    "Bella", "Cassia", "Dora", "Elora", "Freya", "Gwen", "Hanna", "Iris",
    "Juna", "Kaia", "Lana", "Mira", "Nova", "Opal", "Piper", "Ria",
    "Selene", "Tessa", "Una", "Vera", "Willa", "Xena", "Yara", "Zara",
)

NOBLE_LAST_NAMES = (
    "Ashwood", "Blackwater", "Copperleaf", "Dawnbringer", "Evenfall",
    "Frostbeard", "Highwind", "Ironhand", "Jadefire", "Kingsley",
    "Lightfoot", "Moonwhisper", "Nightshade", "Oakenshield", "Pinecroft",
    "Quickfoot", "Redfern", "Shadowclaw", "Stormblade", "Thornwood",
    "Underhill", "Valerius", "Wolfsbane", "Stormwind", "Fireheart",
    "Winterbourne", "Summerfield", "Rosewood", "Hawthorne", "Ravenscroft",
    "Dragonbane", "Lionshield", "Bearclaw", "Eagleeye", "Foxglove",
)

COMMON_LAST_NAMES = (
    "Smith", "Miller", "Baker", "Carter", "Fisher", "Hunter", "Mason",
    "Potter", "Shepherd", "Tailor", "Weaver", "Crowley", "Darkmoor",
    "Ember", "Falconer", "Grimm", "Hawk", "Ivy", "Juniper", "Knight",
    "Lance", "Moss", "North", "Owl", "Pike", "Quarrel", "Raven", "Steel",
    "Torrent", "Vance", "West", "York", "Youngblood", "Zephyrson",
)

HUMAN_LAST_NAMES = NOBLE_LAST_NAMES + COMMON_LAST_NAMES
HUMAN_FIRST_NAMES = HUMAN_NAMES_MALE + HUMAN_NAMES_FEMALE

# ---------- Towns ----------

TOWN_PREFIXES = (
    "Mill", "Stone", "River", "Oak", "Iron", "Gold", "Silver", "Green",
    "White", "Black", "Red", "Blue", "High", "Low", "North", "South",
    "East", "West", "Old", "New", "Fair", "Bright", "Dark", "Swift",
    "Deep", "Shallow", "Long", "Short", "Broad", "Narrow", "Wide",
    "Winter", "Summer", "Spring", "Autumn", "Frost", "Sun", "Moon", "Star",
    "Cloud", "Mist", "Fog", "Rain", "Storm", "Thunder", "Wind", "Snow",
    "Crystal", "Diamond", "Ruby", "Emerald", "Sapphire", "Amber", "Jade",
)

HISTORICAL_SUFFIXES: Dict[str, Sequence[str]] = {
    "hamlet": ("stead", "wick", "croft", "well", "hill", "side", "edge"),
    "village": ("ton", "ham", "ley", "worth", "field", "wood", "burn"),
    "town": ("market", "ford", "bridge", "haven", "shire", "mouth", "crossing"),
    "city": ("burg", "bury", "caster", "chester", "cester", "keep", "hold", "bastion"),
}

CITY_NAMES = (
    "Stronghold", "Fortress", "Citadel", "Bastion", "Rampart", "Bulwark",
    "Keep", "Castle", "Tower", "Spire", "Crown", "Throne", "Palace",
    "Capital", "Metropolis", "Sanctuary", "Dominion", "Empire",
)

NOBLE_TOWN_SUFFIXES = ("ton", "burg", "shire", "hold", "wick", "stead")

# Biome-flavoured name parts; biomes not listed use the generic prefixes.
REGIONAL_NAMES: Dict[str, Dict[str, Sequence[str]]] = {
    "plains": {
        "prefixes": ("Green", "Fair", "Golden", "Wheat", "Barley", "Corn", "Hay", "Meadow"),
        "suffixes": ("field", "meadow", "vale", "haven", "rest", "shire", "ton", "dale"),
    },
    "forest": {
        "prefixes": ("Oak", "Pine", "Elder", "Willow", "Ash", "Birch", "Cedar", "Maple"),
        "suffixes": ("wood", "grove", "glen", "hollow", "shade", "leaf", "branch", "root"),
    },
    "mountain": {
        "prefixes": ("Stone", "Iron", "High", "Peak", "Snow", "Granite", "Cliff", "Summit"),
        "suffixes": ("hold", "keep", "watch", "guard", "peak", "crest", "ridge", "point"),
    },
    "water": {
        "prefixes": ("River", "Lake", "Bay", "Harbor", "Tide", "Wave", "Stream", "Current"),
        "suffixes": ("port", "haven", "bridge", "ford", "mouth", "bay", "cove", "landing"),
    },
}


def _element(seq: Sequence[str], rng: SeededRNG) -> str:
    return seq[rng.below(len(seq))]


def generate_town_name(size: str, biome: str, rng: SeededRNG) -> str:
    # Grand names for some cities
    if size == "city" and rng.random() < 0.3:
        return f"{_element(TOWN_PREFIXES, rng)} {_element(CITY_NAMES, rng)}"

    # Named after a noble family
    if size in ("town", "city") and rng.random() < 0.2:
        return f"{_element(NOBLE_LAST_NAMES, rng)}{_element(NOBLE_TOWN_SUFFIXES, rng)}"

    # Only a known biome costs a draw here.
    regional = REGIONAL_NAMES.get(biome)
    prefixes = regional["prefixes"] if regional and rng.random() < 0.7 else TOWN_PREFIXES
    prefix = _element(prefixes, rng)
    suffix = _element(HISTORICAL_SUFFIXES.get(size, HISTORICAL_SUFFIXES["village"]), rng)
    return f"{prefix}{suffix}"


def generate_unique_town_names(
    count: int,
    biome: str,
    sizes: Sequence[str],
    rng: SeededRNG,
) -> List[str]:
    """Up to ``count`` distinct names; gives up after count*10 attempts."""
    names: List[str] = []
    seen: Set[str] = set()
    attempts = 0
    while len(names) < count and attempts < count * 10:
        size = sizes[len(names)] if len(names) < len(sizes) else "village"
        name = generate_town_name(size, biome, rng)
        if name not in seen:
            seen.add(name)
            names.append(name)
        attempts += 1
    return names


# ---------- Buildings ----------

TAVERN_ADJECTIVES = (
    "Prancing", "Golden", "Silver", "Drunken", "Rusty", "Broken", "Dancing",
    "Sleeping", "Laughing", "Singing", "Roaring", "Jolly", "Merry", "Red",
    "Green", "Blue", "Black", "White", "Iron", "Stone", "Wooden",
    "Crimson", "Azure", "Violet", "Amber", "Emerald", "Sapphire", "Ruby",
    "Lost", "Wandering", "Hidden", "Secret", "Silent", "Whispering", "Howling",
    "Flying", "Running", "Jumping", "Fighting", "Smiling", "Crying", "Blind",
)

TAVERN_NOUNS = (
    "Pony", "Dragon", "Lion", "Bear", "Boar", "Stag", "Eagle", "Crow",
    "Tankard", "Barrel", "Flagon", "Mug", "Keg", "Bottle", "Goblet",
    "Sword", "Shield", "Hammer", "Axe", "Anchor", "Wheel", "Crown",
    "Goat", "Sheep", "Wolf", "Fox", "Cat", "Dog", "Horse", "Mare",
    "Wizard", "Knight", "King", "Queen", "Prince", "Princess", "Jester",
    "Ghost", "Spirit", "Soul", "Shadow", "Flame", "Fire", "Ice", "Frost",
)


def generate_tavern_name(rng: SeededRNG) -> str:
    adj = _element(TAVERN_ADJECTIVES, rng)
    noun = _element(TAVERN_NOUNS, rng)
    return f"The {adj} {noun}"


# (weight, trades)
GUILD_CATEGORIES = (
    (60, ("Merchants", "Smiths", "Masons", "Bakers", "Brewers", "Weavers",
          "Carpenters", "Farmers", "Cobblers", "Tailors")),
    (25, ("Warriors", "Healers", "Alchemists", "Scribes", "Scholars",
          "Inventors", "Explorers", "Rangers")),
    (10, ("Thieves", "Assassins", "Spies", "Smugglers", "Bards", "Illusionists")),
    (5, ("Mages", "Wizards", "Sorcerers", "Necromancers", "Druids")),
)

GUILD_DESCRIPTORS = (
    "Honorable", "Ancient", "Noble", "Royal", "Imperial", "Grand",
    "United", "Free", "Independent", "Loyal", "True", "Faithful",
    "Mystic", "Secret", "Hidden", "Golden", "Silver", "Iron",
)


def generate_guild_name(rng: SeededRNG) -> str:
    total = sum(weight for weight, _ in GUILD_CATEGORIES)
    roll = rng.random() * total
    trades = GUILD_CATEGORIES[0][1]
    for weight, candidates in GUILD_CATEGORIES:
        if roll < weight:
            trades = candidates
            break
        roll -= weight

    trade = _element(trades, rng)
    if rng.random() < 0.4:
        return f"{_element(GUILD_DESCRIPTORS, rng)} Order of {trade}"
    if rng.random() < 0.8:
        return f"{trade} Guild"
    return f"The Order of {trade}"


TEMPLE_DOMAINS = (
    "Light", "Life", "Nature", "War", "Peace", "Death", "Storms", "Seas",
    "Knowledge", "Trickery", "Love", "Justice", "Time", "Fate",
)
TEMPLE_TITLES = ("Temple", "Shrine", "Sanctuary", "Cathedral", "Chapel", "Altar", "Hall")
TEMPLE_ADJECTIVES = ("Holy", "Sacred", "Divine", "Eternal", "Blessed", "Hallowed", "Silent", "Golden")


def generate_temple_name(rng: SeededRNG) -> str:
    domain = _element(TEMPLE_DOMAINS, rng)
    title = _element(TEMPLE_TITLES, rng)
    if rng.random() < 0.5:
        return f"{title} of {domain}"
    return f"The {_element(TEMPLE_ADJECTIVES, rng)} {title}"


BANK_FOUNDERS = (
    "Goldsworth", "Silverton", "Ironvault", "Stonekeeper", "Coinmaster",
    "Wealthguard", "Treasurekeep", "Safehaven", "Vaultwright", "Gemhold",
    "Richman", "Moneychanger", "Goldkeeper", "Silversmith",
    "Profitmaker", "Loadstone", "Bullion", "Cache", "Hoard", "Stash",
)
BANK_TYPES = (
    "Bank", "Trust", "Vault", "Treasury", "Reserve", "Exchange",
    "Counting House", "Money Lenders", "Financial House",
    "Coffers", "Depository", "Fund", "Investment", "Capital",
)


def generate_bank_name(rng: SeededRNG) -> str:
    founder = _element(BANK_FOUNDERS, rng)
    kind = _element(BANK_TYPES, rng)
    if rng.random() < 0.7:
        return f"{founder} & Co. {kind}"
    return f"{founder} {kind}"


SHOP_ADJECTIVES = (
    "Lucky", "Golden", "Silver", "Honest", "Fair", "Quality", "Best",
    "Quick", "Strong", "Sturdy", "Fine", "Cheap", "Useful", "Magic",
    "Mystic", "Ancient", "Old", "New", "Bright", "Dark", "Shining",
    "Rusty", "Dusty", "Clean", "Dirty", "Broken", "Fixed",
)
SHOP_NOUNS = (
    "Horseshoe", "Hammer", "Shield", "Sword", "Cloak", "Potion", "Scroll",
    "Backpack", "Boot", "Glove", "Gem", "Anvil", "Arrow", "Bow",
    "Lantern", "Compass", "Map", "Book", "Feather", "Quill", "Ink",
)
SHOP_GOODS = (
    "Goods", "Supplies", "Wares", "Trade", "Emporium", "Exchange",
    "General Store", "Market", "Provisions", "Equipment",
    "Trinkets", "Treasures", "Oddities", "Curiosities", "Sundries",
)


def generate_shop_name(rng: SeededRNG) -> str:
    """Either "The <Adj> <Noun>" or "<First name>'s <Goods>"."""
    if rng.random() < 0.6:
        adj = _element(SHOP_ADJECTIVES, rng)
        noun = _element(SHOP_NOUNS, rng)
        return f"The {adj} {noun}"
    name = _element(HUMAN_FIRST_NAMES, rng)
    goods = _element(SHOP_GOODS, rng)
    return f"{name}'s {goods}"


MANOR_TYPES = (
    "Manor", "Hall", "Estate", "House", "Keep", "Lodge", "Chateau",
    "Villa", "Palace", "Castle",
)


def generate_manor_name(rng: SeededRNG) -> str:
    surname = _element(NOBLE_LAST_NAMES, rng)
    kind = _element(MANOR_TYPES, rng)
    return f"{surname} {kind}"


BLACKSMITH_NAMES = (
    "Iron Anvil", "Heavy Hammer", "Strong Forge",
    "Dragon Sunder", "Steel Strike", "The Hearth Forge",
)


def generate_blacksmith_name(rng: SeededRNG) -> str:
    return _element(BLACKSMITH_NAMES, rng)


# ---------- Mountains ----------

MOUNTAIN_PREFIXES = (
    "Iron", "Stone", "Thunder", "Storm", "Frost", "Fire", "Shadow", "Crystal",
    "Silver", "Gold", "Granite", "Obsidian", "Amber", "Crimson", "Azure",
    "White", "Black", "Grey", "Red", "Bone", "Cinder", "Ash", "Dusk", "Dawn",
    "Dragon", "Eagle", "Wolf", "Serpent", "Giant", "Titan", "Ancient", "Broken",
    "Jagged", "Shattered", "Frozen", "Burning", "Howling", "Silent", "Lonely",
)
MOUNTAIN_SUFFIXES = (
    "Mountains", "Peaks", "Ridge", "Range", "Heights", "Spires", "Crags",
    "Pinnacles", "Summits", "Teeth", "Spine", "Crown", "Horns", "Cliffs",
)


def generate_mountain_name(rng: SeededRNG) -> str:
    prefix = _element(MOUNTAIN_PREFIXES, rng)
    suffix = _element(MOUNTAIN_SUFFIXES, rng)
    return f"{prefix} {suffix}"


# building type -> name generator
BUILDING_NAMERS = {
    "tavern": generate_tavern_name,
    "inn": generate_tavern_name,
    "guild": generate_guild_name,
    "bank": generate_bank_name,
    "shop": generate_shop_name,
    "market": generate_shop_name,
    "blacksmith": generate_blacksmith_name,
    "manor": generate_manor_name,
    "keep": generate_manor_name,
    "temple": generate_temple_name,
}
