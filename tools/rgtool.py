#!/usr/bin/env python3
import argparse
import json
import logging
import random
import sys

from realmgen.config import load_tuning
from realmgen.mapgen.generator import generate_map_data
from realmgen.population.populate import populate_town
from realmgen.rng import M
from realmgen.tiles import grid_to_dicts
from realmgen.towngen.generator import generate_town_map

WORLD_GLYPHS = {"forest": "T", "mountain": "^", "town": "#", "cave_entrance": "C"}
BIOME_GLYPHS = {"plains": ".", "water": "~", "beach": ","}
TOWN_GLYPHS = {
    "grass": ".", "dirt_path": ":", "stone_path": "=", "town_square": "+",
    "building": "B", "wall": "W", "keep_wall": "w", "water": "~",
    "bridge": "H", "farm_field": "%",
}
BUILDING_GLYPHS = {"house": "h", "keep": "K", "manor": "M", "barn": "b"}
POI_GLYPHS = {"well": "o", "fountain": "O", "tree": "t", "bush": "*", "flowers": "f"}


def world_ascii(map_data):
    lines = []
    for row in map_data:
        line = ""
        for t in row:
            if t.is_starting_town:
                line += "@"
            elif t.poi:
                line += WORLD_GLYPHS.get(t.poi, "?")
            elif t.has_river:
                line += "r"
            elif t.has_path:
                line += "-"
            else:
                line += BIOME_GLYPHS.get(t.biome, "?")
        lines.append(line)
    return "\n".join(lines)


def town_ascii(town_map):
    lines = []
    for row in town_map.map_data:
        line = ""
        for t in row:
            if t.is_entry:
                line += "E"
            elif t.type == "building":
                line += BUILDING_GLYPHS.get(t.building_type, "B")
            elif t.poi:
                line += POI_GLYPHS.get(t.poi, "?")
            else:
                line += TOWN_GLYPHS.get(t.type, "?")
        lines.append(line)
    return "\n".join(lines)


def people_table(npcs):
    return "\n".join(
        f"{n.name:<24} {n.role:<14} {n.title:<14} {n.age:>3}  {n.job or ''}" for n in npcs
    )


def emit(text, out):
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        print(f"Wrote {out}")
    else:
        print(text)


def build_town(args, tuning):
    return generate_town_map(
        args.size,
        args.name,
        args.entry or tuning.entry_direction,
        args.seed,
        has_river=args.river,
        river_direction=args.river_direction,
    )


def cmd_world(args, tuning):
    width = args.width or tuning.world_width
    height = args.height or tuning.world_height
    map_data = generate_map_data(width, height, args.seed)
    if args.format == "ascii":
        emit(world_ascii(map_data), args.out)
    else:
        emit(json.dumps(grid_to_dicts(map_data), indent=args.indent), args.out)


def cmd_town(args, tuning):
    town_map = build_town(args, tuning)
    if args.format == "ascii":
        emit(town_ascii(town_map), args.out)
    else:
        emit(json.dumps(town_map.to_dict(), indent=args.indent), args.out)


def resolve_seed(args):
    if args.seed is None:
        args.seed = random.randrange(M)
        logging.getLogger("rgtool").warning("No seed given; using %d", args.seed)
    return args.seed


def cmd_people(args, tuning):
    seed = resolve_seed(args)
    town_map = build_town(args, tuning)
    npcs = populate_town(town_map, seed, no_evil=tuning.no_evil)
    if args.format == "ascii":
        emit(people_table(npcs), args.out)
    else:
        emit(json.dumps([n.to_dict() for n in npcs], indent=args.indent), args.out)


def add_town_args(p):
    p.add_argument("--size", default="village", choices=["hamlet", "village", "town", "city"])
    p.add_argument("--name", default="Testopolis")
    p.add_argument("--entry", choices=["north", "south", "east", "west"])
    p.add_argument("--river", action="store_true")
    p.add_argument("--river-direction", default="NORTH_SOUTH")


def build_parser():
    p = argparse.ArgumentParser(description="Seeded world, town and NPC generation")
    p.add_argument("--config", type=str, help="tuning TOML (default: packaged tuning.toml)")
    p.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG")
    sub = p.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--seed", type=int)
    common.add_argument("--format", choices=["json", "ascii"], default="ascii")
    common.add_argument("--indent", type=int, default=None)
    common.add_argument("--out", type=str)

    p1 = sub.add_parser("world", parents=[common])
    p1.add_argument("--width", type=int)
    p1.add_argument("--height", type=int)
    p1.set_defaults(func=cmd_world)

    p2 = sub.add_parser("town", parents=[common])
    add_town_args(p2)
    p2.set_defaults(func=cmd_town)

    p3 = sub.add_parser("people", parents=[common])
    add_town_args(p3)
    p3.set_defaults(func=cmd_people)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    tuning = load_tuning(args.config)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else tuning.log_level.upper(),
        format=tuning.log_format,
        stream=sys.stderr,
    )
    args.func(args, tuning)
    return 0


if __name__ == "__main__":
    sys.exit(main())
