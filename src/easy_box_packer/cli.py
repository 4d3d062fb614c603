from __future__ import annotations

import argparse
import json
import logging
import random
import time
from pathlib import Path
from typing import Any, Optional

from easy_box_packer.api import (
    find_smallest_container,
    find_smallest_container_with_limits,
    find_smallest_containers,
    pack,
    to_container,
)
from easy_box_packer.config import LOG_LEVELS, get_settings
from easy_box_packer.errors import InvalidInput
from easy_box_packer.metrics import compute_metrics
from easy_box_packer.models import Container, Item

logger = logging.getLogger(__name__)

BENCHMARK_CONTAINER = Container(dimensions=(200, 300, 400), weight_limit=5000)


def load_input(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or "items" not in data:
        raise InvalidInput(f"{path}: expected an object with an 'items' array")
    return data


def run_pack(args: argparse.Namespace) -> dict[str, Any]:
    data = load_input(args.input)
    if "container" not in data:
        raise InvalidInput(f"{args.input}: missing 'container'")
    container = to_container(data["container"])
    result = pack(container, data["items"])

    packings = []
    for packing in result.packings:
        used_volume, container_volume, fill_rate = compute_metrics(container, packing)
        packings.append({
            "placements": [p.model_dump() for p in packing.placements],
            "weight": packing.weight,
            "used_volume": used_volume,
            "fill_rate": round(fill_rate, 4),
        })
    return {"packings": packings, "errors": result.errors}


def run_smallest(args: argparse.Namespace) -> dict[str, Any]:
    items = load_input(args.input)["items"]
    if args.limit is not None:
        return {"container": list(find_smallest_container_with_limits(items, args.limit, args.max_count))}
    if args.max_count is not None:
        return {"containers": [list(c) for c in find_smallest_containers(items, args.max_count)]}
    return {"container": list(find_smallest_container(items))}


def benchmark_items(count: int, seed: Optional[int]) -> list[Item]:
    rng = random.Random(seed)
    return [
        Item(dimensions=tuple(rng.randint(14, 22) for _ in range(3)), weight=rng.uniform(0.5, 1.5))
        for _ in range(count)
    ]


def run_benchmark(args: argparse.Namespace) -> dict[str, Any]:
    settings = get_settings()
    count = args.items if args.items is not None else settings.benchmark_items
    seed = args.seed if args.seed is not None else settings.benchmark_seed
    items = benchmark_items(count, seed)

    started = time.perf_counter()
    result = pack(BENCHMARK_CONTAINER, items)
    elapsed = time.perf_counter() - started

    return {
        "items": count,
        "bins": len(result.packings),
        "errors": len(result.errors),
        "seconds": round(elapsed, 3),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="easy-box-packer", description="3D bin packing")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Overrides EASY_BOX_PACKER_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("pack", help="Pack items into copies of a container")
    p.add_argument("input", type=Path, help="JSON file with 'container' and 'items'")
    p.set_defaults(func=run_pack)

    s = sub.add_parser("smallest", help="Find the smallest container for a set of items")
    s.add_argument("input", type=Path, help="JSON file with 'items'")
    s.add_argument("--max-count", type=int, help="Return up to N containers, smallest first")
    s.add_argument("--limit", type=float, nargs=3, metavar=("L", "W", "H"), help="Maximum container extents")
    s.set_defaults(func=run_smallest)

    b = sub.add_parser("benchmark", help="Time packing of random items")
    b.add_argument("--items", type=int, help="Number of random items")
    b.add_argument("--seed", type=int, help="Random seed")
    b.set_defaults(func=run_benchmark)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = args.log_level or get_settings().log_level
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        output = args.func(args)
    except (InvalidInput, OSError, json.JSONDecodeError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 2

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
