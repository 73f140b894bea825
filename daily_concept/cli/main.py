# =============================================
# File: daily_concept/cli/main.py
# Purpose: CLI to inspect the topic catalog, sample recommendations and print offline content.
# Usage:
#   daily-concept catalog
#   daily-concept sample --interests Technology Science --draws 1000 --seed 7
#   daily-concept offline "Quantum Computing" --depth light
# =============================================
from __future__ import annotations
import argparse
import json
import random
import sys
from collections import Counter

from daily_concept.services.recommender import Recommender
from daily_concept.utils.catalog import load_default_catalog
from daily_concept.utils.errors import CatalogError, EmptyCatalogError
from daily_concept.utils.offline_content import create_offline_content


def _cmd_catalog(args) -> int:
    try:
        catalog = load_default_catalog()
    except (CatalogError, EmptyCatalogError) as e:
        print(f"[ERROR] Catalog failed its checks: {e}", file=sys.stderr)
        return 1
    for c in catalog.categories:
        related = ", ".join(catalog.neighbors(c)) or "-"
        print(f"{c:<12} {len(catalog.seeds_for(c)):>3} topics  related: {related}")
    print(f"[OK] {len(catalog)} categories")
    return 0


def _cmd_sample(args) -> int:
    catalog = load_default_catalog()
    rec = Recommender(catalog, rng=random.Random(args.seed))
    counts: Counter = Counter()
    for _ in range(args.draws):
        counts[rec.choose_topic_for_today(args.interests, args.recent).category] += 1

    for category, n in counts.most_common():
        print(f"{category:<12} {n:>6}  {n / args.draws:6.1%}")
    in_interests = sum(n for c, n in counts.items() if c in set(args.interests))
    print(f"[OK] {in_interests / args.draws:.1%} of {args.draws} picks within interests")
    return 0


def _cmd_offline(args) -> int:
    content = create_offline_content(args.topic, args.depth)
    print(json.dumps(content.to_wire(), ensure_ascii=False, indent=2))
    return 0


def main(argv=None):
    ap = argparse.ArgumentParser(prog="daily-concept", description="Daily concept catalog and content tools.")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("catalog", help="List categories, seed counts and related categories")

    sp = sub.add_parser("sample", help="Draw many recommendations and print the category distribution")
    sp.add_argument("--interests", nargs="*", default=[], help="Interest categories (default: none, cold start)")
    sp.add_argument("--recent", nargs="*", default=[], help="Recently shown topic titles")
    sp.add_argument("--draws", type=int, default=1000, help="Number of picks (default: 1000)")
    sp.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible run")

    op = sub.add_parser("offline", help="Print deterministic offline content for a topic as JSON")
    op.add_argument("topic")
    op.add_argument("--depth", choices=["light", "normal"], default="normal")

    args = ap.parse_args(argv)
    if args.command == "sample" and args.draws <= 0:
        ap.error("--draws must be positive")

    handlers = {"catalog": _cmd_catalog, "sample": _cmd_sample, "offline": _cmd_offline}
    sys.exit(handlers[args.command](args))


if __name__ == "__main__":
    main()
