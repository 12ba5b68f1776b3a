"""Seed curated merchant rules and keywords for the categorization engine.

Category ids come from the external category store, so they are passed on
the command line as NAME=ID pairs:

    python scripts/seed_categorization.py \
        --category "Food and Beverage=1" --category "Transportation=2"

With --dry-run nothing is written; mock ids are used for every known
category and a summary with sample rows is printed.
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parents[1] / "src"))

from txn_categorizer.categorization.seed_catalog import (  # noqa: E402
    CATEGORY_NAMES,
    build_category_keywords,
    build_merchant_rules,
)
from txn_categorizer.config import settings  # noqa: E402


def parse_category(value: str) -> tuple[str, int]:
    """Parse a NAME=ID pair."""
    name, sep, raw_id = value.rpartition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=ID, got {value!r}")
    try:
        return name.strip(), int(raw_id)
    except ValueError:
        raise argparse.ArgumentTypeError(f"category id must be an integer, got {raw_id!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--category",
        action="append",
        type=parse_category,
        default=[],
        metavar="NAME=ID",
        help="Category name and its id in the category store (repeatable)",
    )
    parser.add_argument(
        "--region",
        default=settings.categorization_region,
        help="Region the merchant rules apply to (default: %(default)s)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print what would be seeded without writing anything",
    )
    return parser


def print_dry_run(region: str) -> None:
    category_ids = {name: i for i, name in enumerate(CATEGORY_NAMES, start=1)}
    rules = build_merchant_rules(category_ids, region)
    keywords = build_category_keywords(category_ids)

    print("DRY RUN MODE - No changes will be made")
    print(f"\nWould seed {len(rules)} merchant rules (region {region})")
    print(f"Would seed {len(keywords)} category keywords")

    print("\nSample merchant rules:")
    for i, rule in enumerate(rules[:5], start=1):
        print(f"  {i}. {rule.merchant_pattern} -> category {rule.category_id} (confidence: {rule.confidence}%)")

    print("\nSample keywords:")
    for i, kw in enumerate(keywords[:5], start=1):
        print(
            f"  {i}. {kw.keyword} ({kw.language.value}) -> category {kw.category_id} "
            f"(confidence: {kw.confidence}%)"
        )


async def seed(category_ids: dict[str, int], region: str) -> tuple[int, int]:
    from txn_categorizer.db.session import AsyncSessionLocal, async_engine
    from txn_categorizer.repositories import KeywordRepository, MerchantRuleRepository

    try:
        rules_count = await MerchantRuleRepository(AsyncSessionLocal).bulk_create(
            build_merchant_rules(category_ids, region)
        )
        keywords_count = await KeywordRepository(AsyncSessionLocal).bulk_create(
            build_category_keywords(category_ids)
        )
    finally:
        await async_engine.dispose()
    return rules_count, keywords_count


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.dry_run:
        print_dry_run(args.region)
        return 0

    category_ids = dict(args.category)
    unknown = sorted(set(category_ids) - set(CATEGORY_NAMES))
    if unknown:
        print(f"Warning: no seed data for categories: {', '.join(unknown)}")
    if not set(category_ids) & set(CATEGORY_NAMES):
        print("No known categories given. Known categories:")
        for name in CATEGORY_NAMES:
            print(f"  - {name}")
        return 1

    rules_count, keywords_count = asyncio.run(seed(category_ids, args.region))
    print(f"✓ Seeded {rules_count} merchant rules")
    print(f"✓ Seeded {keywords_count} category keywords")
    return 0


if __name__ == "__main__":
    sys.exit(main())
