"""
SkillShare admin CLI.

Uses the unified database layer, CatalogService and the profile search engine.
"""

import argparse
import sys

from dotenv import load_dotenv

from core.cache import CacheKeys, cache
from core.cli.formatters import format_output
from core.config import get_settings
from core.db import db
from core.errors import SkillShareError
from core.logging import configure_logging
from core.search import PageRequest, SearchFilters
from core.services import CatalogService, ProfileLifecycleService, serialize_public_profile

load_dotenv()


def _init_database(create_tables: bool = False):
    """Initialize the database connection, optionally creating tables."""
    settings = get_settings()
    if not db.is_initialized:
        db.initialize(settings.database_url)
    if create_tables:
        db.create_all_tables()


def cmd_init_db(args):
    """Create all tables."""
    _init_database(create_tables=True)
    print("Database tables created")


def cmd_seed_catalog(args):
    """Insert the default skills and categories into empty tables."""
    _init_database(create_tables=True)
    with db.session() as session:
        result = CatalogService(session).seed_defaults()

    print(f"Skills created:     {result['skillsCreated']}")
    print(f"Categories created: {result['categoriesCreated']}")
    print(f"Total skills:       {result['totalSkills']}")
    print(f"Total categories:   {result['totalCategories']}")


def cmd_check_config(args):
    """Print configuration errors and warnings; exit 1 when there are errors."""
    settings = get_settings()
    errors, warnings = settings.validate_production_config()

    print(f"\n{'=' * 60}\nCONFIGURATION ({settings.env})\n{'=' * 60}")
    print(f"Auth provider: {settings.auth_provider}")
    print(f"Database:      {'sqlite' if settings.is_sqlite else 'postgresql'}")
    print(f"Cache enabled: {settings.cache_enabled}")

    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR: {error}")

    if errors:
        sys.exit(1)
    print("Configuration OK")


def cmd_list_profiles(args):
    """Search profiles with the same engine as the API."""
    _init_database()
    filters = SearchFilters.build(
        skills=args.skill,
        availability=args.availability,
        university=args.university,
        year=args.year,
        search_term=args.search,
    )
    with db.session() as session:
        page = ProfileLifecycleService(session).search(filters, PageRequest.validated(args.page, args.limit))
        profiles = page.map(serialize_public_profile)

    print(format_output(profiles.items, args.format, verbose=args.verbose))
    print(f"Page {page.page}/{page.total_pages} ({page.total} matching)")


def cmd_cache_status(args):
    """Show cache status and health."""
    cache.initialize()
    health = cache.health_check()
    print(f"Redis Available: {health.get('available', False)}")
    print(f"Status: {health.get('status', 'unknown')}")


def cmd_cache_clear(args):
    """Drop every cached catalog listing."""
    cache.initialize()
    deleted = cache.delete_pattern(CacheKeys.catalog_pattern())
    print(f"Cleared {deleted} catalog cache entries")


def main(argv: list[str] | None = None):
    """Main entry point with CLI interface."""
    parser = argparse.ArgumentParser(description="SkillShare administration")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create database tables")
    subparsers.add_parser("seed-catalog", help="Seed the default skill catalog")
    subparsers.add_parser("check-config", help="Validate configuration")

    list_parser = subparsers.add_parser("list-profiles", help="Search profiles")
    list_parser.add_argument("--skill", action="append", help="Required skill (repeatable)")
    list_parser.add_argument("--availability", action="append", help="Availability (repeatable)")
    list_parser.add_argument("--university", help="University substring")
    list_parser.add_argument("--year", help="Exact year")
    list_parser.add_argument("--search", help="Free-text search term")
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--limit", type=int, default=20)
    list_parser.add_argument("--format", choices=["text", "json", "table"], default="text")
    list_parser.add_argument("--verbose", "-v", action="store_true")

    subparsers.add_parser("cache-status", help="Show cache status")
    subparsers.add_parser("cache-clear", help="Clear catalog cache")

    args = parser.parse_args(argv)
    configure_logging()

    commands = {
        "init-db": cmd_init_db,
        "seed-catalog": cmd_seed_catalog,
        "check-config": cmd_check_config,
        "list-profiles": cmd_list_profiles,
        "cache-status": cmd_cache_status,
        "cache-clear": cmd_cache_clear,
    }

    if args.command not in commands:
        parser.print_help()
        return

    try:
        commands[args.command](args)
    except SkillShareError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
