"""
CLI command entry points for firm_research.

These functions are registered as console scripts in pyproject.toml.
"""

import argparse
import sys


def run_research():
    """Entry point for research-firm command."""
    from firm_research.cli.research import main

    sys.exit(main())


def run_cache(argv: list[str] | None = None):
    """Entry point for research-cache command."""
    from firm_research.cache import get_cache
    from firm_research.config import get_settings

    parser = argparse.ArgumentParser(description="Manage the lookup cache")
    parser.add_argument("command", choices=["stats", "clear"])
    parser.add_argument("namespace", nargs="?", help="Namespace to clear (places, geocode)")
    parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    args = parser.parse_args(argv)

    cache = get_cache(get_settings().cache_dir)

    if args.command == "stats":
        stats = cache.stats()
        print(f"Cache: {stats['cache_dir']}")
        print(f"  Total entries: {stats['total']}")
        print(f"  Size: {stats['size_mb']} MB")
        print("  By namespace:")
        for ns, count in sorted(stats["by_namespace"].items()):
            print(f"    {ns}: {count}")

    elif args.command == "clear":
        if not args.namespace:
            print("Specify a namespace to clear (places, geocode)")
            return
        if not args.yes:
            confirm = input(f"Clear all {args.namespace} entries? [y/N] ")
            if confirm.lower() != "y":
                print("Aborted")
                return
        count = cache.clear_namespace(args.namespace)
        print(f"Cleared {count} entries from {args.namespace}")
