"""
CLI script to index directories and query the file index.

Usage:
    python scripts/run_indexer.py --index /path/to/docs
    python scripts/run_indexer.py --search-name report
    python scripts/run_indexer.py --search-content invoice
    python scripts/run_indexer.py --search-path docs/2024
    python scripts/run_indexer.py --details docs/2024/report.txt
    python scripts/run_indexer.py --stats
    python scripts/run_indexer.py --clear
    python scripts/run_indexer.py --config path/to/config.json --stats
"""

import argparse
import sys
from pathlib import Path
from typing import List

sys.path.insert(0, str(Path(__file__).parent.parent))

from file_indexer.context import build_context  # noqa: E402
from file_indexer.core import (  # noqa: E402
    FileEntry,
    configure_logging,
    get_config,
    get_logger,
    reload_config,
    ConfigurationError,
    FileIndexerError,
    ValidationError
)
from file_indexer.utils import format_file_size, truncate_text  # noqa: E402


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Index files by word frequency and search the index"
    )

    parser.add_argument("--index", metavar="PATH", help="Index every supported file under PATH")
    parser.add_argument("--search-name", metavar="Q", help="Find files whose name contains Q")
    parser.add_argument("--search-content", metavar="Q", help="Find files containing words matching Q")
    parser.add_argument("--search-path", metavar="Q", help="Find files whose path contains Q")
    parser.add_argument("--details", metavar="Q", help="Show word counts of a file by path or name")
    parser.add_argument("--clear", action="store_true", help="Delete all indexed data")
    parser.add_argument("--stats", action="store_true", help="Show index statistics")
    parser.add_argument("--config", type=str, help="Path to custom config.json file")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")

    return parser.parse_args()


def progress_callback(current: int, filename: str) -> None:
    """Print progress to console."""
    print(f"\r[{current:>7,}] {truncate_text(filename, 50):<50}", end="", flush=True)


def print_entries(entries: List[FileEntry], show_relevance: bool = False) -> None:
    if not entries:
        print("No results.")
        return

    for entry in entries:
        line = f"  {entry.path}  ({format_file_size(entry.size)}, {entry.formatted_last_modified})"
        if show_relevance and entry.relevance is not None:
            line += f"  matches: {entry.relevance}"
        print(line)

    print(f"\n{len(entries)} result(s)")


def print_details(entries: List[FileEntry]) -> None:
    if not entries:
        print("No indexed file matches.")
        return

    for entry in entries:
        print("=" * 60)
        print(f"Path:          {entry.path}")
        print(f"Size:          {format_file_size(entry.size)}")
        print(f"Modified:      {entry.formatted_last_modified}")
        print(f"Extension:     {entry.extension or '-'}")
        print(f"Total words:   {entry.total_words:,}")
        print(f"Unique words:  {entry.unique_words:,}")

        top = entry.top_words(20)
        if top:
            print("Top words:")
            for word, count in top:
                print(f"  {word:<30} {count:>8,}")

    print("=" * 60)


def run_index(ctx, directory: str, quiet: bool) -> int:
    if not quiet:
        ctx.walker.progress_callback = progress_callback

    print(f"\nIndexing {directory}...\n")
    stats = ctx.builder.index_directory(directory)

    if not quiet:
        print("\n")

    print("=" * 60)
    print("Indexing Complete")
    print("=" * 60)
    print(f"Files scanned:     {stats.files_scanned:,}")
    print(f"Files indexed:     {stats.files_indexed:,}")
    print(f"Files skipped:     {stats.files_skipped:,}")
    print(f"Files failed:      {stats.files_failed:,}")
    print(f"Dirs unreadable:   {stats.directories_failed:,}")
    print(f"Without content:   {stats.files_without_content:,}")
    print(f"Content rows:      {stats.content_rows:,}")
    print(f"Total words:       {stats.total_words:,}")
    print(f"Elapsed:           {stats.elapsed_seconds:.1f}s")
    print("=" * 60)

    if stats.errors:
        print(f"\nErrors ({len(stats.errors)}):")
        for error in stats.errors[:20]:
            print(f"  - {error}")
        if len(stats.errors) > 20:
            print(f"  ... and {len(stats.errors) - 20} more errors")

    return 1 if stats.files_failed or stats.directories_failed else 0


def main():
    """Main entry point for the indexer CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    if args.config:
        configure_logging(config)

    logger = get_logger(__name__)

    actions = [
        args.index, args.search_name, args.search_content,
        args.search_path, args.details, args.clear, args.stats
    ]
    if not any(actions):
        print("Nothing to do. Use --help to see available actions.")
        sys.exit(2)

    exit_code = 0

    try:
        with build_context(config) as ctx:
            if args.clear:
                response = input("This will DELETE all existing index data. Continue? [y/N] ")
                if response.lower() != "y":
                    print("Aborted.")
                    sys.exit(0)
                ctx.search.clear_index()
                print("Index cleared.")

            if args.index:
                exit_code = run_index(ctx, args.index, args.quiet)

            if args.search_name:
                print_entries(ctx.search.search_by_name(args.search_name))

            if args.search_content:
                print_entries(ctx.search.search_by_content(args.search_content), show_relevance=True)

            if args.search_path:
                print_entries(ctx.search.search_by_partial_path(args.search_path))

            if args.details:
                print_details(ctx.search.find_file_details(args.details))

            if args.stats:
                stats = ctx.search.get_statistics()
                print("=" * 60)
                print(f"Database:          {stats['database_path']}")
                print(f"Indexed files:     {stats['total_files']:,}")
                print(f"Total size:        {format_file_size(stats['total_size_bytes'])}")
                print(f"Content rows:      {stats['content_rows']:,}")
                print(f"Distinct words:    {stats['distinct_words']:,}")
                print(f"Last indexed:      {stats['last_indexed'] or '-'}")
                print("=" * 60)

    except ValidationError as e:
        print(f"Invalid input: {e}")
        sys.exit(2)
    except FileIndexerError as e:
        logger.error(f"Command failed: {e.message}")
        print(f"Error: {e.message}")
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
