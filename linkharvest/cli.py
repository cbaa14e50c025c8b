"""
Command-line interface: run one crawl and print the matching links as JSON.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from linkharvest.container import Container
from linkharvest.domain.crawl_result import HarvestResult
from linkharvest.exceptions import InvalidSeedUrlError


def print_summary(result: HarvestResult) -> None:
    """Print crawl summary to stderr."""
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"Seed:               {result.seed}\n")
    sys.stderr.write(f"Pages fetched:      {result.pages_fetched}\n")
    sys.stderr.write(f"Links discovered:   {result.discovered_count}\n")
    sys.stderr.write(f"Links matching:     {len(result.links)}\n")
    if result.stopped:
        sys.stderr.write("Crawl stopped early by a limit.\n")

    if result.skipped:
        sys.stderr.write(f"\nSkipped ({len(result.skipped)}):\n")
        for skipped in result.skipped:
            sys.stderr.write(f"  [{skipped.stage}] {skipped.url}: {skipped.reason}\n")
    else:
        sys.stderr.write("No errors encountered.\n")

    sys.stderr.write("\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkharvest",
        description="Crawl a site from a seed URL and list the links matching the given file extensions.",
    )
    parser.add_argument("url", help="Seed URL (e.g. https://example.com/)")
    parser.add_argument("extensions", help="Comma-separated extensions, e.g. '.jpg,.png' (not trimmed)")
    parser.add_argument("--max-pages", type=int, help="Stop after this many fetches")
    parser.add_argument("--max-depth", type=int, help="Do not follow links deeper than this (seed is depth 0)")
    parser.add_argument("--deadline", type=float, help="Stop after this many seconds")
    parser.add_argument("--workers", type=int, help="Number of concurrent fetch workers")
    parser.add_argument("--same-host", action="store_true", help="Only follow links on the seed's host")
    parser.add_argument("--insecure", action="store_true", help="Do not verify TLS certificates")
    parser.add_argument("--out", help="Write JSON to this file instead of stdout")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    parser.add_argument("--verbose", action="store_true", help="Log progress and print a summary")
    return parser


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None) -> int:
    """Main entry point for the linkharvest CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if container is None:
        container = Container()
    if args.workers is not None:
        container.config.LINKHARVEST_WORKERS.from_value(args.workers)
    if args.same_host:
        container.config.LINKHARVEST_SAME_HOST.from_value(True)
    if args.insecure:
        container.config.LINKHARVEST_VERIFY_TLS.from_value(False)

    try:
        crawl_service = container.crawl_service()
        limits = crawl_service.crawl_engine.limits.override(
            max_pages=args.max_pages,
            max_depth=args.max_depth,
            deadline_seconds=args.deadline,
        )
        result = crawl_service.crawl(args.url, args.extensions, limits=limits)
    except InvalidSeedUrlError as e:
        sys.stderr.write(f"Invalid URL: {e}\n")
        return 2
    except ValueError as e:
        sys.stderr.write(f"{e}\n")
        return 2

    if args.verbose:
        print_summary(result)

    json_text = json.dumps(result.to_dict(), ensure_ascii=False, indent=2 if args.pretty else None)
    if args.out:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_text, encoding="utf-8")
        if args.verbose:
            sys.stderr.write(f"Results written to: {output_path}\n")
    else:
        print(json_text)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
