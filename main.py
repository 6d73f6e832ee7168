"""CLI entry point for content search."""

import argparse
import sys

from content_search.errors import ContentSearchError
from content_search.formatting.json_writer import JSONWriter
from content_search.processors.config import SamplingConfig, SamplingConfigHolder
from content_search.processors.registry import FILES, RANDOM_CONTENT, build_default_registry
from content_search.search.models import ITEMS_OPTION, PAGE_OPTION, Query, SearchRequest, Session
from content_search.search.service import SearchService
from content_search.search.solr_backend import SolrSearchBackend
from content_search.storage.redis_repository import RedisRepository
from content_search.utils.config import settings
from content_search.utils.logger import get_logger

log = get_logger(__name__)


def option_pair(pair: str) -> tuple[str, str]:
    """argparse type for ``key=value`` backend options."""
    name, sep, value = pair.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
    return name, value


def run_search(args: argparse.Namespace) -> int:
    """Run a single search and print the JSON page to stdout."""
    options = dict(args.option)
    options[ITEMS_OPTION] = str(args.items)
    options[PAGE_OPTION] = str(args.page)
    query = Query(text=args.terms, options=options)
    request = SearchRequest(
        session=Session(user_id=args.user, is_admin=args.admin),
        params={ITEMS_OPTION: str(args.items)},
        attributes={"depth": args.depth},
    )

    backend = SolrSearchBackend()
    try:
        config = SamplingConfigHolder(
            SamplingConfig(
                amplification_factor=(
                    args.amplification
                    if args.amplification is not None
                    else settings.sampling_amplification_factor
                ),
                max_fetch_size=(
                    args.max_fetch if args.max_fetch is not None else settings.sampling_max_fetch_size
                ),
            )
        )
        registry = build_default_registry(backend, RedisRepository(), config, seed=args.seed)
        SearchService(registry).search(request, query, args.processor, JSONWriter(sys.stdout))
    except ContentSearchError as exc:
        sys.stdout.write("\n")
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        backend.close()
    sys.stdout.write("\n")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Content search")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable DEBUG logging")
    sub = parser.add_subparsers(dest="command")

    search = sub.add_parser("search", help="Run one search and print the result page")
    search.add_argument("terms", nargs="?", default="", help="Free-text terms")
    search.add_argument("--processor", "-p", choices=[FILES, RANDOM_CONTENT], default=FILES)
    search.add_argument("--items", type=int, default=settings.default_page_size)
    search.add_argument("--page", type=int, default=0)
    search.add_argument("--depth", type=int, default=0)
    search.add_argument("--user", default="anonymous")
    search.add_argument("--admin", action="store_true")
    search.add_argument("--amplification", type=int, default=None)
    search.add_argument("--max-fetch", type=int, default=None)
    search.add_argument("--seed", type=int, default=None)
    search.add_argument("--option", "-o", action="append", default=[],
                        type=option_pair,
                        help="Extra backend option as key=value (repeatable)")
    args = parser.parse_args()

    if args.verbose:
        import logging
        logging.getLogger().setLevel(logging.DEBUG)
        for name in list(logging.Logger.manager.loggerDict):
            if name.startswith("content_search"):
                logging.getLogger(name).setLevel(logging.DEBUG)

    if args.command == "search":
        sys.exit(run_search(args))
    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
