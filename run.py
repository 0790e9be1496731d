#!/usr/bin/env python3
""" JArchive Scraper entry points.

This module contains the CLI to import games from j-archive. Games are saved as JSON files, one "game-<id>.json" per
game plus an "index.json" listing all of them, under the --out directory (default "data/jeopardy").

    What to scrape (defaults to every season, newest first):

    --season <season integer>: Season to start listing games from. If not specified, the scraper begins with the most
        current season and walks back until all games have been scraped.

    --single-season: Only scrape the games of the starting season.

    --games <id> [<id> ...]: Scrape the given j-archive game ids instead of listing seasons.

    --from <id> --to <id>: Scrape an inclusive range of j-archive game ids.

    Examples:

        $python3 run.py

            Scraper will scrape all j-archive games into data/jeopardy/.

        $python3 run.py --season 35 --single-season --out season35

            Scraper will scrape only season 35 games, and save them to season35/.

        $python3 run.py --games 6333 6334 --overwrite

            Scraper will re-scrape games 6333 and 6334, replacing any saved copies.

"""
import argparse
import logging
import sys
from jarchive import JArchiveScraper, JsonGameStore
from jarchive.config import DEFAULT_OUTPUT_DIR, MAX_THREADS, REQUEST_DELAY, REQUEST_TIMEOUT
from jarchive.exceptions import StorageError


def arg_positive_int(value):
    """argparse helper to validate season numbers, game ids and counts passed via command line.
    """

    if not value.isdigit():
        raise argparse.ArgumentTypeError("{} must be a positive integer".format(value))
    val = int(value)
    if val <= 0:
        raise argparse.ArgumentTypeError("{} must be greater than zero".format(value))
    return val


def arg_non_negative_float(value):
    try:
        val = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("{} must be a number".format(value))
    if val < 0:
        raise argparse.ArgumentTypeError("{} must not be negative".format(value))
    return val


def build_parser():
    parser = argparse.ArgumentParser(description="Scrape j-archive games into JSON files.")
    parser.add_argument("--season", type=arg_positive_int, nargs="?", help="Season to start scraping games from.")
    parser.add_argument("--single-season", help="Scrape only a single season.", action="store_true")
    parser.add_argument("--games", type=arg_positive_int, nargs="+", metavar="ID", help="j-archive game ids to scrape.")
    parser.add_argument("--from", dest="from_id", type=arg_positive_int, metavar="ID", help="First game id of a range.")
    parser.add_argument("--to", dest="to_id", type=arg_positive_int, metavar="ID", help="Last game id of a range.")
    parser.add_argument("--out", type=str, default=DEFAULT_OUTPUT_DIR, help="Directory to save game files to.")
    parser.add_argument("--workers", type=arg_positive_int, default=MAX_THREADS, help="Number of worker threads.")
    parser.add_argument("--delay", type=arg_non_negative_float, default=REQUEST_DELAY,
                        help="Seconds each worker waits after a request.")
    parser.add_argument("--timeout", type=arg_non_negative_float, default=REQUEST_TIMEOUT,
                        help="Request timeout in seconds.")
    parser.add_argument("--overwrite", help="Re-scrape games that are already saved.", action="store_true")
    parser.add_argument("--verbose", "-v", help="Log debug messages.", action="store_true")
    parser.add_argument("--log-file", type=str, help="Write log messages to this file instead of stderr.")
    return parser


def resolve_game_ids(parser, args):
    """Returns the explicit game ids requested on the command line, or None to list seasons instead."""

    if (args.from_id is None) != (args.to_id is None):
        parser.error("--from and --to must be given together")
    game_ids = list(args.games or [])
    if args.from_id is not None:
        if args.from_id > args.to_id:
            parser.error("--from must not be greater than --to")
        game_ids.extend(range(args.from_id, args.to_id + 1))
    return game_ids or None


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    game_ids = resolve_game_ids(parser, args)

    logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(asctime)s %(levelname)s [%(threadName)s] %(message)s",
            filename=args.log_file)

    store = JsonGameStore(args.out)
    scraper = JArchiveScraper(store, args.season, get_single_season=args.single_season, game_ids=game_ids,
                              max_workers=args.workers, request_delay=args.delay, timeout=args.timeout or None,
                              overwrite=args.overwrite)
    try:
        scraper.start()
    except StorageError:
        logging.exception("Unable to open game store")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
