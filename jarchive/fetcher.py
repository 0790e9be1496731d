import bs4
import logging
import requests
from .config import BASE_URL, GAME_URL, REQUEST_HEADERS, SHOW_LIST_URL
from .exceptions import GameParseError
from .parser import parse_current_season, parse_game_page, parse_show_list

"""Entry points that request j-archive pages and hand them to the parser.

Each call makes exactly one GET request and keeps no state between calls, so they are safe to use from any number of
worker threads. Expected failures (network errors, error statuses, unusable pages) never raise; they are logged and
reported through the return value. Callers own timeouts, retries and throttling: pass a timeout, or a
requests.Session with whatever adapters the caller wants mounted.
"""


def get_page_soup(url, params=None, timeout=None, session=None):
    """
    Raises:
        requests.exceptions.RequestException: On connection errors, timeouts and non-success statuses.
    """

    http = session if session is not None else requests
    response = http.get(url, params=params, headers=REQUEST_HEADERS, timeout=timeout)
    response.raise_for_status()
    return bs4.BeautifulSoup(response.text, "html.parser")


def fetch_show_list(page, timeout=None, session=None):
    """Lists the games on one page of the season listing.

    Args:
        page: Positive season page number.
        timeout: Optional request timeout in seconds, passed to requests.
        session: Optional requests.Session to send the request through.

    Returns:
        List of models.GameListEntry in page order. Empty when the page has no game links or could not be fetched.
    """

    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValueError("Listing page must be a positive integer, got {!r}".format(page))
    try:
        page_soup = get_page_soup(SHOW_LIST_URL, params={"season": page}, timeout=timeout, session=session)
    except requests.exceptions.RequestException:
        logging.exception("Exception getting listing page {}".format(page))
        return []

    entries = parse_show_list(page_soup)
    logging.info("Found {} games on listing page {}".format(len(entries), page))
    return entries


def fetch_game(source_game_id, timeout=None, session=None):
    """Scrapes a single game.

    Args:
        source_game_id: j-archive game id, the "game_id" query parameter of the game page.
        timeout: Optional request timeout in seconds, passed to requests.
        session: Optional requests.Session to send the request through.

    Returns:
        models.GameData, or None if the page could not be fetched or has no show number.
    """

    logging.info("Scraping game {}".format(source_game_id))
    try:
        page_soup = get_page_soup(GAME_URL, params={"game_id": source_game_id}, timeout=timeout, session=session)
    except requests.exceptions.RequestException:
        logging.exception("Exception scraping j-archive game {}".format(source_game_id))
        return None

    try:
        return parse_game_page(page_soup, source_game_id)
    except GameParseError as e:
        logging.warning("Unable to parse game {}: {}".format(source_game_id, e))
        return None


def fetch_current_season(timeout=None, session=None):
    """Returns the number of the newest season linked from the j-archive home page, or None."""

    try:
        page_soup = get_page_soup(BASE_URL, timeout=timeout, session=session)
    except requests.exceptions.RequestException:
        logging.exception("Exception getting current season number")
        return None

    season = parse_current_season(page_soup)
    if season is None:
        logging.info("Unable to parse current season from home page.")
    return season
