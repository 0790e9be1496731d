import re
from datetime import date, datetime
from .config import SPECIAL_EPISODE_VOCABULARY

"""Pure helpers that read episode metadata (show number, air date, season, special status) from text."""


SHOW_NUMBER_REGEX = re.compile(r'''show\s*#\s*(\d+)''', re.IGNORECASE)
LEADING_SHOW_NUMBER_REGEX = re.compile(r'''^\s*#\s*(\d+)''')
"""Titles read "Show #8000 - ...", while season listings only show "#8000, aired ..."."""

LONG_DATE_REGEX = re.compile(
    r'''(January|February|March|April|May|June|July|August|September|October|November|December)\s+(\d{1,2}),\s*(\d{4})''',
    re.IGNORECASE)
ISO_DATE_REGEX = re.compile(r'''(\d{4})-(\d{2})-(\d{2})''')
SEASON_HREF_REGEX = re.compile(r'''(?:showseason|showindex)\.php\?season=([^&"'\s]+)''')


def parse_show_number(text):
    if not text:
        return None
    match = SHOW_NUMBER_REGEX.search(text) or LEADING_SHOW_NUMBER_REGEX.search(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_air_date(text):
    """Returns the first "Month D, YYYY" or "YYYY-MM-DD" date found in text, or None.

    Tokens that look like dates but are not valid calendar days (e.g. 2019-02-30) are ignored.
    """

    if not text:
        return None
    match = LONG_DATE_REGEX.search(text)
    if match:
        try:
            return datetime.strptime(" ".join(match.groups()), "%B %d %Y").date()
        except ValueError:
            pass
    match = ISO_DATE_REGEX.search(text)
    if match:
        try:
            return date(*(int(part) for part in match.groups()))
        except ValueError:
            pass
    return None


def parse_season(href):
    """Season number from a season index link, e.g. "showseason.php?season=35".

    Some seasons are keyed by name ("trebekpilots", "superjeopardy"); those have no number and give None.
    """

    if not href:
        return None
    match = SEASON_HREF_REGEX.search(href)
    if match is None or not match.group(1).isdigit():
        return None
    return int(match.group(1))


def classify_episode(title, vocabulary=SPECIAL_EPISODE_VOCABULARY):
    """Decides whether a show is a tournament or special event from its title.

    Args:
        title: Raw title text, e.g. "Tournament of Champions Show #8001 - aired May 15, 2024".
        vocabulary: Ordered (phrase, label) pairs. The first phrase found in the title decides the label.

    Returns:
        (is_special, tournament_type) tuple. tournament_type is the matched phrase's label, or None for
        regular games.
    """

    for phrase, label in vocabulary:
        if re.search(r'''\b{}\b'''.format(re.escape(phrase)), title or "", re.IGNORECASE):
            return True, label
    return False, None
