import re
from . import config
from .config import CONTESTANT_COUNT
from .models import ClueClassification, Round

"""Pure functions deriving clue flags and identifiers from the raw fields the parser reads off the board."""


def make_clue_id(source_game_id, round_, category_position, clue_index):
    """Stable clue identifier, e.g. "g8000-s-c2-r3" (game 8000, single round, column 2, row 3).

    Built only from board coordinates so that re-scraping a game yields the same ids.
    """

    return "g{}-{}-c{}-r{}".format(source_game_id, Round(round_).value[0], category_position, clue_index)


def parse_clue_value(value_text, round_):
    if Round(round_) is Round.FINAL or not value_text:
        return None
    digits = re.sub(r'''[^0-9]''', '', value_text)
    if not digits:
        return None
    return int(digits)


def is_daily_double(value_classes, value_text, round_, marker_classes=None, marker_prefixes=None):
    """A daily double's value is the contestant's wager, so it is recognised by its marker, never by amount.

    Markers default to the lists in config, read on every call so that extending them takes effect immediately.
    """

    if Round(round_) is Round.FINAL:
        return False
    if marker_classes is None:
        marker_classes = config.DAILY_DOUBLE_VALUE_CLASSES
    if marker_prefixes is None:
        marker_prefixes = config.DAILY_DOUBLE_VALUE_PREFIXES
    if any(css_class in marker_classes for css_class in value_classes or ()):
        return True
    text = (value_text or "").strip().upper()
    return any(text.startswith(prefix.upper()) for prefix in marker_prefixes)


def is_triple_stumper(wrong_count, right_count=0, stumper_label=False):
    """True when no contestant gave the correct response.

    Either every contestant has a wrong marker, or the page carries its explicit "Triple Stumper" label
    (used when nobody buzzed in). Any right marker rules it out.
    """

    if right_count:
        return False
    return stumper_label or wrong_count == CONTESTANT_COUNT


def classify_clue(source_game_id, round_, category_position, clue_index,
                  value_classes=(), value_text="", wrong_count=0, right_count=0, stumper_label=False,
                  marker_classes=None, marker_prefixes=None):
    round_ = Round(round_)
    return ClueClassification(
            clue_id=make_clue_id(source_game_id, round_, category_position, clue_index),
            value=parse_clue_value(value_text, round_),
            daily_double=is_daily_double(value_classes, value_text, round_, marker_classes, marker_prefixes),
            triple_stumper=is_triple_stumper(wrong_count, right_count, stumper_label),
            is_final_jeopardy=round_ is Round.FINAL,
            )
