import bs4
import logging
import re
from . import clues, config, episodes
from .config import BOARD_COLUMNS, TRIPLE_STUMPER_LABEL
from .exceptions import ShowNumberNotFoundError
from .models import CategoryData, ClueData, GameData, GameListEntry, Round

"""This module contains functions to parse season listings and game boards from j-archive HTML.
"""


GAME_HREF_REGEX = re.compile(r'''showgame\.php\?game_id=(\d+)''')
CLUE_POSITION_REGEX = re.compile(r'''^clue_(?:J|DJ)_(\d+)_(\d+)$''')
"""
Clue prompts carry their board coordinates in their id, e.g. "clue_J_3_2" is column 3, row 2 of the first round.
Unrevealed clues have no prompt at all, so these coordinates are preferred over counting cells whenever present.
"""

ROUND_CONTAINER_IDS = [
    (Round.SINGLE, "jeopardy_round"),
    (Round.DOUBLE, "double_jeopardy_round"),
    (Round.FINAL, "final_jeopardy_round"),
]


def _clean_text(string):
    return " ".join(string.split())


def _node_text(node):
    if node is None:
        return ""
    return _clean_text(node.get_text())


def _remove_backslashes(string):
    return re.sub(r'''\\''', '', string)


def parse_show_list(page_soup):
    """
    Returns:
        List of models.GameListEntry, one for every game link on a season listing page, in document order.
        Links whose text has no show number are skipped. An empty list means nothing could be found.
    """

    entries = []
    for anchor in page_soup.find_all("a", href=GAME_HREF_REGEX):
        source_game_id = int(GAME_HREF_REGEX.search(anchor["href"]).group(1))
        text = _node_text(anchor)
        show_number = episodes.parse_show_number(text)
        if show_number is None:
            logging.debug("No show number in link text {!r} for game {}".format(text, source_game_id))
            continue
        entries.append(GameListEntry(source_game_id, show_number, episodes.parse_air_date(text)))
    return entries


def parse_current_season(page_soup):
    scope = page_soup.find("table", class_="fullpageheight") or page_soup
    return _find_season(scope)


def _find_season(scope):
    for anchor in scope.find_all("a", href=episodes.SEASON_HREF_REGEX):
        season = episodes.parse_season(anchor["href"])
        if season is not None:
            return season
    return None


def parse_game_page(page_soup, source_game_id, marker_classes=None, marker_prefixes=None):
    """
    Builds models.GameData from a game page. Rounds, categories and clues that are missing from the page are
    simply left out or filled with empty placeholders; only the show number is mandatory.

    marker_classes and marker_prefixes override the daily double markers from config for this page only.

    Raises:
        ShowNumberNotFoundError: If neither the game title nor the document title contain a show number.
    """

    titles = _get_title_texts(page_soup)
    show_number = _first_parsed(episodes.parse_show_number, titles)
    if show_number is None:
        raise ShowNumberNotFoundError("No show number found on page of game {}".format(source_game_id))
    is_special, tournament_type = episodes.classify_episode(" ".join(titles))

    markers = (
            config.DAILY_DOUBLE_VALUE_CLASSES if marker_classes is None else marker_classes,
            config.DAILY_DOUBLE_VALUE_PREFIXES if marker_prefixes is None else marker_prefixes)
    categories = []
    for round_, round_soup in _get_jeopardy_rounds(page_soup):
        if round_ is Round.FINAL:
            categories.extend(_serialize_final_round(round_soup, source_game_id, markers))
        else:
            categories.extend(_serialize_jeopardy_round(round_soup, round_, source_game_id, markers))

    game = GameData(
            source_game_id=source_game_id,
            show_number=show_number,
            air_date=_first_parsed(episodes.parse_air_date, titles),
            season=_find_season(page_soup),
            is_special=is_special,
            tournament_type=tournament_type,
            categories=tuple(categories),
            )
    logging.debug("Parsed show #{} (game {}): {} categories".format(show_number, source_game_id, len(categories)))
    return game


def _get_title_texts(page_soup):
    texts = [_node_text(page_soup.find(id="game_title")), _node_text(page_soup.find("title"))]
    return [text for text in texts if text]


def _first_parsed(parse, texts):
    for text in texts:
        value = parse(text)
        if value is not None:
            return value
    return None


def _get_jeopardy_rounds(page_soup):
    rounds = []
    for round_, container_id in ROUND_CONTAINER_IDS:
        round_soup = page_soup.find(id=container_id)
        if round_soup is not None:
            rounds.append((round_, round_soup))
    return rounds


def _get_round_categories(round_soup):
    return [_node_text(node) for node in round_soup.find_all("td", class_="category_name")]


def _get_round_clue_nodes(round_soup):
    return round_soup.find_all("td", class_="clue")


def _get_prompt_node(clue_node):
    for node in clue_node.find_all("td", class_="clue_text"):
        if not node.get("id", "").endswith("_r"):
            return node
    return None


def _get_clue_position(clue_node):
    """Returns zero-based (column, row) read from the prompt id, or None if the clue has no usable id.

    Coordinates start at 1; an id with a 0 in it is treated as having no coordinates.
    """

    prompt_node = _get_prompt_node(clue_node)
    if prompt_node is None:
        return None
    match = CLUE_POSITION_REGEX.match(prompt_node.get("id", ""))
    if match is None:
        return None
    column, row = int(match.group(1)), int(match.group(2))
    if column < 1 or row < 1:
        return None
    return column - 1, row - 1


def _serialize_jeopardy_round(round_soup, round_, source_game_id, markers):
    """
    Returns:
        List of models.CategoryData for a single or double round, left to right.

    The category list is padded with unnamed categories when the page has fewer headers than clue columns, so that
    no clue is dropped or attached to the wrong column. Clues without coordinates in their markup are placed by
    their ordinal, since cells are laid out row by row.
    """

    names = _get_round_categories(round_soup)
    clue_nodes = _get_round_clue_nodes(round_soup)
    positions = [_get_clue_position(node) for node in clue_nodes]

    columns = max([len(names)] + [position[0] + 1 for position in positions if position])
    if clue_nodes and not columns:
        columns = BOARD_COLUMNS
    if columns > len(names):
        logging.debug("Game {} {} round: {} category headers for {} columns".format(
            source_game_id, round_.value, len(names), columns))
        names = names + [""] * (columns - len(names))

    column_clues = [[] for _ in names]
    for (index, (clue_node, position)) in enumerate(zip(clue_nodes, positions)):
        column, row = position or (index % columns, index // columns)
        column_clues[column].append(
                _serialize_clue_node(clue_node, round_, names[column], column, row, source_game_id, markers))

    return [CategoryData(name, round_, position, tuple(sorted(column_clues[position], key=lambda c: c.row_index)))
            for (position, name) in enumerate(names)]


def _serialize_final_round(round_soup, source_game_id, markers):
    """Final round markup holds one table per clue; tie-breaker games add a second one."""

    categories = []
    tables = round_soup.find_all("table", class_="final_round") or [round_soup]
    for table in tables:
        name = _node_text(table.find("td", class_="category_name"))
        clue_node = table.find("td", class_="clue")
        if clue_node is None and table.find("td", class_="clue_text") is not None:
            clue_node = table
        if not name and clue_node is None:
            continue
        position = len(categories)
        final_clues = ()
        if clue_node is not None:
            final_clues = (_serialize_clue_node(clue_node, Round.FINAL, name, position, 0, source_game_id, markers,
                    response_node=table),)
        categories.append(CategoryData(name, Round.FINAL, position, final_clues))
    return categories


def _get_response_soup(clue_node):
    """Returns the markup holding the correct response and the contestants' right/wrong markers.

    Current pages render it inline in a hidden cell. Older pages write it from an inline JavaScript handler when a
    user hovers over the clue, so there it is parsed out of the "onmouseover" attribute string.
    """

    if clue_node.find("em", class_="correct_response") is not None:
        return clue_node
    toggle_node = clue_node.find(attrs={"onmouseover": True})
    if toggle_node is None:
        return clue_node
    return bs4.BeautifulSoup(_remove_backslashes(toggle_node["onmouseover"]), "html.parser")


def _parse_clue_answer(response_soup):
    return _node_text(response_soup.find("em", class_="correct_response"))


def _count_responses(response_soup):
    wrong_nodes = response_soup.find_all("td", class_="wrong")
    labels = [node for node in wrong_nodes if _node_text(node).lower() == TRIPLE_STUMPER_LABEL]
    right_count = len(response_soup.find_all("td", class_="right"))
    return len(wrong_nodes) - len(labels), right_count, bool(labels)


def _serialize_clue_node(clue_node, round_, category_name, category_position, clue_index, source_game_id, markers,
                         response_node=None):
    """Returns models.ClueData for one clue cell. Missing text is left empty and a missing value is None.

    markers is the (classes, prefixes) pair that tells a daily double value cell apart from a regular one.
    response_node widens the search for the correct response beyond the clue cell. Older final rounds hang the
    hover handler off the category header rather than the clue.
    """

    marker_classes, marker_prefixes = markers
    value_node = clue_node.find("td", class_=["clue_value"] + list(marker_classes))
    value_classes = value_node.get("class", []) if value_node is not None else []
    value_text = _node_text(value_node)
    response_soup = _get_response_soup(clue_node if response_node is None else response_node)
    wrong_count, right_count, stumper_label = _count_responses(response_soup)

    flags = clues.classify_clue(source_game_id, round_, category_position, clue_index,
            value_classes=value_classes,
            value_text=value_text,
            wrong_count=wrong_count,
            right_count=right_count,
            stumper_label=stumper_label,
            marker_classes=marker_classes,
            marker_prefixes=marker_prefixes)

    question = _node_text(_get_prompt_node(clue_node))
    if not question:
        logging.debug("Clue {} has no text".format(flags.clue_id))

    return ClueData(
            clue_id=flags.clue_id,
            question=question,
            answer=_parse_clue_answer(response_soup),
            value=flags.value,
            daily_double=flags.daily_double,
            triple_stumper=flags.triple_stumper,
            is_final_jeopardy=flags.is_final_jeopardy,
            category=category_name,
            round=round_,
            row_index=clue_index,
            )
