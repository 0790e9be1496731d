"""Settings shared by the fetchers, the parser and the batch importer."""

BASE_URL = "https://j-archive.com"
SHOW_LIST_URL = "{}/showseason.php".format(BASE_URL)
GAME_URL = "{}/showgame.php".format(BASE_URL)

REQUEST_HEADERS = {"User-Agent": "jarchive-scraper/1.0 (educational use)"}

# Batch importer defaults. The fetch functions themselves take no timeout unless given one.
REQUEST_TIMEOUT = 10
REQUEST_DELAY = 0.5
MAX_THREADS = 8
DEFAULT_OUTPUT_DIR = "data/jeopardy"

BOARD_COLUMNS = 6
CONTESTANT_COUNT = 3
TRIPLE_STUMPER_LABEL = "triple stumper"

DAILY_DOUBLE_VALUE_CLASSES = ["clue_value_daily_double"]
DAILY_DOUBLE_VALUE_PREFIXES = ["DD:"]
"""
Markers that set a daily double value token apart from a regular one. Older pages only use the
class, newer ones also prefix the wager with "DD:". Extend these lists when the markup changes.
"""

SPECIAL_EPISODE_VOCABULARY = [
    ("tournament of champions", "Tournament of Champions"),
    ("battle of the decades", "Battle of the Decades"),
    ("million dollar", "Million Dollar Masters"),
    ("power players", "Power Players Week"),
    ("back to school", "Back to School Week"),
    ("all-star", "All-Star Games"),
    ("teen tournament", "Teen Tournament"),
    ("college championship", "College Championship"),
    ("teachers tournament", "Teachers Tournament"),
    ("professors tournament", "Professors Tournament"),
    ("celebrity", "Celebrity Jeopardy!"),
    ("champions", "Tournament of Champions"),
    ("teen", "Teen Tournament"),
    ("college", "College Championship"),
    ("teachers", "Teachers Tournament"),
    ("professors", "Professors Tournament"),
    ("kids", "Kids Week"),
    ("championship", "Championship"),
    ("tournament", "Tournament"),
]
"""
Ordered (phrase, label) pairs used to spot tournaments and special events in a show title.
Phrases match case-insensitively on word boundaries; the first hit wins, so keep specific phrases first.
"""
