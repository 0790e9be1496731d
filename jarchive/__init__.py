from .fetcher import fetch_current_season, fetch_game, fetch_show_list
from .models import CategoryData, ClueData, GameData, GameListEntry, Round
from .scraper import JArchiveScraper
from .storage import JsonGameStore
