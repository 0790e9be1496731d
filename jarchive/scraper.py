#!/usr/bin/env python3
import logging
import queue
import threading
from datetime import datetime
from time import sleep
from .config import MAX_THREADS, REQUEST_DELAY, REQUEST_TIMEOUT
from .exceptions import StorageError
from .fetcher import fetch_current_season, fetch_game, fetch_show_list

GAME_ID_SENTINEL = "FINISHED"


class JArchiveScraper:
    """
    Provides entry point to configure and begin a batch import of j-archive games.

    The fetch functions themselves never throttle or retry; this driver is the caller that does. Each worker sleeps
    request_delay seconds after every request, and the worker count bounds how many requests are in flight.

    Args:
        store: Object responsible for saving games. Should expose 'init_store', 'exists' and 'save' methods;
            'save' accepts a models.GameData.
        starting_season: Season to start listing games from. Defaults to the current season.
        get_single_season: Only list games of the starting season instead of walking back to season 1.
        game_ids: Explicit game ids to scrape. When given, no listing pages are requested.
        overwrite: Scrape and save games that are already in the store.

    Attributes:
        game_id_queue (queue.Queue): Shared among worker threads and populated with game ids that are queued to be
            scraped.

        game_data_queue (queue.Queue): Populated with GameData objects created by ScraperWorker threads, for saving.

        workers [ScraperWorker]: List of references to worker threads.

        game_id_worker (GameIdWorker): Responsible for populating the game_id_queue for ScraperWorker threads to
            consume.
    """

    def __init__(self, store, starting_season=None, get_single_season=False, game_ids=None,
                 max_workers=MAX_THREADS, request_delay=REQUEST_DELAY, timeout=REQUEST_TIMEOUT, overwrite=False):
        self.store = store
        self.game_id_queue = queue.Queue()
        self.game_data_queue = queue.Queue()
        self.starting_season = starting_season
        self.get_single_season = get_single_season
        self.game_ids = game_ids
        self.max_workers = max_workers
        self.request_delay = request_delay
        self.timeout = timeout
        self.overwrite = overwrite
        self.finished = False

        self.game_id_worker = None
        self.workers = []
        self.storage_errors = []

    def init_workers(self):
        for i in range(max(self.max_workers - 1, 1)):
            w = ScraperWorker(self.game_id_queue, self.game_data_queue, self.store,
                              request_delay=self.request_delay, timeout=self.timeout, overwrite=self.overwrite)
            w.daemon = True
            self.workers.append(w)
            w.name = "Worker Thread {}".format(i)
            w.start()

        self.game_id_worker = GameIdWorker(self.game_id_queue, request_delay=self.request_delay, timeout=self.timeout)
        self.game_id_worker.daemon = True
        self.game_id_worker.name = "Game ID Worker Thread"
        self.game_id_worker.start(starting_season=self.starting_season, get_single_season=self.get_single_season,
                                  game_ids=self.game_ids)

    def start(self):
        """Entry point for the import. Blocks until every queued game has been scraped and saved.

        Raises:
            StorageError: If the store cannot be initialised.
        """

        self.store.init_store()
        self.init_workers()
        self.mainloop()

    def mainloop(self):
        startime = datetime.now()
        while not self.finished:
            try:
                game = self.game_data_queue.get(timeout=1)
            except queue.Empty:
                self._handle_empty_data_queue()
                continue
            try:
                self.store.save(game)
                logging.info(self._describe(game))
            except StorageError as e:
                self._handle_storage_exception(game, e)

        finished_time = datetime.now() - startime
        logging.info("FINISHED importing j-archive games in {}".format(finished_time))
        self.on_finished()

    def _handle_empty_data_queue(self):
        if any(t.is_alive() for t in self.workers):
            return  # No data in queue right now, but workers are still working.
        if self.game_data_queue.empty():
            self.finished = True

    def _handle_storage_exception(self, game, e):
        logging.error("Unable to save game {}: {}".format(game.source_game_id, e))
        self.storage_errors.append(game.source_game_id)

    @property
    def failed_game_ids(self):
        return sorted(game_id for w in self.workers for game_id in w.failed_game_ids)

    @property
    def skipped_game_ids(self):
        return sorted(game_id for w in self.workers for game_id in w.skipped_game_ids)

    def _describe(self, game):
        clues = game.clues
        description = "Saved show #{} (game {}) | {} | {} clues | {} DD | {} TS".format(
                game.show_number,
                game.source_game_id,
                game.air_date.isoformat() if game.air_date else "unknown date",
                len(clues),
                sum(1 for clue in clues if clue.daily_double),
                sum(1 for clue in clues if clue.triple_stumper))
        if game.is_special:
            description += " [{}]".format(game.tournament_type)
        return description

    def on_finished(self):
        logging.info("Finished scraping j-archive")
        logging.info("{:,} games and {:,} clues were saved, {:,} games skipped, {:,} failed.".format(
            self.store.game_count, self.store.clue_count,
            len(self.skipped_game_ids), len(self.failed_game_ids) + len(self.storage_errors)))


class ScraperWorker(threading.Thread):
    """
    Thread that takes game ids off the queue, scrapes each game with fetch_game, and passes the game data on to be
    saved.
    """
    def __init__(self, game_id_queue, out_queue, store, request_delay=REQUEST_DELAY, timeout=REQUEST_TIMEOUT,
                 overwrite=False):
        threading.Thread.__init__(self)
        self.game_id_queue = game_id_queue
        self.out_queue = out_queue
        self.store = store
        self.request_delay = request_delay
        self.timeout = timeout
        self.overwrite = overwrite
        self.failed_game_ids = []
        self.skipped_game_ids = []

    def run(self):
        while True:
            game_id = self.game_id_queue.get()
            if game_id == GAME_ID_SENTINEL:  # No more ids are coming
                logging.debug("Got game id sentinel. Returning")
                self.game_id_queue.task_done()
                self.game_id_queue.put(GAME_ID_SENTINEL)  # For next worker to get
                return

            self.process(game_id)
            self.game_id_queue.task_done()

    def process(self, game_id):
        if not self.overwrite and self.store.exists(game_id):
            logging.info("Game {} already saved, skipping".format(game_id))
            self.skipped_game_ids.append(game_id)
            return

        game = fetch_game(game_id, timeout=self.timeout)
        if game is not None:
            self.out_queue.put(game)
        else:
            logging.info("No data for game {}".format(game_id))
            self.failed_game_ids.append(game_id)
        sleep(self.request_delay)


class GameIdWorker(threading.Thread):
    """
    Responsible for providing scraper workers with j-archive game ids to scrape.

    Attributes:

        game_id_queue(queue.Queue): Populated with game ids. Scraper workers pop an id to collect data from.

        ids_exhausted(boolean): Set to True when unable to populate game_id_queue with more game ids. This may be
            because a listing page could not be fetched, had no game links, or there are no more seasons.
    """

    def __init__(self, game_id_queue, request_delay=REQUEST_DELAY, timeout=REQUEST_TIMEOUT):
        threading.Thread.__init__(self)
        self.game_id_queue = game_id_queue
        self.request_delay = request_delay
        self.timeout = timeout
        self.ids_exhausted = False

        self.starting_season = None
        self.get_single_season = False
        self.game_ids = None

    def start(self, starting_season=None, get_single_season=False, game_ids=None):
        self.game_ids = game_ids
        self.get_single_season = get_single_season
        if game_ids is None:
            self.starting_season = starting_season or fetch_current_season(timeout=self.timeout)
            if self.starting_season is None:
                logging.warning("Unable to determine starting season. Exiting!")
                self.finished()
                return

        super().start()

    def run(self):
        if self.game_ids is not None:
            for game_id in self.game_ids:
                self.game_id_queue.put(game_id)
            self.finished()

        elif self.get_single_season:
            self.populate_game_id_queue(self.starting_season)
            self.finished()

        else:
            curr_season = self.starting_season
            while (curr_season > 0) and not self.ids_exhausted:
                logging.info("Getting game ids for season {}".format(curr_season))
                self.populate_game_id_queue(curr_season)
                curr_season -= 1
                sleep(self.request_delay)
            self.finished()

    def populate_game_id_queue(self, season):
        """Populate game id queue with the games listed for season.

        Sets the "ids_exhausted" flag to True if no game ids are found.
        """
        entries = fetch_show_list(season, timeout=self.timeout)
        if not entries:
            logging.warning("Unable to get game ids for season {}. Game ids exhausted.".format(season))
            self.ids_exhausted = True
            return

        for entry in entries:
            self.game_id_queue.put(entry.source_game_id)

    def finished(self):
        self.ids_exhausted = True
        logging.debug("Game ids are exhausted. Putting sentinel into game id queue")
        self.game_id_queue.put(GAME_ID_SENTINEL)
