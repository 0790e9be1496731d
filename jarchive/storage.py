#!/usr/bin/env python3
import json
import logging
import os
import tempfile
from .exceptions import StorageError


class JsonGameStore:
    """
    Saves scraped games as flat JSON files: one "game-<id>.json" per game plus an "index.json" listing every saved
    game, newest show first. Saving a game that is already stored replaces its file and index entry.

    Every file is written to a temporary file first and moved into place, so an interrupted write never leaves a
    truncated file behind.

    Args:
        directory: Folder that holds the game files. Created by init_store() if missing.
    """

    index_filename = "index.json"

    def __init__(self, directory):
        self.directory = directory
        self.game_count = 0
        self.clue_count = 0

    def init_store(self):
        logging.info("Saving games to {}".format(self.directory))
        try:
            os.makedirs(self.directory, exist_ok=True)
        except OSError as e:
            raise StorageError("Unable to create game directory {}".format(self.directory)) from e

    def game_path(self, source_game_id):
        return os.path.join(self.directory, "game-{}.json".format(source_game_id))

    def exists(self, source_game_id):
        return os.path.isfile(self.game_path(source_game_id))

    def save(self, game):
        """Upserts the game's index entry, then writes the game to its own file.

        The index is written first: a game whose file is missing is scraped again on the next run, while a game file
        without an index entry would be skipped forever.

        Raises:
            StorageError: If the index cannot be read, or either file cannot be written.
        """

        path = self.game_path(game.source_game_id)
        entry = self._index_entry(game, os.path.basename(path))
        index = [e for e in self.load_index() if e.get("gameId") != game.source_game_id]
        index.append(entry)
        index.sort(key=lambda e: e.get("showNumber") or 0, reverse=True)
        try:
            self._write_json(self._index_path(), index)
        except OSError as e:
            raise StorageError("Unable to write {}".format(self._index_path())) from e

        try:
            self._write_json(path, game.to_dict())
        except OSError as e:
            raise StorageError("Unable to write {}".format(path)) from e

        self.game_count += 1
        self.clue_count += len(game.clues)

    def load_index(self):
        """Returns the saved index entries, or an empty list if no index has been written yet.

        Raises:
            StorageError: If the index exists but cannot be read or parsed. Saving over it would drop every entry.
        """

        try:
            with open(self._index_path(), "r") as index_file:
                return json.load(index_file)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            raise StorageError("Unreadable index {}".format(self._index_path())) from e

    def _index_path(self):
        return os.path.join(self.directory, self.index_filename)

    def _index_entry(self, game, filename):
        entry = game.to_dict()
        del entry["categories"]
        entry["file"] = filename
        return entry

    def _write_json(self, path, data):
        fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path), prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as out:
                json.dump(data, out, indent=2)
            os.replace(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
