#!/usr/bin/env python3

import json
import os
import shutil
import tempfile
import unittest
import mock
from datetime import date

from jarchive.exceptions import StorageError
from jarchive.models import CategoryData, ClueData, GameData, Round
from jarchive.storage import JsonGameStore


def make_game(source_game_id, show_number, tournament_type=None):
    clue = ClueData(
            clue_id="g{}-s-c0-r0".format(source_game_id),
            question="This planet is closest to the sun",
            answer="Mercury",
            value=200,
            daily_double=False,
            triple_stumper=False,
            is_final_jeopardy=False,
            category="SCIENCE",
            round=Round.SINGLE,
            row_index=0)
    return GameData(
            source_game_id=source_game_id,
            show_number=show_number,
            air_date=date(2019, 7, 19),
            season=35,
            is_special=tournament_type is not None,
            tournament_type=tournament_type,
            categories=(CategoryData("SCIENCE", Round.SINGLE, 0, (clue,)),))


class TestJsonGameStore(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.mkdtemp()
        self.store = JsonGameStore(os.path.join(self.directory, "games"))
        self.store.init_store()

    def tearDown(self):
        shutil.rmtree(self.directory)

    def test_save_writes_game_file(self):
        self.store.save(make_game(6333, 8000))
        self.assertTrue(self.store.exists(6333))
        with open(self.store.game_path(6333)) as game_file:
            data = json.load(game_file)
        self.assertEqual(data["showNumber"], 8000)
        self.assertEqual(data["categories"][0]["clues"][0]["clueId"], "g6333-s-c0-r0")

    def test_exists(self):
        self.assertFalse(self.store.exists(1))

    def test_index_sorted_newest_first(self):
        self.store.save(make_game(1, 10))
        self.store.save(make_game(3, 30, tournament_type="Teen Tournament"))
        self.store.save(make_game(2, 20))
        index = self.store.load_index()
        self.assertEqual([entry["showNumber"] for entry in index], [30, 20, 10])
        self.assertEqual(index[0], {
            "gameId": 3,
            "showNumber": 30,
            "airDate": "2019-07-19",
            "season": 35,
            "isSpecial": True,
            "tournamentType": "Teen Tournament",
            "file": "game-3.json",
            })

    def test_save_again_replaces_entry(self):
        self.store.save(make_game(1, 10))
        self.store.save(make_game(1, 11))
        index = self.store.load_index()
        self.assertEqual(len(index), 1)
        self.assertEqual(index[0]["showNumber"], 11)

    def test_counts(self):
        self.store.save(make_game(1, 10))
        self.store.save(make_game(2, 20))
        self.assertEqual(self.store.game_count, 2)
        self.assertEqual(self.store.clue_count, 2)

    def test_missing_index(self):
        self.assertEqual(self.store.load_index(), [])

    def test_corrupt_index_is_not_overwritten(self):
        for game_id in (1, 2, 3):
            self.store.save(make_game(game_id, game_id * 10))
        index_path = os.path.join(self.store.directory, "index.json")
        with open(index_path, "a") as index_file:
            index_file.write("x")
        with open(index_path) as index_file:
            corrupt = index_file.read()

        with self.assertRaises(StorageError):
            self.store.load_index()
        with self.assertRaises(StorageError):
            self.store.save(make_game(4, 40))

        with open(index_path) as index_file:
            self.assertEqual(index_file.read(), corrupt)
        self.assertFalse(self.store.exists(4))

    def test_write_failure(self):
        with mock.patch.object(self.store, "_write_json", side_effect=PermissionError("read-only")):
            with self.assertRaises(StorageError):
                self.store.save(make_game(1, 10))

    def test_failed_game_write_leaves_game_unsaved(self):
        write_json = self.store._write_json

        def fail_game_file(path, data):
            if os.path.basename(path).startswith("game-"):
                raise PermissionError("read-only")
            write_json(path, data)

        with mock.patch.object(self.store, "_write_json", side_effect=fail_game_file):
            with self.assertRaises(StorageError):
                self.store.save(make_game(1, 10))
        self.assertFalse(self.store.exists(1))

        self.store.save(make_game(1, 10))
        self.assertEqual([entry["gameId"] for entry in self.store.load_index()], [1])
        self.assertTrue(self.store.exists(1))

    def test_interrupted_write_keeps_previous_index(self):
        self.store.save(make_game(1, 10))
        with mock.patch("jarchive.storage.os.replace", side_effect=OSError("interrupted")):
            with self.assertRaises(StorageError):
                self.store.save(make_game(2, 20))
        self.assertEqual([entry["gameId"] for entry in self.store.load_index()], [1])
        self.assertEqual(sorted(os.listdir(self.store.directory)), ["game-1.json", "index.json"])


if __name__ == "__main__":
    unittest.main()
