#!/usr/bin/env python3

import os
import unittest
import mock
import requests
from datetime import date

from jarchive.config import GAME_URL, REQUEST_HEADERS, SHOW_LIST_URL
from jarchive.fetcher import fetch_current_season, fetch_game, fetch_show_list

current_dir = os.path.dirname(os.path.realpath(__file__))
test_html_page_path = "{}/{}".format(current_dir, "test_page.html")


def html_response(markup):
    response = mock.Mock()
    response.text = markup
    return response


def error_response(status):
    response = html_response("<html><body>Error</body></html>")
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("{} Server Error".format(status))
    return response


@mock.patch("jarchive.fetcher.requests.get")
class TestFetchShowList(unittest.TestCase):

    def test_no_game_links(self, mock_get):
        mock_get.return_value = html_response("<html><body></body></html>")
        self.assertEqual(fetch_show_list(1), [])

    def test_game_link(self, mock_get):
        mock_get.return_value = html_response(
                '<html><body><a href="showgame.php?game_id=8000">Show #8000 - 2024-01-01</a></body></html>')
        entries = fetch_show_list(1)
        self.assertGreaterEqual(len(entries), 1)
        self.assertEqual(entries[0].source_game_id, 8000)
        self.assertEqual(entries[0].show_number, 8000)
        self.assertEqual(entries[0].air_date, date(2024, 1, 1))

    def test_requests_listing_page(self, mock_get):
        mock_get.return_value = html_response("<html></html>")
        fetch_show_list(35, timeout=5)
        mock_get.assert_called_once_with(SHOW_LIST_URL, params={"season": 35}, headers=REQUEST_HEADERS, timeout=5)

    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("Network error")
        self.assertEqual(fetch_show_list(1), [])

    def test_error_status(self, mock_get):
        mock_get.return_value = error_response(503)
        self.assertEqual(fetch_show_list(1), [])

    def test_invalid_page(self, mock_get):
        for page in (0, -1, "2", True):
            with self.assertRaises(ValueError):
                fetch_show_list(page)
        mock_get.assert_not_called()


@mock.patch("jarchive.fetcher.requests.get")
class TestFetchGame(unittest.TestCase):

    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("Network error")
        self.assertIsNone(fetch_game(8000))

    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout("timed out")
        self.assertIsNone(fetch_game(8000, timeout=0.1))

    def test_error_status(self, mock_get):
        mock_get.return_value = error_response(404)
        self.assertIsNone(fetch_game(8000))

    def test_game_data(self, mock_get):
        mock_get.return_value = html_response('''<html><body>
            <div id="game_title">Show #8000 - aired January 1, 2024</div>
            <div id="jeopardy_round">
              <td class="category_name">SCIENCE</td>
            </div>
            </body></html>''')
        game = fetch_game(8000, timeout=3)
        self.assertIsNotNone(game)
        self.assertEqual(game.show_number, 8000)
        self.assertEqual(game.air_date, date(2024, 1, 1))
        self.assertEqual([c.name for c in game.categories], ["SCIENCE"])
        mock_get.assert_called_once_with(GAME_URL, params={"game_id": 8000}, headers=REQUEST_HEADERS, timeout=3)

    def test_no_round_containers(self, mock_get):
        mock_get.return_value = html_response('<html><body><div id="game_title">Show #42</div></body></html>')
        game = fetch_game(42)
        self.assertEqual(game.show_number, 42)
        self.assertEqual(game.categories, ())

    def test_missing_show_number(self, mock_get):
        mock_get.return_value = html_response('<html><body><div id="game_title">Untitled</div></body></html>')
        self.assertIsNone(fetch_game(8000))

    @unittest.skipIf(not os.path.isfile(test_html_page_path), 'Test html page not in directory.')
    def test_same_page_twice(self, mock_get):
        with open(test_html_page_path, 'r') as markup:
            mock_get.return_value = html_response(markup.read())
        first = fetch_game(6333)
        second = fetch_game(6333)
        self.assertEqual(first, second)
        self.assertEqual([clue.clue_id for clue in first.clues], [clue.clue_id for clue in second.clues])

    def test_session_is_used(self, mock_get):
        session = mock.Mock()
        session.get.return_value = html_response('<html><body><div id="game_title">Show #1</div></body></html>')
        game = fetch_game(1, session=session)
        self.assertEqual(game.show_number, 1)
        session.get.assert_called_once_with(GAME_URL, params={"game_id": 1}, headers=REQUEST_HEADERS, timeout=None)
        mock_get.assert_not_called()


@mock.patch("jarchive.fetcher.requests.get")
class TestFetchCurrentSeason(unittest.TestCase):

    def test_current_season(self, mock_get):
        mock_get.return_value = html_response(
                '<table class="fullpageheight"><tr><td><a href="showseason.php?season=41">Season 41</a></td></tr></table>')
        self.assertEqual(fetch_current_season(), 41)

    def test_unparseable(self, mock_get):
        mock_get.return_value = html_response("<html></html>")
        self.assertIsNone(fetch_current_season())

    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("Network error")
        self.assertIsNone(fetch_current_season())


if __name__ == "__main__":
    unittest.main()
