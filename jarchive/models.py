"""Value objects produced by the fetchers and handed to storage."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class Round(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"
    FINAL = "final"


def _iso(day: date | None) -> str | None:
    return day.isoformat() if day else None


@dataclass(frozen=True)
class GameListEntry:
    """One show link found on a season listing page."""
    source_game_id: int
    show_number: int
    air_date: date | None = None

    def to_dict(self) -> dict:
        return {
            "gameId": self.source_game_id,
            "showNumber": self.show_number,
            "airDate": _iso(self.air_date),
        }


@dataclass(frozen=True)
class ClueClassification:
    """Fields derived from a clue's raw markup and its place on the board."""
    clue_id: str
    value: int | None
    daily_double: bool
    triple_stumper: bool
    is_final_jeopardy: bool


@dataclass(frozen=True)
class ClueData:
    clue_id: str
    question: str
    answer: str
    value: int | None
    daily_double: bool
    triple_stumper: bool
    is_final_jeopardy: bool
    category: str
    round: Round
    row_index: int

    def to_dict(self) -> dict:
        return {
            "clueId": self.clue_id,
            "question": self.question,
            "answer": self.answer,
            "value": self.value,
            "dailyDouble": self.daily_double,
            "tripleStumper": self.triple_stumper,
            "isFinalJeopardy": self.is_final_jeopardy,
            "category": self.category,
            "round": self.round.value,
            "rowIndex": self.row_index,
        }


@dataclass(frozen=True)
class CategoryData:
    """A board column. Position is the zero-based column within its round."""
    name: str
    round: Round
    position: int
    clues: tuple[ClueData, ...] = ()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "round": self.round.value,
            "position": self.position,
            "clues": [clue.to_dict() for clue in self.clues],
        }


@dataclass(frozen=True)
class GameData:
    """A fully parsed game. Categories are in round-major, left-to-right page order."""
    source_game_id: int
    show_number: int
    air_date: date | None
    season: int | None
    is_special: bool
    tournament_type: str | None
    categories: tuple[CategoryData, ...] = ()

    @property
    def clues(self) -> list[ClueData]:
        return [clue for category in self.categories for clue in category.clues]

    def to_dict(self) -> dict:
        return {
            "gameId": self.source_game_id,
            "showNumber": self.show_number,
            "airDate": _iso(self.air_date),
            "season": self.season,
            "isSpecial": self.is_special,
            "tournamentType": self.tournament_type,
            "categories": [category.to_dict() for category in self.categories],
        }
