class GameParseError(Exception):
    """Raise when a j-archive game page cannot be turned into game data at all.

    Missing clue text, values or whole rounds are not parse errors; those degrade to empty placeholders.
    """
    pass


class ShowNumberNotFoundError(GameParseError):
    """Raise when no show number can be read from the title of a game page.

    A game without a show number cannot be stored or referenced downstream, so the page is unusable.
    """
    pass


class StorageError(Exception):
    """Generic catchall to indicate the game store could not be written. Raised from the underlying I/O error."""
    pass
