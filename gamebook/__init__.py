"""Hockey Gamebook: game lineups, rosters and scores for hockey teams."""

__version__ = "1.0.0"
