"""
Shared constants: table names and round-key encoding.

Round keys encode a season and a round within it as ``year * 100 + round``,
so 202303 is round 3 of 2023.
"""

# Table names
CLUB_EVENTS_TABLE = "club_events"
PLAYERS_TABLE = "players"
PLAYER_ROUND_STATS_TABLE = "player_round_stats"
CLUB_SEASONS_TABLE = "club_seasons"

ROUND_KEY_FACTOR = 100
DEFAULT_ROUNDS_PER_SEASON = 24


def round_key(year: int, round_number: int) -> int:
    """Encode a year and a round within it as a single round key."""
    return year * ROUND_KEY_FACTOR + round_number


def year_of(round_key_value: int) -> int:
    """Return the season year a round key belongs to."""
    return round_key_value // ROUND_KEY_FACTOR
