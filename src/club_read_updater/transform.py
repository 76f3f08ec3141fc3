"""
Conversions from stored records to their read-model shapes.

Both functions are pure: they never fail for a valid input record and
never touch storage.
"""

from .core.models import DisplayStat, PlayerRecord, PlayerRef, RawStat


def to_display_stat(stat: RawStat) -> DisplayStat:
    """
    Score one round of raw counters for display.

    forward  = goals * 6 + behinds
    midfield = disposals
    ruck     = hitouts + marks
    tackle   = tackles * 6

    round_number is left at 0; the stored documents have never carried
    the round (see DESIGN.md, open questions).
    """
    return DisplayStat(
        forward=stat.goals * 6 + stat.behinds,
        midfield=stat.disposals,
        ruck=stat.hitouts + stat.marks,
        tackle=stat.tackles * 6,
    )


def to_player_ref(player: PlayerRecord) -> PlayerRef:
    """Copy the player fields embedded in contract documents."""
    return PlayerRef(
        id=player.id,
        name=player.name,
        current_club_id=player.current_club_id,
        active=player.active,
        source_name=player.source_name,
    )
