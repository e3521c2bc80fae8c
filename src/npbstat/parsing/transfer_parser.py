"""
Team history inference
======================

Derives team changes and inactive seasons from the yearly stat rows.
Stat tables carry no transfer details, so every real change is tagged
TransferType.OTHER.
"""

from typing import Dict, Iterable, List, Optional

from npbstat.parsing.models import NPB_INACTIVE, Transfer, TransferType


def build_team_history(*series: Optional[Iterable]) -> Dict[str, str]:
    """
    Merge year -> team from stat series.

    Later series overwrite earlier ones for the same year; rows missing
    a year or team are skipped.
    """
    history = {}
    for stats in series:
        for stat in stats or []:
            if stat.year and stat.team:
                history[stat.year] = stat.team
    return history


def infer_transfers(history: Dict[str, str]) -> List[Transfer]:
    """
    Walk the seasons in order and emit transfers.

    A gap of more than one year gives one inactive entry per missing year,
    then a return entry from the inactive marker to the new team. Without a
    gap, a team change gives one ordinary entry. The first season never
    produces a transfer.

    Args:
        history: Season year (string) to team name

    Returns:
        Transfers in chronological order
    """
    years = {}
    for year, team in history.items():
        try:
            years[int(year)] = team
        except ValueError:
            continue

    transfers = []
    previous_team = None
    previous_year = None

    for year in sorted(years):
        team = years[year]

        if previous_year is not None and year - previous_year > 1:
            for gap_year in range(previous_year + 1, year):
                transfers.append(Transfer(
                    year=str(gap_year),
                    from_team=previous_team,
                    to_team=NPB_INACTIVE,
                    type=TransferType.NPB_INACTIVE,
                ))
            if team:
                transfers.append(Transfer(
                    year=str(year),
                    from_team=NPB_INACTIVE,
                    to_team=team,
                    type=TransferType.OTHER,
                ))
        elif team and previous_team and team != previous_team:
            transfers.append(Transfer(
                year=str(year),
                from_team=previous_team,
                to_team=team,
                type=TransferType.OTHER,
            ))

        previous_team = team
        previous_year = year

    return transfers


def parse_transfers(pitching_stats=None, batting_stats=None) -> List[Transfer]:
    """Transfers implied by a player's pitching and batting seasons"""
    return infer_transfers(build_team_history(pitching_stats, batting_stats))
