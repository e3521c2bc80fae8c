"""
DataFrame views
===============
Tabular views of parsed records for display and validation.
"""

from typing import Iterable, List, Optional

import pandas as pd

from npbstat.parsing.models import BattingStats, PitchingStats

PLAYER_COLUMNS = ['team_id', 'number', 'name', 'name_kana', 'position', 'category',
                  'pitching_hand', 'batting_hand', 'height', 'weight', 'birth_date',
                  'player_id', 'note']
TEAM_COLUMNS = ['id', 'name', 'full_name', 'league', 'roster_url']
TRANSFER_COLUMNS = ['year', 'from_team', 'to_team', 'type']


def records_frame(records: Optional[Iterable], columns: Optional[List[str]] = None) -> pd.DataFrame:
    """
    DataFrame with one row per record.

    Args:
        records: Objects with to_dict() (None is treated as empty)
        columns: Column order to enforce; missing columns are added empty

    Returns:
        DataFrame, empty with the given columns when there are no records
    """
    rows = [record.to_dict() for record in (records or [])]
    df = pd.DataFrame(rows)
    if columns is not None:
        df = df.reindex(columns=columns)
    return df


def players_frame(players) -> pd.DataFrame:
    return records_frame(players, PLAYER_COLUMNS)


def teams_frame(teams) -> pd.DataFrame:
    return records_frame(teams, TEAM_COLUMNS)


def transfers_frame(transfers) -> pd.DataFrame:
    return records_frame(transfers, TRANSFER_COLUMNS)


def pitching_frame(stats) -> pd.DataFrame:
    """Season pitching rows, including derived columns"""
    return records_frame(stats, list(PitchingStats.__dataclass_fields__))


def batting_frame(stats) -> pd.DataFrame:
    """Season batting rows, including derived columns"""
    return records_frame(stats, list(BattingStats.__dataclass_fields__))
