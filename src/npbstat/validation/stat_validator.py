"""
Stats validation functions
==========================
Rebuilds published rate stats from the counting stats of each season and
reports seasons where the two disagree.
"""

import logging
from typing import Dict, List

import pandas as pd

from npbstat.pipeline.frames import batting_frame, pitching_frame

logger = logging.getLogger(__name__)

ERA_TOLERANCE = 0.01
RATE_TOLERANCE = 0.002


def innings_to_decimal(innings: float) -> float:
    """
    Convert innings in thirds notation to real innings.

    147.1 means 147 and one third, 147.2 means 147 and two thirds.
    """
    whole = int(innings)
    thirds = int(round((innings - whole) * 10))
    return whole + thirds / 3


def _ratio(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Element-wise ratio, NaN where the denominator is not positive"""
    return numerator.where(denominator > 0) / denominator.where(denominator > 0)


def compare_rates(frame: pd.DataFrame, checks: List[tuple]) -> Dict:
    """
    Compare published rate columns with recomputed ones.

    Args:
        frame: Season rows with 'year' and 'team' columns
        checks: (stat name, official column, computed column, tolerance)

    Returns:
        Dict with accuracy (percent of compared values within tolerance),
        seasons_compared and differences
    """
    if frame.empty:
        return {'accuracy': 0, 'seasons_compared': 0, 'values_compared': 0, 'differences': []}

    compared = 0
    matched = 0
    seasons = set()
    differences = []

    for index, row in frame.iterrows():
        for stat, official_col, computed_col, tolerance in checks:
            computed = row[computed_col]
            if pd.isna(computed):
                continue

            official = float(row[official_col])
            diff = computed - official
            compared += 1
            seasons.add(index)

            if abs(diff) <= tolerance:
                matched += 1
            else:
                differences.append({
                    'year': row['year'],
                    'team': row['team'],
                    'stat': stat,
                    'official': official,
                    'computed': round(float(computed), 4),
                    'diff': round(float(diff), 4),
                })

    accuracy = (matched / compared * 100) if compared > 0 else 0

    return {
        'accuracy': accuracy,
        'seasons_compared': len(seasons),
        'values_compared': compared,
        'differences': differences,
    }


def validate_pitching_stats(stats) -> Dict:
    """Check ERA and winning percentage of each pitching season"""
    df = pitching_frame(stats)
    if df.empty:
        return compare_rates(df, [])

    for col in ['earned_runs', 'innings', 'wins', 'losses', 'era', 'winning_percentage']:
        df[col] = pd.to_numeric(df[col], errors='coerce').fillna(0)

    true_innings = df['innings'].apply(innings_to_decimal)
    df['computed_era'] = _ratio(df['earned_runs'] * 9, true_innings)
    df['computed_wpct'] = _ratio(df['wins'], df['wins'] + df['losses'])

    result = compare_rates(df, [
        ('ERA', 'era', 'computed_era', ERA_TOLERANCE),
        ('W%', 'winning_percentage', 'computed_wpct', RATE_TOLERANCE),
    ])
    logger.debug(f"Pitching validation: {result['accuracy']:.1f}% over {result['seasons_compared']} seasons")
    return result


def validate_batting_stats(stats) -> Dict:
    """Check AVG, SLG, OBP and OPS of each batting season"""
    df = batting_frame(stats)
    if df.empty:
        return compare_rates(df, [])

    numeric = ['hits', 'at_bats', 'total_bases', 'walks', 'hit_by_pitch', 'sacrifice_flies',
               'average', 'slugging_percentage', 'on_base_percentage', 'ops']
    for col in numeric:
        df[col] = pd.to_numeric(df[col], errors='coerce').fillna(0)

    on_base = df['hits'] + df['walks'] + df['hit_by_pitch']
    on_base_chances = df['at_bats'] + df['walks'] + df['hit_by_pitch'] + df['sacrifice_flies']

    df['computed_avg'] = _ratio(df['hits'], df['at_bats'])
    df['computed_slg'] = _ratio(df['total_bases'], df['at_bats'])
    df['computed_obp'] = _ratio(on_base, on_base_chances)
    df['computed_ops'] = df['computed_obp'] + df['computed_slg']

    result = compare_rates(df, [
        ('AVG', 'average', 'computed_avg', RATE_TOLERANCE),
        ('SLG', 'slugging_percentage', 'computed_slg', RATE_TOLERANCE),
        ('OBP', 'on_base_percentage', 'computed_obp', RATE_TOLERANCE),
        ('OPS', 'ops', 'computed_ops', RATE_TOLERANCE),
    ])
    logger.debug(f"Batting validation: {result['accuracy']:.1f}% over {result['seasons_compared']} seasons")
    return result


def validate_player_stats(details) -> Dict:
    """Run both checks on a PlayerDetails result"""
    return {
        'pitching': validate_pitching_stats(details.pitching_stats),
        'batting': validate_batting_stats(details.batting_stats),
    }
