"""
Extracted Record Types
======================

Typed records produced by the roster, profile and stats parsers.
Every record serializes through to_dict(): snake_case keys in field order,
enum values unwrapped, whole-number floats written as ints, unset
optionals dropped.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class League(Enum):
    CENTRAL = "central"
    PACIFIC = "pacific"


class Position(Enum):
    PITCHER = "pitcher"
    CATCHER = "catcher"
    INFIELDER = "infielder"
    OUTFIELDER = "outfielder"


class Hand(Enum):
    RIGHT = "右"
    LEFT = "左"
    SWITCH = "両"


class PlayerCategory(Enum):
    REGISTERED = "registered"
    DEVELOPMENT = "development"


class TransferType(Enum):
    OTHER = "other"
    NPB_INACTIVE = "npb_inactive"


# Years with no first-team record in either stat table
NPB_INACTIVE = "NPB1軍稼働無し"


def _record_dict(items) -> Dict[str, Any]:
    result = {}
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, float) and value.is_integer():
            value = int(value)
        result[key] = value
    return result


class Record:
    """Mixin giving dataclasses a JSON-ready dict form"""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self, dict_factory=_record_dict)


@dataclass(frozen=True)
class Team(Record):
    id: str
    name: str
    full_name: str
    league: League
    roster_url: str


@dataclass
class Player(Record):
    """One row of a team roster page"""
    number: str
    name: str
    birth_date: str
    height: int
    weight: int
    pitching_hand: Hand
    batting_hand: Hand
    position: Position
    category: PlayerCategory
    team_id: str
    name_kana: Optional[str] = None
    note: Optional[str] = None
    player_id: Optional[str] = None


@dataclass
class TeamRoster(Record):
    team: Team
    players: List[Player]
    last_updated: datetime


@dataclass
class PlayerProfile(Record):
    """
    Profile facts from a player detail page.

    Height and weight stay formatted ("170cm") on purpose; the roster view
    carries the integer values.
    """
    player_id: str
    name: str = ""
    team: str = ""
    name_kana: Optional[str] = None
    uniform_number: Optional[str] = None
    position: Optional[str] = None
    throwing_hand: Optional[str] = None
    batting_hand: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    birth_date: Optional[str] = None
    career: Optional[str] = None
    draft_info: Optional[str] = None
    joined_year: Optional[int] = None


@dataclass
class PitchingStats(Record):
    year: str
    team: str
    games: float = 0
    wins: float = 0
    losses: float = 0
    saves: float = 0
    holds: float = 0
    hold_points: float = 0
    complete_games: float = 0
    shutouts: float = 0
    no_walks: float = 0
    winning_percentage: float = 0
    batters: float = 0
    innings: float = 0
    hits: float = 0
    home_runs: float = 0
    strikeouts: float = 0
    strikeouts_per9: float = 0
    walks: float = 0
    hit_by_pitch: float = 0
    wild_pitches: float = 0
    balks: float = 0
    runs_allowed: float = 0
    earned_runs: float = 0
    era: float = 0
    # Derived, only set when the denominator is positive
    whip: Optional[float] = None
    home_runs_per9: Optional[float] = None
    walks_per9: Optional[float] = None
    strikeout_walk_ratio: Optional[float] = None
    batting_average_against: Optional[float] = None


@dataclass
class BattingStats(Record):
    year: str
    team: str
    games: float = 0
    plate_appearances: float = 0
    at_bats: float = 0
    runs: float = 0
    hits: float = 0
    doubles: float = 0
    triples: float = 0
    home_runs: float = 0
    total_bases: float = 0
    rbi: float = 0
    stolen_bases: float = 0
    caught_stealing: float = 0
    sacrifice_hits: float = 0
    sacrifice_flies: float = 0
    walks: float = 0
    intentional_walks: float = 0
    hit_by_pitch: float = 0
    strikeouts: float = 0
    grounded_into_double_plays: float = 0
    average: float = 0
    on_base_percentage: float = 0
    slugging_percentage: float = 0
    ops: float = 0
    # Derived
    iso: Optional[float] = None
    babip: Optional[float] = None
    strikeout_rate: Optional[float] = None
    walk_rate: Optional[float] = None
    home_run_rate: Optional[float] = None
    stolen_base_percentage: Optional[float] = None


@dataclass
class CareerPitching(Record):
    """Partial totals read from the career row of the pitching table"""
    games: Optional[float] = None
    wins: Optional[float] = None
    losses: Optional[float] = None
    saves: Optional[float] = None
    holds: Optional[float] = None
    era: Optional[float] = None


@dataclass
class CareerBatting(Record):
    """Partial totals read from the career row of the batting table"""
    games: Optional[float] = None
    plate_appearances: Optional[float] = None
    at_bats: Optional[float] = None
    hits: Optional[float] = None
    average: Optional[float] = None


@dataclass
class Transfer(Record):
    year: str
    from_team: Optional[str]
    to_team: str
    type: TransferType


@dataclass
class PlayerDetails(Record):
    profile: PlayerProfile
    pitching_stats: Optional[List[PitchingStats]] = None
    batting_stats: Optional[List[BattingStats]] = None
    career_pitching: Optional[CareerPitching] = None
    career_batting: Optional[CareerBatting] = None
    transfers: Optional[List[Transfer]] = None


@dataclass
class StatsResult:
    """One stat kind's season series plus its career row, if any"""
    stats: List[Any] = field(default_factory=list)
    career: Optional[Any] = None
