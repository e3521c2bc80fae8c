"""
Season Stats Parser
===================

Reads the yearly pitching and batting tables of an NPB player page.

Tables are recognized by the keywords in their header cells. Each field is
looked up by header text first and by a known column position second, so
pages with missing or reordered columns still parse. Innings and hits may be
split over two cells ("147" and ".1"); those are joined before conversion.
"""

import re
import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup

from npbstat.parsing.models import (
    BattingStats, CareerBatting, CareerPitching, PitchingStats, StatsResult
)
from npbstat.parsing.parsing_utils import cell_text, join_fraction, parse_number

logger = logging.getLogger(__name__)

PITCHING_KEYWORDS = ('防御率', '勝利', '登板')
BATTING_KEYWORDS = ('打率', '安打', '打席')
# Batting tables must not contain any of these
PITCHING_ONLY_KEYWORDS = ('防御率', '勝利')

CAREER_MARKER = '通'
_SEASON_YEAR = re.compile(r'^\d{4}$', re.ASCII)


class TableKind(Enum):
    PITCHING = "pitching"
    BATTING = "batting"
    OTHER = "other"


class Column:
    """A stat field: header names to look for, and where it usually sits"""

    def __init__(self, field: str, headers: Tuple[str, ...], fallback: int,
                 fraction: bool = False):
        self.field = field
        self.headers = headers
        self.fallback = fallback
        self.fraction = fraction


PITCHING_COLUMNS = [
    Column('games', ('登板',), 2),
    Column('wins', ('勝利',), 3),
    Column('losses', ('敗北',), 4),
    Column('saves', ('セーブ',), 5),
    Column('holds', ('H', 'ホールド'), 6),
    Column('hold_points', ('HP',), 7),
    Column('complete_games', ('完投',), 8),
    Column('shutouts', ('完封勝', '完封'), 9),
    Column('no_walks', ('無四球',), 10),
    Column('winning_percentage', ('勝率',), 11),
    Column('batters', ('打者',), 12),
    Column('innings', ('投球回',), 13, fraction=True),
    Column('hits', ('安打',), 14, fraction=True),
    Column('home_runs', ('本塁打',), 15),
    Column('walks', ('四球',), 16),
    Column('hit_by_pitch', ('死球',), 17),
    Column('strikeouts_per9', ('奪三振率',), 17),
    Column('strikeouts', ('三振',), 18),
    Column('wild_pitches', ('暴投',), 19),
    Column('balks', ('ボーク',), 20),
    Column('runs_allowed', ('失点',), 21),
    Column('earned_runs', ('自責点',), 22),
]

CAREER_PITCHING_COLUMNS = PITCHING_COLUMNS[:5]

BATTING_COLUMNS = [
    Column('games', ('試合',), 2),
    Column('plate_appearances', ('打席',), 3),
    Column('at_bats', ('打数',), 4),
    Column('runs', ('得点',), 5),
    Column('hits', ('安打',), 6),
    Column('doubles', ('二塁打',), 7),
    Column('triples', ('三塁打',), 8),
    Column('home_runs', ('本塁打',), 9),
    Column('total_bases', ('塁打',), 10),
    Column('rbi', ('打点',), 11),
    Column('stolen_bases', ('盗塁',), 12),
    Column('caught_stealing', ('盗塁刺', '盗塁死'), 13),
    Column('sacrifice_hits', ('犠打',), 14),
    Column('sacrifice_flies', ('犠飛',), 15),
    Column('walks', ('四球',), 16),
    Column('intentional_walks', ('故意四', '敬遠'), 17),
    Column('hit_by_pitch', ('死球',), 18),
    Column('strikeouts', ('三振',), 19),
    Column('grounded_into_double_plays', ('併殺打',), 20),
    Column('average', ('打率',), 21),
    Column('on_base_percentage', ('出塁率',), 22),
    Column('slugging_percentage', ('長打率',), 23),
    Column('ops', ('OPS',), 24),
]

CAREER_BATTING_FIELDS = ('games', 'plate_appearances', 'at_bats', 'hits', 'average')
CAREER_BATTING_COLUMNS = [c for c in BATTING_COLUMNS if c.field in CAREER_BATTING_FIELDS]

TEAM_HEADERS = ('所属球団', '球団')
TEAM_FALLBACK = 1


def classify_table(table) -> TableKind:
    """Tell pitching, batting and unrelated tables apart by header keywords"""
    header_text = ''.join(th.get_text() for th in table.find_all('th'))

    if any(keyword in header_text for keyword in PITCHING_KEYWORDS):
        return TableKind.PITCHING

    if (any(keyword in header_text for keyword in BATTING_KEYWORDS)
            and not any(keyword in header_text for keyword in PITCHING_ONLY_KEYWORDS)):
        return TableKind.BATTING

    return TableKind.OTHER


def build_column_map(table) -> Dict[str, int]:
    """
    Map header text to column position.

    The header row is the first row of <thead>, else the table's first row.
    Positions honour colspan, so a two-cell 投球回 header does not shift
    the columns after it.
    """
    thead = table.find('thead')
    header_row = thead.find('tr') if thead else None
    if header_row is None:
        header_row = table.find('tr')
    if header_row is None:
        return {}

    column_map = {}
    index = 0
    for cell in header_row.find_all(['th', 'td']):
        text = cell_text(cell)
        if text:
            column_map[text] = index
        try:
            span = int(cell.get('colspan', 1))
        except (TypeError, ValueError):
            span = 1
        index += max(span, 1)
    return column_map


def column_index(column_map: Dict[str, int], headers: Tuple[str, ...],
                 fallback: int, cell_count: int) -> int:
    """Header position when known and present in the row, else the fallback"""
    for header in headers:
        index = column_map.get(header)
        if index is not None and index < cell_count:
            return index
    return fallback


def read_column(cells: List, column_map: Dict[str, int], column: Column) -> float:
    index = column_index(column_map, column.headers, column.fallback, len(cells))
    if index >= len(cells):
        return 0.0
    if column.fraction:
        return parse_number(join_fraction(cells, index))
    return parse_number(cell_text(cells[index]))


def read_team(cells: List, column_map: Dict[str, int]) -> str:
    index = column_index(column_map, TEAM_HEADERS, TEAM_FALLBACK, len(cells))
    return cell_text(cells[index]) if index < len(cells) else ''


def is_career_row(year_text: str) -> bool:
    return CAREER_MARKER in year_text


def is_season_row(year_text: str) -> bool:
    return bool(_SEASON_YEAR.match(year_text))


def add_pitching_metrics(stat: PitchingStats) -> PitchingStats:
    """Fill WHIP, per-9 rates, K/BB and opponent average where defined"""
    if stat.innings > 0:
        stat.whip = (stat.walks + stat.hits) / stat.innings
        stat.home_runs_per9 = stat.home_runs * 9 / stat.innings
        stat.walks_per9 = stat.walks * 9 / stat.innings
        if stat.walks > 0:
            stat.strikeout_walk_ratio = stat.strikeouts / stat.walks

    at_bats_against = stat.batters - stat.walks - stat.hit_by_pitch
    if at_bats_against > 0:
        stat.batting_average_against = stat.hits / at_bats_against

    return stat


def add_batting_metrics(stat: BattingStats) -> BattingStats:
    """Fill ISO, BABIP, K%, BB%, HR% and SB% where defined"""
    stat.iso = stat.slugging_percentage - stat.average

    balls_in_play = stat.at_bats - stat.strikeouts - stat.home_runs
    if balls_in_play > 0:
        stat.babip = (stat.hits - stat.home_runs) / balls_in_play

    if stat.plate_appearances > 0:
        stat.strikeout_rate = stat.strikeouts / stat.plate_appearances
        stat.walk_rate = stat.walks / stat.plate_appearances
        stat.home_run_rate = stat.home_runs / stat.plate_appearances

    attempts = stat.stolen_bases + stat.caught_stealing
    if attempts > 0:
        stat.stolen_base_percentage = stat.stolen_bases / attempts

    return stat


def parse_pitching_row(cells: List, column_map: Dict[str, int]) -> PitchingStats:
    values = {column.field: read_column(cells, column_map, column)
              for column in PITCHING_COLUMNS}

    era_index = column_map.get('防御率')
    if era_index is None or era_index >= len(cells):
        era_index = len(cells) - 1

    stat = PitchingStats(
        year=cell_text(cells[0]),
        team=read_team(cells, column_map),
        era=parse_number(cell_text(cells[era_index])),
        **values,
    )
    return add_pitching_metrics(stat)


def parse_career_pitching_row(cells: List, column_map: Dict[str, int]) -> CareerPitching:
    values = {column.field: read_column(cells, column_map, column)
              for column in CAREER_PITCHING_COLUMNS}
    return CareerPitching(era=parse_number(cell_text(cells[-1])), **values)


def parse_batting_row(cells: List, column_map: Dict[str, int]) -> BattingStats:
    values = {column.field: read_column(cells, column_map, column)
              for column in BATTING_COLUMNS}
    stat = BattingStats(
        year=cell_text(cells[0]),
        team=read_team(cells, column_map),
        **values,
    )
    return add_batting_metrics(stat)


def parse_career_batting_row(cells: List, column_map: Dict[str, int]) -> CareerBatting:
    values = {column.field: read_column(cells, column_map, column)
              for column in CAREER_BATTING_COLUMNS}
    return CareerBatting(**values)


ROW_PARSERS = {
    TableKind.PITCHING: (parse_pitching_row, parse_career_pitching_row),
    TableKind.BATTING: (parse_batting_row, parse_career_batting_row),
}


def parse_stats_table(table, kind: TableKind, result: StatsResult) -> StatsResult:
    """
    Append one table's season rows to result.

    A career row replaces any earlier career row; rows that are neither
    a season nor a career total are ignored.
    """
    season_parser, career_parser = ROW_PARSERS[kind]
    column_map = build_column_map(table)

    for row in table.find_all('tr'):
        cells = row.find_all('td')
        if not cells:
            continue

        year_text = cell_text(cells[0])
        if is_career_row(year_text):
            result.career = career_parser(cells, column_map)
        elif is_season_row(year_text):
            result.stats.append(season_parser(cells, column_map))

    return result


def parse_stats(soup: BeautifulSoup, kind: TableKind) -> StatsResult:
    """Collect every table of one kind on the page"""
    result = StatsResult()
    for table in soup.find_all('table'):
        if classify_table(table) is kind:
            parse_stats_table(table, kind, result)

    logger.debug(f"Parsed {len(result.stats)} {kind.value} seasons")
    return result


def parse_pitching_stats(soup: BeautifulSoup) -> StatsResult:
    """Pitching seasons plus the career pitching row, if present"""
    return parse_stats(soup, TableKind.PITCHING)


def parse_batting_stats(soup: BeautifulSoup) -> StatsResult:
    """Batting seasons plus the career batting row, if present"""
    return parse_stats(soup, TableKind.BATTING)
