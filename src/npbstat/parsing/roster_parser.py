"""
Team Roster Parser
==================

Parses an NPB team roster page (rst_<team>.html) into Player records.

A roster page holds one or more tables. Each table is either the registered
(支配下) or development (育成) squad, and rows are grouped by position through
header rows such as "No. | 投手 | 生年月日 | ...". The current position is
carried down the table as rows are read.
"""

import re
import logging
from itertools import islice
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup

from npbstat.parsing.models import Player, PlayerCategory, Position
from npbstat.parsing.parsing_utils import (
    cell_text, extract_player_id, parse_hand, parse_int_prefix
)

logger = logging.getLogger(__name__)

ROSTER_TABLE_SELECTOR = 'table.rosterlisttbl'
HEADING_TAGS = ['h2', 'h3', 'h4']
MAX_ANCESTOR_LEVELS = 5
MIN_DATA_CELLS = 7

POSITION_KEYWORDS = [
    ('投手', Position.PITCHER),
    ('捕手', Position.CATCHER),
    ('内野手', Position.INFIELDER),
    ('外野手', Position.OUTFIELDER),
]
STAFF_KEYWORDS = ('監督', 'コーチ')

_DEVELOPMENT_NUMBER = re.compile(r'^\d{3}$', re.ASCII)


def position_from_text(text: str) -> Optional[Position]:
    """First position keyword found in the text, None when there is none"""
    for keyword, position in POSITION_KEYWORDS:
        if keyword in text:
            return position
    return None


def is_staff_text(text: str) -> bool:
    return any(keyword in text for keyword in STAFF_KEYWORDS)


def category_from_text(text: str) -> Optional[PlayerCategory]:
    if '育成' in text:
        return PlayerCategory.DEVELOPMENT
    if '支配下' in text:
        return PlayerCategory.REGISTERED
    return None


def find_roster_tables(soup: BeautifulSoup) -> List:
    """Tables marked as roster lists, or every table when none are marked"""
    tables = soup.select(ROSTER_TABLE_SELECTOR)
    if tables:
        return tables
    return soup.find_all('table')


def determine_category(table) -> PlayerCategory:
    """
    Decide whether a table lists registered or development players.

    Checked in order:
      1. the nearest heading sibling before the table
      2. the nearest keyword heading before the table inside its
         closest five ancestors
      3. a three-digit uniform number in any data row
    Registered is the default.
    """
    heading = table.find_previous_sibling(HEADING_TAGS)
    if heading is not None:
        category = category_from_text(heading.get_text())
        if category is not None:
            return category

    ancestors = list(islice(table.parents, MAX_ANCESTOR_LEVELS))
    if ancestors:
        scope = ancestors[-1]
        # find_all_previous walks backwards, so the first hit is the nearest
        for heading in table.find_all_previous(HEADING_TAGS):
            category = category_from_text(heading.get_text())
            if category is None:
                continue
            if any(parent is scope for parent in heading.parents):
                return category

    for row in table.find_all('tr'):
        cells = row.find_all('td')
        if len(cells) >= 2 and _DEVELOPMENT_NUMBER.match(cell_text(cells[0])):
            return PlayerCategory.DEVELOPMENT

    return PlayerCategory.REGISTERED


def get_name_and_kana(html_cell) -> Tuple[str, Optional[str]]:
    """
    Split a name cell into display name and ruby reading.

    <ruby>牧<rt>まき</rt></ruby> gives ('牧', 'まき'); a cell without ruby
    text gives (text, None).
    """
    name_parts = []
    kana_parts = []
    for text in html_cell.find_all(string=True):
        parent_names = {parent.name for parent in text.parents}
        if 'rt' in parent_names:
            kana_parts.append(str(text).strip())
        elif 'rp' not in parent_names:
            name_parts.append(str(text))

    name = ''.join(name_parts).strip()
    kana = ''.join(kana_parts).strip()
    return name, (kana or None)


def parse_player_row(row, position: Position, category: PlayerCategory,
                     team_id: str) -> Optional[Player]:
    """
    Parse one roster data row.

    Returns:
        Player, or None when the row has too few cells or its height or
        weight is not numeric (manager and staff rows)
    """
    cells = row.find_all('td')
    if len(cells) < MIN_DATA_CELLS:
        return None

    height = parse_int_prefix(cell_text(cells[3]))
    weight = parse_int_prefix(cell_text(cells[4]))
    if height is None or weight is None:
        logger.debug(f"Skipping row without height/weight: {cell_text(cells[1])!r}")
        return None

    name, name_kana = get_name_and_kana(cells[1])
    note = cell_text(cells[7]) if len(cells) > 7 else ''

    return Player(
        number=cell_text(cells[0]),
        name=name,
        birth_date=cell_text(cells[2]),
        height=height,
        weight=weight,
        pitching_hand=parse_hand(cell_text(cells[5])),
        batting_hand=parse_hand(cell_text(cells[6])),
        position=position,
        category=category,
        team_id=team_id,
        name_kana=name_kana,
        note=note or None,
        player_id=extract_player_id(cells[1]),
    )


def parse_roster_table(table, team_id: str) -> List[Player]:
    """Parse every player row of one roster table"""
    category = determine_category(table)
    position = Position.PITCHER
    players = []

    for row in table.find_all('tr'):
        cells = row.find_all(['td', 'th'])

        # Section rows: "投手", "監督・コーチ", spacer rows
        if len(cells) < MIN_DATA_CELLS:
            new_position = position_from_text(row.get_text())
            if new_position is not None:
                position = new_position
            continue

        # Column header rows: "No. | 投手 | 生年月日 | ..."
        first_text = cell_text(cells[0])
        second_text = cell_text(cells[1])
        if 'No.' in first_text:
            new_position = position_from_text(second_text)
            if new_position is not None:
                position = new_position
                continue
            if is_staff_text(second_text):
                continue

        player = parse_player_row(row, position, category, team_id)
        if player:
            players.append(player)

    return players


def parse_roster(soup: BeautifulSoup, team_id: str) -> List[Player]:
    """
    Extract all players from a roster page.

    Args:
        soup: Parsed roster page
        team_id: Short team id stamped on every record

    Returns:
        Players in document order
    """
    players = []
    for table in find_roster_tables(soup):
        players.extend(parse_roster_table(table, team_id))

    logger.debug(f"Parsed {len(players)} players for team {team_id}")
    return players


def scrape_players_from_html(html: str, team_id: str) -> List[Player]:
    """Parse raw roster HTML"""
    return parse_roster(BeautifulSoup(html, 'html.parser'), team_id)
