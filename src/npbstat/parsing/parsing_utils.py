"""
Cell, number and link utilities
===============================
"""

import re
import math
from typing import List, Optional

from npbstat.parsing.models import Hand

# Placeholder text used by the site for undefined or not-applicable values
PLACEHOLDERS = {'', '-', '----'}

_FLOAT_PREFIX = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?', re.ASCII)
_INT_PREFIX = re.compile(r'^[+-]?\d+', re.ASCII)
_FRACTION_CELL = re.compile(r'^\.\d+$', re.ASCII)
_PLAYER_LINK = re.compile(r'/bis/players/(\d{8})\.html', re.ASCII)


def parse_number(text) -> float:
    """
    Convert raw cell text to a number.

    Blank and dash placeholders read as zero. Otherwise the longest ASCII
    numeric prefix is used ("3.48" -> 3.48, ".295" -> 0.295, "12(1)" -> 12.0),
    and anything without one, or overflowing to infinity, reads as zero.
    Always returns a float and never raises.
    """
    if text is None:
        return 0.0
    cleaned = str(text).strip()
    if cleaned in PLACEHOLDERS:
        return 0.0
    match = _FLOAT_PREFIX.match(cleaned)
    if not match:
        return 0.0
    try:
        value = float(match.group(0))
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse_int_prefix(text) -> Optional[int]:
    """Leading integer of the text ("180cm" -> 180), None when there is none"""
    if text is None:
        return None
    match = _INT_PREFIX.match(str(text).strip())
    return int(match.group(0)) if match else None


def parse_hand(text) -> Hand:
    """Hand value for an exact 右/左/両 cell, right-handed otherwise"""
    cleaned = (text or '').strip()
    for hand in Hand:
        if cleaned == hand.value:
            return hand
    return Hand.RIGHT


def cell_text(cell) -> str:
    """Stripped text of a BeautifulSoup cell, empty string for a missing cell"""
    if cell is None:
        return ''
    return cell.get_text().strip()


def join_fraction(cells: List, index: int) -> str:
    """
    Text of cells[index], with a following fraction-only cell appended.

    Innings and hits are sometimes split into "147" and ".1" cells.
    """
    if index < 0 or index >= len(cells):
        return ''
    text = cell_text(cells[index])
    if index + 1 < len(cells):
        following = cell_text(cells[index + 1])
        if _FRACTION_CELL.match(following):
            text += following
    return text


def extract_player_id(html_cell) -> Optional[str]:
    """Extract the eight-digit NPB player ID from a linked name cell"""
    if not html_cell:
        return None

    # Player links look like /bis/players/41045138.html
    link = html_cell.find('a', href=True)
    if link and link.get('href'):
        match = _PLAYER_LINK.search(link.get('href'))
        if match:
            return match.group(1)

    return None
