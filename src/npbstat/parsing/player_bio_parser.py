"""
Player Profile Parser
=====================

Extracts profile facts from an NPB player page (/bis/players/<id>.html).

The profile block has no fixed layout, so every table row, <dd> and
.playerInfo list item is tested against each pattern independently.
Later matches overwrite earlier ones, except the career text where the
first match is kept.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup

from npbstat.parsing.models import PlayerProfile

PROFILE_ITEM_SELECTOR = 'table tr, dl dd, .playerInfo li'
POSITION_WORDS = ('投手', '捕手', '内野手', '外野手')

MIN_JOINED_YEAR = 1965
MAX_JOINED_YEAR = 2100

_KANA_ONLY = re.compile(r'[ぁ-ん・]+')
_UNIFORM_NUMBER = re.compile(r'\d{1,3}')
_HANDS = re.compile(r'([左右両])投([左右両])打')
_HEIGHT_WEIGHT = re.compile(r'(\d+)cm[／/](\d+)kg')
_BIRTH_DATE = re.compile(r'\d{4}年\d{1,2}月\d{1,2}日')
_DRAFT_YEAR = re.compile(r'(\d{4})年ドラフト')


def get_player_name(soup: BeautifulSoup) -> str:
    """Player's name from the first <h1>"""
    h1 = soup.find('h1')
    if h1:
        return h1.get_text().strip()
    return ''


def get_team_name(soup: BeautifulSoup) -> str:
    """
    Team name from the page title.

    HTML: <title>東　克樹 | 横浜DeNAベイスターズ</title>
    """
    title = soup.find('title')
    if not title:
        return ''
    parts = title.get_text().split('|')
    if len(parts) < 2:
        return ''
    return parts[1].strip()


def get_profile_texts(soup: BeautifulSoup) -> List[str]:
    """Stripped text of every profile-like element, in document order"""
    return [item.get_text().strip() for item in soup.select(PROFILE_ITEM_SELECTOR)]


def get_joined_year(draft_text: str) -> Optional[int]:
    """
    Year from draft text such as "2017年ドラフト1位".

    Only plausible NPB draft years are accepted.
    """
    match = _DRAFT_YEAR.search(draft_text)
    if not match:
        return None
    year = int(match.group(1))
    if MIN_JOINED_YEAR <= year <= MAX_JOINED_YEAR:
        return year
    return None


def apply_profile_text(profile: PlayerProfile, text: str) -> None:
    """Test one element's text against every profile pattern"""
    if _KANA_ONLY.fullmatch(text):
        profile.name_kana = text

    if _UNIFORM_NUMBER.fullmatch(text):
        profile.uniform_number = text

    if text in POSITION_WORDS:
        profile.position = text

    if '投' in text and '打' in text:
        match = _HANDS.search(text)
        if match:
            profile.throwing_hand = match.group(1)
            profile.batting_hand = match.group(2)

    if 'cm' in text and 'kg' in text:
        match = _HEIGHT_WEIGHT.search(text)
        if match:
            profile.height = f"{match.group(1)}cm"
            profile.weight = f"{match.group(2)}kg"

    if _BIRTH_DATE.search(text):
        profile.birth_date = text

    # School markers (高校 / 大学); keep the first one seen
    if ('高' in text or '大' in text) and not profile.career:
        profile.career = text

    if 'ドラフト' in text:
        profile.draft_info = text
        joined_year = get_joined_year(text)
        if joined_year is not None:
            profile.joined_year = joined_year


def parse_player_profile(soup: BeautifulSoup, player_id: str) -> PlayerProfile:
    """
    Build a PlayerProfile from a player page.

    Args:
        soup: Parsed player page
        player_id: Eight-digit NPB player ID

    Returns:
        PlayerProfile; fields with no matching element stay unset
    """
    profile = PlayerProfile(
        player_id=player_id,
        name=get_player_name(soup),
        team=get_team_name(soup),
    )

    for text in get_profile_texts(soup):
        apply_profile_text(profile, text)

    return profile
