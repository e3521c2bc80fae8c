"""
Player name matching
====================

Loose matching used by roster search: spaces (half and full width) and the
mid-dot separator are removed, katakana is folded to hiragana and latin text
is lowercased before a plain substring test.
"""

import re
from typing import Optional

_SEPARATORS = re.compile(r'[\s　・]')

# Katakana ァ..ヶ map onto hiragana ぁ..ゖ at a fixed offset
_KATAKANA_TO_HIRAGANA = {code: code - 0x60 for code in range(0x30A1, 0x30F7)}


def normalize_name(name: Optional[str]) -> str:
    """Normalize a name or search query for matching"""
    if not name:
        return ""
    cleaned = _SEPARATORS.sub('', name).lower()
    return cleaned.translate(_KATAKANA_TO_HIRAGANA)


def matches_name(name1: str, name2: str) -> bool:
    """True when either normalized name contains the other"""
    normalized1 = normalize_name(name1)
    normalized2 = normalize_name(name2)
    return normalized2 in normalized1 or normalized1 in normalized2


def matches_player_name(query: str, player_name: str, player_name_kana: Optional[str] = None) -> bool:
    """
    Check a search query against a player's name and phonetic name.

    Kanji names never match a kana query on their own, so the phonetic
    name is what makes "まき" find 牧秀悟.
    """
    normalized_query = normalize_name(query)

    if normalized_query in normalize_name(player_name):
        return True

    if player_name_kana and normalized_query in normalize_name(player_name_kana):
        return True

    return False
