from bs4 import BeautifulSoup

from npbstat.parsing.models import Hand, PlayerCategory, Position
from npbstat.parsing.roster_parser import (
    determine_category,
    get_name_and_kana,
    parse_roster,
    scrape_players_from_html,
)

HEADER = "<tr><td>No.</td><td>{}</td><td>生年月日</td><td>身長</td><td>体重</td><td>投</td><td>打</td><td>備考</td></tr>"


def _player_row(number, name, height="180", weight="80", throws="右", bats="右", note=""):
    return (f"<tr><td>{number}</td><td>{name}</td><td>2000.01.01</td><td>{height}</td>"
            f"<td>{weight}</td><td>{throws}</td><td>{bats}</td><td>{note}</td></tr>")


def _table(*rows, css_class="rosterlisttbl"):
    return f'<table class="{css_class}">' + "".join(rows) + "</table>"


def test_extracts_all_players(roster_html):
    players = scrape_players_from_html(roster_html, "db")

    assert len(players) == 10
    assert all(p.team_id == "db" for p in players)
    assert [p.name for p in players][:2] == ["東　克樹", "竹田　祐"]


def test_positions_follow_header_rows(roster_html):
    players = scrape_players_from_html(roster_html, "db")
    counts = {position: 0 for position in Position}
    for player in players:
        counts[player.position] += 1

    assert counts[Position.PITCHER] == 3
    assert counts[Position.CATCHER] == 2
    assert counts[Position.INFIELDER] == 3
    assert counts[Position.OUTFIELDER] == 2

    catchers = [p.name for p in players if p.position is Position.CATCHER]
    assert catchers == ["戸柱　恭孝", "嶺井　博希"]


def test_categories_from_headings(roster_html):
    players = scrape_players_from_html(roster_html, "db")
    development = [p for p in players if p.category is PlayerCategory.DEVELOPMENT]

    assert [p.name for p in development] == ["深沢　鳳介", "草野　陽斗"]
    assert [p.number for p in development] == ["043", "101"]
    assert sum(p.category is PlayerCategory.REGISTERED for p in players) == 8


def test_player_fields(roster_html):
    players = scrape_players_from_html(roster_html, "db")
    azuma = next(p for p in players if p.name == "東　克樹")

    assert azuma.number == "11"
    assert azuma.birth_date == "1995.11.29"
    assert azuma.height == 170
    assert azuma.weight == 80
    assert azuma.pitching_hand is Hand.LEFT
    assert azuma.batting_hand is Hand.LEFT
    assert azuma.player_id == "51155136"
    assert azuma.note is None

    yamato = next(p for p in players if p.name == "大和")
    assert yamato.pitching_hand is Hand.RIGHT
    assert yamato.batting_hand is Hand.LEFT

    kuwahara = next(p for p in players if p.name == "桑原　将志")
    assert kuwahara.note == "育成から昇格"


def test_manager_and_header_rows_are_skipped(roster_html):
    names = [p.name for p in scrape_players_from_html(roster_html, "db")]
    assert "三浦　大輔" not in names
    assert "No." not in names
    assert "監督" not in names


def test_row_without_height_or_weight_is_dropped():
    html = _table(
        HEADER.format("投手"),
        _player_row("81", "監督　太郎", height="", weight=""),
        _player_row("11", "投手　一郎", height="183cm", weight="-"),
        _player_row("12", "投手　二郎"),
    )
    players = scrape_players_from_html(html, "g")
    assert [p.name for p in players] == ["投手　二郎"]


def test_section_rows_switch_position_and_staff_rows_do_not():
    html = _table(
        "<tr><th colspan='8'>監督・コーチ</th></tr>",
        _player_row("1", "A"),
        "<tr><th colspan='8'>外野手</th></tr>",
        _player_row("2", "B"),
        "<tr><td>No.</td><td>コーチ</td><td></td><td></td><td></td><td></td><td></td><td></td></tr>",
        _player_row("3", "C"),
    )
    players = scrape_players_from_html(html, "t")
    assert [(p.name, p.position) for p in players] == [
        ("A", Position.PITCHER),
        ("B", Position.OUTFIELDER),
        ("C", Position.OUTFIELDER),
    ]


def test_section_row_with_position_keyword_switches_even_for_coaches():
    html = _table(
        "<tr><th colspan='8'>捕手</th></tr>",
        _player_row("10", "A"),
        "<tr><td colspan='8'>投手コーチ</td></tr>",
        _player_row("20", "B"),
    )
    players = scrape_players_from_html(html, "t")
    assert [p.position for p in players] == [Position.CATCHER, Position.PITCHER]


def test_three_digit_number_without_heading_is_development():
    html = "<div>" + _table(HEADER.format("投手"), _player_row("005", "X"), _player_row("120", "Y")) + "</div>"
    players = scrape_players_from_html(html, "h")
    assert all(p.category is PlayerCategory.DEVELOPMENT for p in players)


def test_registered_heading_beats_three_digit_number():
    html = "<h3>支配下選手</h3>" + _table(HEADER.format("投手"), _player_row("100", "X"))
    players = scrape_players_from_html(html, "h")
    assert players[0].category is PlayerCategory.REGISTERED


def test_no_heading_and_short_numbers_is_registered():
    html = _table(HEADER.format("捕手"), _player_row("22", "X"), _player_row("8", "Y"))
    players = scrape_players_from_html(html, "f")
    assert {p.category for p in players} == {PlayerCategory.REGISTERED}
    assert {p.position for p in players} == {Position.CATCHER}


def test_heading_found_through_ancestor():
    html = (
        "<div id='main'>"
        "<h3>育成選手</h3>"
        "<div class='wrap'><div class='inner'>"
        + _table(HEADER.format("投手"), _player_row("11", "X"))
        + "</div></div></div>"
    )
    soup = BeautifulSoup(html, "html.parser")
    assert determine_category(soup.find("table")) is PlayerCategory.DEVELOPMENT


def test_nearest_ancestor_heading_wins():
    html = (
        "<div>"
        "<h3>支配下選手</h3><div><p>...</p></div>"
        "<h3>育成選手</h3><div>" + _table(HEADER.format("投手"), _player_row("11", "X")) + "</div>"
        "</div>"
    )
    soup = BeautifulSoup(html, "html.parser")
    # Not a sibling of the table, so the ancestor search decides
    assert determine_category(soup.find("table")) is PlayerCategory.DEVELOPMENT


def test_unmarked_tables_are_used_when_no_roster_class():
    html = _table(HEADER.format("内野手"), _player_row("5", "X"), css_class="other")
    players = scrape_players_from_html(html, "e")
    assert len(players) == 1
    assert players[0].position is Position.INFIELDER


def test_ruby_reading_becomes_name_kana():
    html = _table(
        HEADER.format("内野手"),
        _player_row("2", "<a href='/bis/players/11111111.html'><ruby>牧<rp>(</rp><rt>まき</rt><rp>)</rp></ruby>"
                         "<ruby>秀悟<rt>しゅうご</rt></ruby></a>"),
    )
    player = scrape_players_from_html(html, "db")[0]
    assert player.name == "牧秀悟"
    assert player.name_kana == "まきしゅうご"
    assert player.player_id == "11111111"


def test_get_name_and_kana_plain_cell():
    cell = BeautifulSoup("<td>佐野　恵太</td>", "html.parser").td
    assert get_name_and_kana(cell) == ("佐野　恵太", None)


def test_empty_document_gives_no_players():
    assert parse_roster(BeautifulSoup("<html><body></body></html>", "html.parser"), "g") == []


def test_extraction_is_repeatable(roster_html):
    first = [p.to_dict() for p in scrape_players_from_html(roster_html, "db")]
    second = [p.to_dict() for p in scrape_players_from_html(roster_html, "db")]
    assert first == second
