import pytest

from npbstat.utils.url_cacher import FetchError, PageCache


ROSTER_HTML = """
<!DOCTYPE html>
<html>
<head><title>横浜DeNAベイスターズ 選手一覧</title></head>
<body>
  <h1>横浜DeNAベイスターズ</h1>
  <h2>2025年度 選手一覧</h2>

  <h3>■ 支配下選手</h3>
  <table class="rosterlisttbl">
    <tr><td>No.</td><td>監督</td><td>生年月日</td><td></td><td>備考</td></tr>
    <tr><td>81</td><td>三浦　大輔</td><td>1973.12.25</td><td></td><td></td></tr>
    <tr><td>No.</td><td>投手</td><td>生年月日</td><td>身長</td><td>体重</td><td>投</td><td>打</td><td>備考</td></tr>
    <tr><td>11</td><td><a href="/bis/players/51155136.html">東　克樹</a></td><td>1995.11.29</td><td>170</td><td>80</td><td>左</td><td>左</td><td></td></tr>
    <tr><td>12</td><td><a href="/bis/players/51234567.html">竹田　祐</a></td><td>1999.07.05</td><td>184</td><td>96</td><td>右</td><td>右</td><td></td></tr>
    <tr><td>No.</td><td>捕手</td><td>生年月日</td><td>身長</td><td>体重</td><td>投</td><td>打</td><td>備考</td></tr>
    <tr><td>2</td><td><a href="/bis/players/52345678.html">戸柱　恭孝</a></td><td>1989.10.20</td><td>178</td><td>88</td><td>右</td><td>右</td><td></td></tr>
    <tr><td>27</td><td><a href="/bis/players/53456789.html">嶺井　博希</a></td><td>1990.05.12</td><td>175</td><td>82</td><td>右</td><td>右</td><td></td></tr>
    <tr><td>No.</td><td>内野手</td><td>生年月日</td><td>身長</td><td>体重</td><td>投</td><td>打</td><td>備考</td></tr>
    <tr><td>6</td><td><a href="/bis/players/54567890.html">牧　秀悟</a></td><td>1994.11.20</td><td>180</td><td>88</td><td>右</td><td>右</td><td></td></tr>
    <tr><td>25</td><td><a href="/bis/players/55678901.html">大和</a></td><td>1992.03.15</td><td>175</td><td>75</td><td>右</td><td>左</td><td></td></tr>
    <tr><td>No.</td><td>外野手</td><td>生年月日</td><td>身長</td><td>体重</td><td>投</td><td>打</td><td>備考</td></tr>
    <tr><td>7</td><td><a href="/bis/players/56789012.html">佐野　恵太</a></td><td>1994.02.06</td><td>180</td><td>88</td><td>右</td><td>左</td><td></td></tr>
    <tr><td>8</td><td><a href="/bis/players/57890123.html">桑原　将志</a></td><td>1993.05.18</td><td>178</td><td>85</td><td>右</td><td>右</td><td>育成から昇格</td></tr>
  </table>

  <h3>■ 育成選手</h3>
  <table class="rosterlisttbl">
    <tr><td>No.</td><td>投手</td><td>生年月日</td><td>身長</td><td>体重</td><td>投</td><td>打</td><td>備考</td></tr>
    <tr><td>043</td><td><a href="/bis/players/58901234.html">深沢　鳳介</a></td><td>2003.11.05</td><td>177</td><td>80</td><td>右</td><td>右</td><td></td></tr>
    <tr><td>No.</td><td>内野手</td><td>生年月日</td><td>身長</td><td>体重</td><td>投</td><td>打</td><td>備考</td></tr>
    <tr><td>101</td><td><a href="/bis/players/59012345.html">草野　陽斗</a></td><td>2004.06.07</td><td>175</td><td>87</td><td>右</td><td>右</td><td></td></tr>
  </table>
</body>
</html>
"""

PITCHING_HEADER = (
    "<tr><th>年度</th><th>球団</th><th>登板</th><th>勝利</th><th>敗北</th><th>セーブ</th>"
    "<th>H</th><th>HP</th><th>完投</th><th>完封</th><th>無四球</th><th>勝率</th><th>打者</th>"
    "<th>投球回</th><th>安打</th><th>本塁打</th><th>三振</th><th>奪三振率</th><th>四球</th>"
    "<th>死球</th><th>暴投</th><th>ボーク</th><th>失点</th><th>自責点</th><th>防御率</th></tr>"
)

BATTING_HEADER = (
    "<tr><th>年度</th><th>球団</th><th>試合</th><th>打席</th><th>打数</th><th>得点</th>"
    "<th>安打</th><th>二塁打</th><th>三塁打</th><th>本塁打</th><th>塁打</th><th>打点</th>"
    "<th>盗塁</th><th>盗塁死</th><th>犠打</th><th>犠飛</th><th>四球</th><th>敬遠</th>"
    "<th>死球</th><th>三振</th><th>併殺打</th><th>打率</th><th>出塁率</th><th>長打率</th>"
    "<th>OPS</th></tr>"
)


def table_row(*values) -> str:
    return "<tr>" + "".join(f"<td>{value}</td>" for value in values) + "</tr>"


PITCHER_HTML = f"""
<!DOCTYPE html>
<html>
<head><title>東　克樹 | 横浜DeNAベイスターズ</title></head>
<body>
  <h1>東　克樹</h1>
  <div class="playerInfo">
    <ul>
      <li>11</li>
      <li>投手</li>
      <li>左投左打</li>
      <li>170cm／80kg</li>
      <li>1995年11月29日</li>
      <li>愛工大名電高→立命館大</li>
      <li>2017年ドラフト1位</li>
    </ul>
  </div>

  <h2>投手成績</h2>
  <table>
    <thead>{PITCHING_HEADER}</thead>
    <tbody>
      {table_row(2018, 'DeNA', 26, 9, 6, 0, 0, 0, 2, 1, 0, '.600', 620, '147.1', 138, 14, 130, '7.94', 50, 8, 5, 0, 62, 57, '3.48')}
      {table_row(2019, 'DeNA', 20, 10, 5, 0, 0, 0, 1, 0, 0, '.667', 500, '120.0', 100, 10, 110, '8.25', 40, 5, 3, 0, 50, 45, '3.38')}
      {table_row('通　算', '2年', 46, 19, 11, 0, 0, 0, 3, 1, 0, '.633', 1120, '267.1', 238, 24, 240, '8.08', 90, 13, 8, 0, 112, 102, '3.43')}
    </tbody>
  </table>

  <h2>打撃成績</h2>
  <table>
    <thead>{BATTING_HEADER}</thead>
    <tbody>
      {table_row(2018, 'DeNA', 26, 50, 45, 3, 5, 1, 0, 0, 6, 2, 0, 0, 5, 0, 0, 0, 0, 25, 0, '.111', '.111', '.133', '.244')}
      {table_row('通　算', '1年', 26, 50, 45, 3, 5, 1, 0, 0, 6, 2, 0, 0, 5, 0, 0, 0, 0, 25, 0, '.111', '.111', '.133', '.244')}
    </tbody>
  </table>
</body>
</html>
"""

BATTER_HTML = f"""
<!DOCTYPE html>
<html>
<head><title>佐野　恵太 | 横浜DeNAベイスターズ</title></head>
<body>
  <h1>佐野　恵太</h1>
  <div class="playerInfo">
    <ul>
      <li>7</li>
      <li>外野手</li>
      <li>右投左打</li>
      <li>180cm／88kg</li>
      <li>1994年2月6日</li>
    </ul>
  </div>

  <h2>打撃成績</h2>
  <table>
    <thead>{BATTING_HEADER}</thead>
    <tbody>
      {table_row(2020, 'DeNA', 120, 520, 460, 65, 145, 30, 2, 20, 239, 75, 5, 3, 0, 5, 50, 8, 5, 85, 12, '.315', '.384', '.520', '.904')}
      {table_row('通　算', '5年', 600, 2500, 2200, 300, 650, 120, 10, 80, 1030, 350, 25, 15, 5, 20, 250, 40, 25, 400, 60, '.295', '.368', '.468', '.836')}
    </tbody>
  </table>
</body>
</html>
"""


class FakeFetcher:
    """Serves canned HTML by URL and records every request"""

    def __init__(self, pages=None, errors=None):
        self.pages = dict(pages or {})
        self.errors = dict(errors or {})
        self.requests = []

    def fetch_html(self, url: str) -> str:
        self.requests.append(url)
        if url in self.errors:
            raise self.errors[url]
        if url not in self.pages:
            raise FetchError(url, "HTTP error! status: 404", status=404)
        return self.pages[url]


@pytest.fixture
def roster_html():
    return ROSTER_HTML


@pytest.fixture
def pitcher_html():
    return PITCHER_HTML


@pytest.fixture
def batter_html():
    return BATTER_HTML


@pytest.fixture
def cache():
    return PageCache()


@pytest.fixture
def fake_fetcher():
    return FakeFetcher
