"""
Row extraction: the fold over table rows and its classification rules.
"""

from hockey_pool.scraping.document import parse_document
from hockey_pool.scraping.headers import classify_table_headers
from hockey_pool.scraping.rows import (
    ROW_HEADER,
    ROW_INJURY,
    ROW_TEAM,
    ROW_UNATTRIBUTED,
    TeamContext,
    classify_row,
    fold_rows,
    is_team_banner_row,
    resolve_indices,
    select_rows,
)
from support import injury_table, player_row

BASE_URL = "https://www.espn.in"


def _fold(rows, team="", headers=None):
    table = parse_document(injury_table(rows, headers=headers)).select_one("table")
    mapping = classify_table_headers(table)
    return fold_rows(select_rows(table), mapping, TeamContext(team), BASE_URL)


def _row(html):
    return parse_document(f"<table><tbody>{html}</tbody></table>").select_one("tr")


def test_extracts_all_fields():
    records, context = _fold(
        [player_row("Connor McDavid", "C", est="Dec 1", date="Nov 10", status="Out", comment="Upper body.")],
        team="Edmonton Oilers",
    )

    assert context.team == "Edmonton Oilers"
    record = records[0]
    assert record.team == "Edmonton Oilers"
    assert record.name == "Connor McDavid"
    assert record.position == "C"
    assert record.est_return == "Dec 1"
    assert record.date == "Nov 10"
    assert record.status == "Out"
    assert record.comment == "Upper body."
    assert record.player_url is None


def test_player_url_is_resolved_against_site():
    records, _ = _fold(
        [
            player_row("Leon Draisaitl", "C", href="/nhl/player/_/id/3114727/leon-draisaitl"),
            player_row("Evan Bouchard", "D", href="nhl/player/_/id/4024/evan-bouchard"),
            player_row("Zach Hyman", "LW", href="https://www.espn.com/nhl/player/_/id/2562606/zach-hyman"),
        ],
        team="Edmonton Oilers",
    )

    assert [r.player_url for r in records] == [
        "https://www.espn.in/nhl/player/_/id/3114727/leon-draisaitl",
        "https://www.espn.in/nhl/player/_/id/4024/evan-bouchard",
        "https://www.espn.com/nhl/player/_/id/2562606/zach-hyman",
    ]


def test_header_row_inside_body_is_skipped():
    outcome = classify_row(_row("<tr><td>NAME POS STATUS</td><td>x</td></tr>"), {}, TeamContext("Boston Bruins"), BASE_URL)

    assert outcome.kind == ROW_HEADER
    assert outcome.record is None
    assert outcome.context.team == "Boston Bruins"


def test_invalid_position_with_name_like_text_becomes_team_row():
    records, context = _fold(
        [
            "<tr><td>Florida Panthers</td><td>Atlantic Division</td><td></td><td></td><td></td><td></td></tr>",
            player_row("Aleksander Barkov", "C"),
        ]
    )

    assert context.team == "Florida Panthers"
    assert [(r.team, r.name) for r in records] == [("Florida Panthers", "Aleksander Barkov")]


def test_rows_without_team_are_dropped():
    records, context = _fold([player_row("Aleksander Barkov", "C")])

    assert records == []
    assert context.team == ""


def test_team_like_row_sets_team_when_none_known():
    row = _row("<tr><td>Seattle Kraken</td><td>TM</td><td>-</td></tr>")

    outcome = classify_row(row, {}, TeamContext(), BASE_URL)

    assert outcome.kind == ROW_TEAM
    assert outcome.context.team == "Seattle Kraken"


def test_player_row_without_team_is_unattributed():
    outcome = classify_row(_row(player_row("Matty Beniers", "C")), {}, TeamContext(), BASE_URL)

    assert outcome.kind == ROW_UNATTRIBUTED
    assert outcome.record is None


def test_positional_fallback_without_header_mapping():
    outcome = classify_row(_row("<tr><td>Jared McCann</td><td>LW</td><td>Nov 5</td></tr>"), {}, TeamContext("Seattle Kraken"), BASE_URL)

    assert outcome.kind == ROW_INJURY
    assert outcome.record.name == "Jared McCann"
    assert outcome.record.position == "LW"
    assert outcome.record.est_return == "Nov 5"
    assert outcome.record.status == ""


def test_resolve_indices_positional_needs_two_cells():
    assert resolve_indices({}, 1) is None
    assert resolve_indices({}, 3) == {"NAME": 0, "POS": 1, "EST. RETURN": 2}
    mapping = {"NAME": 2, "POS": 0}
    assert resolve_indices(mapping, 3) is mapping


def test_team_banner_row_rules():
    assert is_team_banner_row(["Buffalo Sabres"])
    assert is_team_banner_row(["Buffalo Sabres", "", ""])
    assert not is_team_banner_row(["Buffalo Sabres", "C"])
    assert not is_team_banner_row(["LW", "", ""])
    assert not is_team_banner_row(["123456", ""])
    assert not is_team_banner_row(["", "Buffalo Sabres"])


def test_short_or_numeric_single_cell_keeps_current_team():
    records, context = _fold(
        ['<tr><td colspan="6">12</td></tr>', player_row("Rasmus Dahlin", "D")],
        team="Buffalo Sabres",
    )

    assert context.team == "Buffalo Sabres"
    assert [r.team for r in records] == ["Buffalo Sabres"]


def test_name_containing_header_keyword_is_rejected():
    records, _ = _fold([player_row("Nameless Ghost", "C")], team="Buffalo Sabres")

    assert records == []


def test_row_errors_are_skipped():
    class BrokenRow:
        def select(self, selector):
            raise RuntimeError("malformed row")

    good = _row(player_row("Owen Power", "D"))

    records, context = fold_rows([BrokenRow(), good], {}, TeamContext("Buffalo Sabres"), BASE_URL)

    assert [r.name for r in records] == ["Owen Power"]
    assert context.team == "Buffalo Sabres"
