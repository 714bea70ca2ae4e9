"""
End-to-end extraction over whole pages, including the fallback strategies.
"""

from datetime import datetime, timedelta, timezone

from hockey_pool.scraping.document import parse_document
from hockey_pool.scraping.locator import locate_tables
from hockey_pool.scraping.scraper import UNKNOWN_TEAM, build_scrape_result, extract_injuries, utc_timestamp
from support import injury_table, page, player_row


def test_extracts_espn_layout(espn_page):
    injuries = extract_injuries(espn_page)

    assert [(i.team, i.name, i.position) for i in injuries] == [
        ("Anaheim Ducks", "Trevor Zegras", "C"),
        ("Anaheim Ducks", "John Gibson", "G"),
        ("Boston Bruins", "Charlie McAvoy", "D"),
    ]
    assert injuries[0].player_url == "https://www.espn.in/nhl/player/_/id/4697382/trevor-zegras"
    assert injuries[1].status == "Day-To-Day"
    assert injuries[2].player_url == "https://www.espn.com/nhl/player/_/id/4233563/charlie-mcavoy"


def test_base_url_override(espn_page):
    injuries = extract_injuries(espn_page, base_url="https://www.espn.com")

    assert injuries[0].player_url == "https://www.espn.com/nhl/player/_/id/4697382/trevor-zegras"


def test_every_record_has_name_and_short_position():
    html = page(
        "<div><h2>Montreal Canadiens</h2>"
        + injury_table([
            player_row("Kirby Dach", "C"),
            player_row("Patrik Laine", "LW"),
            player_row("X", "D"),
            player_row("Mike Matheson", "Defense"),
            player_row("Cole Caufield", ""),
            "<tr></tr>",
        ])
        + "</div>"
    )

    injuries = extract_injuries(html)

    assert [i.name for i in injuries] == ["Kirby Dach", "Patrik Laine"]
    for injury in injuries:
        assert len(injury.name) > 1
        assert 1 <= len(injury.position) <= 3


def test_duplicate_tables_are_deduplicated():
    table = injury_table([player_row("Nathan MacKinnon", "C"), player_row("Cale Makar", "D")])
    html = page("<div><h2>Colorado Avalanche</h2>" + table + table + "</div>")

    injuries = extract_injuries(html)

    assert [i.name for i in injuries] == ["Nathan MacKinnon", "Cale Makar"]


def test_heading_strategy_when_tables_have_no_injury_context():
    html = page(
        "<section><h4>Colorado Avalanche</h4>"
        "<table><tr><td>Cale Makar</td><td>D</td><td>Nov 1</td><td>Oct 20</td><td>Out</td><td>Knee.</td></tr></table>"
        "</section>"
    )

    injuries = extract_injuries(html)

    assert [(i.team, i.name, i.comment) for i in injuries] == [("Colorado Avalanche", "Cale Makar", "Knee.")]


def test_placeholder_team_is_last_resort():
    html = page(
        "<div><table><tr><td>Cale Makar</td><td>D</td><td>Nov 1</td></tr>"
        "<tr><td>NAME</td><td>POS</td><td>EST. RETURN</td></tr></table></div>"
    )

    injuries = extract_injuries(html)

    assert [(i.team, i.name) for i in injuries] == [(UNKNOWN_TEAM, "Cale Makar")]


def test_page_without_tables_yields_nothing():
    assert extract_injuries(page("<div><h2>Injuries</h2><p>No injuries reported.</p></div>")) == []


def test_locator_takes_first_matching_selector_only():
    html = page(
        '<table class="Table"><tr><td>a</td></tr></table>'
        '<table class="injuries-list"><tr><td>b</td></tr></table>'
        "<table><tr><td>c</td></tr></table>"
    )

    tables = locate_tables(parse_document(html))

    assert [t.text() for t in tables] == ["a"]


def test_locator_falls_back_to_all_tables_then_containers():
    plain = parse_document(page("<table><tr><td>a</td></tr></table><table><tr><td>b</td></tr></table>"))
    containers = parse_document(page('<div data-testid="injuries-feed"><div>c</div></div>'))

    assert [t.text() for t in locate_tables(plain)] == ["a", "b"]
    assert [t.text() for t in locate_tables(containers)] == ["c"]
    assert locate_tables(containers, include_containers=False) == []


def test_div_container_takes_team_from_its_own_heading():
    html = page(
        '<div class="injuries-wrap"><h2>Boston Bruins</h2>'
        '<div class="Table__TR"><span class="Table__TD">Charlie McAvoy</span><span class="Table__TD">D</span></div>'
        '<div class="Table__TR"><span class="Table__TD">Hampus Lindholm</span><span class="Table__TD">D</span></div>'
        "</div>"
    )

    injuries = extract_injuries(html)

    assert [(i.team, i.name, i.position) for i in injuries] == [
        ("Boston Bruins", "Charlie McAvoy", "D"),
        ("Boston Bruins", "Hampus Lindholm", "D"),
    ]


def test_build_scrape_result():
    injuries = extract_injuries(page("<div><h2>Vegas Golden Knights</h2>" + injury_table([player_row("Jack Eichel", "C")]) + "</div>"))
    scraped_at = datetime(2025, 11, 3, 12, 0, tzinfo=timezone.utc)

    result = build_scrape_result(injuries, scraped_at=scraped_at)
    payload = result.to_payload()

    assert result.count == 1
    assert payload["scrapedAt"] == "2025-11-03T12:00:00.000Z"
    assert payload["items"][0] == {
        "team": "Vegas Golden Knights",
        "name": "Jack Eichel",
        "position": "C",
        "estReturn": "Nov 1",
        "date": "Oct 20",
        "status": "Out",
        "comment": "Lower body injury.",
    }


def test_timestamps_are_utc_with_z_suffix():
    eastern = timezone(timedelta(hours=-5))

    assert utc_timestamp(datetime(2025, 11, 3, 7, 30, 15, 123456, tzinfo=eastern)) == "2025-11-03T12:30:15.123Z"
    assert utc_timestamp().endswith("Z")
