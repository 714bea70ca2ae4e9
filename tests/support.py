"""
HTML builders and fakes for the injury scraper tests.
"""

from typing import List, Optional, Sequence


HEADERS = ["NAME", "POS", "EST. RETURN", "DATE", "STATUS", "COMMENT"]


def player_row(name, pos, est="Nov 1", date="Oct 20", status="Out", comment="Lower body injury.", href=None):
    name_cell = f'<a href="{href}">{name}</a>' if href else name
    return (
        f"<tr><td>{name_cell}</td><td>{pos}</td><td>{est}</td>"
        f"<td>{date}</td><td>{status}</td><td>{comment}</td></tr>"
    )


def injury_table(rows: Sequence[str], headers: Optional[List[str]] = None, css_class: str = "Table", caption: str = "") -> str:
    headers = HEADERS if headers is None else headers
    head = "".join(f"<th>{h}</th>" for h in headers)
    caption_html = f"<caption>{caption}</caption>" if caption else ""
    class_attr = f' class="{css_class}"' if css_class else ""
    return (
        f"<table{class_attr}>{caption_html}<thead><tr>{head}</tr></thead>"
        f"<tbody>{''.join(rows)}</tbody></table>"
    )


def page(body: str) -> str:
    return f"<html><head><title>NHL Injuries - ESPN</title></head><body>{body}</body></html>"


ESPN_PAGE = page(
    '<section class="Card"><div class="Wrapper Card__Content">'
    '<div class="ResponsiveTable Table__league-injuries">'
    '<div class="Table__Title"><div class="flex items-center">'
    '<span class="injuries__teamName ml2">Anaheim Ducks</span></div></div>'
    '<div class="flex"><div class="Table__ScrollerWrapper"><div class="Table__Scroller">'
    + injury_table([
        player_row("Trevor Zegras", "C", href="/nhl/player/_/id/4697382/trevor-zegras"),
        player_row("John Gibson", "G", status="Day-To-Day", comment="Back spasms."),
    ])
    + "</div></div></div></div>"
    '<div class="ResponsiveTable Table__league-injuries">'
    '<div class="Table__Title"><div class="flex items-center">'
    '<span class="injuries__teamName ml2">Boston Bruins</span></div></div>'
    '<div class="flex"><div class="Table__ScrollerWrapper"><div class="Table__Scroller">'
    + injury_table([
        player_row("Charlie McAvoy", "D", href="https://www.espn.com/nhl/player/_/id/4233563/charlie-mcavoy"),
    ])
    + "</div></div></div></div>"
    "</div></section>"
)


class FakeFetcher:
    """Stand-in for InjuryPageFetcher returning canned HTML or raising."""

    def __init__(self, html: Optional[str] = None, error: Optional[Exception] = None):
        self.html = html
        self.error = error
        self.calls = 0

    async def fetch(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.html


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds
