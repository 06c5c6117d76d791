"""
HTML parsing for the TIOBE index page.

The ranking lives in ``table#top20``; each body row holds
rank, previous rank, a change icon, the language name, its rating and,
optionally, the year-over-year change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from tiobe_service.schemas import Language

if TYPE_CHECKING:
    from bs4.element import Tag

ROW_SELECTOR = "table#top20 tbody tr"
MIN_CELLS = 5
MISSING_CHANGE = "N/A"


def _cell_text(cell: Tag) -> str:
    return cell.get_text().strip()


def parse_rank(text: str) -> int:
    """Parse a rank cell; anything that is not an integer counts as 0."""
    try:
        return int(text.strip())
    except ValueError:
        return 0


def parse_row(cells: list[Tag]) -> Language | None:
    """
    Build a ranking entry from one table row.

    Returns:
        The entry, or None if the row is short, unnamed or unranked
    """
    if len(cells) < MIN_CELLS:
        return None

    rank = parse_rank(_cell_text(cells[0]))
    name = _cell_text(cells[3])
    if not name or rank <= 0:
        return None

    change = _cell_text(cells[5]) if len(cells) > MIN_CELLS else MISSING_CHANGE

    return Language(
        rank=rank,
        prev_rank=parse_rank(_cell_text(cells[1])),
        name=name,
        rating=_cell_text(cells[4]),
        change=change,
    )


def parse_index_html(html: str) -> list[Language]:
    """
    Extract ranking entries from the index page.

    Args:
        html: Raw page HTML

    Returns:
        Entries in page order; empty if the table is missing
    """
    soup = BeautifulSoup(html, "html.parser")

    languages: list[Language] = []
    for row in soup.select(ROW_SELECTOR):
        entry = parse_row(row.find_all("td"))
        if entry is not None:
            languages.append(entry)

    return languages
