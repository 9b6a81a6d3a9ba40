# standings_board/utils/html_utils.py
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

WHITESPACE_RUN = re.compile(r"\s+")


def strip_markup(fragment: str) -> str:
    """Plain text of an HTML fragment: tags dropped, entities decoded, whitespace collapsed."""
    text = BeautifulSoup(fragment or "", "html.parser").get_text()
    return WHITESPACE_RUN.sub(" ", text).strip()


def find_standings_table(html: str) -> Optional[Tag]:
    """First <table> whose markup contains a hyphen and at least one <td>."""
    soup = BeautifulSoup(html, "html.parser")
    for table in soup.find_all("table"):
        markup = str(table)
        if "-" in markup and table.find("td") is not None:
            return table
    return None


def extract_table_rows(table: Tag) -> List[List[str]]:
    """Cell text of each data row; the first row and any header rows are skipped."""
    rows: List[List[str]] = []
    for tr in table.find_all("tr")[1:]:
        if tr.find("th") is not None:
            continue
        rows.append([strip_markup(td.decode_contents()) for td in tr.find_all("td")])
    return rows
