import re
from typing import NamedTuple, Optional

# En dash, em dash and minus sign all show up in published records.
DASH_VARIANTS = re.compile("[–—−]")
LEADING_INT = re.compile(r"^\s*\+?([0-9]+)")


class RecordParts(NamedTuple):
    wins: int
    losses: int


def parse_leading_int(text: Optional[str], default: int = 0) -> int:
    """Read the leading non-negative integer of ``text``, ignoring anything after it.

    "12" -> 12, " 7th" -> 7, "" / "abc" / "-3" / None -> ``default``.
    """
    if not text:
        return default
    match = LEADING_INT.match(text)
    if not match:
        return default
    return int(match.group(1))


def parse_record(text: Optional[str]) -> RecordParts:
    """Parse a "W-L" record string into integers.

    Any dash variant is accepted. Missing or garbled sides become 0, so this
    never raises: "9–5" -> (9, 5), "bad" -> (0, 0).
    """
    clean = DASH_VARIANTS.sub("-", text or "")
    wins_raw, _, losses_raw = clean.partition("-")
    return RecordParts(parse_leading_int(wins_raw), parse_leading_int(losses_raw))
