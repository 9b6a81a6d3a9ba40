from typing import Optional

from pydantic import BaseModel, ConfigDict


class DisplayRow(BaseModel):
    """A rendered line of the standings board."""

    model_config = ConfigDict(frozen=True)

    position: int  # 1-based place in the ranked order
    poll_rank_badge: Optional[int] = None  # Only set for ranked teams
    team: str
    conference_record: str
    overall_record: str
    highlight: bool = False  # Priority entity row
