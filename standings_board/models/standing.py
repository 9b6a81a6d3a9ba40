from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator

# Poll rank assigned to teams without a ranking.
UNRANKED = 999


class TeamStanding(BaseModel):
    """One team's line in the conference standings, normalized from any source."""

    model_config = ConfigDict(frozen=True)  # Rebuilt on every refresh, never edited

    team: str
    # Field names used by the original relay payload are accepted too
    conference_record: str = Field(
        "", validation_alias=AliasChoices("conference_record", "conf")
    )  # Display text, e.g. "9-5"
    overall_record: str = Field("", validation_alias=AliasChoices("overall_record", "ovr"))
    poll_rank: int = Field(
        UNRANKED, ge=1, le=UNRANKED, validation_alias=AliasChoices("poll_rank", "apRank")
    )
    net_rank: Optional[int] = Field(
        None, validation_alias=AliasChoices("net_rank", "netRank")
    )  # Scrape path only, not a sort key
    conference_wins: int = Field(
        0, ge=0, validation_alias=AliasChoices("conference_wins", "confWins")
    )
    conference_losses: int = Field(
        0, ge=0, validation_alias=AliasChoices("conference_losses", "confLosses")
    )
    overall_wins: int = Field(0, ge=0, validation_alias=AliasChoices("overall_wins", "wins"))
    overall_losses: int = Field(
        0, ge=0, validation_alias=AliasChoices("overall_losses", "losses")
    )
    is_priority_entity: bool = False
    source_order: int = Field(0, ge=0)

    @field_validator("team")
    @classmethod
    def _canonical_team(cls, value: str) -> str:
        team = value.strip().upper()
        if not team:
            raise ValueError("team name must not be empty")
        return team

    @computed_field  # type: ignore[misc]
    @property
    def conference_win_pct(self) -> float:
        """Conference win percentage, -1 when no conference games were played."""
        games = self.conference_wins + self.conference_losses
        if games == 0:
            return -1.0
        return self.conference_wins / games

    @computed_field  # type: ignore[misc]
    @property
    def overall_win_pct(self) -> float:
        """Overall win percentage, 0 when no games were played."""
        games = self.overall_wins + self.overall_losses
        if games == 0:
            return 0.0
        return self.overall_wins / games

    @property
    def is_ranked(self) -> bool:
        return self.poll_rank < UNRANKED
