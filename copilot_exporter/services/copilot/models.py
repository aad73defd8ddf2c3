"""
Pydantic models for the GitHub Copilot metrics API response.

The upstream document is a JSON array with one object per day. Every nested
field is optional: missing or null values fall back to their zero value
(empty string, 0, empty list or an empty section), so absent sections simply
contribute nothing to the export.
"""

from typing import Any, List

from pydantic import BaseModel, Field, model_validator


class CopilotModel(BaseModel):
    """Base model that treats explicit nulls like missing fields."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Breakdown(CopilotModel):
    """
    A dimensioned slice of activity (by language, editor or model).

    Counters <= 0 mean "not reported" and are never exported.
    """
    language: str = ""
    editor: str = ""
    model: str = ""

    suggestions_count: int = 0
    acceptances_count: int = 0
    lines_suggested: int = 0
    lines_accepted: int = 0
    active_users: int = 0
    chat_acceptances: int = 0
    chat_turns: int = 0
    active_chat_users: int = 0


class IDECodeCompletions(CopilotModel):
    total_engaged_users: int = 0
    languages: List[Breakdown] = Field(default_factory=list)
    editors: List[Breakdown] = Field(default_factory=list)
    models: List[Breakdown] = Field(default_factory=list)


class IDEChat(CopilotModel):
    total_engaged_users: int = 0
    editors: List[Breakdown] = Field(default_factory=list)
    models: List[Breakdown] = Field(default_factory=list)


class DotcomChat(CopilotModel):
    total_engaged_users: int = 0
    models: List[Breakdown] = Field(default_factory=list)


class PullRequestRepository(CopilotModel):
    """Per-repository pull request activity."""
    name: str = ""
    total_engaged_users: int = 0
    models: List[Breakdown] = Field(default_factory=list)


class DotcomPullRequests(CopilotModel):
    total_engaged_users: int = 0
    repositories: List[PullRequestRepository] = Field(default_factory=list)
    models: List[Breakdown] = Field(default_factory=list)


class CopilotUsageDay(CopilotModel):
    """One calendar day of aggregated Copilot activity."""
    day: str = Field(default="", description="Calendar day (YYYY-MM-DD)")

    # Top-level totals
    total_suggestions_count: int = 0
    total_acceptances_count: int = 0
    total_lines_suggested: int = 0
    total_lines_accepted: int = 0
    total_active_users: int = 0
    total_chat_acceptances: int = 0
    total_chat_turns: int = 0
    total_active_chat_users: int = 0

    # Generic breakdown list
    breakdown: List[Breakdown] = Field(default_factory=list)

    # Feature sections
    copilot_ide_code_completions: IDECodeCompletions = Field(default_factory=IDECodeCompletions)
    copilot_ide_chat: IDEChat = Field(default_factory=IDEChat)
    copilot_dotcom_chat: DotcomChat = Field(default_factory=DotcomChat)
    copilot_dotcom_pull_requests: DotcomPullRequests = Field(default_factory=DotcomPullRequests)

    @property
    def acceptance_rate(self) -> float:
        """Acceptances / suggestions, or 0.0 when nothing was suggested."""
        if self.total_suggestions_count > 0:
            return self.total_acceptances_count / self.total_suggestions_count
        return 0.0
