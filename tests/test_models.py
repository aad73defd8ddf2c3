"""
Unit tests for the Copilot document model.
"""

import pytest
from pydantic import ValidationError

from conftest import make_day
from copilot_exporter.services.copilot.models import CopilotUsageDay


class TestCopilotUsageDay:
    """Decoding of upstream day records."""

    def test_missing_sections_default_to_empty(self):
        record = CopilotUsageDay.model_validate(make_day())

        assert record.breakdown == []
        assert record.copilot_ide_code_completions.total_engaged_users == 0
        assert record.copilot_ide_code_completions.languages == []
        assert record.copilot_dotcom_pull_requests.repositories == []

    def test_null_values_take_zero_values(self):
        record = CopilotUsageDay.model_validate(make_day(
            total_chat_turns=None,
            copilot_dotcom_chat=None,
            breakdown=[{"language": None, "suggestions_count": None, "editor": "vim"}],
        ))

        assert record.total_chat_turns == 0
        assert record.copilot_dotcom_chat.models == []
        assert record.breakdown[0].language == ""
        assert record.breakdown[0].suggestions_count == 0
        assert record.breakdown[0].editor == "vim"

    def test_unknown_fields_ignored(self):
        record = CopilotUsageDay.model_validate(make_day(date="2024-01-01", extra={"a": 1}))

        assert record.day == "2024-01-01"

    def test_nested_repositories(self):
        record = CopilotUsageDay.model_validate(make_day(copilot_dotcom_pull_requests={
            "repositories": [{"name": "org/api", "total_engaged_users": 3, "models": [{"model": "default"}]}],
        }))

        repo = record.copilot_dotcom_pull_requests.repositories[0]
        assert repo.name == "org/api"
        assert repo.total_engaged_users == 3
        assert repo.models[0].model == "default"

    def test_wrong_type_rejected(self):
        with pytest.raises(ValidationError):
            CopilotUsageDay.model_validate(make_day(total_suggestions_count="many"))

    def test_acceptance_rate(self):
        assert CopilotUsageDay(total_suggestions_count=4, total_acceptances_count=1).acceptance_rate == 0.25
        assert CopilotUsageDay(total_acceptances_count=1).acceptance_rate == 0.0
