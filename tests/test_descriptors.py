"""
Unit tests for the metric descriptor registry.
"""

import dataclasses

import pytest

from copilot_exporter.services.copilot.descriptors import (
    BREAKDOWN_LABELS,
    DescriptorRegistry,
    MetricDescriptor,
    MetricsMode,
    TOTAL_LABELS,
    build_registry,
)


class TestDescriptorRegistry:
    """Registry contents and stability."""

    def test_full_registry_has_22_descriptors(self):
        assert len(build_registry(MetricsMode.FULL)) == 22

    def test_minimal_registry_has_9_descriptors(self):
        registry = build_registry(MetricsMode.MINIMAL)

        assert len(registry) == 9
        assert registry.names[-1] == "github_copilot_acceptance_rate"

    def test_mode_accepts_string(self):
        assert len(build_registry("minimal")) == 9

    def test_enumeration_is_stable(self):
        registry = build_registry()

        first = [(d.name, d.labels) for d in registry]
        second = [(d.name, d.labels) for d in registry]
        assert first == second
        assert first == [(d.name, d.labels) for d in build_registry()]

    def test_label_schemas(self):
        registry = build_registry()

        assert registry.get("github_copilot_suggestions_total").labels == TOTAL_LABELS
        assert registry.get("github_copilot_breakdown_chat_turns_total").labels == BREAKDOWN_LABELS
        assert registry.get("github_copilot_dotcom_pr_repo_engaged_users").labels == ("day", "org", "repository")

    def test_ordering_groups(self):
        names = build_registry().names

        assert names[0] == "github_copilot_suggestions_total"
        assert names[9] == "github_copilot_breakdown_suggestions_total"
        assert names[17] == "github_copilot_ide_code_completions_engaged_users"
        assert names[21] == "github_copilot_dotcom_pr_repo_engaged_users"

    def test_descriptors_are_immutable(self):
        descriptor = build_registry().get("github_copilot_acceptance_rate")

        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.name = "other"

    def test_unknown_descriptor(self):
        with pytest.raises(KeyError, match="Unknown metric descriptor"):
            build_registry(MetricsMode.MINIMAL).get("github_copilot_ide_chat_engaged_users")

    def test_duplicate_names_rejected(self):
        descriptor = MetricDescriptor("dup", "help")

        with pytest.raises(ValueError, match="Duplicate"):
            DescriptorRegistry((descriptor, descriptor))

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            build_registry("everything")
