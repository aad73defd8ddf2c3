"""
Metric descriptor catalogue for the Copilot exporter.

Descriptors are defined once as data and grouped into a read-only
``DescriptorRegistry``. The label schema of a descriptor never changes for
the lifetime of the process, which Prometheus requires for every sample
exposed under the same metric name.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Tuple


class MetricsMode(str, Enum):
    """Capability flag selecting how much of the document is exported."""
    FULL = "full"         # totals, breakdowns, feature sections
    MINIMAL = "minimal"   # totals and acceptance rate only


TOTAL_LABELS = ("day", "org")
BREAKDOWN_LABELS = ("day", "org", "language", "editor", "model")
REPOSITORY_LABELS = ("day", "org", "repository")


@dataclass(frozen=True)
class MetricDescriptor:
    name: str
    documentation: str
    labels: Tuple[str, ...] = TOTAL_LABELS


# --- TOP-LEVEL TOTALS ---

TOTAL_DESCRIPTORS: Tuple[MetricDescriptor, ...] = (
    MetricDescriptor("github_copilot_suggestions_total", "Total number of Copilot suggestions"),
    MetricDescriptor("github_copilot_acceptances_total", "Total number of Copilot acceptances"),
    MetricDescriptor("github_copilot_lines_suggested_total", "Total number of lines suggested by Copilot"),
    MetricDescriptor("github_copilot_lines_accepted_total", "Total number of lines accepted from Copilot"),
    MetricDescriptor("github_copilot_active_users_total", "Total number of active Copilot users"),
    MetricDescriptor("github_copilot_chat_acceptances_total", "Total number of Copilot chat acceptances"),
    MetricDescriptor("github_copilot_chat_turns_total", "Total number of Copilot chat turns"),
    MetricDescriptor("github_copilot_active_chat_users_total", "Total number of active Copilot chat users"),
    MetricDescriptor("github_copilot_acceptance_rate", "Copilot acceptance rate (acceptances/suggestions)"),
)

# --- BREAKDOWN (language / editor / model) ---

BREAKDOWN_DESCRIPTORS: Tuple[MetricDescriptor, ...] = (
    MetricDescriptor("github_copilot_breakdown_suggestions_total",
                     "Copilot suggestions by language, editor, or model", BREAKDOWN_LABELS),
    MetricDescriptor("github_copilot_breakdown_acceptances_total",
                     "Copilot acceptances by language, editor, or model", BREAKDOWN_LABELS),
    MetricDescriptor("github_copilot_breakdown_lines_suggested_total",
                     "Lines suggested by language, editor, or model", BREAKDOWN_LABELS),
    MetricDescriptor("github_copilot_breakdown_lines_accepted_total",
                     "Lines accepted by language, editor, or model", BREAKDOWN_LABELS),
    MetricDescriptor("github_copilot_breakdown_active_users",
                     "Active users by language, editor, or model", BREAKDOWN_LABELS),
    MetricDescriptor("github_copilot_breakdown_chat_acceptances_total",
                     "Chat acceptances by language, editor, or model", BREAKDOWN_LABELS),
    MetricDescriptor("github_copilot_breakdown_chat_turns_total",
                     "Chat turns by language, editor, or model", BREAKDOWN_LABELS),
    MetricDescriptor("github_copilot_breakdown_active_chat_users",
                     "Active chat users by language, editor, or model", BREAKDOWN_LABELS),
)

# --- FEATURE SECTIONS ---

FEATURE_DESCRIPTORS: Tuple[MetricDescriptor, ...] = (
    MetricDescriptor("github_copilot_ide_code_completions_engaged_users",
                     "Total engaged users for IDE code completions"),
    MetricDescriptor("github_copilot_ide_chat_engaged_users",
                     "Total engaged users for IDE chat"),
    MetricDescriptor("github_copilot_dotcom_chat_engaged_users",
                     "Total engaged users for Dotcom chat"),
    MetricDescriptor("github_copilot_dotcom_pr_engaged_users",
                     "Total engaged users for Dotcom pull requests"),
    MetricDescriptor("github_copilot_dotcom_pr_repo_engaged_users",
                     "Engaged users for Dotcom pull requests by repository", REPOSITORY_LABELS),
)


class DescriptorRegistry:
    """
    Immutable, ordered set of metric descriptors.

    Built once at startup and shared by the exporter and the collector.
    Iteration always yields the same descriptors in the same order.
    """

    def __init__(self, descriptors: Tuple[MetricDescriptor, ...]):
        self._descriptors = tuple(descriptors)
        self._by_name: Dict[str, MetricDescriptor] = {d.name: d for d in self._descriptors}
        if len(self._by_name) != len(self._descriptors):
            raise ValueError("Duplicate metric descriptor names")

    def __iter__(self) -> Iterator[MetricDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> MetricDescriptor:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown metric descriptor: {name}") from None

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self._descriptors)


def build_registry(mode: MetricsMode = MetricsMode.FULL) -> DescriptorRegistry:
    """Build the descriptor registry for the given capability mode."""
    mode = MetricsMode(mode)
    if mode is MetricsMode.MINIMAL:
        return DescriptorRegistry(TOTAL_DESCRIPTORS)
    return DescriptorRegistry(TOTAL_DESCRIPTORS + BREAKDOWN_DESCRIPTORS + FEATURE_DESCRIPTORS)
