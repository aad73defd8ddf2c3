"""
Transforms Copilot usage documents into flat, labeled gauge observations.

Export rules:
- Top-level totals and the acceptance rate are dense: always emitted, zeros included.
- Breakdown counters, feature engaged users and repository engaged users are
  sparse: a value <= 0 means "not reported" and produces no observation.
- Inside a feature section each breakdown list declares one dimension
  (language, editor or model). An empty value for that dimension is exported
  as "unknown"; the other two dimensions are passed through unchanged.
- The generic ``breakdown`` list is exported verbatim, without defaulting.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .descriptors import DescriptorRegistry, MetricDescriptor, MetricsMode, build_registry
from .models import Breakdown, CopilotUsageDay

UNKNOWN_DIMENSION = "unknown"
DIMENSIONS = ("language", "editor", "model")


@dataclass(frozen=True)
class Observation:
    """One sample: a descriptor, a value and label values in descriptor order."""
    descriptor: MetricDescriptor
    value: float
    labels: Tuple[str, ...]

    @property
    def label_dict(self) -> Dict[str, str]:
        return dict(zip(self.descriptor.labels, self.labels))


# --- DECLARATIVE EXPORT TABLES ---

# (CopilotUsageDay attribute, descriptor name)
TOTAL_FIELDS = (
    ("total_suggestions_count", "github_copilot_suggestions_total"),
    ("total_acceptances_count", "github_copilot_acceptances_total"),
    ("total_lines_suggested", "github_copilot_lines_suggested_total"),
    ("total_lines_accepted", "github_copilot_lines_accepted_total"),
    ("total_active_users", "github_copilot_active_users_total"),
    ("total_chat_acceptances", "github_copilot_chat_acceptances_total"),
    ("total_chat_turns", "github_copilot_chat_turns_total"),
    ("total_active_chat_users", "github_copilot_active_chat_users_total"),
)

ACCEPTANCE_RATE = "github_copilot_acceptance_rate"

# (Breakdown counter, descriptor name)
BREAKDOWN_COUNTERS = (
    ("suggestions_count", "github_copilot_breakdown_suggestions_total"),
    ("acceptances_count", "github_copilot_breakdown_acceptances_total"),
    ("lines_suggested", "github_copilot_breakdown_lines_suggested_total"),
    ("lines_accepted", "github_copilot_breakdown_lines_accepted_total"),
    ("active_users", "github_copilot_breakdown_active_users"),
    ("chat_acceptances", "github_copilot_breakdown_chat_acceptances_total"),
    ("chat_turns", "github_copilot_breakdown_chat_turns_total"),
    ("active_chat_users", "github_copilot_breakdown_active_chat_users"),
)

# (section attribute, engaged-users descriptor, ((list attribute, dimension), ...))
# Pull request repositories are handled separately before the section's own models.
FEATURE_SECTIONS = (
    ("copilot_ide_code_completions", "github_copilot_ide_code_completions_engaged_users",
     (("languages", "language"), ("editors", "editor"), ("models", "model"))),
    ("copilot_ide_chat", "github_copilot_ide_chat_engaged_users",
     (("editors", "editor"), ("models", "model"))),
    ("copilot_dotcom_chat", "github_copilot_dotcom_chat_engaged_users",
     (("models", "model"),)),
    ("copilot_dotcom_pull_requests", "github_copilot_dotcom_pr_engaged_users",
     (("models", "model"),)),
)

REPOSITORY_ENGAGED_USERS = "github_copilot_dotcom_pr_repo_engaged_users"


def resolve_org_label(organization: str = "", enterprise: str = "") -> str:
    """The org label is the enterprise when set, otherwise the organization."""
    return enterprise if enterprise else organization


def default_dimensions(entry: Breakdown, dimension: str) -> Tuple[str, str, str]:
    """
    Return (language, editor, model) with the declared dimension defaulted.

    Only the field named by ``dimension`` is replaced with "unknown" when empty.
    """
    if dimension not in DIMENSIONS:
        raise ValueError(f"Unknown breakdown dimension: {dimension}")
    values = [entry.language, entry.editor, entry.model]
    index = DIMENSIONS.index(dimension)
    if not values[index]:
        values[index] = UNKNOWN_DIMENSION
    return values[0], values[1], values[2]


class CopilotExporter:
    """
    Walks CopilotUsageDay records and yields observations in a fixed order.

    The registry decides the walk depth: in minimal mode only totals and the
    acceptance rate are exported.
    """

    def __init__(
        self,
        registry: Optional[DescriptorRegistry] = None,
        organization: str = "",
        enterprise: str = "",
    ):
        self.registry = registry if registry is not None else build_registry(MetricsMode.FULL)
        self.org = resolve_org_label(organization, enterprise)
        self.full = all(name in self.registry for _, name in BREAKDOWN_COUNTERS)

    def export(self, records: Iterable[CopilotUsageDay]) -> Iterator[Observation]:
        for record in records:
            yield from self.export_day(record)

    def export_all(self, records: Iterable[CopilotUsageDay]) -> List[Observation]:
        """Materialize a whole cycle; nothing is returned if export fails midway."""
        return list(self.export(records))

    def export_day(self, record: CopilotUsageDay) -> Iterator[Observation]:
        day = record.day

        for field_name, metric in TOTAL_FIELDS:
            yield self._observe(metric, getattr(record, field_name), day, self.org)
        yield self._observe(ACCEPTANCE_RATE, record.acceptance_rate, day, self.org)

        if not self.full:
            return

        for entry in record.breakdown:
            yield from self._export_counters(day, entry, entry.language, entry.editor, entry.model)

        for section_name, engaged_metric, lists in FEATURE_SECTIONS:
            section = getattr(record, section_name)
            if section.total_engaged_users > 0:
                yield self._observe(engaged_metric, section.total_engaged_users, day, self.org)

            if section_name == "copilot_dotcom_pull_requests":
                for repo in section.repositories:
                    if repo.total_engaged_users > 0:
                        yield self._observe(
                            REPOSITORY_ENGAGED_USERS, repo.total_engaged_users, day, self.org, repo.name
                        )
                    for entry in repo.models:
                        yield from self.export_breakdown(day, entry, "model")

            for list_name, dimension in lists:
                for entry in getattr(section, list_name):
                    yield from self.export_breakdown(day, entry, dimension)

    def export_breakdown(self, day: str, entry: Breakdown, dimension: str) -> Iterator[Observation]:
        """Export one breakdown entry whose list represents ``dimension``."""
        language, editor, model = default_dimensions(entry, dimension)
        yield from self._export_counters(day, entry, language, editor, model)

    def _export_counters(
        self, day: str, entry: Breakdown, language: str, editor: str, model: str
    ) -> Iterator[Observation]:
        for field_name, metric in BREAKDOWN_COUNTERS:
            value = getattr(entry, field_name)
            if value > 0:
                yield self._observe(metric, value, day, self.org, language, editor, model)

    def _observe(self, metric: str, value: float, *labels: str) -> Observation:
        return Observation(self.registry.get(metric), float(value), labels)
