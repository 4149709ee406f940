"""Advisory finding value objects."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

Severity = Literal["high", "medium", "low", "info"]

FindingKind = Literal[
    "n_m_relationship",
    "no_primary_key",
    "duplicate_columns",
    "missing_index",
    "text_length",
]

ActionKind = Literal[
    "create_junction_table",
    "add_primary_key",
    "rename_duplicate_columns",
    "add_index",
    "check_length",
    "add_primary_attribute",
]


@dataclass(frozen=True)
class RemediationAction:
    """A suggested fix the caller may dispatch (see remediation.apply_remediation)."""

    kind: ActionKind
    label: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Finding:
    """A validation issue or a recommendation found in a schema."""

    id: str  # e.g. "val-nopk-table-1"
    kind: FindingKind
    title: str
    description: str
    severity: Severity
    action: Optional[RemediationAction] = None


@dataclass
class AdvisoryReport:
    """Result of one analysis pass."""

    issues: List[Finding] = field(default_factory=list)
    recommendations: List[Finding] = field(default_factory=list)

    @property
    def findings(self) -> List[Finding]:
        return [*self.issues, *self.recommendations]

    @property
    def has_high_priority(self) -> bool:
        return any(f.severity == "high" for f in self.findings)
