"""
Tagging run domain objects for gittagger.

Provides the transient state of a tagging run and standardized result
types for reporting what the run did.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional

from .version import SemanticVersion


class TagStatus(Enum):
    """Outcome for a single commit."""
    TAGGED = "tagged"
    DRY_RUN = "dry_run"


@dataclass
class TaggingRun:
    """
    State carried across commits during one run.

    Owned by a single TaggingService call and discarded when it ends.
    """
    branch: str
    current_version: SemanticVersion
    processed_count: int = 0


@dataclass
class TagResult:
    """What happened to one commit."""
    commit: str
    short_id: str
    tag: str
    version: SemanticVersion
    status: TagStatus
    reason: str  # DirectiveReason value, e.g. "feature"
    subject: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'commit': self.commit,
            'short_id': self.short_id,
            'tag': self.tag,
            'version': str(self.version),
            'status': self.status.value,
            'reason': self.reason,
        }
        if self.subject:
            result['subject'] = self.subject
        return result


@dataclass
class TaggingSummary:
    """
    Summary of a tagging run on one branch.

    ``tagged`` counts tags actually created; dry-run results are kept in
    ``results`` but never counted as tagged.
    """
    branch: str
    baseline: Optional[str] = None
    baseline_defaulted: bool = False
    dry_run: bool = False
    tagged: int = 0
    results: List[TagResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        """True if the run finished without an error."""
        return self.error is None

    def add_result(self, result: TagResult) -> None:
        """Record a commit outcome and update counts."""
        self.results.append(result)
        if result.status == TagStatus.TAGGED:
            self.tagged += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'type': 'summary',
            'branch': self.branch,
            'baseline': self.baseline,
            'baseline_defaulted': self.baseline_defaulted,
            'dry_run': self.dry_run,
            'tagged': self.tagged,
            'success': self.success,
        }
        if self.error:
            result['error'] = self.error
        return result
