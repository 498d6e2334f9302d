"""Issue reporting and severity tallies."""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import List

from linkcheck.checks.issues import Issue, Severity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
}


class IssueReporter:
    """Streams issues to the log and decides the final verdict.

    Warnings are advisory; only error-severity issues fail a run.
    """

    def __init__(self) -> None:
        self.counts: Counter = Counter()
        self.issues: List[Issue] = []

    def emit(self, issue: Issue) -> None:
        """Print an issue immediately and add it to the tally."""
        logger.log(_LOG_LEVELS[issue.severity], f"{issue.path}: {issue.message}")
        self.counts[issue.severity] += 1
        self.issues.append(issue)

    @property
    def errors(self) -> int:
        """Number of error-severity issues emitted."""
        return self.counts[Severity.ERROR]

    @property
    def warnings(self) -> int:
        """Number of warning-severity issues emitted."""
        return self.counts[Severity.WARNING]

    @property
    def failed(self) -> bool:
        """True if any error-severity issue was emitted."""
        return self.errors > 0

    def write_report(self, output_path: Path) -> None:
        """Write all emitted issues as a JSON array.

        Args:
            output_path: Destination file, parent directories are created
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump([issue.to_dict() for issue in self.issues], f, indent=2)
        logger.info(f"Wrote {len(self.issues)} issues to {output_path}")
