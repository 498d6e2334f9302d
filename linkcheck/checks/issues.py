"""Issue records produced by link checks."""

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Dict

from linkcheck.config import LINTER_NAME


class Severity(str, Enum):
    """Severity of a linter message."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Issue:
    """A single validation finding.

    Line and column are best effort and stay 0 when the parser cannot
    report a position.
    """

    severity: Severity
    message: str
    path: str = ""
    line: int = 0
    col: int = 0
    linter: str = LINTER_NAME

    def with_path(self, path: str) -> "Issue":
        return replace(self, path=path)

    def with_position(self, line: int, col: int) -> "Issue":
        return replace(self, line=line, col=col)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape used in reports."""
        data = asdict(self)
        data["severity"] = self.severity.value
        return {
            key: data[key]
            for key in ("linter", "severity", "path", "line", "col", "message")
        }


def issue_error(message: str) -> Issue:
    """Create an error-severity issue."""
    return Issue(severity=Severity.ERROR, message=message)


def issue_warning(message: str) -> Issue:
    """Create a warning-severity issue."""
    return Issue(severity=Severity.WARNING, message=message)


def quote(value: str) -> str:
    """Double-quote a value for use in an issue message."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'
