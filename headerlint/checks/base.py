import abc
from typing import Any, Callable, List, Mapping
from dataclasses import dataclass, field
from pathlib import Path
import uuid


@dataclass(frozen=True)
class FileLocation:
    path: Path


@dataclass(frozen=True)
class IssueType:
    """
    Represents a type of issue.

    message is a str.format template filled from the issue's data.
    """
    id: str
    message: str

    def __post_init__(self):
        # Verify that the ID is a valid UUID
        if not isinstance(self.id, str):
            raise ValueError(f"Invalid ID: {self.id}")
        try:
            uuid.UUID(self.id)
        except ValueError:
            raise ValueError(f"Invalid UUID: {self.id}")

    def make(self, **kwargs) -> 'Issue':
        """
        Creates an Issue of this type.
        """
        return Issue(self, data=kwargs)

    def at(self, path: Path) -> 'Issue':
        """
        Returns an Issue with the specified path.
        """
        return Issue(self).at(path)


@dataclass
class Issue:
    """
    Represents an issue found during a check.
    """
    issue_type: IssueType
    data: Mapping[str, Any] | None = None
    location: FileLocation | None = None
    fix: Callable[[], None] | None = None

    def fixable(self, fix: Callable[[], None]) -> 'Issue':
        """
        Marks the issue as fixable.
        """
        self.fix = fix
        return self

    def at(self, path: Path) -> 'Issue':
        """
        Returns an Issue with the specified path.
        """
        if self.location is not None and self.location.path != path:
            raise ValueError("Cannot change the path of an existing issue.")
        self.location = FileLocation(path)
        return self

    @property
    def message(self) -> str:
        return self.issue_type.message.format(**(self.data or {}))


@dataclass
class IssueList:
    """
    Represents a list of issues found during a check.
    """
    issues: List[Issue] = field(default_factory=list)

    def append(self, issue: Issue) -> None:
        """
        Adds an issue to the list, dropping exact repeats.
        """
        if self.issues and self.issues[-1] == issue:
            return
        self.issues.append(issue)


class SourceFileCheck(abc.ABC):
    @abc.abstractmethod
    def check(self, source: Any) -> List[Issue]:
        raise NotImplementedError()
