"""
Data models representing Things 3 objects (to-dos, projects, areas, tags)
and the outcome records of batch operations.

Every object is rebuilt from Things on each read; ids are owned by Things.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence


class Status(str, Enum):
    OPEN = "open"
    COMPLETED = "completed"
    CANCELED = "canceled"


@dataclass(frozen=True)
class Todo:
    id: str
    name: str
    status: Status = Status.OPEN
    notes: Optional[str] = None
    tag_names: List[str] = field(default_factory=list)
    due_date: Optional[str] = None
    scheduled_date: Optional[str] = None
    completion_date: Optional[str] = None
    project_name: Optional[str] = None
    area_name: Optional[str] = None

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "notes": self.notes,
            "status": self.status.value,
            "tag_names": list(self.tag_names),
            "due_date": self.due_date,
            "scheduled_date": self.scheduled_date,
            "completion_date": self.completion_date,
            "project_name": self.project_name,
            "area_name": self.area_name,
        }


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    status: Status = Status.OPEN
    notes: Optional[str] = None
    tag_names: List[str] = field(default_factory=list)
    area_name: Optional[str] = None
    todo_count: int = 0

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "notes": self.notes,
            "status": self.status.value,
            "tag_names": list(self.tag_names),
            "area_name": self.area_name,
            "todo_count": self.todo_count,
        }


@dataclass(frozen=True)
class Area:
    id: str
    name: str
    tag_names: List[str] = field(default_factory=list)

    def to_dict(self):
        return {"id": self.id, "name": self.name, "tag_names": list(self.tag_names)}


@dataclass(frozen=True)
class Tag:
    id: str
    name: str

    def to_dict(self):
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class BatchItemResult:
    index: int
    success: bool
    id: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self):
        return {"index": self.index, "success": self.success, "id": self.id, "error": self.error}


@dataclass(frozen=True)
class BatchResult:
    total: int
    succeeded: int
    failed: int
    results: List[BatchItemResult] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: Sequence[BatchItemResult]) -> "BatchResult":
        """Build a summary whose counts are derived from ``results``."""
        succeeded = sum(1 for r in results if r.success)
        return cls(
            total=len(results),
            succeeded=succeeded,
            failed=len(results) - succeeded,
            results=list(results),
        )

    def to_dict(self):
        return {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }
