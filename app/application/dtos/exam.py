"""DTOs for exam use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ExamSummary:
    """Exam list-view read-model (paginated listings and search results)."""

    id: int
    subject: str
    degree: str
    date: datetime
    room: str | None


@dataclass(frozen=True)
class ExamResult:
    """Exam read-model (result of get, create, update)."""

    id: int
    subject: str
    degree: str
    year: str
    semester: str
    date: datetime
    room: str | None
    school: str


@dataclass(frozen=True)
class ExamWrite:
    """Command for create and update: every writable exam field."""

    subject: str
    degree: str
    year: str
    semester: str
    date: datetime
    school: str
    room: str | None = None


@dataclass(frozen=True)
class ExamCount:
    """Number of exams sharing one value of a grouping field."""

    value: str
    count: int
