"""Exam API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.application.dtos.exam import ExamSummary, ExamWrite
from app.application.dtos.pagination import Page


class ExamWriteRequest(BaseModel):
    """Request body for creating or replacing an exam."""

    subject: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    year: str = Field(..., min_length=1, max_length=16)
    semester: str = Field(..., min_length=1, max_length=16)
    date: datetime
    school: str = Field(..., min_length=1, max_length=255)
    room: str | None = Field(default=None, max_length=255)

    @field_validator("subject", "degree", "year", "semester", "school")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        """Strip surrounding whitespace; reject whitespace-only values."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("room")
    @classmethod
    def _blank_room_is_none(cls, v: str | None) -> str | None:
        return (v.strip() or None) if v is not None else None

    def to_command(self) -> ExamWrite:
        return ExamWrite(
            subject=self.subject,
            degree=self.degree,
            year=self.year,
            semester=self.semester,
            date=self.date,
            school=self.school,
            room=self.room,
        )


class ExamResponse(BaseModel):
    """Full exam record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    subject: str
    degree: str
    year: str
    semester: str
    date: datetime
    room: str | None = None
    school: str


class ExamSummaryResponse(BaseModel):
    """Exam as shown in listings and search results."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    subject: str
    degree: str
    date: datetime
    room: str | None = None


class ExamPageResponse(BaseModel):
    """One page of exams plus totals for the whole query."""

    items: list[ExamSummaryResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_next: bool

    @classmethod
    def from_page(cls, page: Page[ExamSummary]) -> "ExamPageResponse":
        return cls(
            items=[ExamSummaryResponse.model_validate(e) for e in page.items],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            has_next=page.has_next,
        )


class ExamCountResponse(BaseModel):
    """Number of exams for one degree or year."""

    model_config = ConfigDict(from_attributes=True)

    value: str
    count: int
