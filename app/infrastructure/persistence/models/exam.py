"""Exam ORM model. One scheduled exam sitting."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base


class Exam(Base):
    """Exam entity. Table: exam. Index: (degree, year, semester, date)."""

    __tablename__ = "exam"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    degree: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    year: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    semester: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    room: Mapped[str | None] = mapped_column(String(255), nullable=True)
    school: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index("ix_exam_degree_year_semester_date", "degree", "year", "semester", "date"),
    )
