"""
Application model - a user's application to a job.
"""
from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from jobly.core.database import Base


class Application(Base):
    """Join row between users and jobs; one application per (user, job)."""

    __tablename__ = "applications"

    username: Mapped[str] = mapped_column(
        String(25),
        ForeignKey("users.username", ondelete="CASCADE"),
        primary_key=True,
    )
    job_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("jobs.id", ondelete="CASCADE"),
        primary_key=True,
    )

    def __repr__(self) -> str:
        return f"<Application {self.username} -> {self.job_id}>"
