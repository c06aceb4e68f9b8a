"""
Company model - employers that post jobs.
"""
from typing import TYPE_CHECKING, List, Optional
from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobly.core.database import Base

if TYPE_CHECKING:
    from jobly.models.job import Job


class Company(Base):
    """
    Company entity, keyed by its handle (a lowercase slug).

    Deleting a company removes its jobs through the foreign key cascade.
    """

    __tablename__ = "companies"

    __table_args__ = (
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
    )

    handle: Mapped[str] = mapped_column(String(25), primary_key=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    num_employees: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    jobs: Mapped[List["Job"]] = relationship(
        "Job",
        back_populates="company",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Company {self.handle}>"
