"""
User model - an account that can log in and apply to jobs.
"""
from sqlalchemy import Boolean, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from jobly.core.database import Base


class User(Base):
    """User entity. ``password`` holds the bcrypt hash, never plain text."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(25), primary_key=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    def __repr__(self) -> str:
        return f"<User {self.username}>"
