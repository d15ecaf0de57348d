"""Directory tables: directors, managers and employees.

The reporting chain (employee -> manager -> director) decides who a business
event notifies.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from staffboard.db.base import Base, TimestampMixin


class DirectorRow(Base, TimestampMixin):
    __tablename__ = "directors"

    director_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="director")


class ManagerRow(Base, TimestampMixin):
    __tablename__ = "managers"

    manager_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="manager")
    director_id: Mapped[str | None] = mapped_column(
        String(128), ForeignKey("directors.director_id"), nullable=True, index=True
    )


class EmployeeRow(Base, TimestampMixin):
    __tablename__ = "employees"

    employee_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="employee")
    department: Mapped[str | None] = mapped_column(String(200), nullable=True)
    manager_id: Mapped[str | None] = mapped_column(
        String(128), ForeignKey("managers.manager_id"), nullable=True, index=True
    )
    director_id: Mapped[str | None] = mapped_column(
        String(128), ForeignKey("directors.director_id"), nullable=True, index=True
    )
