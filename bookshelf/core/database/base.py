"""Base database model classes.

Provides the declarative base shared by every model plus an integer
primary key mixin.

Example:
    class Author(Base, IntegerPKMixin):
        __tablename__ = "author"
        name: Mapped[str] = mapped_column(String(255), unique=True)
"""

from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base with constraint naming and automatic table names.

    The automatic table naming can be overridden by setting __tablename__
    explicitly on the model class.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


class IntegerPKMixin:
    """Integer auto-increment primary key.

    Provides:
        id: Auto-incrementing integer primary key, assigned on flush
    """

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )


__all__ = ["NAMING_CONVENTION", "Base", "IntegerPKMixin"]
