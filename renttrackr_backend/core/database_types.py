"""Custom database types shared by all models."""

import uuid

from sqlalchemy import Numeric, String, TypeDecorator


class UUID(TypeDecorator):
    """Portable UUID type.

    Stores UUIDs as CHAR(36) strings so MySQL and SQLite behave the same.
    Automatically converts between Python uuid.UUID objects and strings.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """Convert UUID to string when saving to database."""
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return str(value)
        return str(uuid.UUID(str(value)))

    def process_result_value(self, value, dialect):
        """Convert string to UUID when reading from database."""
        if value is None:
            return value
        if isinstance(value, str):
            return uuid.UUID(value)
        return value


def Money() -> Numeric:
    """Money column type: two decimals, read back as float."""
    return Numeric(12, 2, asdecimal=False)
