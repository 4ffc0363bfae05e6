"""Global search schemas."""

from enum import Enum

from pydantic import BaseModel


class SearchResultType(str, Enum):
    ACTION = "action"
    PAGE = "page"
    PROPERTY = "property"
    TENANT = "tenant"
    OWNER = "owner"
    EXPENSE = "expense"
    UNIT = "unit"
    RENOVATION = "renovation"


class SearchResult(BaseModel):
    type: SearchResultType
    id: str
    title: str
    subtitle: str | None = None
    href: str
