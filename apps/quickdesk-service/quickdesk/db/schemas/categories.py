import uuid
from datetime import datetime
from typing import Optional

from .common import CamelModel


class CategoryBase(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CategoryBase):
    pass


class Category(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    color: str
    created_by: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime


class CategoryWithCount(Category):
    ticket_count: int = 0
