"""Shared base for domain entities"""

import uuid
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate a UUID4 string identifier"""
    return str(uuid.uuid4())


class BaseModel(SQLModel):
    """Base class for all persisted domain entities"""
    pass
