"""
models package
- Purpose: Import all ORM models so metadata (and relationship strings) resolve.
- Important: Base.metadata only sees models that are imported somewhere.
"""

from app.models.user import User
from app.models.evidence import Evidence
from app.models.access_log import AccessLog

__all__ = [
    "User",
    "Evidence",
    "AccessLog",
]
