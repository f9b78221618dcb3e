from .base import BaseEntity, PyObjectId
from .user import USERS_COLLECTION, UserRecord

__all__ = [
    "BaseEntity",
    "PyObjectId",
    "USERS_COLLECTION",
    "UserRecord",
]
