from .mongo import MongoConnection, connection

__all__ = ["MongoConnection", "connection"]
