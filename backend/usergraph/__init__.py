"""GraphQL CRUD gateway for users stored in MongoDB."""

__version__ = "1.0.0"
