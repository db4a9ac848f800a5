"""HTTP CRUD service for user records stored in DynamoDB."""

__version__ = "1.0.0"
