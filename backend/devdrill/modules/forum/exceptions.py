"""
Forum errors.
"""


class ForumError(Exception):
    """Base class for forum-layer errors."""


class NotFoundError(ForumError, LookupError):
    """Update, delete or vote targeted an id that does not exist."""

    def __init__(self, entity: str, entity_id: int) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
