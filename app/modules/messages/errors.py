"""Errors for the messages module."""

from infrastructure.persistence.errors import NotFoundError


class MessageNotFoundError(NotFoundError):
    """Raised when a message id does not exist."""

    def __init__(self, message_id: str):
        super().__init__(f"cannot find message with id [{message_id}]")
        self.message_id = message_id
