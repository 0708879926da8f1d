"""Errors for the message threads module."""

from infrastructure.persistence.errors import NotFoundError


class MessageThreadNotFoundError(NotFoundError):
    """Raised when no thread exists between an owner and a contact."""

    def __init__(self, owner: str, contact: str):
        super().__init__(f"cannot find thread between [{owner}] and [{contact}]")
        self.owner = owner
        self.contact = contact
