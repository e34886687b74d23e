from typing import Optional


class MenuValidationError(ValueError):
    """An edit the menu tree refuses; the message is meant for the user."""

    def __init__(self, message: str, node_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.node_id = node_id
