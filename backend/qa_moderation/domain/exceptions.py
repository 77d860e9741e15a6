"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class InvalidStateTransitionError(Exception):
    """Raised when an entity in a terminal state is asked to transition again."""

    def __init__(self, entity_type: str, entity_id: int | str | None, state: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.state = state
        super().__init__(f"{entity_type} '{entity_id}' is already {state}")


class PostValidationError(Exception):
    """Raised when a field set would leave a post violating its validity rules."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class CommentValidationError(Exception):
    """Raised when comment content breaks the comment length rules."""


class PersistenceError(Exception):
    """Raised when the underlying store fails to write after validation passed.

    Not retried by this service — callers report the failure and leave retry to the user.
    """

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"Could not {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
