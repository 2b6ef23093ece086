"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ValidationError(Exception):
    """Raised when a draft fails validation before reaching the store.

    ``field_errors`` maps each offending field name to a human-readable
    message so the editor can flag the fields inline.
    """

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        fields = ", ".join(sorted(self.field_errors))
        super().__init__(f"Validation failed for: {fields}")


class StoreError(Exception):
    """Raised when the record store itself fails.

    Covers network, permission and constraint failures. Always recoverable
    by retrying the same action.
    """

    def __init__(self, operation: str, collection: str, message: str):
        self.operation = operation
        self.collection = collection
        self.message = message
        super().__init__(f"[{collection}] {operation} failed: {message}")
