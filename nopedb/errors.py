from __future__ import annotations


class DatabaseError(Exception):
    """Base class for every error raised by the store."""

    def __init__(self, message: str = "Unknown Error") -> None:
        super().__init__(message)
        self.message = message


class InvalidConfigError(DatabaseError):
    pass


class InvalidKeyError(DatabaseError):
    pass


class MissingValueError(DatabaseError):
    pass


class TypeMismatchError(DatabaseError):
    pass


class ParseError(DatabaseError):
    pass


class ConfirmationRequiredError(DatabaseError):
    pass


class BackupError(DatabaseError):
    pass


class DatabaseIOError(DatabaseError, OSError):
    """Filesystem failure other than a missing database file."""


# Human-readable messages shared by the storage layer and its tests.
MESSAGES = {
    "data_not_a_number": "Existing data for this ID is not of type 'number'.",
    "must_be_a_number": "The provided value must be of type 'number'.",
    "must_be_array": "The existing data must be of type 'array'.",
    "non_valid_id": "Invalid ID. It cannot be empty, start/end with a separator, or contain repeated separators.",
    "undefined_id": "ID is undefined.",
    "undefined_value": "Value is undefined.",
    "parse_error": "Failed to parse database file. Check for corrupt JSON.",
    "not_an_object": "The database file must contain a JSON object.",
    "clear_confirm": "Accidental clear prevented. Must pass { confirm: true } to clear().",
    "invalid_backup_path": "Invalid backup file path provided.",
    "backup_extension": "The backup file path must end with '.json'.",
}
