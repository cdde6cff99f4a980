"""Domain exceptions raised by the library layer and mapped to HTTP codes by src/api/main.py."""


class LibraryError(Exception):
    """Base class for every error the document library raises on purpose."""


class InvalidCredentialsError(LibraryError):
    def __init__(self) -> None:
        # Deliberately identical for unknown e-mail and wrong password
        super().__init__("Invalid credentials")


class AccountNotFoundError(LibraryError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("No account is associated with this e-mail address.")


class PermissionDeniedError(LibraryError):
    pass


class RecordNotFoundError(LibraryError):
    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"Unknown {kind}: {record_id}")


class StoreCorruptedError(LibraryError):
    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Stored value for '{key}' could not be parsed: {reason}")
