"""Application errors and their user-facing messages."""

MISSING_TABLE = "42P01"
MISSING_COLUMN = "42703"
FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"

_STORAGE_MESSAGES: dict[str, str] = {
    MISSING_TABLE: (
        "La tabla no existe. Por favor ejecuta el script de migración de Supabase."
    ),
    MISSING_COLUMN: "La columna no existe. Ejecuta el script de migración primero.",
    FOREIGN_KEY_VIOLATION: (
        "Error de referencia. Verifica que el usuario existe en la base de datos."
    ),
    UNIQUE_VIOLATION: "Este registro ya está registrado.",
}


class AppError(Exception):
    """Base error rendered to clients as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(AppError):
    """Request data failed validation."""

    status_code = 400


class NotAuthenticatedError(AppError):
    """No valid session accompanies the request."""

    status_code = 401

    def __init__(self, message: str = "No autenticado") -> None:
        super().__init__(message)


class ForbiddenError(AppError):
    """The caller may not perform the action."""

    status_code = 403


class LimitReachedError(ForbiddenError):
    """A plan limit has been reached."""


class NotFoundError(AppError):
    """The requested row does not exist for the caller."""

    status_code = 404


class StorageError(AppError):
    """The backing store rejected a query."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class AuthProviderError(AppError):
    """The identity provider rejected a request."""

    status_code = 400


def storage_error_message(
    code: str | None,
    fallback: str,
    messages: dict[str, str] | None = None,
) -> str:
    """Return a localized message for a backend error code."""
    if code is None:
        return fallback
    if messages and code in messages:
        return messages[code]
    return _STORAGE_MESSAGES.get(code, fallback)
