from typing import Any

from core.domain.error import Error


class DefaultError(Exception):
    default_message: str = "An unknown error occurred"
    code: str = "internal_error"
    default_status_code: int = 500
    default_capture: bool = False

    def __init__(
        self,
        msg: str | None = None,
        capture: bool | None = None,
        status_code: int | None = None,
        extras: dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        super().__init__(msg or self.default_message)
        self.capture: bool = self.default_capture if capture is None else capture
        self.status_code: int = status_code or self.default_status_code
        self.extras: dict[str, Any] = {**(extras or {}), **kwargs}

    @property
    def message(self) -> str:
        return str(self)

    def serialized(self) -> Error:
        return Error(
            code=self.code,
            message=self.message,
            status_code=self.status_code,
            details=self.extras or None,
        )


class InternalError(DefaultError):
    default_capture = True


class BadRequestError(DefaultError):
    code = "bad_request"
    default_message = "Bad request"
    default_status_code = 400


class ObjectNotFoundError(DefaultError):
    code = "object_not_found"
    default_message = "Object not found"
    default_status_code = 404

    def __init__(self, msg: str | None = None, object_type: str | None = None, **kwargs: Any):
        if not msg and object_type:
            msg = f"{object_type} not found"
        super().__init__(msg, **kwargs)
        self.object_type: str | None = object_type


class DuplicateValueError(DefaultError):
    code = "duplicate_value"
    default_message = "Duplicate value"
    default_status_code = 409


class InvalidDocumentError(DefaultError):
    """Raised when a stored or posted dashboard is not a JSON object"""

    code = "bad_data"
    default_message = "Invalid dashboard document"
    default_status_code = 400


class PanelDeletionError(BadRequestError):
    """Raised by the update safety policy when an update removes more than one panel.

    This is a rejection of the update, not a storage failure, so callers can render it
    as an actionable message.
    """

    code = "panel_deletion_not_supported"
    default_message = "deleting more than one panel is not supported"

    def __init__(self, removed_ids: list[str], **kwargs: Any):
        super().__init__(removed_ids=removed_ids, **kwargs)
        self.removed_ids: list[str] = removed_ids
