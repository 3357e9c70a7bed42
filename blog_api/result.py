"""
Result / error propagation convention.

Every service operation returns a ``Result``: either ``Ok`` (success with
data) or ``Err`` (failure with one or more messages).  Business-rule
failures are never raised; they are returned as ``Err`` values built from an
``ErrorKind``.  Only unexpected faults travel as exceptions, and those are
rendered by ``blog_api.error_handlers``.

Wire shape (``to_payload()``)::

    {"success": true,  "data": <T>,  "message": str,          "statusCode": 2xx}
    {"success": false, "data": null, "error": str | [str, ...], "statusCode": 4xx/5xx}
"""
from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Literal, NamedTuple, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Error taxonomy
# ---------------------------------------------------------------------------

class ErrorKind(str, Enum):
    # Client errors (4xx)
    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_FIELD = "INVALID_FIELD"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Server errors (5xx)
    INFRASTRUCTURE_ERROR = "INFRASTRUCTURE_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class ErrorSpec(NamedTuple):
    status_code: int
    default_message: str


ERROR_TAXONOMY: MappingProxyType[ErrorKind, ErrorSpec] = MappingProxyType({
    ErrorKind.REQUIRED_FIELD: ErrorSpec(400, "Campo obrigatório"),
    ErrorKind.INVALID_FIELD: ErrorSpec(400, "Campo inválido"),
    ErrorKind.VALIDATION_ERROR: ErrorSpec(400, "Dados inválidos"),
    ErrorKind.NOT_FOUND: ErrorSpec(404, "Recurso não encontrado"),
    ErrorKind.UNAUTHORIZED: ErrorSpec(401, "Não autorizado"),
    ErrorKind.FORBIDDEN: ErrorSpec(403, "Acesso negado"),
    ErrorKind.CONFLICT: ErrorSpec(409, "Conflito de dados"),
    ErrorKind.INFRASTRUCTURE_ERROR: ErrorSpec(500, "Erro interno do servidor"),
    ErrorKind.DATABASE_ERROR: ErrorSpec(500, "Erro no banco de dados"),
    ErrorKind.EXTERNAL_SERVICE_ERROR: ErrorSpec(502, "Erro em serviço externo"),
})

_missing = set(ErrorKind) - set(ERROR_TAXONOMY)
if _missing:
    raise RuntimeError(f"ErrorKind without taxonomy entry: {sorted(k.value for k in _missing)}")

UNKNOWN_ERROR_MESSAGE = "Erro desconhecido"


def status_code_for(kind: ErrorKind) -> int:
    return ERROR_TAXONOMY[kind].status_code


def default_message_for(kind: ErrorKind) -> str:
    return ERROR_TAXONOMY[kind].default_message


# ---------------------------------------------------------------------------
# ApplicationException
# ---------------------------------------------------------------------------

class ApplicationException(Exception):
    """
    A failure of one ``ErrorKind`` carrying one or more messages.

    ``status_code`` is always looked up from the taxonomy; it cannot be
    passed in.  Instances are converted into ``Err`` results with
    ``error_from_exception``; they are not meant to escape a service.
    """

    def __init__(self, message: str | Sequence[str], kind: ErrorKind | str) -> None:
        kind = ErrorKind(kind)
        messages = (message,) if isinstance(message, str) else tuple(message)
        if not messages:
            messages = (default_message_for(kind),)
        super().__init__(", ".join(messages))
        self.kind: ErrorKind = kind
        self.messages: tuple[str, ...] = messages
        self.status_code = status_code_for(kind)

    @classmethod
    def with_kind(cls, kind: ErrorKind, message: str | Sequence[str] | None = None) -> ApplicationException:
        return cls(default_message_for(kind) if message is None else message, kind)

    @classmethod
    def not_found(cls, message: str | None = None) -> ApplicationException:
        return cls.with_kind(ErrorKind.NOT_FOUND, message)

    @classmethod
    def unauthorized(cls, message: str | None = None) -> ApplicationException:
        return cls.with_kind(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def forbidden(cls, message: str | None = None) -> ApplicationException:
        return cls.with_kind(ErrorKind.FORBIDDEN, message)

    @classmethod
    def conflict(cls, message: str | None = None) -> ApplicationException:
        return cls.with_kind(ErrorKind.CONFLICT, message)

    @classmethod
    def validation_error(cls, message: str | Sequence[str] | None = None) -> ApplicationException:
        return cls.with_kind(ErrorKind.VALIDATION_ERROR, message)

    @classmethod
    def internal(cls, message: str | None = None) -> ApplicationException:
        return cls.with_kind(ErrorKind.INFRASTRUCTURE_ERROR, message)

    def is_kind(self, kind: ErrorKind) -> bool:
        return self.kind == kind

    def get_messages(self) -> str | list[str]:
        """
        Return the single message unwrapped, or every message as a list.

        Single-field failures render as a scalar and multi-field failures
        as a list; API clients rely on that shape.
        """
        if len(self.messages) == 1:
            return self.messages[0]
        return list(self.messages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "message": self.get_messages(),
            "kind": self.kind.value,
            "statusCode": self.status_code,
        }


# ---------------------------------------------------------------------------
# Result variants
# ---------------------------------------------------------------------------

class Ok(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: Literal[True] = True
    data: T
    message: str
    status_code: int = Field(alias="statusCode")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class Err(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: Literal[False] = False
    data: None = None
    error: Union[str, list[str]]
    status_code: int = Field(alias="statusCode")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


Result = Union[Ok[T], Err]


# ---------------------------------------------------------------------------
# Success constructors
# ---------------------------------------------------------------------------

def success(data: T, message: str = "Operação realizada com sucesso", status_code: int = 200) -> Ok[T]:
    return Ok(data=data, message=message, status_code=status_code)


def ok(data: T, message: str | None = None) -> Ok[T]:
    return success(data, message or "Sucesso", 200)


def created(data: T, message: str | None = None) -> Ok[T]:
    return success(data, message or "Recurso criado com sucesso", 201)


# ---------------------------------------------------------------------------
# Error constructors (one per source shape)
# ---------------------------------------------------------------------------

def error_from_exception(exc: ApplicationException) -> Err:
    return Err(error=exc.get_messages(), status_code=exc.status_code)


def error_from_kind(kind: ErrorKind, message: str | Sequence[str] | None = None) -> Err:
    return error_from_exception(ApplicationException.with_kind(kind, message))


def error_from_messages(messages: str | Sequence[str], status_code: int = 500) -> Err:
    error = messages if isinstance(messages, str) else list(messages)
    return Err(error=error, status_code=status_code)


def _as_kind(value: Any) -> ErrorKind | None:
    if isinstance(value, ErrorKind):
        return value
    if isinstance(value, str):
        try:
            return ErrorKind(value)
        except ValueError:
            return None
    return None


def error(
    source: Any,
    message_or_status: str | Sequence[str] | int | None = None,
    status_code: int | None = None,
) -> Err:
    """
    Build an ``Err`` from whatever the caller has at hand.

    - an ``ErrorKind`` (or its string value), with an optional message
      override;
    - an ``ApplicationException``;
    - a raw message or list of messages, with an optional status code
      (default 500).

    Anything else becomes a generic "unknown error" with status 500.
    """
    kind = _as_kind(source)
    if kind is not None:
        message = None if isinstance(message_or_status, int) else message_or_status
        return error_from_kind(kind, message)

    if isinstance(source, ApplicationException):
        return error_from_exception(source)

    if isinstance(source, str) or (
        isinstance(source, Sequence) and all(isinstance(m, str) for m in source)
    ):
        if isinstance(message_or_status, int):
            status = message_or_status
        else:
            status = status_code or 500
        return error_from_messages(source, status)

    return Err(error=UNKNOWN_ERROR_MESSAGE, status_code=status_code or 500)


# Per-kind shortcuts for one-line failure returns in services.

def not_found(message: str | None = None) -> Err:
    return error_from_kind(ErrorKind.NOT_FOUND, message)


def unauthorized(message: str | None = None) -> Err:
    return error_from_kind(ErrorKind.UNAUTHORIZED, message)


def forbidden(message: str | None = None) -> Err:
    return error_from_kind(ErrorKind.FORBIDDEN, message)


def conflict(message: str | None = None) -> Err:
    return error_from_kind(ErrorKind.CONFLICT, message)


def invalid_field(message: str | None = None) -> Err:
    return error_from_kind(ErrorKind.INVALID_FIELD, message)


def validation_error(message: str | Sequence[str] | None = None) -> Err:
    return error_from_kind(ErrorKind.VALIDATION_ERROR, message)


def internal(message: str | None = None) -> Err:
    return error_from_kind(ErrorKind.INFRASTRUCTURE_ERROR, message)
