"""
Request and response schemas.

Request models carry the field rules of the API together with the exact
(Portuguese) messages clients receive when a rule is broken.  Each rule is a
``BeforeValidator`` raising ``PydanticCustomError`` so the message reaches
``exc.errors()[i]["msg"]`` untouched; the error boundary turns those into
the ``error`` list of a VALIDATION_ERROR result.
"""
import math
import uuid
from datetime import datetime
from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, BeforeValidator, ConfigDict, HttpUrl, TypeAdapter, ValidationError
from pydantic_core import PydanticCustomError

# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------

USER_NAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6

TAG_NAME_MIN_LENGTH = 2
TAG_NAME_MAX_LENGTH = 12

ARTICLE_TITLE_MIN_LENGTH = 3
ARTICLE_TITLE_MAX_LENGTH = 100
ARTICLE_CONTENT_MIN_LENGTH = 10
ARTICLE_CONTENT_MAX_LENGTH = 5000
ARTICLE_MIN_TAGS = 1
ARTICLE_MAX_TAGS = 3
SEARCH_TERM_MAX_LENGTH = 16

COMMENT_MIN_LENGTH = 2
COMMENT_MAX_LENGTH = 2000

_http_url = TypeAdapter(HttpUrl)


def _text(label: str, required: str, min_length: int, max_length: int | None = None, nullable: bool = False):
    def check(value):
        if value is None and nullable:
            return None
        if not isinstance(value, str):
            raise PydanticCustomError("string_type", required)
        if len(value) < min_length:
            raise PydanticCustomError(
                "string_too_short", f"{label} deve ter no mínimo {min_length} caracteres"
            )
        if max_length is not None and len(value) > max_length:
            raise PydanticCustomError(
                "string_too_long", f"{label} deve ter no máximo {max_length} caracteres"
            )
        return value

    return BeforeValidator(check)


def _uuid(message: str, nullable: bool = False):
    def check(value):
        if value is None and nullable:
            return None
        if isinstance(value, uuid.UUID):
            return value
        try:
            return uuid.UUID(str(value))
        except ValueError:
            raise PydanticCustomError("uuid_parsing", message) from None

    return BeforeValidator(check)


def _url(message: str, allow_blank: bool = False):
    def check(value):
        if value is None or (allow_blank and isinstance(value, str) and not value.strip()):
            return None
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise PydanticCustomError("url_parsing", message) from None
        return value

    return BeforeValidator(check)


def _email(value):
    if not isinstance(value, str):
        raise PydanticCustomError("value_error", "Email inválido")
    try:
        return validate_email(value, check_deliverability=False).normalized
    except EmailNotValidError:
        raise PydanticCustomError("value_error", "Email inválido") from None


def _nullable_email(value):
    return None if value is None else _email(value)


def _tag_ids(nullable: bool = False):
    def check(value):
        if value is None and nullable:
            return None
        if not isinstance(value, list):
            raise PydanticCustomError("list_type", "Tags do artigo são obrigatórias")
        if len(value) < ARTICLE_MIN_TAGS:
            raise PydanticCustomError(
                "too_short", f"Um artigo deve ter no mínimo {ARTICLE_MIN_TAGS} tags"
            )
        if len(value) > ARTICLE_MAX_TAGS:
            raise PydanticCustomError(
                "too_long", f"Um artigo pode ter no máximo {ARTICLE_MAX_TAGS} tags"
            )
        return value

    return BeforeValidator(check)


UserId = Annotated[uuid.UUID, _uuid("ID do usuário deve ser um UUID válido")]
TagId = Annotated[uuid.UUID, _uuid("ID da tag deve ser um UUID válido")]
ArticleId = Annotated[uuid.UUID, _uuid("ID do artigo deve ser um UUID válido")]
CommentId = Annotated[uuid.UUID, _uuid("ID do comentário deve ser um UUID válido")]

UserName = _text("Nome", "Nome é obrigatório", USER_NAME_MIN_LENGTH)
Password = _text("Senha", "Senha é obrigatória", PASSWORD_MIN_LENGTH)
TagName = _text("A tag", "O nome da tag é obrigatório", TAG_NAME_MIN_LENGTH, TAG_NAME_MAX_LENGTH)
CommentContent = _text(
    "Comentário", "Conteúdo do comentário é obrigatório", COMMENT_MIN_LENGTH, COMMENT_MAX_LENGTH
)


def _article_title(nullable: bool = False):
    return _text(
        "Título", "Título do artigo é obrigatório",
        ARTICLE_TITLE_MIN_LENGTH, ARTICLE_TITLE_MAX_LENGTH, nullable,
    )


def _article_content(nullable: bool = False):
    return _text(
        "Conteúdo", "Conteúdo do artigo é obrigatório",
        ARTICLE_CONTENT_MIN_LENGTH, ARTICLE_CONTENT_MAX_LENGTH, nullable,
    )


# --- Lookups (path parameters) ---

class UserLookup(BaseModel):
    id: UserId


class TagLookup(BaseModel):
    id: TagId


class ArticleLookup(BaseModel):
    id: ArticleId


class CommentLookup(BaseModel):
    id: CommentId


class ArticleTagLookup(BaseModel):
    article_id: ArticleId
    tag_id: TagId


# --- User ---

class UserCreate(BaseModel):
    name: Annotated[str, UserName]
    email: Annotated[str, BeforeValidator(_email)]
    password: Annotated[str, Password]
    avatar: Annotated[Optional[str], _url("Avatar deve ser uma URL válida")] = None


class UserUpdate(BaseModel):
    name: Annotated[Optional[str], _text("Nome", "Nome é obrigatório", USER_NAME_MIN_LENGTH, nullable=True)] = None
    email: Annotated[Optional[str], BeforeValidator(_nullable_email)] = None
    avatar: Annotated[Optional[str], _url("Avatar deve ser uma URL válida")] = None


class UserSummary(BaseModel):
    id: uuid.UUID
    name: str
    avatar: str | None = None
    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserSummary):
    email: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


# --- Auth ---

class LoginRequest(BaseModel):
    email: Annotated[str, BeforeValidator(_email)]
    password: Annotated[str, Password]


# --- Tag ---

class TagCreate(BaseModel):
    name: Annotated[str, TagName]


class TagUpdate(TagCreate):
    pass


class TagResponse(BaseModel):
    id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Article ---

class ArticleCreate(BaseModel):
    title: Annotated[str, _article_title()]
    content: Annotated[str, _article_content()]
    image: Annotated[Optional[str], _url("URL da imagem deve ser válida", allow_blank=True)] = None
    author_id: Annotated[uuid.UUID, _uuid("ID do autor deve ser um UUID válido")]
    tag_ids: Annotated[list[TagId], _tag_ids()]


class ArticleUpdate(BaseModel):
    title: Annotated[Optional[str], _article_title(nullable=True)] = None
    content: Annotated[Optional[str], _article_content(nullable=True)] = None
    image: Annotated[Optional[str], _url("URL da imagem deve ser válida")] = None
    tag_ids: Annotated[Optional[list[TagId]], _tag_ids(nullable=True)] = None


class ArticleTagsUpdate(BaseModel):
    tag_ids: Annotated[list[TagId], _tag_ids()]


class ArticleSearch(BaseModel):
    term: Annotated[str, _text("A busca", "Termo de busca é obrigatório", 0, SEARCH_TERM_MAX_LENGTH)]


class ArticleResponse(BaseModel):
    id: uuid.UUID
    title: str
    content: str
    image: str | None
    author_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    author: UserSummary | None = None
    tags: list[TagResponse] = []
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

class CommentCreate(BaseModel):
    content: Annotated[str, CommentContent]
    article_id: ArticleId
    user_id: UserId
    parent_id: Annotated[
        Optional[uuid.UUID], _uuid("ID do comentário pai deve ser um UUID válido", nullable=True)
    ] = None


class CommentUpdate(BaseModel):
    content: Annotated[str, CommentContent]


class CommentResponse(BaseModel):
    id: uuid.UUID
    content: str
    article_id: uuid.UUID
    user_id: uuid.UUID
    parent_id: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class CommentReply(CommentResponse):
    user: UserSummary | None = None


class CommentThread(CommentReply):
    replies: list[CommentReply] = []


# --- Pagination ---

class PaginatedResponse(BaseModel):
    items: list
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, items: list, total: int, page: int, limit: int) -> "PaginatedResponse":
        return cls(
            items=items,
            total=total,
            page=page,
            limit=limit,
            pages=math.ceil(total / limit) if total > 0 else 0,
        )
