"""
Result convention tests: taxonomy, ApplicationException and the Result
constructors, without any HTTP or database involvement.
"""
import json

import pytest
from pydantic import ValidationError

from blog_api.result import (
    ERROR_TAXONOMY,
    ApplicationException,
    Err,
    ErrorKind,
    Ok,
    conflict,
    created,
    default_message_for,
    error,
    error_from_exception,
    error_from_kind,
    error_from_messages,
    internal,
    not_found,
    ok,
    status_code_for,
    success,
    validation_error,
)


# ---------------------------------------------------------------------------
# Taxonomy
# ---------------------------------------------------------------------------

def test_every_kind_has_a_taxonomy_entry():
    assert set(ERROR_TAXONOMY) == set(ErrorKind)


@pytest.mark.parametrize("kind,status", [
    (ErrorKind.REQUIRED_FIELD, 400),
    (ErrorKind.INVALID_FIELD, 400),
    (ErrorKind.VALIDATION_ERROR, 400),
    (ErrorKind.NOT_FOUND, 404),
    (ErrorKind.UNAUTHORIZED, 401),
    (ErrorKind.FORBIDDEN, 403),
    (ErrorKind.CONFLICT, 409),
    (ErrorKind.INFRASTRUCTURE_ERROR, 500),
    (ErrorKind.DATABASE_ERROR, 500),
    (ErrorKind.EXTERNAL_SERVICE_ERROR, 502),
])
def test_status_codes(kind, status):
    assert status_code_for(kind) == status


def test_taxonomy_is_read_only():
    with pytest.raises(TypeError):
        ERROR_TAXONOMY[ErrorKind.NOT_FOUND] = None


def test_default_messages_are_portuguese():
    assert default_message_for(ErrorKind.NOT_FOUND) == "Recurso não encontrado"
    assert default_message_for(ErrorKind.INFRASTRUCTURE_ERROR) == "Erro interno do servidor"


# ---------------------------------------------------------------------------
# ApplicationException
# ---------------------------------------------------------------------------

def test_single_message_is_unwrapped():
    exc = ApplicationException("Usuário não encontrado", ErrorKind.NOT_FOUND)
    assert exc.get_messages() == "Usuário não encontrado"
    assert exc.status_code == 404


def test_multiple_messages_keep_order():
    exc = ApplicationException(["a", "b"], ErrorKind.VALIDATION_ERROR)
    assert exc.get_messages() == ["a", "b"]
    assert str(exc) == "a, b"
    assert exc.status_code == 400


def test_convenience_constructors_fall_back_to_default_message():
    assert ApplicationException.not_found().get_messages() == "Recurso não encontrado"
    assert ApplicationException.conflict("x").is_kind(ErrorKind.CONFLICT)
    assert ApplicationException.internal().status_code == 500
    assert ApplicationException.unauthorized().status_code == 401
    assert ApplicationException.forbidden().status_code == 403


def test_to_dict():
    exc = ApplicationException.conflict("Tag já cadastrada com esse nome")
    assert exc.to_dict() == {
        "name": "ApplicationException",
        "message": "Tag já cadastrada com esse nome",
        "kind": "CONFLICT",
        "statusCode": 409,
    }


def test_kind_given_as_string_is_normalized():
    exc = ApplicationException("x", "NOT_FOUND")
    assert exc.kind is ErrorKind.NOT_FOUND
    assert exc.is_kind(ErrorKind.NOT_FOUND)
    assert exc.to_dict()["kind"] == "NOT_FOUND"
    assert exc.status_code == 404


# ---------------------------------------------------------------------------
# Success constructors
# ---------------------------------------------------------------------------

def test_ok_defaults():
    result = ok({"id": 1})
    assert result.to_payload() == {
        "success": True,
        "data": {"id": 1},
        "message": "Sucesso",
        "statusCode": 200,
    }


def test_created_defaults():
    result = created([1, 2])
    assert result.status_code == 201
    assert result.message == "Recurso criado com sucesso"


def test_success_with_custom_status():
    result = success("x", "Aceito", 202)
    assert isinstance(result, Ok)
    assert result.to_payload()["statusCode"] == 202


def test_results_are_immutable():
    result = ok(1)
    with pytest.raises(ValidationError):
        result.message = "changed"


def test_serialization_is_stable():
    result = created({"name": "python"}, "Tag registrada com sucesso")
    assert result.to_json() == result.to_json()
    assert json.loads(result.to_json()) == result.to_payload()


# ---------------------------------------------------------------------------
# Error constructors
# ---------------------------------------------------------------------------

def test_error_from_kind_single_message():
    result = error_from_kind(ErrorKind.NOT_FOUND, "Artigo não encontrado")
    assert result.to_payload() == {
        "success": False,
        "data": None,
        "error": "Artigo não encontrado",
        "statusCode": 404,
    }


def test_error_from_kind_message_list():
    result = error_from_kind(ErrorKind.VALIDATION_ERROR, ["Email inválido", "Senha deve ter no mínimo 6 caracteres"])
    assert result.error == ["Email inválido", "Senha deve ter no mínimo 6 caracteres"]
    assert result.status_code == 400


def test_error_from_kind_default_message():
    assert error_from_kind(ErrorKind.CONFLICT).error == "Conflito de dados"


def test_error_from_exception():
    result = error_from_exception(ApplicationException.forbidden("Conta desativada"))
    assert result.error == "Conta desativada"
    assert result.status_code == 403


@pytest.mark.parametrize("exc", [
    ApplicationException("Tag não encontrada", ErrorKind.NOT_FOUND),
    ApplicationException(["Nome inválido", "Email inválido"], ErrorKind.VALIDATION_ERROR),
])
def test_same_exception_renders_identical_json(exc):
    assert error_from_exception(exc).to_json() == error_from_exception(exc).to_json()
    assert error(exc).to_json() == error(exc).to_json()
    assert error(exc).to_json() == error_from_exception(exc).to_json()


def test_error_from_messages_defaults_to_500():
    assert error_from_messages("boom").status_code == 500
    assert error_from_messages(["a", "b"], 418).error == ["a", "b"]


def test_error_dispatches_on_kind_and_kind_value():
    assert error(ErrorKind.UNAUTHORIZED).status_code == 401
    assert error("NOT_FOUND", "Tag não encontrada").to_payload()["error"] == "Tag não encontrada"


def test_error_dispatches_on_exception_and_messages():
    assert error(ApplicationException.conflict("dup")).status_code == 409
    assert error("falha", 503).status_code == 503
    assert error(["a", "b"], status_code=422).error == ["a", "b"]


def test_error_with_unknown_source():
    result = error(42)
    assert isinstance(result, Err)
    assert result.error == "Erro desconhecido"
    assert result.status_code == 500


def test_shortcuts():
    assert not_found().status_code == 404
    assert conflict("x").error == "x"
    assert internal("Erro ao buscar tags").status_code == 500
    assert validation_error(["a"]).error == "a"
    assert validation_error(["a", "b"]).error == ["a", "b"]


def test_err_roundtrips_through_json():
    result = not_found("Comentário não encontrado")
    assert Err.model_validate_json(result.to_json()) == result
