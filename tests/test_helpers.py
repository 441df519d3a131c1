from vetclinic_client.helpers import (
    GENERIC_ERROR_MESSAGE,
    build_query_string,
    get_error_message,
    get_pagination_info,
    get_status_color,
    get_status_label,
    group_by,
    sort_by,
)
from vetclinic_client.http import ApiHttpError
from vetclinic_client.services import FormValidationError


def test_build_query_string():
    assert build_query_string(None) == ""
    assert build_query_string({"a": None, "b": ""}) == ""
    assert build_query_string({"q": "a&b", "active": True, "page": 0}) == "?q=a%26b&active=true&page=0"


def test_error_message_prefers_message_field():
    error = ApiHttpError(400, "HTTP 400", {"message": "Email já cadastrado"})

    assert get_error_message(error) == "Email já cadastrado"


def test_error_message_joins_errors_list():
    error = ApiHttpError(422, "HTTP 422", {"errors": [{"msg": "Nome obrigatório"}, {"message": "Email inválido"}]})

    assert get_error_message(error) == "Nome obrigatório, Email inválido"


def test_error_message_falls_back_to_exception_text_then_generic():
    assert get_error_message(ConnectionError("sem conexão")) == "sem conexão"
    assert get_error_message(RuntimeError()) == GENERIC_ERROR_MESSAGE
    assert get_error_message(None) == GENERIC_ERROR_MESSAGE


def test_error_message_for_form_errors():
    error = FormValidationError({"email": "Email inválido"})

    assert get_error_message(error) == "email: Email inválido"


def test_pagination_info():
    info = get_pagination_info({"page": 2, "limit": 20, "total": 45, "totalPages": 3})

    assert info == {
        "start": 21,
        "end": 40,
        "total": 45,
        "current_page": 2,
        "total_pages": 3,
        "has_next": True,
        "has_prev": True,
    }
    assert get_pagination_info(None) is None


def test_status_color_and_label():
    assert get_status_color("overdue") == "danger"
    assert get_status_color("whatever") == "secondary"
    assert get_status_label("in_progress") == "Em Andamento"
    assert get_status_label("custom") == "custom"
    assert get_status_label(None) == "-"


def test_group_and_sort():
    items = [{"sex": "male", "w": 3}, {"sex": "female", "w": None}, {"sex": "male", "w": 1}]

    grouped = group_by(items, "sex")
    assert [len(grouped["male"]), len(grouped["female"])] == [2, 1]
    assert [i["w"] for i in sort_by(items, "w")] == [1, 3, None]
    assert [i["w"] for i in sort_by(items, lambda i: i["w"] or 0, order="desc")] == [3, 1, None]


def test_sort_keeps_missing_values_last_when_descending():
    items = [{"name": None}, {"name": "Bia"}, {"name": "Ana"}, {"name": None}]

    assert [i["name"] for i in sort_by(items, "name", order="desc")] == ["Bia", "Ana", None, None]
    assert [i["name"] for i in sort_by(iter(items), "name")] == ["Ana", "Bia", None, None]
