from conftest import FakeRequestsSession, FakeResponse
import pytest

from vetclinic_client.apis import AnimalsApi, AppointmentsApi, ClientsApi, ReportsApi, TeamApi
from vetclinic_client.http import ApiHttpError, HttpClient


def _client(settings, responses=None, token="tok-1"):
    session = FakeRequestsSession(responses)
    http_client = HttpClient(settings, token_provider=lambda: token, session=session)
    return http_client, session


def test_json_headers_and_bearer_token(settings):
    http_client, session = _client(settings)

    http_client.get_json("/dashboard/overview")

    request = session.requests[0]
    assert session.headers["Accept"] == "application/json"
    assert session.headers["Content-Type"] == "application/json"
    assert request["headers"]["Authorization"] == "Bearer tok-1"
    assert request["url"] == "https://vet.example.com/api/v1/dashboard/overview"
    assert request["timeout"] == 10


def test_no_authorization_header_without_token(settings):
    http_client, session = _client(settings, token=None)

    http_client.post_json("/auth/login", {"email": "a@b.com"})

    assert "Authorization" not in session.requests[0]["headers"]
    assert session.requests[0]["json"] == {"email": "a@b.com"}


def test_empty_body_returns_empty_dict(settings):
    http_client, _ = _client(settings, [FakeResponse(204)])

    assert http_client.delete_json("/clients/1") == {}


def test_error_carries_status_message_and_payload(settings):
    body = {"success": False, "message": "Cliente não encontrado"}
    http_client, _ = _client(settings, [FakeResponse(404, body)])

    with pytest.raises(ApiHttpError) as excinfo:
        http_client.get_json("/clients/missing")

    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "Cliente não encontrado"
    assert excinfo.value.payload == body


def test_error_without_json_body(settings):
    http_client, _ = _client(settings, [FakeResponse(502, content=b"Bad gateway")])

    with pytest.raises(ApiHttpError) as excinfo:
        http_client.get_json("/clients")

    assert str(excinfo.value) == "HTTP 502: Bad gateway"
    assert excinfo.value.payload is None


def test_list_query_string_skips_empty_values(settings):
    http_client, session = _client(settings)
    api = ClientsApi(settings, http_client)

    api.get_clients({"page": 2, "limit": 20, "search": "", "city": None, "state": "São Paulo"})

    assert session.requests[0]["url"].endswith("/clients?page=2&limit=20&state=S%C3%A3o%20Paulo")


def test_list_without_params_has_no_query_string(settings):
    http_client, session = _client(settings)

    AnimalsApi(settings, http_client).get_batches()

    assert session.requests[0]["url"].endswith("/animals/batches")


def test_path_interpolation_and_verbs(settings):
    http_client, session = _client(settings)
    clients = ClientsApi(settings, http_client)
    animals = AnimalsApi(settings, http_client)
    appointments = AppointmentsApi(settings, http_client)

    clients.update_property("c-1", "p-2", {"name": "Fazenda"})
    animals.add_animals_to_batch("b-1", ["a-1", "a-2"])
    appointments.remove_animals_from_appointment("ap-1", {"animalIds": ["a-1"]})
    appointments.get_upcoming_appointments()

    methods_and_paths = [
        (r["method"], r["url"].replace(settings.base_url, "")) for r in session.requests
    ]
    assert methods_and_paths == [
        ("PATCH", "/clients/c-1/properties/p-2"),
        ("POST", "/animals/batches/b-1/add-animals"),
        ("DELETE", "/appointments/ap-1/animals"),
        ("GET", "/appointments/upcoming?days=7"),
    ]
    assert session.requests[1]["json"] == {"animalIds": ["a-1", "a-2"]}
    assert session.requests[2]["json"] == {"animalIds": ["a-1"]}


def test_team_role_update_body(settings):
    http_client, session = _client(settings)

    TeamApi(settings, http_client).update_member_role("u-7", "viewer")

    assert session.requests[0]["method"] == "PATCH"
    assert session.requests[0]["json"] == {"role": "viewer"}


def test_reports_return_raw_bytes(settings):
    http_client, session = _client(settings, [FakeResponse(200, content=b"%PDF-1.4")])

    document = ReportsApi(settings, http_client).generate_financial_report({"year": 2024})

    assert document == b"%PDF-1.4"
    assert session.requests[0]["headers"]["Accept"] == "application/octet-stream"
    assert session.requests[0]["url"].endswith("/reports/financial?year=2024")


def test_api_errors_propagate_unchanged(settings):
    http_client, _ = _client(settings, [FakeResponse(500, {"message": "falhou"})])

    with pytest.raises(ApiHttpError, match="falhou"):
        ClientsApi(settings, http_client).create_client({"name": "X"})
