"""
Tests for the GraphQL data API client.

Uses httpx.MockTransport as the AppSync endpoint; retries use tenacity's
wait_none so no test sleeps.
"""

import json

import httpx
import pytest
from tenacity import wait_none

from estate_portal.boundary.graphql.client import SESSION_EXPIRED, DataApiClient
from estate_portal.configs.aws import DataApiSettings
from estate_portal.core.exceptions import AuthenticationError, DataApiError, DataApiTransportError
from estate_portal.models.property import PropertyFilter, PropertyStatus
from estate_portal.models.report import GenerateReportInput, ReportStatus, ReportType

ENDPOINT = "https://api.example.com/graphql"


class FakeEndpoint:
    """Scripted GraphQL endpoint recording every request."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def body(self, index=-1) -> dict:
        return json.loads(self.requests[index].content)


def _ok(operation, data):
    return httpx.Response(200, json={"data": {operation: data}})


def _client(endpoint, token="access-token", attempts=3):
    http = httpx.AsyncClient(transport=httpx.MockTransport(endpoint))
    settings = DataApiSettings(endpoint=ENDPOINT, retry_attempts=attempts)
    return DataApiClient(settings, http, access_token=token, retry_wait=wait_none())


@pytest.mark.asyncio
async def test_request_carries_token_query_and_variables():
    endpoint = FakeEndpoint([_ok("getProperty", {"id": "p1", "title": "Home"})])
    client = _client(endpoint, token="tok-123")

    listing = await client.get_property("p1")

    request = endpoint.requests[0]
    assert request.headers["Authorization"] == "tok-123"
    assert str(request.url) == ENDPOINT
    body = endpoint.body()
    assert "getProperty(id: $id)" in body["query"]
    assert body["variables"] == {"id": "p1"}
    assert listing.id == "p1"
    assert listing.title == "Home"


@pytest.mark.asyncio
async def test_get_property_returns_none_when_missing():
    client = _client(FakeEndpoint([_ok("getProperty", None)]))

    assert await client.get_property("missing") is None


@pytest.mark.asyncio
async def test_for_user_binds_a_new_token():
    endpoint = FakeEndpoint([_ok("getProperty", None)])
    anonymous = _client(endpoint, token=None)

    await anonymous.for_user("user-token").get_property("p1")

    assert endpoint.requests[0].headers["Authorization"] == "user-token"


@pytest.mark.asyncio
async def test_transport_errors_are_retried():
    endpoint = FakeEndpoint(
        [
            httpx.ConnectError("connection refused"),
            httpx.Response(503),
            _ok("listMyReports", {"items": [{"reportId": "r1"}], "nextToken": None}),
        ]
    )
    client = _client(endpoint)

    reports = await client.list_my_reports(limit=20)

    assert len(endpoint.requests) == 3
    assert reports.items[0].report_id == "r1"
    assert endpoint.body()["variables"] == {"limit": 20}


@pytest.mark.asyncio
async def test_retries_give_up_after_configured_attempts():
    endpoint = FakeEndpoint([httpx.Response(502)] * 3)
    client = _client(endpoint, attempts=3)

    with pytest.raises(DataApiTransportError) as exc_info:
        await client.list_my_reports()

    assert len(endpoint.requests) == 3
    assert exc_info.value.message == "Failed to fetch reports"


@pytest.mark.asyncio
async def test_report_status_is_not_retried():
    endpoint = FakeEndpoint([httpx.Response(503), _ok("getReportStatus", {"status": "RUNNING"})])
    client = _client(endpoint)

    with pytest.raises(DataApiTransportError):
        await client.get_report_status("arn:aws:states:exec-1")

    assert len(endpoint.requests) == 1


@pytest.mark.asyncio
async def test_create_property_is_sent_once_on_timeout():
    endpoint = FakeEndpoint(
        [
            httpx.ReadTimeout("timed out"),
            _ok("createProperty", {"propertyId": "p1", "message": "queued"}),
        ]
    )
    client = _client(endpoint)

    with pytest.raises(DataApiTransportError) as exc_info:
        await client.create_property({"title": "Sunny family home"})

    assert len(endpoint.requests) == 1
    assert exc_info.value.message == "Failed to create property listing"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.generate_property_report(GenerateReportInput(report_type=ReportType.INVESTMENT_ANALYSIS)),
        lambda c: c.approve_property("p1"),
        lambda c: c.reject_property("p1", "Blurry photos"),
        lambda c: c.delete_property("p1"),
        lambda c: c.upgrade_user_to_paid("user-1"),
    ],
)
async def test_mutations_are_not_retried(call):
    endpoint = FakeEndpoint([httpx.Response(503), httpx.Response(503)])

    with pytest.raises(DataApiTransportError):
        await call(_client(endpoint))

    assert len(endpoint.requests) == 1


@pytest.mark.asyncio
async def test_report_status_parses_payload():
    endpoint = FakeEndpoint(
        [
            _ok(
                "getReportStatus",
                {"status": "SUCCEEDED", "reportId": "r1", "s3Key": "reports/r1.pdf"},
            )
        ]
    )
    client = _client(endpoint)

    payload = await client.get_report_status("arn-1")

    assert payload.status is ReportStatus.SUCCEEDED
    assert payload.report_id == "r1"
    assert payload.s3_key == "reports/r1.pdf"
    assert endpoint.body()["variables"] == {"executionArn": "arn-1"}


@pytest.mark.asyncio
async def test_graphql_errors_raise_plain_message():
    endpoint = FakeEndpoint(
        [
            httpx.Response(
                200,
                json={
                    "data": {"generatePropertyReport": None},
                    "errors": [{"message": "Lambda:Unhandled", "errorType": "Lambda:Unhandled"}],
                },
            )
        ]
    )
    client = _client(endpoint)

    with pytest.raises(DataApiError) as exc_info:
        await client.generate_property_report(GenerateReportInput(title="Home"))

    assert exc_info.value.message == "Failed to generate AI insights. Please try again."
    assert exc_info.value.details["errors"][0]["message"] == "Lambda:Unhandled"
    assert len(endpoint.requests) == 1


@pytest.mark.asyncio
async def test_unauthorized_graphql_error_means_session_expired():
    endpoint = FakeEndpoint(
        [
            httpx.Response(
                200,
                json={"errors": [{"message": "Not Authorized", "errorType": "Unauthorized"}]},
            )
        ]
    )

    with pytest.raises(AuthenticationError) as exc_info:
        await _client(endpoint).list_my_properties("u1")

    assert exc_info.value.message == SESSION_EXPIRED


@pytest.mark.asyncio
async def test_http_401_means_session_expired():
    with pytest.raises(AuthenticationError):
        await _client(FakeEndpoint([httpx.Response(401)])).get_property("p1")


@pytest.mark.asyncio
async def test_invalid_json_raises_data_api_error():
    endpoint = FakeEndpoint([httpx.Response(200, content=b"<html>gateway</html>")])

    with pytest.raises(DataApiError) as exc_info:
        await _client(endpoint).get_property("p1")

    assert not isinstance(exc_info.value, DataApiTransportError)


@pytest.mark.asyncio
async def test_empty_mutation_result_is_an_error():
    endpoint = FakeEndpoint([_ok("createProperty", None)])

    with pytest.raises(DataApiError) as exc_info:
        await _client(endpoint).create_property({"title": "x"})

    assert exc_info.value.message == "Failed to create property listing"


@pytest.mark.asyncio
async def test_create_property_returns_queue_handle():
    endpoint = FakeEndpoint(
        [
            _ok(
                "createProperty",
                {"propertyId": "p9", "message": "queued", "queueMessageId": "msg-9"},
            )
        ]
    )

    created = await _client(endpoint).create_property({"title": "Sunny family home"})

    assert created.property_id == "p9"
    assert created.queue_message_id == "msg-9"
    assert endpoint.body()["variables"] == {"input": {"title": "Sunny family home"}}


@pytest.mark.asyncio
async def test_list_properties_sends_filter_without_nulls():
    endpoint = FakeEndpoint([_ok("listProperties", {"items": [], "nextToken": "n2"})])
    filters = PropertyFilter(city="Austin", status=PropertyStatus.ACTIVE)

    result = await _client(endpoint).list_properties(filters, limit=10)

    assert endpoint.body()["variables"] == {
        "limit": 10,
        "filter": {"city": "Austin", "status": "ACTIVE"},
    }
    assert result.next_token == "n2"


@pytest.mark.asyncio
async def test_generate_report_sends_flat_camel_case_input():
    endpoint = FakeEndpoint(
        [_ok("generatePropertyReport", {"executionArn": "arn-1", "reportType": "MARKET_ANALYSIS"})]
    )
    report_input = GenerateReportInput(
        title="Home",
        zip_code="78701",
        report_type=ReportType.INVESTMENT_ANALYSIS,
        cognito_user_id="u1",
    )

    report = await _client(endpoint).generate_property_report(report_input)

    sent = endpoint.body()["variables"]["input"]
    assert sent["zipCode"] == "78701"
    assert sent["reportType"] == "INVESTMENT_ANALYSIS"
    assert sent["cognitoUserId"] == "u1"
    assert sent["includeDetailedAmenities"] is True
    assert report.execution_arn == "arn-1"
    assert not report.is_synchronous


@pytest.mark.asyncio
async def test_reject_property_sends_reason():
    endpoint = FakeEndpoint(
        [_ok("rejectProperty", {"success": True, "message": "Rejected", "propertyId": "p1"})]
    )

    result = await _client(endpoint).reject_property("p1", "Blurry photos")

    assert endpoint.body()["variables"] == {"id": "p1", "reason": "Blurry photos"}
    assert result["success"] is True
