"""
GraphQL data API client.

Typed request/response functions over the portal's AppSync API. Requests
are authorized with the caller's Cognito access token. Queries retry
transient transport failures (connection errors, timeouts, 5xx) with
exponential jitter. Mutations and report status polls are sent exactly once.
GraphQL errors are logged raw and raised as DataApiError with a
plain-language message.

Dependencies: httpx, tenacity
System role: Data API boundary
"""

import logging
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)
from tenacity.wait import wait_base

from estate_portal.boundary.graphql import operations as ops
from estate_portal.configs.aws import DataApiSettings
from estate_portal.core.exceptions import AuthenticationError, DataApiError, DataApiTransportError
from estate_portal.models.property import (
    Property,
    PropertyConnection,
    PropertyFilter,
    PropertyUpdate,
    PropertyUploadResponse,
    UploadUrl,
)
from estate_portal.models.report import (
    GenerateReportInput,
    PropertyReport,
    ReportConnection,
    ReportStatusPayload,
)
from estate_portal.models.user import UpgradeResult, UserDetails
from estate_portal.observability.log_utils import log_with_context, redact

logger = logging.getLogger(__name__)

_FAILURE_MESSAGES = {
    "createProperty": "Failed to create property listing",
    "updateProperty": "Failed to update property",
    "deleteProperty": "Failed to delete property",
    "getUploadUrl": "Failed to prepare image upload",
    "generatePropertyReport": "Failed to generate AI insights. Please try again.",
    "getReportStatus": "Failed to check report status",
    "listProperties": "Failed to load properties",
    "listMyProperties": "Failed to load your properties",
    "getProperty": "Failed to load property",
    "listMyReports": "Failed to fetch reports",
    "listPendingProperties": "Failed to load pending properties",
    "approveProperty": "Failed to approve property",
    "rejectProperty": "Failed to reject property",
    "getUserDetails": "Failed to load user details",
    "upgradeUserToPaid": "Failed to upgrade account",
}

SESSION_EXPIRED = "Session expired. Please sign in again."


class DataApiClient:
    """Async client for the GraphQL data API."""

    def __init__(
        self,
        settings: DataApiSettings,
        http_client: httpx.AsyncClient,
        access_token: str | None = None,
        retry_wait: wait_base | None = None,
    ) -> None:
        """
        Initialize data API client.

        Args:
            settings: Endpoint, timeout and retry configuration
            http_client: Shared httpx client (owned by the caller)
            access_token: Cognito access token sent as Authorization
            retry_wait: Override the backoff strategy (tests use wait_none)
        """
        self._settings = settings
        self._http = http_client
        self._access_token = access_token
        self._retry_wait = retry_wait or wait_exponential_jitter(initial=0.5, max=5, jitter=0.5)

    def for_user(self, access_token: str) -> "DataApiClient":
        """Client bound to ``access_token`` sharing this client's connection pool."""
        return DataApiClient(self._settings, self._http, access_token, self._retry_wait)

    # -- transport -----------------------------------------------------------

    async def execute(
        self,
        operation: str,
        query: str,
        variables: dict[str, Any] | None = None,
        retry: bool = True,
    ) -> Any:
        """
        Run one GraphQL operation and return ``data[operation]``.

        Args:
            operation: Root field name (also used for error messages)
            query: GraphQL document
            variables: Operation variables
            retry: Retry transient transport errors

        Raises:
            AuthenticationError: If the API rejects the access token
            DataApiTransportError: If the API is unreachable after retries
            DataApiError: If the response carries GraphQL errors
        """
        attempts = self._settings.retry_attempts if retry else 1
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(DataApiTransportError),
            stop=stop_after_attempt(max(attempts, 1)),
            wait=self._retry_wait,
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:execute - {operation} retry "
                f"{retry_state.attempt_number}/{attempts} after transport error"
            ),
            reraise=True,
        ):
            with attempt:
                body = await self._post(operation, query, variables or {})
        return self._unwrap(operation, body, variables or {})

    async def _post(self, operation: str, query: str, variables: dict[str, Any]) -> dict:
        headers = {"Content-Type": "application/json"}
        if self._access_token:
            headers["Authorization"] = self._access_token
        try:
            response = await self._http.post(
                self._settings.endpoint,
                json={"query": query, "variables": variables},
                headers=headers,
                timeout=self._settings.timeout_seconds,
            )
        except httpx.TransportError as e:
            raise DataApiTransportError(
                _FAILURE_MESSAGES.get(operation, "Data API request failed"),
                operation=operation,
                details={"error": f"{type(e).__name__}: {e}"},
            ) from e

        if response.status_code in (401, 403):
            raise AuthenticationError(SESSION_EXPIRED, details={"operation": operation})
        if response.status_code >= 500:
            raise DataApiTransportError(
                _FAILURE_MESSAGES.get(operation, "Data API request failed"),
                operation=operation,
                details={"status_code": response.status_code},
            )
        try:
            return response.json()
        except ValueError as e:
            raise DataApiError(
                _FAILURE_MESSAGES.get(operation, "Data API request failed"),
                operation=operation,
                details={"status_code": response.status_code, "body": response.text[:200]},
            ) from e

    def _unwrap(self, operation: str, body: dict, variables: dict[str, Any]) -> Any:
        errors = body.get("errors")
        if errors:
            log_with_context(
                logger,
                logging.ERROR,
                f"{__name__}:_unwrap - {operation} returned GraphQL errors: "
                f"{[error.get('message') for error in errors]}",
                operation=operation,
                variables=str(redact(variables)),
                error_types=",".join(str(error.get("errorType")) for error in errors),
            )
            if any(error.get("errorType") in ("Unauthorized", "UnauthorizedException") for error in errors):
                raise AuthenticationError(SESSION_EXPIRED, details={"operation": operation})
            raise DataApiError(
                _FAILURE_MESSAGES.get(operation, "Data API request failed"),
                operation=operation,
                details={"errors": errors},
            )
        return (body.get("data") or {}).get(operation)

    def _require(self, operation: str, value: Any) -> Any:
        if value is None:
            raise DataApiError(
                _FAILURE_MESSAGES.get(operation, "Data API request failed"),
                operation=operation,
                details={"reason": "empty result"},
            )
        return value

    # -- properties ----------------------------------------------------------

    async def create_property(self, property_input: dict[str, Any]) -> PropertyUploadResponse:
        data = await self.execute(
            "createProperty", ops.CREATE_PROPERTY, {"input": property_input}, retry=False
        )
        return PropertyUploadResponse.model_validate(self._require("createProperty", data))

    async def update_property(self, property_id: str, update: PropertyUpdate) -> Property:
        payload = {"id": property_id, **update.to_api()}
        data = await self.execute(
            "updateProperty", ops.UPDATE_PROPERTY, {"input": payload}, retry=False
        )
        return Property.model_validate(self._require("updateProperty", data))

    async def delete_property(self, property_id: str) -> str:
        data = await self.execute(
            "deleteProperty", ops.DELETE_PROPERTY, {"id": property_id}, retry=False
        )
        return self._require("deleteProperty", data)["id"]

    async def get_upload_url(self, file_name: str, content_type: str) -> UploadUrl:
        data = await self.execute(
            "getUploadUrl",
            ops.GET_UPLOAD_URL,
            {"fileName": file_name, "contentType": content_type},
            retry=False,
        )
        return UploadUrl.model_validate(self._require("getUploadUrl", data))

    async def list_properties(
        self,
        filters: PropertyFilter | None = None,
        limit: int | None = None,
        next_token: str | None = None,
    ) -> PropertyConnection:
        variables: dict[str, Any] = {"limit": limit, "nextToken": next_token}
        if filters is not None:
            variables["filter"] = filters.to_api()
        data = await self.execute("listProperties", ops.LIST_PROPERTIES, _compact(variables))
        return PropertyConnection.model_validate(data or {})

    async def list_my_properties(
        self,
        user_id: str,
        limit: int | None = None,
        next_token: str | None = None,
    ) -> PropertyConnection:
        variables = _compact({"userId": user_id, "limit": limit, "nextToken": next_token})
        data = await self.execute("listMyProperties", ops.LIST_MY_PROPERTIES, variables)
        return PropertyConnection.model_validate(data or {})

    async def get_property(self, property_id: str) -> Property | None:
        data = await self.execute("getProperty", ops.GET_PROPERTY, {"id": property_id})
        return Property.model_validate(data) if data else None

    # -- moderation ----------------------------------------------------------

    async def list_pending_properties(
        self,
        limit: int | None = None,
        next_token: str | None = None,
    ) -> PropertyConnection:
        variables = _compact({"limit": limit, "nextToken": next_token})
        data = await self.execute("listPendingProperties", ops.LIST_PENDING_PROPERTIES, variables)
        return PropertyConnection.model_validate(data or {})

    async def approve_property(self, property_id: str) -> dict:
        data = await self.execute(
            "approveProperty", ops.APPROVE_PROPERTY, {"id": property_id}, retry=False
        )
        return self._require("approveProperty", data)

    async def reject_property(self, property_id: str, reason: str) -> dict:
        data = await self.execute(
            "rejectProperty",
            ops.REJECT_PROPERTY,
            {"id": property_id, "reason": reason},
            retry=False,
        )
        return self._require("rejectProperty", data)

    # -- reports -------------------------------------------------------------

    async def generate_property_report(self, report_input: GenerateReportInput) -> PropertyReport:
        data = await self.execute(
            "generatePropertyReport",
            ops.GENERATE_PROPERTY_REPORT,
            {"input": report_input.to_api()},
            retry=False,
        )
        return PropertyReport.model_validate(self._require("generatePropertyReport", data))

    async def get_report_status(self, execution_arn: str) -> ReportStatusPayload:
        """Single-attempt status query; the caller owns the poll schedule."""
        data = await self.execute(
            "getReportStatus",
            ops.GET_REPORT_STATUS,
            {"executionArn": execution_arn},
            retry=False,
        )
        return ReportStatusPayload.model_validate(self._require("getReportStatus", data))

    async def list_my_reports(
        self,
        limit: int | None = None,
        next_token: str | None = None,
    ) -> ReportConnection:
        variables = _compact({"limit": limit, "nextToken": next_token})
        data = await self.execute("listMyReports", ops.LIST_MY_REPORTS, variables)
        return ReportConnection.model_validate(self._require("listMyReports", data))

    # -- users ---------------------------------------------------------------

    async def get_user_details(self, cognito_user_id: str) -> UserDetails | None:
        data = await self.execute(
            "getUserDetails",
            ops.GET_USER_DETAILS,
            {"cognitoUserId": cognito_user_id},
        )
        return UserDetails.model_validate(data) if data else None

    async def upgrade_user_to_paid(self, cognito_user_id: str) -> UpgradeResult:
        data = await self.execute(
            "upgradeUserToPaid",
            ops.UPGRADE_USER_TO_PAID,
            {"cognitoUserId": cognito_user_id},
            retry=False,
        )
        return UpgradeResult.model_validate(self._require("upgradeUserToPaid", data))


def _compact(variables: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in variables.items() if value is not None}
