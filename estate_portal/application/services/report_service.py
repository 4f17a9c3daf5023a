"""
Report service orchestrator.

Starts AI report generation for a listing and tracks the pipeline
execution with a ReportTracker. Reports are a paid feature: only users in
the paid or admin tier may generate them.

Dependencies: estate_portal.boundary.graphql, estate_portal.boundary.aws,
    estate_portal.core.tracker
System role: Report use case orchestration
"""

import logging

from estate_portal.application.services.tracker_registry import TrackerRegistry
from estate_portal.boundary.aws.s3_client import S3MediaClient
from estate_portal.boundary.graphql.client import DataApiClient
from estate_portal.configs.settings import Settings
from estate_portal.core.exceptions import (
    AuthorizationError,
    DataApiError,
    PropertyNotFoundError,
    TriggerError,
)
from estate_portal.core.session import Tier, UserSession
from estate_portal.core.tracker.report_tracker import ReportTracker
from estate_portal.models.report import (
    GenerateReportInput,
    PropertyReport,
    ReportConnection,
    ReportStatus,
    ReportStatusPayload,
    ReportType,
)

logger = logging.getLogger(__name__)

NO_EXECUTION_HANDLE = "No execution ARN received from server"
PAID_FEATURE = "AI reports are available on the paid plan. Please upgrade to continue."


class ReportService:
    """Report use cases for one signed-in user."""

    def __init__(
        self,
        data_api: DataApiClient,
        session: UserSession,
        registry: TrackerRegistry,
        settings: Settings,
        media: S3MediaClient | None = None,
    ) -> None:
        self._api = data_api
        self._session = session
        self._registry = registry
        self._settings = settings
        self._media = media

    async def generate(
        self,
        property_id: str,
        report_type: ReportType = ReportType.MARKET_ANALYSIS,
        additional_context: str | None = None,
    ) -> ReportTracker:
        """
        Trigger report generation and start tracking it.

        A report returned synchronously completes the tracker immediately;
        otherwise the tracker polls the execution handle.

        Raises:
            AuthorizationError: If the user is not in the paid or admin tier
            PropertyNotFoundError: If the listing does not exist
            TriggerError: If the mutation fails or returns no handle
        """
        if not self._session.is_paid:
            raise AuthorizationError(PAID_FEATURE, required_tier=Tier.PAID.value)

        listing = await self._session.cache.get_or_fetch(
            ("property", property_id),
            lambda: self._api.get_property(property_id),
        )
        if listing is None:
            raise PropertyNotFoundError(property_id)

        report_input = GenerateReportInput.from_listing(
            listing,
            report_type=report_type,
            additional_context=additional_context,
            cognito_user_id=self._session.user.sub,
        )
        report = await self._trigger(report_input)

        tracker = ReportTracker(
            property_id=property_id,
            execution_handle=report.execution_arn,
            fetch_status=self._fetch_status,
            scheduler=self._registry.scheduler,
            settings=self._settings.tracker,
            retrigger=lambda: self._retrigger(report_input),
            cache=self._session.cache,
            owner_id=self._session.user.sub,
        )
        self._registry.register(tracker)
        tracker.start()
        if not report.execution_arn:
            tracker.finish_with(
                {
                    "reportId": report.report_id,
                    "signedUrl": report.signed_url or self._sign(report.s3_key),
                    "s3Key": report.s3_key,
                }
            )
        return tracker

    async def list_reports(
        self,
        limit: int | None = 20,
        next_token: str | None = None,
    ) -> ReportConnection:
        return await self._session.cache.get_or_fetch(
            ("myReports", self._session.user.sub, limit, next_token),
            lambda: self._api.list_my_reports(limit, next_token),
        )

    async def _trigger(self, report_input: GenerateReportInput) -> PropertyReport:
        try:
            report = await self._api.generate_property_report(report_input)
        except DataApiError as e:
            logger.error(f"{__name__}:_trigger - generatePropertyReport failed: {e}")
            raise TriggerError(e.message, details=e.details) from e

        if not report.execution_arn and not report.is_synchronous:
            logger.error(
                f"{__name__}:_trigger - Response carried neither a handle nor a report",
                extra={"report_id": report.report_id},
            )
            raise TriggerError(NO_EXECUTION_HANDLE)

        logger.info(
            f"{__name__}:_trigger - Report triggered",
            extra={"execution_arn": report.execution_arn, "report_id": report.report_id},
        )
        return report

    async def _retrigger(self, report_input: GenerateReportInput) -> str:
        report = await self._trigger(report_input)
        if not report.execution_arn:
            raise TriggerError(NO_EXECUTION_HANDLE)
        return report.execution_arn

    async def _fetch_status(self, execution_arn: str) -> ReportStatusPayload:
        payload = await self._api.get_report_status(execution_arn)
        if payload.status is ReportStatus.SUCCEEDED and not payload.signed_url and payload.s3_key:
            payload = payload.model_copy(update={"signed_url": self._sign(payload.s3_key)})
        return payload

    def _sign(self, s3_key: str | None) -> str | None:
        if not s3_key or self._media is None:
            return None
        url, _ = self._media.generate_presigned_download_url(s3_key)
        return url
