"""
Report API endpoints.

Routes:
- POST /reports - Generate an AI report for a listing (paid tier)
- GET /reports - Reports generated by the caller

Dependencies: estate_portal.application.services.report_service
System role: Report HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from estate_portal.api.deps import get_report_service
from estate_portal.application.services import ReportService
from estate_portal.models.report import GenerateReportRequest, ReportConnection
from estate_portal.models.tracker import TrackerStarted

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=TrackerStarted, status_code=202)
async def generate_report(
    request: GenerateReportRequest,
    report_service: ReportService = Depends(get_report_service),
) -> TrackerStarted:
    """
    Trigger report generation and start a polling tracker.

    Raises:
        AuthorizationError (403): Caller is not paid or admin
        TriggerError (502): Trigger failed or returned no execution handle
    """
    tracker = await report_service.generate(
        request.property_id,
        report_type=request.report_type,
        additional_context=request.additional_context,
    )
    return TrackerStarted(
        tracker_id=tracker.tracker_id,
        property_id=tracker.job.property_id,
        kind=tracker.kind,
        execution_handle=tracker.job.execution_handle,
    )


@router.get("", response_model=ReportConnection)
async def list_reports(
    limit: int | None = 20,
    next_token: str | None = None,
    report_service: ReportService = Depends(get_report_service),
) -> ReportConnection:
    return await report_service.list_reports(limit=limit, next_token=next_token)
