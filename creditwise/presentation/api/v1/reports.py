"""Credit report API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response

from creditwise.application.dto import GenerateReportRequest
from creditwise.application.services import ReportService
from creditwise.core.dependencies import get_report_service
from creditwise.presentation.schemas import (
    CreditFactorsSchema,
    ErrorResponseSchema,
    GenerateReportRequestSchema,
    ReportHistoryResponseSchema,
    ReportResponseSchema,
    ReportSummarySchema,
)

report_router = APIRouter(
    prefix="/reports",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        503: {"model": ErrorResponseSchema, "description": "Text generation unavailable"},
    },
)


@report_router.post(
    "",
    response_model=ReportResponseSchema,
    status_code=201,
    summary="Generate Credit Report",
    description="""
    Score the user's transaction history and persist a new credit report.

    Fails with NO_TRANSACTIONS when the user has no transactions. Nothing
    is persisted when the narrative cannot be generated or validated.
    """,
    responses={
        201: {"description": "Report generated successfully"},
        502: {"model": ErrorResponseSchema, "description": "Narrative failed validation"},
    },
)
async def generate_report(
    request: GenerateReportRequestSchema,
    report_service: Annotated[ReportService, Depends(get_report_service)],
) -> ReportResponseSchema:
    """Generate a credit report for a user."""
    response = await report_service.generate_report(
        GenerateReportRequest(user_id=request.user_id)
    )

    return ReportResponseSchema(
        report_id=response.report_id,
        user_id=response.user_id,
        score=response.score,
        grade=response.grade,
        risk_grade=response.risk_grade,
        score_type=response.score_type,
        breakdown=response.breakdown,
        recommendations=response.recommendations,
        transaction_count=response.transaction_count,
        factors=CreditFactorsSchema(**response.factors),
        generation_date=response.generation_date,
        url=response.url,
    )


@report_router.get(
    "",
    response_model=ReportHistoryResponseSchema,
    summary="Get Report History",
    description="""
    Retrieve the report history for a user.

    Returns a list of past reports ordered by date (newest first).
    """,
)
async def get_report_history(
    user_id: Annotated[
        str,
        Query(
            min_length=1,
            max_length=255,
            description="User ID to get history for",
        ),
    ],
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of reports to return"),
    ] = 10,
    offset: Annotated[
        int,
        Query(ge=0, description="Number of reports to skip"),
    ] = 0,
    report_service: Annotated[ReportService, Depends(get_report_service)] = None,
) -> ReportHistoryResponseSchema:
    response = await report_service.get_report_history(user_id, limit, offset)

    return ReportHistoryResponseSchema(
        user_id=response.user_id,
        reports=[
            ReportSummarySchema(
                report_id=r.report_id,
                generation_date=r.generation_date,
                score=r.score,
                grade=r.grade,
                risk_grade=r.risk_grade,
                transaction_count=r.transaction_count,
                url=r.url,
            )
            for r in response.reports
        ],
    )


@report_router.get(
    "/{report_id}/document",
    response_class=Response,
    summary="Download Report Document",
    description="""
    Render a stored report as a PDF.

    The document shows the stored score and grade exactly as generated.
    """,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        403: {"model": ErrorResponseSchema, "description": "Report belongs to another user"},
        404: {"model": ErrorResponseSchema, "description": "Report not found"},
    },
)
async def download_report_document(
    report_id: Annotated[
        UUID,
        Path(description="UUID of the report to render"),
    ],
    user_id: Annotated[
        str,
        Query(min_length=1, max_length=255, description="Requesting user"),
    ],
    report_service: Annotated[ReportService, Depends(get_report_service)],
) -> Response:
    document = await report_service.render_report_document(report_id, user_id)

    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
