"""POST /v1/reports/* - turn pasted report text or CSV exports into structured data"""

import logging
import time
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from credit_engine.api.dependencies import get_request_id, get_today
from credit_engine.api.v1.schemas import (
    CSVAccountSchema,
    CSVParseResponse,
    CSVRequest,
    ParsedReportResponse,
    ReportTextRequest,
)
from credit_engine.domain.exceptions import InvalidCSVError
from credit_engine.infrastructure.observability.logging import log_report_parsed
from credit_engine.infrastructure.observability.metrics import parse_failures_counter, record_report_parsed
from credit_engine.parsing.csv_parser import parse_accounts_csv
from credit_engine.parsing.report_parser import parse_credit_report_text

router = APIRouter()


@router.post("/reports/parse-text", response_model=ParsedReportResponse)
def parse_report_text(
    request_body: ReportTextRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Best-effort extraction from OCR or pasted report text.

    Unrecognised lines are skipped, so an unhelpful document yields an
    empty report rather than an error.
    """
    start_time = time.time()

    report = parse_credit_report_text(request_body.text, today=request_body.as_of or today)

    record_report_parsed("text")
    log_report_parsed(
        get_request_id(request), "text", len(report.accounts), (time.time() - start_time) * 1000
    )
    return ParsedReportResponse.model_validate(report)


@router.post("/reports/parse-csv", response_model=CSVParseResponse)
def parse_report_csv(request_body: CSVRequest, request: Request):
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        accounts = parse_accounts_csv(request_body.content)
    except InvalidCSVError as e:
        parse_failures_counter.labels(source="csv").inc()
        logging.warning(f"Rejected CSV upload: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_report_parsed("csv")
    log_report_parsed(request_id, "csv", len(accounts), (time.time() - start_time) * 1000)
    return CSVParseResponse(accounts=[CSVAccountSchema.model_validate(a) for a in accounts])
