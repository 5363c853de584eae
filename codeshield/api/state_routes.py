"""JSON view of the page: the same workflows, for script or API callers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from codeshield.api.deps import PageHandle, current_page
from codeshield.errors import FieldError

router = APIRouter(prefix="/api/v1", tags=["state"])


class ScanForm(BaseModel):
    """Raw scan form input. Validation happens in the workflow."""

    language: str | None = None
    code: str | None = None


class BestPracticesForm(BaseModel):
    language: str | None = None


def _form_errors(handle: PageHandle, errors: list[FieldError]) -> JSONResponse:
    return handle.bind(JSONResponse(
        status_code=422,
        content={"error": True, "errors": [e.as_dict() for e in errors]},
    ))


def _in_flight(handle: PageHandle, what: str) -> JSONResponse:
    return handle.bind(JSONResponse(
        status_code=409,
        content={"error": True, "message": f"A {what} request is already in progress."},
    ))


def _gateway_failed(handle: PageHandle, message: str) -> JSONResponse:
    return handle.bind(JSONResponse(status_code=502, content={"error": True, "message": message}))


@router.get("/state")
async def get_state(handle: PageHandle = Depends(current_page)):
    return handle.bind(JSONResponse(content=handle.page.snapshot()))


@router.post("/scan")
async def submit_scan(body: ScanForm, handle: PageHandle = Depends(current_page)):
    scan = handle.page.scan
    if scan.is_loading:
        return _in_flight(handle, "scan")
    scan.set_form(language=body.language or "", code=body.code or "")
    result = await scan.submit()
    if scan.field_errors:
        return _form_errors(handle, scan.field_errors)
    if result is None:
        return _gateway_failed(handle, "Scan failed")
    return handle.bind(JSONResponse(content=result.model_dump()))


@router.post("/scan/findings/{index}/remediation")
async def request_remediation(index: int, handle: PageHandle = Depends(current_page)):
    scan = handle.page.scan
    try:
        scan.finding(index)
        if scan.remediation.state(index).is_loading:
            return _in_flight(handle, "remediation")
        suggestion = await scan.remediate(index)
    except LookupError:
        raise HTTPException(status_code=404, detail="Finding not found")
    if suggestion is None:
        return _gateway_failed(handle, "Failed to get remediation")
    return handle.bind(JSONResponse(content={"remediation_suggestions": suggestion.text}))


@router.post("/best-practices")
async def submit_best_practices(body: BestPracticesForm, handle: PageHandle = Depends(current_page)):
    workflow = handle.page.best_practices
    if workflow.is_loading:
        return _in_flight(handle, "best-practices")
    workflow.set_form(language=body.language or "")
    result = await workflow.submit()
    if workflow.field_errors:
        return _form_errors(handle, workflow.field_errors)
    if result is None:
        return _gateway_failed(handle, "Failed to get best practices")
    return handle.bind(JSONResponse(content={"language": result.language, "best_practices": result.html}))


@router.get("/notifications")
async def list_notifications(handle: PageHandle = Depends(current_page)):
    return handle.bind(JSONResponse(content=[n.as_dict() for n in handle.page.notifications.active()]))


@router.delete("/notifications/{notification_id}")
async def dismiss_notification(notification_id: str, handle: PageHandle = Depends(current_page)):
    if not handle.page.notifications.dismiss(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return handle.bind(JSONResponse(content={"dismissed": notification_id}))
