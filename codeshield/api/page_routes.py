"""Server-rendered page and its form posts (post/redirect/get)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from codeshield.api.deps import PageHandle, current_page
from codeshield.config.loader import get_settings
from codeshield.render.templates import templates

router = APIRouter(tags=["page"])


def _back_to_page(handle: PageHandle, anchor: str = "") -> RedirectResponse:
    target = f"/#{anchor}" if anchor else "/"
    return handle.bind(RedirectResponse(target, status_code=303))


@router.get("/", response_class=HTMLResponse)
async def show_page(request: Request, handle: PageHandle = Depends(current_page)):
    """Render the Code Shield page for the caller's session."""
    page = handle.page
    response = templates.TemplateResponse(
        request,
        "page.html",
        {
            "scan": page.scan,
            "remediation": page.scan.remediation.states(),
            "best_practices": page.best_practices,
            "notifications": page.notifications.active(),
            "render_mode": get_settings().best_practices_render_mode,
        },
    )
    return handle.bind(response)


@router.post("/scan")
async def submit_scan(
    language: str = Form(""),
    code: str = Form(""),
    handle: PageHandle = Depends(current_page),
):
    scan = handle.page.scan
    if not scan.is_loading:
        scan.set_form(language=language, code=code)
        await scan.submit()
    return _back_to_page(handle, "scan-results")


@router.post("/scan/upload")
async def upload_code(file: UploadFile = File(...), handle: PageHandle = Depends(current_page)):
    content = await file.read()
    handle.page.scan.upload_file(content, filename=file.filename or "")
    return _back_to_page(handle, "scan")


@router.post("/scan/clear")
async def clear_code(handle: PageHandle = Depends(current_page)):
    handle.page.scan.clear_code()
    return _back_to_page(handle, "scan")


@router.post("/scan/findings/{index}/remediation")
async def request_remediation(index: int, handle: PageHandle = Depends(current_page)):
    try:
        await handle.page.scan.remediate(index)
    except LookupError:
        raise HTTPException(status_code=404, detail="Finding not found")
    return _back_to_page(handle, f"finding-{index}")


@router.post("/best-practices")
async def submit_best_practices(
    language: str = Form(""),
    handle: PageHandle = Depends(current_page),
):
    workflow = handle.page.best_practices
    if not workflow.is_loading:
        workflow.set_form(language=language)
        await workflow.submit()
    return _back_to_page(handle, "best-practices")


@router.post("/notifications/{notification_id}/dismiss")
async def dismiss_notification(notification_id: str, handle: PageHandle = Depends(current_page)):
    handle.page.notifications.dismiss(notification_id)
    return _back_to_page(handle)
