"""Jinja2 environment for the server-rendered page."""

from __future__ import annotations

from pathlib import Path

from fastapi.templating import Jinja2Templates

from codeshield.config.languages import SUPPORTED_LANGUAGES, UPLOAD_ACCEPT
from codeshield.render.badges import badge_variant, findings_summary
from codeshield.render.sanitize import render_best_practices, safe_reference_url

_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

# Skeleton rows shown while a scan is in flight
LOADING_ROWS = 3

templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))
templates.env.filters["badge_variant"] = badge_variant
templates.env.filters["findings_summary"] = findings_summary
templates.env.filters["reference_url"] = safe_reference_url
templates.env.globals["render_best_practices"] = render_best_practices
templates.env.globals["supported_languages"] = SUPPORTED_LANGUAGES
templates.env.globals["upload_accept"] = UPLOAD_ACCEPT
templates.env.globals["loading_rows"] = LOADING_ROWS
