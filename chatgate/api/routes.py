"""
API routes: dispatched by method, on any path. No logic here — only delegate to services.

Every route depends on require_secret, so no method or path answers without the secret.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, PlainTextResponse

from chatgate.api.deps import require_secret
from chatgate.core.config import MAX_QUERY_LENGTH, GatewayConfig
from chatgate.core.errors import InvalidInputError
from chatgate.schemas.query import QueryForm
from chatgate.services.query_service import handle_query
from chatgate.services.sanitizer import escape_html
from chatgate.ui import render_form_page

logger = logging.getLogger(__name__)
router = APIRouter()

OTHER_METHODS = ["PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", "TRACE", "CONNECT"]


@router.get("/", response_class=HTMLResponse, tags=["ui"], summary="Chat form page")
@router.get("/{path:path}", response_class=HTMLResponse, include_in_schema=False)
def get_form(config: GatewayConfig = Depends(require_secret)) -> HTMLResponse:
    return HTMLResponse(render_form_page(MAX_QUERY_LENGTH))


@router.post(
    "/",
    response_class=PlainTextResponse,
    tags=["query"],
    summary="Ask a model (with search fallback)",
    description="Form fields model and query. Returns escaped plain text. 400 on invalid input, 500 on search or unexpected failure.",
)
@router.post("/{path:path}", response_class=PlainTextResponse, include_in_schema=False)
def post_query(
    form: Annotated[QueryForm, Form()],
    config: GatewayConfig = Depends(require_secret),
) -> PlainTextResponse:
    logger.info("[api:post_query] IN  model=%r query_len=%d", form.model, len(form.query))
    try:
        text = handle_query(form.model, form.query, config)
    except InvalidInputError as e:
        logger.info("[api:post_query] invalid input: %s", e.message)
        return PlainTextResponse("Invalid input", status_code=400)
    except Exception as e:
        logger.exception("Query failed")
        return PlainTextResponse(f"Error: {escape_html(str(e))}", status_code=500)
    logger.info("[api:post_query] OUT text_len=%d", len(text))
    return PlainTextResponse(text)


@router.api_route("/", methods=OTHER_METHODS, include_in_schema=False)
@router.api_route("/{path:path}", methods=OTHER_METHODS, include_in_schema=False)
def method_not_allowed(config: GatewayConfig = Depends(require_secret)) -> PlainTextResponse:
    return PlainTextResponse("Method not allowed", status_code=405)
