"""Template rendering API routes.

Handles placeholder discovery and rendering of uploaded Word templates.
"""

import io
import json
import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile, status
from fastapi.responses import Response
from pydantic import ValidationError

from docx_template.api.deps import get_factory
from docx_template.api.schemas import PlaceholderListResponse, RenderRequest
from docx_template.core.factory import ComponentFactory
from docx_template.interfaces.template import BaseDocumentTemplate, TemplateError, UnpackError

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/templates", tags=["templates"])


# =============================================================================
# Helper Functions
# =============================================================================


async def _store_upload(file: UploadFile, factory: ComponentFactory) -> Path:
    """Write an uploaded file to the scratch directory."""
    directory = factory.settings.scratch_dir or Path(tempfile.gettempdir())
    fd, name = tempfile.mkstemp(prefix="upload", suffix=".docx", dir=directory)
    with os.fdopen(fd, "wb") as f:
        f.write(await file.read())
    return Path(name)


def _check_extension(file: UploadFile, template: BaseDocumentTemplate) -> None:
    if not file.filename or not template.supports_file(file.filename):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type. Supported: {sorted(template.supported_extensions)}",
        )


def _content_disposition(filename: str) -> str:
    """Build an attachment header, RFC 5987-encoding names that need it."""
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


def _template_http_error(e: TemplateError) -> HTTPException:
    if isinstance(e, UnpackError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _parse_render_request(
    values: str, multiline_values: str, escape: bool
) -> RenderRequest:
    try:
        return RenderRequest(
            values=json.loads(values or "{}"),
            multiline_values=json.loads(multiline_values or "{}"),
            escape=escape,
        )
    except (json.JSONDecodeError, ValidationError) as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid substitution values: {e}",
        ) from e


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "/placeholders",
    response_model=PlaceholderListResponse,
    status_code=status.HTTP_200_OK,
)
async def list_placeholders(
    file: UploadFile,
    factory: ComponentFactory = Depends(get_factory),
) -> PlaceholderListResponse:
    """List the placeholders found in an uploaded template.

    Args:
        file: The uploaded .docx template.
        factory: Template factory.

    Returns:
        PlaceholderListResponse with placeholder names in document order.

    Raises:
        HTTPException: If the file type is invalid or the archive is unreadable.
    """
    template = factory.get_template()
    _check_extension(file, template)

    upload_path = await _store_upload(file, factory)
    try:
        names = template.open(upload_path).placeholders()
    except TemplateError as e:
        logger.warning(f"Placeholder listing failed for {file.filename}: {e}")
        raise _template_http_error(e) from e
    finally:
        template.discard()
        upload_path.unlink(missing_ok=True)

    return PlaceholderListResponse(
        filename=file.filename,
        placeholders=names,
        count=len(names),
    )


@router.post("/render", response_class=Response)
async def render_template(
    file: UploadFile,
    values: str = Form(default="{}", description="JSON object of placeholder values"),
    multiline_values: str = Form(
        default="{}", description="JSON object of multi-line placeholder values"
    ),
    escape: bool = Form(default=True, description="Escape XML special characters"),
    filename: str | None = Form(default=None, description="Filename for the download"),
    factory: ComponentFactory = Depends(get_factory),
) -> Response:
    """Render an uploaded template and return it as a download.

    Args:
        file: The uploaded .docx template.
        values: JSON object mapping placeholder names to values.
        multiline_values: JSON object mapping placeholder names to multi-line values.
        escape: Whether to escape XML special characters in values.
        filename: Optional filename for the download.
        factory: Template factory.

    Returns:
        Response carrying the rendered document and transfer headers.

    Raises:
        HTTPException: If the input is invalid or rendering fails.
    """
    template = factory.get_template()
    _check_extension(file, template)
    request = _parse_render_request(values, multiline_values, escape)

    download_name = filename or factory.settings.download_filename
    if not download_name.endswith(".docx"):
        download_name = f"{download_name}.docx"

    upload_path = await _store_upload(file, factory)
    buffer = io.BytesIO()
    try:
        template.open(upload_path)
        template.replace(request.values, escape=request.escape)
        for name, value in request.multiline_values.items():
            template.replace_multiline(name, value, escape=request.escape)

        headers = template.download(
            buffer,
            {"Content-Disposition": _content_disposition(download_name)},
        )
    except TemplateError as e:
        logger.warning(f"Rendering failed for {file.filename}: {e}")
        raise _template_http_error(e) from e
    finally:
        template.discard()
        upload_path.unlink(missing_ok=True)

    logger.info(
        f"Rendered {file.filename} with {len(request.values)} values "
        f"and {len(request.multiline_values)} multi-line values"
    )
    return Response(content=buffer.getvalue(), headers=headers)
