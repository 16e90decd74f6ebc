"""CSV upload endpoint.

Imports products, marks and categories from a multipart CSV file.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.schemas import ErrorResponse, ImportReportResponse, SuccessResponse
from storefront.catalog.importer import CatalogImporter
from storefront.domain.exceptions import BadRequestError
from storefront.infrastructure.database import get_session

logger = structlog.get_logger()

router = APIRouter(tags=["Upload"])


@router.post(
    "/upload",
    response_model=SuccessResponse[ImportReportResponse],
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Import catalog CSV",
    description=(
        "Upload a CSV with columns Product, Mark, Category, Description, Price, Stock. "
        "Categories and marks are created when missing; products are created or "
        "updated in place. The whole file is imported or nothing is."
    ),
)
async def upload_csv(
    session: Annotated[AsyncSession, Depends(get_session)],
    csv_file: Annotated[UploadFile | None, File(alias="csv")] = None,
) -> SuccessResponse[ImportReportResponse]:
    """Import a catalog CSV.

    Args:
        session: Database session.
        csv_file: Uploaded file from the "csv" form field.

    Returns:
        Import counts.

    Raises:
        BadRequestError: If no file was sent or it is not valid UTF-8 CSV.
    """
    if csv_file is None:
        raise BadRequestError("No file uploaded")

    content = await csv_file.read()
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BadRequestError("Uploaded file is not valid UTF-8 text") from e

    logger.info("Importing catalog CSV", filename=csv_file.filename, size=len(content))

    report = await CatalogImporter(session).import_csv(text)
    return SuccessResponse(
        data=ImportReportResponse(message="File uploaded successfully", **report.to_dict())
    )
