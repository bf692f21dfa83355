"""Error body returned for 400, 404 and 500 responses. 422 keeps the FastAPI default."""

from pydantic import BaseModel

INTERNAL_ERROR_DETAIL = "Internal server error"


class ErrorDetail(BaseModel):
    """Single top-level ``detail`` string; unexpected failures never leak their message."""

    detail: str
