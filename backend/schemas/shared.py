"""schemas/shared.py — Reusable building blocks shared across schema modules."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Body of every error the API returns (see exception handlers in api/main.py)."""

    model_config = ConfigDict(from_attributes=False)

    error: str
    status_code: int
    request_id: Optional[str] = None
