"""Response Envelope — uniform {success, data} wrapper for successful responses.

Failure envelopes are produced by ApiError.to_response() (core/errors.py).
"""

from datetime import datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class SuccessEnvelope(BaseModel, Generic[DataT]):
    success: Literal[True] = True
    data: DataT


class HealthStatus(BaseModel):
    """Payload of GET /health."""
    status: Literal["ok"] = "ok"
    timestamp: datetime
    database: Literal["connected"] = "connected"
