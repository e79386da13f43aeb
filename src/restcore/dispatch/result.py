"""OperationResponse: what a handled request resolves to.

INVARIANT: Every dispatched request resolves to exactly one
OperationResponse, produced either by an operation or by the error
classifier, before it is rendered for the transport.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class OperationResponse(BaseModel):
    """Status code and structured body of a handled request.

    Attributes:
        status: HTTP status code.
        body: Structured payload, rendered by the negotiated output format.
    """

    model_config = {"frozen": True}

    status: int
    body: Any = Field(default_factory=dict)
