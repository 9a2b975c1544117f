"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: All service-layer methods return ServiceResult. Exceptions from
the domain (policy parse errors, pattern errors) are converted into
``ServiceError`` payloads here, never leaked to the command layer.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is a stable machine-readable identifier such as
    ``CONFIG_PARSE_ERROR`` or ``INVALID_PATTERNS``.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"check"``, ``"decide"``, ...).
        data: Operation-specific payload.
        warnings: Non-fatal issues (shadowed rules, unparsable files, ...).
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (counts, timing).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
