"""FastAPI application entrypoint for relguard service mode."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Tuple

from fastapi import FastAPI
from pydantic import BaseModel

from ..auditor import audit_text
from ..logging import get_logger
from ..models import STATUS_FIXED, Issue

logger = get_logger("service")


class AuditRequest(BaseModel):
    html: str
    fix: bool = False
    source: str = "<request>"


class IssuePayload(BaseModel):
    file: str
    line: int
    href: str
    current_rel: str
    severity: str
    message: str
    status: Optional[str] = None


class AuditResponse(BaseModel):
    all_clear: bool
    issues: List[IssuePayload]
    html: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _issue_payload(issue: Issue) -> IssuePayload:
    return IssuePayload(
        file=issue.file,
        line=issue.line,
        href=issue.href,
        current_rel=issue.current_rel,
        severity=issue.severity,
        message=issue.message,
        status=issue.status,
    )


def create_app() -> FastAPI:
    """Create the FastAPI application exposing the link audit."""

    app = FastAPI(title="relguard", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/audit", response_model=AuditResponse)
    async def audit(payload: AuditRequest) -> AuditResponse:
        def _run_audit() -> Tuple[str, List[Issue]]:
            return audit_text(payload.html, fix_mode=payload.fix, source=payload.source)

        loop = asyncio.get_running_loop()
        updated, issues = await loop.run_in_executor(None, _run_audit)
        if payload.fix:
            # Nothing is persisted here; the rewritten markup is the fix.
            for issue in issues:
                issue.status = STATUS_FIXED
        logger.debug("Audited %s: %d violation(s)", payload.source, len(issues))

        return AuditResponse(
            all_clear=not issues,
            issues=[_issue_payload(issue) for issue in issues],
            html=updated if payload.fix else None,
        )

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
