"""Axiom 요청 로깅 미들웨어.

Axiom request logging middleware.
Ships one structured event per API call to Axiom: method, path, query and
path params, masked request body, status code, duration and the error
detail of failed calls. Credentials, tokens and one-time passwords are
masked before anything leaves the process.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from gearsync.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Keys whose values never reach the log sink
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|otp|authorization|api_key|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})

_MAX_BODY_CHARS = 2000
_MAX_ERROR_CHARS = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 재귀 마스킹 — Recursively mask sensitive keys in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    if isinstance(data, str) and len(data) > _MAX_BODY_CHARS:
        return data[:_MAX_BODY_CHARS] + "...(truncated)"
    return data


def extract_error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유 추출 (Pull the `detail` out of an error body)."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_ERROR_CHARS]
    detail = payload.get("detail", payload) if isinstance(payload, dict) else payload
    if not isinstance(detail, str):
        detail = json.dumps(detail, default=str)
    return detail[:_MAX_ERROR_CHARS]


async def _read_request_body(request: Request) -> Any:
    if request.method not in ("POST", "PUT", "PATCH"):
        return None
    body_bytes = await request.body()
    if not body_bytes:
        return None
    try:
        return mask_sensitive(json.loads(body_bytes))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Logs every API request and response to Axiom. Without an Axiom token
    and dataset the middleware passes requests straight through.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Axiom 미설정 또는 제외 경로 — Pass through
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        event: dict[str, Any] = {
            "service": settings.APP_NAME,
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))
        request_body = await _read_request_body(request)
        if request_body is not None:
            event["request_body"] = request_body

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code
            if request.path_params:
                event["path_params"] = dict(request.path_params)

            # 에러 응답 본문 캡처 후 재구성 — Capture the error body, then rebuild the response
            if response.status_code >= 400:
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event["error"] = extract_error_detail(body)
                response = Response(
                    content=body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            self._ship(event)

        return response

    def _ship(self, event: dict[str, Any]) -> None:
        # 로깅 실패는 요청에 영향 없음 — A failed ingest only leaves a local warning
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            logger.warning("Axiom ingest failed for %s %s", event["method"], event["path"], exc_info=True)
