from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from ..config import config
from ..utils.audit import audit_logger


class SecurityMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, max_request_size: int = None):
        super().__init__(app)
        # Room for multipart framing around the largest allowed upload
        self.max_request_size = max_request_size or config.max_upload_bytes() + 64 * 1024

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_ip = self._get_client_ip(request)

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_request_size:
            audit_logger.log_request_event(
                user_id="anonymous",
                action="request_rejected",
                ip_address=client_ip,
                status="error",
                details={"path": request.url.path, "content_length": int(content_length)}
            )
            return JSONResponse(status_code=413, content={"detail": "Request too large"})

        audit_logger.log_request_event(
            user_id="anonymous",
            action="incoming_request",
            ip_address=client_ip,
            details={
                "method": request.method,
                "path": request.url.path,
                "query_params": str(request.query_params)
            }
        )

        response = await call_next(request)

        # Add security headers
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Get client IP address from request headers."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"
