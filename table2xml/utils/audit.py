from datetime import datetime
from typing import Any, Dict, Optional
import json

from .logger import audit_log


class AuditLogger:
    def __init__(self, logger=None):
        self.logger = logger or audit_log

    def _format_message(self,
        event_type: str,
        user_id: str,
        action: str,
        details: Optional[Dict[str, Any]] = None,
        status: str = "success"
    ) -> str:
        """Format audit log message in a structured way."""
        audit_data = {
            "timestamp": datetime.utcnow().isoformat(),
            "event_type": event_type,
            "user_id": user_id,
            "action": action,
            "status": status,
            "details": details or {}
        }
        return json.dumps(audit_data, default=str)

    def log_conversion_event(self,
        user_id: str,
        action: str,
        conversion_time: float,
        status: str = "success",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log grid/XML conversion events."""
        conversion_details = {
            "conversion_time_ms": conversion_time,
            **(details or {})
        }
        message = self._format_message(
            "conversion",
            user_id,
            action,
            conversion_details,
            status
        )
        if status == "success":
            self.logger.info(message)
        else:
            self.logger.warning(message)

    def log_request_event(self,
        user_id: str,
        action: str,
        ip_address: str,
        status: str = "success",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log incoming HTTP requests and rejections."""
        request_details = {
            "ip_address": ip_address,
            **(details or {})
        }
        message = self._format_message(
            "request",
            user_id,
            action,
            request_details,
            status
        )
        if status == "success":
            self.logger.info(message)
        else:
            self.logger.warning(message)

    def log_error(self,
        user_id: str,
        action: str,
        error: Exception,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log error events."""
        error_details = {
            "error_type": type(error).__name__,
            "error_message": str(error),
            **(details or {})
        }
        error_code = getattr(error, "error_code", None)
        if error_code:
            error_details["error_code"] = error_code
        message = self._format_message(
            "error",
            user_id,
            action,
            error_details,
            "error"
        )
        self.logger.error(message)

# Create singleton instance
audit_logger = AuditLogger()
