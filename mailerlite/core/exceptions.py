from typing import Any, Dict, Optional

class MailerLiteError(Exception):
    """Base exception class for all mailerlite client exceptions"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

class ConfigError(MailerLiteError):
    """Raised when there is a configuration error"""
    pass

class LoggerError(MailerLiteError):
    """Raised when there is a logging error"""
    pass
