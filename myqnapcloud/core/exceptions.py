from typing import Any, Dict, Optional

class MyQNAPcloudError(Exception):
    """Base exception class for all myQNAPcloud client exceptions"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

class ConfigError(MyQNAPcloudError):
    """Raised when there is a configuration error"""
    pass

class LoggerError(MyQNAPcloudError):
    """Raised when there is a logging error"""
    pass
