"""Custom exceptions for the redirect service."""

from typing import Dict, Any


class DecodeError(Exception):
    """Raised when redirect rules cannot be decoded from their source text."""
    
    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        self.message = f"Failed to decode redirect rules from {source}: {reason}"
        super().__init__(self.message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error": "decode_error",
            "source": self.source,
            "reason": self.reason,
            "message": self.message
        }


class RedirectConfigNotFound(Exception):
    """Raised when a redirect rules file does not exist."""
    
    def __init__(self, path: str):
        self.path = path
        self.message = f"Redirect rules file not found: {path}"
        super().__init__(self.message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error": "config_not_found",
            "path": self.path,
            "message": self.message
        }
