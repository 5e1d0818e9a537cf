from functools import wraps
from typing import Callable, Any, Optional, Dict


class PlanogramError(Exception):
    """Base exception for planogram system"""

    def __init__(self, message: str, details: Optional[Dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DataLoadError(PlanogramError):
    """Error loading data"""
    pass


class ConfigurationError(PlanogramError):
    """Configuration error"""
    pass


class ValidationError(PlanogramError):
    """A candidate placement failed a shelf constraint check"""

    def __init__(self, check, actual: float, limit: float, message: str,
                 remaining: Optional[float] = None, index: Optional[int] = None):
        self.check = check
        self.actual = actual
        self.limit = limit
        self.remaining = remaining
        self.index = index
        details = {
            'check': check.value,
            'actual': actual,
            'limit': limit,
            'remaining': remaining
        }
        if index is not None:
            details['index'] = index
            message = f"Entry {index}: {message}"
        super().__init__(message, details)

    def at_index(self, index: int) -> 'ValidationError':
        """Copy of this error tagged with a batch entry index"""
        return ValidationError(self.check, self.actual, self.limit,
                               self.message, remaining=self.remaining, index=index)


class NotFoundError(PlanogramError):
    """A command referenced a door/equipment/bay/shelf/product that does not exist"""

    def __init__(self, kind: str, node_id: Any, index: Optional[int] = None):
        self.kind = kind
        self.node_id = node_id
        self.index = index
        message = f"{kind.capitalize()} not found: {node_id}"
        details = {'kind': kind, 'id': node_id}
        if index is not None:
            message = f"Entry {index}: {message}"
            details['index'] = index
        super().__init__(message, details)


class DuplicateIdError(PlanogramError):
    """An add command reused an id that is already live in the tree"""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Id already in use: {node_id}", {'id': node_id})


class MalformedExternalPayload(PlanogramError):
    """An externally supplied placement batch has a missing or mistyped field"""

    def __init__(self, reason: str, index: Optional[int] = None, field: Optional[str] = None):
        self.reason = reason
        self.index = index
        self.field = field
        if index is not None:
            message = f"Invalid {field} at index {index}: {reason}"
        else:
            message = f"Malformed layout payload: {reason}"
        super().__init__(message, {'index': index, 'field': field, 'reason': reason})


def handle_errors(default_return=None, raise_on_error=True):
    """Decorator for error handling"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except PlanogramError:
                if raise_on_error:
                    raise
                return default_return
            except Exception as e:
                if raise_on_error:
                    raise PlanogramError(f"Unexpected error in {func.__name__}: {str(e)}") from e
                return default_return
        return wrapper
    return decorator
