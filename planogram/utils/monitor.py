import time
from functools import wraps

from planogram.utils.logger import get_logger


class PerformanceMonitor:
    """Monitor system performance"""

    def __init__(self, logger=None):
        self.logger = logger

    def time_it(self, func):
        """Decorator to time function execution"""
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            result = func(*args, **kwargs)
            duration = time.perf_counter() - start
            (self.logger or get_logger()).debug(f"{func.__name__} took {duration * 1000:.2f}ms")
            return result
        return wrapper

monitor = PerformanceMonitor()
