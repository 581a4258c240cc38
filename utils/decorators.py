import functools
import logging
import time
from typing import Callable, Type, Optional, TypeVar, ParamSpec

from .exceptions import (
    DataFormatException,
    ExternalServiceException,
    ValidationException,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')
P = ParamSpec('P')

def log_exception(exc: Exception, func_name: str, error_message: str) -> None:
    """Helper function to log exceptions."""
    logger.exception(f"{error_message} in {func_name}: {str(exc)}")

def handle_exceptions(*exception_types: Type[Exception]) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    A decorator that logs the specified exception types and re-raises them.

    Args:
    - *exception_types: Exception types to be caught
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except exception_types as e:
                log_exception(e, func.__name__, f"Error in {func.__name__}")
                raise
        return wrapper
    return decorator

def validate_input() -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator for input validation."""
    return handle_exceptions(ValidationException, DataFormatException)

def handle_external_service() -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator for file export interactions."""
    return handle_exceptions(ExternalServiceException)

def measure_performance(threshold: Optional[float] = None) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    A decorator that measures the execution time of a function.

    Args:
    - threshold: If set, log a warning if execution time exceeds this value (in seconds)
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            result = func(*args, **kwargs)
            execution_time = time.perf_counter() - start_time
            logger.debug(f"{func.__name__} executed in {execution_time:.4f} seconds")
            if threshold and execution_time > threshold:
                logger.warning(f"{func.__name__} exceeded threshold of {threshold} seconds")
            return result
        return wrapper
    return decorator
