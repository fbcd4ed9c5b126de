import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

import requests
from requests.exceptions import HTTPError

from ..exceptions import MarkpressAuthenticationError, WordPressApiError

logger = logging.getLogger(__name__)


def handle_wordpress_api_errors(service_name: str = "WordPress API") -> Callable:
    """
    Decorator translating ``requests`` failures into markpress exceptions.

    Every failure is raised; nothing is swallowed.

    Args:
        service_name: Name of the service for error logging.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            operation_name = getattr(func, "__name__", "API operation")
            try:
                return func(self, *args, **kwargs)
            except HTTPError as http_err:
                response = http_err.response
                status_code = response.status_code if response is not None else None
                if status_code in (401, 403):
                    error_msg = (
                        f"Authentication failed for {service_name} ({status_code}). "
                        "Please verify the username and application password."
                    )
                    logger.error(error_msg)
                    raise MarkpressAuthenticationError(
                        error_msg, status_code=status_code
                    ) from http_err

                body = response.text[:500] if response is not None else ""
                logger.error(f"HTTP error during {operation_name}: {http_err} {body}")
                raise WordPressApiError(
                    f"{service_name} {operation_name} failed: {http_err}",
                    status_code=status_code,
                ) from http_err
            except requests.RequestException as e:
                logger.error(f"Network error during {operation_name}: {str(e)}")
                raise WordPressApiError(
                    f"{service_name} {operation_name} failed: {e}"
                ) from e

        return wrapper

    return decorator
