"""
Monitoring utilities for metrics and error tracking
"""
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import logging
import time
from functools import wraps

logger = logging.getLogger(__name__)


def track_error(
    error_type: str,
    locale: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None
):
    """
    Track error for monitoring.

    Args:
        error_type: Type of error
        locale: Locale involved (optional)
        metadata: Additional metadata
    """
    error_data = {
        "error_type": error_type,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "locale": locale,
        "metadata": metadata or {},
    }

    logger.error(f"Error tracked: {error_data}")


def track_metric(
    metric_name: str,
    value: float,
    tags: Optional[Dict[str, str]] = None
):
    """
    Track metric for monitoring.

    Args:
        metric_name: Name of metric
        value: Metric value
        tags: Additional tags
    """
    metric_data = {
        "metric": metric_name,
        "value": value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "tags": tags or {},
    }

    logger.info(f"Metric: {metric_data}")


def monitor_performance(func):
    """
    Decorator to monitor function performance.

    Usage:
        @monitor_performance
        def build_export(...):
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            duration = time.time() - start_time
            track_error(f"{func.__name__}.error", metadata={"error": str(e), "duration": duration})
            track_metric(f"{func.__name__}.duration", duration, tags={"status": "error"})
            raise
        track_metric(f"{func.__name__}.duration", time.time() - start_time, tags={"status": "success"})
        return result

    return wrapper
