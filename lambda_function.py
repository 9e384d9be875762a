"""AWS Lambda handler for the Google Calendar dashboard tile."""
import json
import logging
import os
import time
from typing import Dict, Any

import requests

from fetcher.google_calendar import GoogleCalendarClient
from processor.config import ScheduleMode, TileConfig, STUDENT_SCHEDULE
from processor.gcal_widget import GcalWidget
from processor.models import SchedulePayload

FETCH_ERROR_MESSAGE = 'Unable to load calendar'

# Attributes every LogRecord has; anything else came in through extra=
STANDARD_LOG_ATTRS = set(
    vars(logging.LogRecord('', logging.INFO, '', 0, '', None, None))
) | {'message', 'asctime'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in record.__dict__.items():
            if key not in STANDARD_LOG_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def load_config() -> TileConfig:
    """Load tile configuration from CONFIG_PATH if set, else the environment."""
    config_path = os.environ.get('CONFIG_PATH')
    if config_path:
        return TileConfig.from_file(config_path)
    return TileConfig.from_env()


def _schedule_name(event: Dict[str, Any]) -> str:
    """Read the requested schedule from a direct or API Gateway event."""
    if event.get('schedule'):
        return event['schedule']
    query = event.get('queryStringParameters') or {}
    return query.get('schedule') or STUDENT_SCHEDULE.name


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'body': json.dumps(body)
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler function for the calendar tile.

    Args:
        event: Invocation payload, optionally naming the schedule
        context: Lambda context object

    Returns:
        Response dict with statusCode and the tile payload as body
    """
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    timeout_seconds = int(os.environ.get('TIMEOUT_SECONDS', '30'))

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    schedule_name = _schedule_name(event or {})
    logger.info(
        f"Lambda execution started for {schedule_name}",
        extra={'schedule': schedule_name, 'timeout_seconds': timeout_seconds}
    )

    try:
        try:
            mode = ScheduleMode.by_name(schedule_name)
        except ValueError as e:
            logger.warning(str(e))
            return _response(400, {'message': str(e)})

        try:
            config = load_config()
        except (OSError, KeyError, ValueError) as e:
            logger.error(
                f"Invalid tile configuration: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _response(500, {
                'message': 'Invalid tile configuration',
                'error': str(e),
                'error_type': type(e).__name__
            })

        widget = GcalWidget(config, GoogleCalendarClient(timeout=timeout_seconds))

        try:
            payload = widget.schedule(mode)
        except requests.RequestException as e:
            # The tile still gets a payload so it can show the failure
            logger.error(
                f"Failed to fetch calendar after retries: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            payload = SchedulePayload(
                entries=[],
                conditional_more_info=FETCH_ERROR_MESSAGE,
                error=True
            )
            return _response(502, payload.to_dict())

        duration = time.time() - start_time
        logger.info(
            "Lambda execution completed successfully",
            extra={
                'duration_seconds': round(duration, 2),
                'entries': len(payload.entries),
                'conditional_more_info': payload.conditional_more_info
            }
        )

        return _response(200, payload.to_dict())

    except Exception as e:
        duration = time.time() - start_time

        # Unexpected feed shapes and other failures still get a JSON response
        logger.error(
            f"Lambda execution failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )

        return _response(500, {
            'message': 'Tile update failed',
            'error': str(e),
            'error_type': type(e).__name__,
            'duration_seconds': round(duration, 2)
        })
