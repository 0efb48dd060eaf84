"""Built-in configuration defaults, overridable by file and environment."""
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "environment": "development",
    "debug": False,
    "logging": {
        "level": "${LOG_LEVEL:INFO}",
        "destination": "${LOG_DESTINATION:stdout}",
        "file_path": "${GARDEN_WORKDIR:.}/logs/garden_management.log",
        "max_size_mb": 10,
        "backup_count": 5,
        "json_format": False,
    },
    "messaging": {
        "transport": "logging",
        "sqs": {
            "queue_url": None,
            "region": "${AWS_REGION:us-east-1}",
            "endpoint_url": None,
            "retry_attempts": 3,
            "connect_timeout_ms": 1000,
        },
    },
}

# Environment variable -> dotted configuration path
ENVIRONMENT_OVERRIDES: Dict[str, str] = {
    "GARDEN_ENVIRONMENT": "environment",
    "GARDEN_DEBUG": "debug",
    "GARDEN_LOG_LEVEL": "logging.level",
    "GARDEN_LOG_DESTINATION": "logging.destination",
    "GARDEN_LOG_FILE": "logging.file_path",
    "GARDEN_LOG_JSON": "logging.json_format",
    "GARDEN_MESSAGING_TRANSPORT": "messaging.transport",
    "GARDEN_SQS_QUEUE_URL": "messaging.sqs.queue_url",
    "GARDEN_AWS_REGION": "messaging.sqs.region",
    "GARDEN_AWS_ENDPOINT_URL": "messaging.sqs.endpoint_url",
}
