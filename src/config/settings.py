import logging.config
import re

import structlog
from decouple import config

# ---------------------------------------------------------------------------
# MongoDB
# ---------------------------------------------------------------------------
MONGO_URI = config("MONGO_URI", default="mongodb://localhost:27017")
MONGO_DATABASE = config("MONGO_DATABASE", default="product_grpc")
MONGO_COLLECTION = config("MONGO_COLLECTION", default="products")

# ---------------------------------------------------------------------------
# gRPC server
# ---------------------------------------------------------------------------
GRPC_ADDRESS = config("GRPC_ADDRESS", default="[::]:50051")
GRPC_MAX_WORKERS = config("GRPC_MAX_WORKERS", default=10, cast=int)
GRPC_SHUTDOWN_GRACE = config("GRPC_SHUTDOWN_GRACE", default=5.0, cast=float)

# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
DEFAULT_PAGE_SIZE = config("DEFAULT_PAGE_SIZE", default=10, cast=int)

# When enabled, CreateProduct inserts the request fields as given and lets
# MongoDB assign ``_id``; the id returned to the caller is then not the stored
# one. Kept for compatibility with clients of the previous server.
PRODUCT_LEGACY_CREATE = config("PRODUCT_LEGACY_CREATE", default=False, cast=bool)

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

# ---------------------------------------------------------------------------
# Structured Logging (structlog + stdlib LOGGING)
# ---------------------------------------------------------------------------
SENSITIVE_PATTERN = re.compile(
    r"(password|passwd|secret|token|authorization)"
    r"""([=:]\s*["']?)([^\s,}"']+)""",
    re.IGNORECASE,
)

MONGO_CREDENTIALS_PATTERN = re.compile(r"(mongodb(?:\+srv)?://)([^@/\s]+)@")


def mask_sensitive_data(_, __, event_dict):
    """Processor that masks credentials, passwords and tokens in log values."""
    for key, value in list(event_dict.items()):
        if isinstance(value, str):
            value = MONGO_CREDENTIALS_PATTERN.sub(r"\1***MASKED***@", value)
            event_dict[key] = SENSITIVE_PATTERN.sub("***MASKED***", value)
    return event_dict


# Shared processors used by both structlog and stdlib logging
_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

structlog.configure(
    processors=[
        *_shared_processors,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": [
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
            "foreign_pre_chain": _shared_processors,
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "pymongo": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
        "grpc": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}


def configure_logging() -> None:
    """Install the JSON console handler on the root logger."""
    logging.config.dictConfig(LOGGING)
