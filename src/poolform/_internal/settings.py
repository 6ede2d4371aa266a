import os

from poolform import version
from poolform._internal.utils.env import environ

POOLFORM_VERSION = os.getenv("POOLFORM_VERSION", version.__version__)

POOLFORM_HOST = environ.get("POOLFORM_HOST")
POOLFORM_TOKEN = environ.get("POOLFORM_TOKEN")

CLIENT_REQUEST_TIMEOUT = environ.get_int("POOLFORM_REQUEST_TIMEOUT", default=60)
CLIENT_MAX_RETRIES = environ.get_int("POOLFORM_CLIENT_MAX_RETRIES", default=3)
CLIENT_RETRY_INTERVAL = 1

CLI_LOG_LEVEL = os.getenv("POOLFORM_CLI_LOG_LEVEL", "INFO").upper()
CLI_FILE_LOG_LEVEL = os.getenv("POOLFORM_CLI_FILE_LOG_LEVEL", "DEBUG").upper()
# Can be used to disable control characters (e.g. for testing).
CLI_RICH_FORCE_TERMINAL = environ.get_bool("POOLFORM_CLI_RICH_FORCE_TERMINAL")

# Acceptance tests run against a real workspace only when set, e.g. CLOUD_ENV=aws
CLOUD_ENV = environ.get("CLOUD_ENV")
