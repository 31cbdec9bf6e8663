import os
from dotenv import load_dotenv

# ---------------------------
# Load environment variables
# ---------------------------
load_dotenv()


def env_flag(name: str, default: bool = False) -> bool:
    """
    Read a boolean switch from the environment.
    "1", "true" and "yes" (any case) turn it on.
    """
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes")


DATABASE_URL = os.getenv("DATABASE_URL")
SQL_ECHO = env_flag("SQL_ECHO")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DUPLICATE_CHECK_USE_INDEX = env_flag("DUPLICATE_CHECK_USE_INDEX")
