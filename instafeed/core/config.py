import logging
from functools import lru_cache
from pydantic import BaseModel
import os
from dotenv import load_dotenv

load_dotenv()

log_level = os.getenv("LOG_LEVEL", "INFO")
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s :: %(levelname)s :: %(processName)s :: %(threadName)s :: %(filename)s :: %(funcName)s :: %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseModel):
    app_name: str = "Instagram Feed"
    api_v1_prefix: str = "/api/v1"

    instagram_base_url: str = os.getenv("INSTAGRAM_BASE_URL", "https://www.instagram.com")
    instagram_query_string: str = os.getenv("INSTAGRAM_QUERY_STRING", "/?__a=1")
    instagram_user_agent: str = os.getenv("INSTAGRAM_USER_AGENT", DEFAULT_USER_AGENT)
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "5.0"))

    environment: str = os.getenv("ENVIRONMENT", "local")


@lru_cache
def get_settings() -> Settings:
    return Settings()
