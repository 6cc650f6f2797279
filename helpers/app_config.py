import os
from typing import Optional
from urllib.parse import quote_plus
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv
from .message_formatter import MAXLEN, MIN_LENGTH
from .publisher import BROADCAST, DRY_RUN, PUBLISH_MODES

TWITTER_ENV_VARS = (
    'TWITTER_API_KEY',
    'TWITTER_API_KEY_SECRET',
    'TWITTER_ACCESS_TOKEN',
    'TWITTER_ACCESS_TOKEN_SECRET',
)


def _env_flag(name: str) -> bool:
    return os.getenv(name, '').strip().lower() in ('1', 'true', 'yes', 'on')


def build_mongo_uri(user: str, password: str, host: str) -> str:
    """Build an Atlas connection string from its parts"""
    return (
        f"mongodb+srv://{quote_plus(user)}:{quote_plus(password)}@{host}"
        "/?retryWrites=true&w=majority"
    )


class AppConfig(BaseModel):
    """Settings of a broadcast run"""
    mongodb_uri: str = Field(..., min_length=1, description="MongoDB connection string")
    database_name: str = Field('every-fkn-commit', min_length=1)
    pending_collection: str = Field('fresh-commits', min_length=1)
    archive_collection: str = Field('used-commits', min_length=1)
    use_transaction: bool = False
    publish_mode: str = DRY_RUN
    github_token: Optional[str] = None
    twitter_api_key: Optional[str] = None
    twitter_api_key_secret: Optional[str] = None
    twitter_access_token: Optional[str] = None
    twitter_access_token_secret: Optional[str] = None
    max_length: int = Field(MAXLEN, ge=MIN_LENGTH)
    log_level: str = 'INFO'

    @field_validator('publish_mode')
    @classmethod
    def known_publish_mode(cls, value):
        if value not in PUBLISH_MODES:
            raise ValueError(f"PUBLISH_MODE must be one of {', '.join(PUBLISH_MODES)}")
        return value

    @field_validator('log_level')
    @classmethod
    def upper_log_level(cls, value):
        return value.upper()

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """
        Read settings from the environment (and a .env file, if present)

        Raises:
            ValueError: a required variable is missing or invalid
        """
        load_dotenv()

        mongodb_uri = os.getenv('MONGODB_URI')
        if not mongodb_uri:
            user = os.getenv('DB_USER')
            password = os.getenv('DB_PASSWORD')
            host = os.getenv('DB_HOST')
            if not user or not password or not host:
                raise ValueError("MONGODB_URI or DB_USER, DB_PASSWORD and DB_HOST must be set in environment variables")
            mongodb_uri = build_mongo_uri(user, password, host)

        default_mode = BROADCAST if os.getenv('APP_ENV') == 'production' else DRY_RUN
        publish_mode = os.getenv('PUBLISH_MODE') or default_mode

        if publish_mode == BROADCAST:
            missing = [name for name in TWITTER_ENV_VARS if not os.getenv(name)]
            if missing:
                raise ValueError(f"{', '.join(missing)} must be set in environment variables to broadcast")

        return cls(
            mongodb_uri=mongodb_uri,
            database_name=os.getenv('DB_NAME', 'every-fkn-commit'),
            pending_collection=os.getenv('PENDING_COLLECTION', 'fresh-commits'),
            archive_collection=os.getenv('ARCHIVE_COLLECTION', 'used-commits'),
            use_transaction=_env_flag('USE_TRANSACTION'),
            publish_mode=publish_mode,
            github_token=os.getenv('GITHUB_TOKEN') or None,
            twitter_api_key=os.getenv('TWITTER_API_KEY'),
            twitter_api_key_secret=os.getenv('TWITTER_API_KEY_SECRET'),
            twitter_access_token=os.getenv('TWITTER_ACCESS_TOKEN'),
            twitter_access_token_secret=os.getenv('TWITTER_ACCESS_TOKEN_SECRET'),
            max_length=os.getenv('MESSAGE_MAX_LENGTH', MAXLEN),
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
        )
