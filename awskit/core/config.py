# core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    """
    Centralized library configuration.

    Unlike a process-wide singleton, a Settings instance is built by the
    caller and handed to each client's constructor.
    """

    # ------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------
    DEBUG: bool = False

    # ------------------------------------------------------------
    # AWS Core
    # ------------------------------------------------------------
    AWS_REGION: str = "us-east-1"
    AWS_ACCOUNT_ID: str = ""
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_SESSION_TOKEN: Optional[str] = None

    # ------------------------------------------------------------
    # Messaging (SQS)
    # ------------------------------------------------------------
    SQS_QUEUE_PREFIX: str = ""
    SQS_QUEUE_SUFFIX: str = ""
    SQS_DEFAULT_VISIBILITY_TIMEOUT: int = Field(
        default=300,
        description="Visibility timeout (seconds) applied when retrieving without an explicit one",
    )
    SQS_WAIT_TIME_SECONDS: int = Field(
        default=20,
        description="Long-poll wait for receive calls (0-20)",
    )

    """
    Extended payloads: messages too large for SQS are stored in this
    bucket and replaced by a pointer message
    """
    SQS_EXTENDED_BUCKET: Optional[str] = None
    SQS_EXTENDED_SHARD_COUNT: int = Field(
        default=50,
        description="Number of top-level key prefixes offloaded payloads are spread across",
    )
    SQS_EXTENDED_BLOB_TTL_DAYS: Optional[int] = Field(
        default=None,
        description="When set, offloaded payloads are written with an Expires header this many days out",
    )

    # ------------------------------------------------------------
    # Topics (SNS)
    # ------------------------------------------------------------
    SNS_ARN_SUFFIX: str = ""
    SNS_DEFAULT_SUBJECT: str = ""

    # ------------------------------------------------------------
    # Key-value store (DynamoDB)
    # ------------------------------------------------------------
    DYNAMO_CONSISTENT_READ: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
