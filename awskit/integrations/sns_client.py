# integrations/sns_client.py
import asyncio
import json
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from awskit.core.config import Settings
from awskit.core.exceptions import SerializationError, TransportError
from awskit.core.logger import logger


class SNSPublisher:
    """Publishes messages to topics addressed by their short name."""

    def __init__(self, client, settings: Settings) -> None:
        self._sns = client
        self.region = settings.AWS_REGION
        self.account = settings.AWS_ACCOUNT_ID
        self.arn_suffix = settings.SNS_ARN_SUFFIX
        self.default_subject = settings.SNS_DEFAULT_SUBJECT

    @classmethod
    def from_settings(cls, settings: Settings) -> "SNSPublisher":
        from awskit.core.aws_client import get_sns_client
        from awskit.core.logger import configure_logger

        configure_logger(settings)
        return cls(get_sns_client(settings), settings)

    def topic_arn(self, topic_name: str) -> str:
        return f"arn:aws:sns:{self.region}:{self.account}:sns-{topic_name}{self.arn_suffix}"

    async def publish(self, message: Any, topic_name: str, subject: Optional[str] = None) -> Dict[str, Any]:
        """
        Publish a message to a topic; non-string messages are sent as JSON.

        Returns:
            SNS publish response (carries MessageId)
        """
        if not isinstance(message, str):
            try:
                message = json.dumps(message, separators=(",", ":"), ensure_ascii=False)
            except (TypeError, ValueError) as e:
                raise SerializationError(f"Message is not JSON serializable: {e}") from e

        params: Dict[str, Any] = {"Message": message, "TopicArn": self.topic_arn(topic_name)}
        # SNS rejects an empty Subject
        subject = subject or self.default_subject
        if subject:
            params["Subject"] = subject

        try:
            resp = await asyncio.to_thread(self._sns.publish, **params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"SNS publish failed: {e}", extra={"topic_arn": params["TopicArn"]})
            raise TransportError(f"SNS publish failed: {e}") from e

        logger.info("SNS publish ok topic=%s msg_id=%s", topic_name, resp.get("MessageId"))
        return resp
