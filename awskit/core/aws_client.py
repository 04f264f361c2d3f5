# core/aws_client.py
"""
Centralized boto3 client factory.

Each helper takes an explicit Settings instance. Credentials are passed
through only when configured; otherwise boto3's default chain applies.
"""
from typing import Any, Dict

import boto3
from botocore.config import Config

from awskit.core.config import Settings
from awskit.core.logger import logger


def _client_kwargs(settings: Settings) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {
        "region_name": settings.AWS_REGION,
        "config": Config(tcp_keepalive=True),
    }
    if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
        kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
        kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
        if settings.AWS_SESSION_TOKEN:
            kwargs["aws_session_token"] = settings.AWS_SESSION_TOKEN
    return kwargs


def _create_client(service_name: str, settings: Settings):
    try:
        client = boto3.client(service_name, **_client_kwargs(settings))
        logger.info(f"{service_name} client initialized", extra={"region": settings.AWS_REGION})
        return client
    except Exception as e:
        logger.error(f"Failed to initialize {service_name} client: {str(e)}")
        raise


def get_sqs_client(settings: Settings):
    """Get SQS client."""
    return _create_client("sqs", settings)


def get_s3_client(settings: Settings):
    """Get S3 client."""
    return _create_client("s3", settings)


def get_sns_client(settings: Settings):
    """Get SNS client."""
    return _create_client("sns", settings)


def get_dynamodb_document_client(settings: Settings):
    """
    Get a DynamoDB client that speaks plain Python values.

    The client behind a boto3 resource has the type (de)serializers
    registered, so items come back as dicts of native values rather than
    {"S": ...} attribute maps.
    """
    try:
        resource = boto3.resource("dynamodb", **_client_kwargs(settings))
        logger.info("dynamodb document client initialized", extra={"region": settings.AWS_REGION})
        return resource.meta.client
    except Exception as e:
        logger.error(f"Failed to initialize dynamodb client: {str(e)}")
        raise
