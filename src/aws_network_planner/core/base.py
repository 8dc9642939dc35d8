"""Shared boto3 session handling for AWS clients."""

from typing import Optional
import boto3
from botocore.exceptions import BotoCoreError

from ..errors import DiscoveryError
from .logging import get_logger

logger = get_logger("aws")


class BaseClient:
    """Holds a boto3 session built from an optional named profile."""

    def __init__(
        self, profile: Optional[str] = None, session: Optional[boto3.Session] = None
    ):
        self.profile = profile
        if session is not None:
            self.session = session
            return
        try:
            if profile:
                self.session = boto3.Session(profile_name=profile)
            else:
                self.session = boto3.Session()
        except BotoCoreError as e:
            raise DiscoveryError(f"Cannot open AWS session: {e}") from e

    def client(self, service: str, region_name: Optional[str] = None):
        region = region_name or self.session.region_name or "us-east-1"
        logger.debug("Creating %s client in %s", service, region)
        try:
            return self.session.client(service, region_name=region)
        except BotoCoreError as e:
            raise DiscoveryError(f"Cannot create {service} client: {e}") from e

    def account_id(self) -> Optional[str]:
        """Caller account, used to keep caches from leaking across accounts."""
        try:
            return self.client("sts").get_caller_identity()["Account"]
        except Exception as e:
            logger.debug("Could not resolve account id: %s", e)
            return None
