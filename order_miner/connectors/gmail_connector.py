"""
Gmail connector for retrieving order-confirmation messages.
Lists messages matching a Gmail search query and decodes their plain-text body.
"""
import base64
import binascii
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from loguru import logger

from config.settings import settings
from order_miner.exceptions import MailboxError

# Failures talking to Gmail: API errors, token refresh, sockets and timeouts.
TRANSPORT_ERRORS = (HttpError, GoogleAuthError, OSError)


class Mailbox(Protocol):
    """What the sync service needs from a mailbox."""

    def search_messages(self, query: str, max_results: int) -> List[str]:
        ...

    def fetch_body(self, message_id: str) -> str:
        ...

    def __enter__(self) -> "Mailbox":
        ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...


class GmailConnector:
    """
    Gmail API connector using an installed-app OAuth flow.
    The OAuth token is cached on disk and refreshed when it expires.
    """

    def __init__(self):
        self.service: Optional[Any] = None
        self.gmail_settings = settings.gmail

    @staticmethod
    def _parse_scopes(scopes_value: str) -> List[str]:
        """Parse scopes from comma or whitespace separated string."""
        return [scope for scope in re.split(r"[\s,]+", scopes_value.strip()) if scope]

    def _load_credentials(self) -> Credentials:
        """Load cached credentials, refreshing or running the consent flow as needed."""
        scopes = self._parse_scopes(self.gmail_settings.scopes)
        if not scopes:
            raise ValueError("GMAIL_SCOPES must include at least one scope")

        token_file = Path(self.gmail_settings.token_file)
        creds: Optional[Credentials] = None
        if token_file.exists():
            creds = Credentials.from_authorized_user_file(str(token_file), scopes)

        if creds and creds.valid:
            return creds

        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing Gmail access token")
            creds.refresh(Request())
        else:
            credentials_file = Path(self.gmail_settings.credentials_file)
            if not credentials_file.exists():
                raise MailboxError(f"OAuth client secrets not found: {credentials_file}")
            flow = InstalledAppFlow.from_client_secrets_file(str(credentials_file), scopes)
            creds = flow.run_local_server(port=0)

        token_file.parent.mkdir(parents=True, exist_ok=True)
        token_file.write_text(creds.to_json(), encoding="utf-8")
        logger.info(f"Saved Gmail token to {token_file}")
        return creds

    def connect(self) -> None:
        """Authenticate and build the Gmail service."""
        try:
            creds = self._load_credentials()
            self.service = build("gmail", "v1", credentials=creds, cache_discovery=False)
            logger.info("Connected to Gmail API")
        except TRANSPORT_ERRORS as e:
            logger.error(f"Failed to connect to Gmail: {e}")
            raise MailboxError(f"Failed to connect to Gmail: {e}") from e

    def disconnect(self) -> None:
        """Release the Gmail service."""
        if self.service:
            try:
                self.service.close()
                logger.info("Disconnected from Gmail API")
            except Exception as e:
                logger.warning(f"Error during disconnect: {e}")
            finally:
                self.service = None

    def search_messages(self, query: str, max_results: int) -> List[str]:
        """
        Return ids of messages matching a Gmail search query, newest first.
        Only the first page is read; ``max_results`` caps the result.
        """
        if not self.service:
            raise MailboxError("Not connected to Gmail")

        logger.info(f"Searching messages with query: {query}")
        try:
            response = self.service.users().messages().list(
                userId=self.gmail_settings.user_id,
                q=query,
                maxResults=max_results,
                includeSpamTrash=self.gmail_settings.include_spam_trash,
            ).execute()
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error searching messages: {e}")
            raise MailboxError(f"Message search failed: {e}") from e

        ids = [message["id"] for message in response.get("messages", [])]
        logger.info(f"Found {len(ids)} messages matching query")
        return ids

    @staticmethod
    def _decode_data(data: str) -> str:
        padded = data + "=" * (-len(data) % 4)
        try:
            return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")
        except binascii.Error as e:
            raise MailboxError(f"Message body is not valid base64: {e}") from e

    @classmethod
    def _first_part_body(cls, payload: Dict[str, Any]) -> str:
        """Decode the body of the first leaf part of a message payload."""
        part = payload
        while part.get("parts"):
            part = part["parts"][0]

        data = part.get("body", {}).get("data")
        if not data:
            return ""
        return cls._decode_data(data)

    def fetch_body(self, message_id: str) -> str:
        """Fetch one message and return the decoded text of its first body part."""
        if not self.service:
            raise MailboxError("Not connected to Gmail")

        try:
            message = self.service.users().messages().get(
                userId=self.gmail_settings.user_id, id=message_id, format="full"
            ).execute()
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error fetching message {message_id}: {e}")
            raise MailboxError(f"Fetch failed for message {message_id}: {e}") from e

        return self._first_part_body(message.get("payload", {}))

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()
