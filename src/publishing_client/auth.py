"""Confluence user and API token for article-push.

The three values come from the environment; a .env file in the working
directory is loaded first with python-dotenv. PushCommand uses
``read_credentials`` so the push itself reports what is missing, while the
client calls ``get_credentials`` right before it opens a session.
"""

import logging
import os
from typing import List, NamedTuple

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

logger = logging.getLogger(__name__)


class Credentials(NamedTuple):
    """Confluence base URL, user email and API token."""
    url: str
    user: str
    api_token: str


class Authenticator:
    """Reads CONFLUENCE_URL, CONFLUENCE_USER and CONFLUENCE_API_TOKEN.

    Values are read on every call and never logged.

    Example:
        >>> Authenticator().missing_variables()
        ['CONFLUENCE_API_TOKEN']
    """

    URL_VAR = 'CONFLUENCE_URL'
    USER_VAR = 'CONFLUENCE_USER'
    TOKEN_VAR = 'CONFLUENCE_API_TOKEN'

    def __init__(self):
        load_dotenv()

    def read_credentials(self) -> Credentials:
        """Current values, with '' for anything unset."""
        return Credentials(
            url=os.getenv(self.URL_VAR) or '',
            user=os.getenv(self.USER_VAR) or '',
            api_token=os.getenv(self.TOKEN_VAR) or '',
        )

    def missing_variables(self) -> List[str]:
        """Names of the environment variables that are unset or empty."""
        creds = self.read_credentials()
        return [
            name for name, value in (
                (self.URL_VAR, creds.url),
                (self.USER_VAR, creds.user),
                (self.TOKEN_VAR, creds.api_token),
            )
            if not value
        ]

    def get_credentials(self) -> Credentials:
        """Credentials for opening a Confluence session.

        Raises:
            InvalidCredentialsError: If the URL, user or token is not set
        """
        missing = self.missing_variables()
        creds = self.read_credentials()
        if missing:
            logger.error(f"Confluence credentials incomplete, unset: {', '.join(missing)}")
            raise InvalidCredentialsError(
                user=creds.user or "<unset user>",
                endpoint=creds.url or "<unset URL>",
            )
        return creds
