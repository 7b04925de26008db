"""Loading Confluence credentials for page-title lookups.

Credentials come from environment variables, loaded from a .env file with
python-dotenv. Lookups are optional for the converter, so callers can ask
whether credentials are configured before building a client.
"""

import os
from typing import List, NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

URL_ENV_VAR = 'CONFLUENCE_URL'
USER_ENV_VAR = 'CONFLUENCE_USER'
TOKEN_ENV_VAR = 'CONFLUENCE_API_TOKEN'


class Credentials(NamedTuple):
    """Confluence API credentials."""
    url: str
    user: str
    api_token: str


class Authenticator:
    """Loads and validates Confluence credentials from environment variables.

    Credentials are read on every call and never cached or logged.

    Required environment variables:
        CONFLUENCE_URL: Confluence instance URL (e.g., https://yourinstance.atlassian.net/wiki)
        CONFLUENCE_USER: Confluence user email address
        CONFLUENCE_API_TOKEN: Confluence API token

    Example:
        >>> auth = Authenticator()
        >>> if auth.is_configured():
        ...     creds = auth.get_credentials()
    """

    def __init__(self, env_file: Optional[str] = None):
        """Load environment variables from a .env file.

        Args:
            env_file: Explicit .env path; python-dotenv searches upwards from
                the working directory when omitted
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

    def missing_variables(self) -> List[str]:
        """Names of the required variables that are unset or empty."""
        return [
            name for name in (URL_ENV_VAR, USER_ENV_VAR, TOKEN_ENV_VAR)
            if not os.getenv(name)
        ]

    def is_configured(self) -> bool:
        return not self.missing_variables()

    def get_credentials(self) -> Credentials:
        """Get Confluence credentials from environment variables.

        Returns:
            Credentials: A named tuple containing url, user, and api_token

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        url = os.getenv(URL_ENV_VAR)
        user = os.getenv(USER_ENV_VAR)
        api_token = os.getenv(TOKEN_ENV_VAR)

        if not (url and user and api_token):
            raise InvalidCredentialsError(
                user=user if user else "unknown",
                endpoint=url if url else "unknown"
            )

        return Credentials(url=url, user=user, api_token=api_token)
