"""Unit tests for confluence_client.auth module."""

import pytest
from unittest.mock import patch

from src.confluence_client.auth import Authenticator, Credentials
from src.confluence_client.errors import InvalidCredentialsError

ENV = {
    'CONFLUENCE_URL': 'https://test.atlassian.net/wiki',
    'CONFLUENCE_USER': 'test@example.com',
    'CONFLUENCE_API_TOKEN': 'test-token-123',
}


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestAuthenticator:
    """Test cases for Authenticator class."""

    @patch('src.confluence_client.auth.load_dotenv')
    def test_init_loads_dotenv(self, mock_load_dotenv):
        """Authenticator __init__ should call load_dotenv()."""
        Authenticator()
        mock_load_dotenv.assert_called_once_with()

    @patch('src.confluence_client.auth.load_dotenv')
    def test_init_loads_explicit_env_file(self, mock_load_dotenv):
        Authenticator(env_file='/tmp/custom.env')
        mock_load_dotenv.assert_called_once_with('/tmp/custom.env')

    @patch('src.confluence_client.auth.load_dotenv')
    def test_get_credentials_success(self, mock_load_dotenv, clean_env):
        for name, value in ENV.items():
            clean_env.setenv(name, value)

        creds = Authenticator().get_credentials()

        assert creds == Credentials(
            url='https://test.atlassian.net/wiki',
            user='test@example.com',
            api_token='test-token-123',
        )
        assert Authenticator().is_configured() is True

    @patch('src.confluence_client.auth.load_dotenv')
    def test_missing_variables(self, mock_load_dotenv, clean_env):
        clean_env.setenv('CONFLUENCE_URL', ENV['CONFLUENCE_URL'])

        auth = Authenticator()

        assert auth.missing_variables() == ['CONFLUENCE_USER', 'CONFLUENCE_API_TOKEN']
        assert auth.is_configured() is False

    @patch('src.confluence_client.auth.load_dotenv')
    def test_get_credentials_missing_token(self, mock_load_dotenv, clean_env):
        clean_env.setenv('CONFLUENCE_URL', ENV['CONFLUENCE_URL'])
        clean_env.setenv('CONFLUENCE_USER', ENV['CONFLUENCE_USER'])

        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.user == 'test@example.com'
        assert exc_info.value.endpoint == 'https://test.atlassian.net/wiki'

    @patch('src.confluence_client.auth.load_dotenv')
    def test_get_credentials_nothing_set(self, mock_load_dotenv, clean_env):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.user == 'unknown'
        assert exc_info.value.endpoint == 'unknown'
