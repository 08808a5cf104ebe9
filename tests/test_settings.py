"""Tests for settings module using Pydantic."""

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from work_activity_mcp.src.settings import Settings, validate_config


class TestSettings:
    """Test cases for Pydantic settings."""

    @patch.dict('os.environ', {
        'MCP_TRANSPORT': 'http',
        'JIRA_API_KEY': 'YWxpY2VAZXhhbXBsZS5jb206dG9rZW4=',
        'JIRA_BASE_URL': 'https://example.atlassian.net/',
        'JIRA_EMAIL': 'alice@example.com',
        'GITHUB_TOKEN': 'ghp_from_env',
        'ENABLE_METRICS': 'true',
        'METRICS_PORT': '9090'
    })
    def test_settings_from_environment(self):
        """Test settings loading from environment variables."""
        settings = Settings()

        assert settings.MCP_TRANSPORT == 'http'
        assert settings.JIRA_API_KEY == 'YWxpY2VAZXhhbXBsZS5jb206dG9rZW4='
        assert settings.JIRA_BASE_URL == 'https://example.atlassian.net/'
        assert settings.JIRA_EMAIL == 'alice@example.com'
        assert settings.GITHUB_TOKEN == 'ghp_from_env'
        assert settings.ENABLE_METRICS is True
        assert settings.METRICS_PORT == 9090

    @patch.dict('os.environ', {}, clear=True)
    def test_settings_defaults(self):
        """Test settings defaults when environment variables are not set."""
        settings = Settings()

        assert settings.MCP_TRANSPORT == 'stdio'
        assert settings.JIRA_BASE_URL == 'https://sipgatede.atlassian.net/'
        assert settings.GITHUB_BASE_URL == 'https://api.github.com'
        assert settings.ENABLE_METRICS is False
        assert settings.METRICS_PORT == 8000
        assert settings.MAX_HTTP_CONNECTIONS == 20
        assert settings.HTTP_TIMEOUT_SECONDS == 30
        assert settings.TOOL_TIMEOUT_SECONDS == 60

        # Credentials are only checked when a tool needs them
        assert settings.JIRA_API_KEY is None
        assert settings.JIRA_EMAIL is None
        assert settings.GITHUB_TOKEN is None

    @patch.dict('os.environ', {
        'FASTMCP_HOST': '127.0.0.1',
        'FASTMCP_PORT': '8080',
        'MAX_HTTP_CONNECTIONS': '50',
        'HTTP_TIMEOUT_SECONDS': '120'
    })
    def test_server_and_http_settings(self):
        """Test FastMCP and HTTP client settings."""
        settings = Settings()

        assert settings.FASTMCP_HOST == '127.0.0.1'
        assert settings.FASTMCP_PORT == 8080
        assert settings.MAX_HTTP_CONNECTIONS == 50
        assert settings.HTTP_TIMEOUT_SECONDS == 120

    @patch.dict('os.environ', {'METRICS_PORT': 'not_a_number'})
    def test_invalid_port_validation(self):
        """Test validation of invalid port numbers."""
        with pytest.raises(ValidationError):
            Settings()

    @patch.dict('os.environ', {'FASTMCP_PORT': '70000'})
    def test_out_of_range_port_validation(self):
        """Test validation of out-of-range port numbers."""
        with pytest.raises(ValidationError):
            Settings()

    @patch.dict('os.environ', {'HTTP_TIMEOUT_SECONDS': '0'})
    def test_timeout_must_be_positive(self):
        """Test that a zero timeout is rejected."""
        with pytest.raises(ValidationError):
            Settings()


class TestValidateConfig:
    """Test cases for configuration validation."""

    def test_validate_config_valid(self):
        """Test validation with valid configuration."""
        settings = Settings(
            JIRA_API_KEY='key',
            JIRA_EMAIL='alice@example.com',
            GITHUB_TOKEN='token',
        )

        # Should not raise any exceptions
        validate_config(settings)

    def test_validate_config_invalid_mcp_port(self):
        """Test validation with invalid MCP port."""
        with pytest.raises(ValidationError):
            Settings(MCP_PORT=80)

    def test_validate_config_invalid_log_level(self):
        """Test validation with invalid log level."""
        settings = Settings(PYTHON_LOG_LEVEL='INVALID')

        with pytest.raises(ValueError, match="PYTHON_LOG_LEVEL must be one of"):
            validate_config(settings)

    def test_validate_config_invalid_transport(self):
        """Test validation with invalid transport protocol."""
        settings = Settings(MCP_TRANSPORT='invalid')

        with pytest.raises(ValueError, match="MCP_TRANSPORT must be one of"):
            validate_config(settings)

    def test_missing_credentials_only_warn(self, caplog):
        """Test that missing credentials are reported but do not fail startup."""
        settings = Settings(JIRA_API_KEY=None, JIRA_EMAIL=None, GITHUB_TOKEN=None)

        with caplog.at_level(logging.WARNING, logger="work_activity_mcp"):
            validate_config(settings)

        assert "JIRA_API_KEY is not set" in caplog.text
        assert "JIRA_EMAIL is not set" in caplog.text
        assert "GITHUB_TOKEN is not set" in caplog.text
