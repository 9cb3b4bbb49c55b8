"""Tests for credential discovery."""

import pytest

from storx_mcp.core.exceptions import ConfigurationError
from storx_mcp.schemas import StorxCredentials
from storx_mcp.storage_config import (
    candidate_config_paths,
    credentials_from_env,
    find_config_file,
    load_credentials,
    to_client_config,
)


class TestCandidatePaths:
    """Test config search order."""

    def test_default_locations(self, isolated_home):
        """Test macOS, Windows and Linux locations come before the cwd."""
        paths = [str(p) for p in candidate_config_paths()]

        assert paths[0].endswith("Library/Application Support/Claude/claude_desktop_config.json")
        assert paths[1].endswith("AppData/Roaming/Claude/claude_desktop_config.json")
        assert paths[2].endswith(".config/Claude/claude_desktop_config.json")
        assert paths[-1].endswith("work/claude_desktop_config.json")
        assert all(p.startswith(str(isolated_home)) for p in paths[:3])

    def test_explicit_path_first(self, isolated_home, tmp_path):
        """Test an explicit path is searched before everything else."""
        explicit = tmp_path / "custom.json"
        assert candidate_config_paths(explicit)[0] == explicit

    def test_find_first_existing(self, tmp_path):
        """Test the first existing file wins."""
        first = tmp_path / "a.json"
        second = tmp_path / "b.json"
        second.write_text("{}")
        first.write_text("{}")

        assert find_config_file([tmp_path / "missing.json", first, second]) == first
        assert find_config_file([tmp_path / "missing.json"]) is None


class TestLoadCredentials:
    """Test loading credentials from claude_desktop_config.json."""

    def test_storx_keys(self, isolated_home, write_config):
        """Test STORX_* variables are read from mcpServers.storx.env."""
        path = write_config(
            {
                "STORX_ACCESS_KEY": "ak",
                "STORX_SECRET_KEY": "sk",
                "STORX_ENDPOINT": "https://minio.local:9000",
                "STORX_REGION": "eu-west-1",
            }
        )

        credentials = load_credentials(path)

        assert credentials == StorxCredentials(
            access_key="ak",
            secret_key="sk",
            endpoint="https://minio.local:9000",
            region="eu-west-1",
            source=str(path),
        )

    def test_defaults(self, isolated_home, write_config):
        """Test endpoint and region defaults."""
        path = write_config({"STORX_ACCESS_KEY": "ak", "STORX_SECRET_KEY": "sk"})

        credentials = load_credentials(path)

        assert credentials.endpoint == "https://gateway.storx.io"
        assert credentials.region == "us-east-1"

    def test_storx_keys_preferred_over_aws(self, isolated_home, write_config):
        """Test STORX_* wins when both spellings are present."""
        path = write_config(
            {
                "STORX_ACCESS_KEY": "storx-ak",
                "AWS_ACCESS_KEY_ID": "aws-ak",
                "AWS_SECRET_ACCESS_KEY": "aws-sk",
                "AWS_REGION": "ap-south-1",
                "AWS_ENDPOINT_URL": "https://s3.example.com",
            }
        )

        credentials = load_credentials(path)

        assert credentials.access_key == "storx-ak"
        assert credentials.secret_key == "aws-sk"
        assert credentials.region == "ap-south-1"
        assert credentials.endpoint == "https://s3.example.com"

    def test_alternate_server_key(self, isolated_home, write_config):
        """Test mcpServers['storx-mcp-server'] is accepted."""
        path = write_config(
            {"STORX_ACCESS_KEY": "ak", "STORX_SECRET_KEY": "sk"},
            server_key="storx-mcp-server",
        )

        assert load_credentials(path).access_key == "ak"

    def test_found_in_linux_location(self, isolated_home, write_config):
        """Test discovery without an explicit path."""
        write_config(
            {"STORX_ACCESS_KEY": "ak", "STORX_SECRET_KEY": "sk"},
            directory=isolated_home / ".config" / "Claude",
        )

        credentials = load_credentials()

        assert credentials.access_key == "ak"
        assert credentials.source.endswith(".config/Claude/claude_desktop_config.json")

    def test_missing_secret(self, isolated_home, write_config):
        """Test a missing secret names both accepted variables."""
        path = write_config({"STORX_ACCESS_KEY": "ak"})

        with pytest.raises(ConfigurationError) as exc_info:
            load_credentials(path)

        message = str(exc_info.value)
        assert "STORX_SECRET_KEY or AWS_SECRET_ACCESS_KEY" in message
        assert "STORX_ACCESS_KEY or AWS_ACCESS_KEY_ID" not in message
        assert '"mcpServers"' in message

    def test_missing_server_entry(self, isolated_home, tmp_path):
        """Test a config without a storx entry reports both keys missing."""
        path = tmp_path / "claude_desktop_config.json"
        path.write_text('{"mcpServers": {"other": {}}}')

        with pytest.raises(ConfigurationError) as exc_info:
            load_credentials(path)

        message = str(exc_info.value)
        assert "STORX_ACCESS_KEY or AWS_ACCESS_KEY_ID" in message
        assert "STORX_SECRET_KEY or AWS_SECRET_ACCESS_KEY" in message

    @pytest.mark.parametrize(
        "document",
        [
            '{"mcpServers": {"storx": "oops"}}',
            '{"mcpServers": {"storx": {"env": ["STORX_ACCESS_KEY"]}}}',
            '{"mcpServers": {"storx": {"env": null}}}',
            '{"mcpServers": ["storx"]}',
        ],
    )
    def test_malformed_entries_report_missing_keys(self, isolated_home, tmp_path, document):
        """Test wrongly typed server entries are treated as empty."""
        path = tmp_path / "claude_desktop_config.json"
        path.write_text(document)

        with pytest.raises(ConfigurationError) as exc_info:
            load_credentials(path)

        message = str(exc_info.value)
        assert "STORX_ACCESS_KEY or AWS_ACCESS_KEY_ID" in message
        assert "STORX_SECRET_KEY or AWS_SECRET_ACCESS_KEY" in message
        assert exc_info.value.searched == [str(path)]

    def test_malformed_first_key_falls_through(self, isolated_home, tmp_path):
        """Test a non-object 'storx' entry does not hide 'storx-mcp-server'."""
        path = tmp_path / "claude_desktop_config.json"
        path.write_text(
            '{"mcpServers": {"storx": "oops", "storx-mcp-server": '
            '{"env": {"STORX_ACCESS_KEY": "ak", "STORX_SECRET_KEY": "sk"}}}}'
        )

        assert load_credentials(path).access_key == "ak"

    def test_invalid_json(self, isolated_home, tmp_path):
        """Test malformed JSON is reported as a parse failure."""
        path = tmp_path / "claude_desktop_config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_credentials(path)

    def test_non_object_json(self, isolated_home, tmp_path):
        """Test a JSON array is rejected."""
        path = tmp_path / "claude_desktop_config.json"
        path.write_text("[]")

        with pytest.raises(ConfigurationError, match="must be an object"):
            load_credentials(path)

    def test_environment_fallback(self, isolated_home):
        """Test process environment is used when no file exists."""
        credentials = load_credentials(
            environ={"AWS_ACCESS_KEY_ID": "ak", "AWS_SECRET_ACCESS_KEY": "sk"}
        )

        assert credentials.access_key == "ak"
        assert credentials.source is None

    def test_nothing_found(self, isolated_home):
        """Test the diagnostic lists every searched location."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_credentials(environ={})

        error = exc_info.value
        assert "claude_desktop_config.json file not found" in str(error)
        assert len(error.searched) == 5
        for location in error.searched:
            assert location in str(error)


class TestCredentialsFromEnv:
    """Test mapping an env mapping to credentials."""

    def test_empty_values_are_missing(self):
        """Test empty strings do not satisfy required keys."""
        with pytest.raises(ConfigurationError, match="STORX_ACCESS_KEY"):
            credentials_from_env({"STORX_ACCESS_KEY": "", "STORX_SECRET_KEY": "sk"})

    def test_to_client_config(self):
        """Test credentials become an S3 client config."""
        credentials = credentials_from_env(
            {"STORX_ACCESS_KEY": "ak", "STORX_SECRET_KEY": "sk"}
        )

        config = to_client_config(credentials)

        assert config.access_key_id == "ak"
        assert config.secret_access_key == "sk"
        assert config.endpoint_url == "https://gateway.storx.io"
        assert config.region_name == "us-east-1"
        assert config.addressing_style == "path"
