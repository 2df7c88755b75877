"""
CLI Configuration Unit Tests
Tests for merkle_cli/config.py
"""
import json

import pytest

from core.schemas.errors import ConfigException
from merkle_cli.config import (
    CLIConfig,
    get_default_config_template,
    load_config,
    load_config_from_file,
    validate_config,
)


def _track_env(monkeypatch, *names):
    """Make monkeypatch remove variables that load_dotenv may set during a test."""
    for name in names:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)


class TestDefaults:

    def test_defaults(self, cli_env):
        config = load_config()

        assert config == CLIConfig()
        assert config.log_level == "WARNING"
        assert config.leaf_encoding == "utf-8"
        assert config.default_output_format == "human"
        assert config.proof_indent == 2

    def test_template_is_valid_json_of_defaults(self):
        assert json.loads(get_default_config_template()) == CLIConfig().to_dict()


class TestConfigFile:

    def test_json_file(self, cli_env):
        path = cli_env / "custom.json"
        path.write_text(json.dumps({"leaf_encoding": "hex", "proof_indent": 0}))

        config = load_config(path)

        assert config.leaf_encoding == "hex"
        assert config.proof_indent == 0
        assert config.log_level == "WARNING"

    def test_yaml_file(self, cli_env):
        path = cli_env / "custom.yaml"
        path.write_text("log_level: debug\ndefault_output_format: json\n")

        config = load_config(path)

        assert config.log_level == "DEBUG"
        assert config.default_output_format == "json"

    def test_empty_yaml_file(self, cli_env):
        path = cli_env / "empty.yml"
        path.write_text("")

        assert load_config(path) == CLIConfig()

    def test_discovered_in_working_directory(self, cli_env):
        (cli_env / "merkle.json").write_text(json.dumps({"default_output_format": "json"}))

        assert load_config().default_output_format == "json"

    def test_discovered_in_home(self, cli_env, tmp_path):
        config_dir = tmp_path / "home" / ".config" / "merkle"
        config_dir.mkdir(parents=True)
        (config_dir / "config.json").write_text(json.dumps({"leaf_encoding": "hex"}))

        assert load_config().leaf_encoding == "hex"

    def test_missing_explicit_file(self, cli_env):
        with pytest.raises(FileNotFoundError):
            load_config(cli_env / "nope.json")

    def test_unknown_key(self, cli_env):
        path = cli_env / "bad.json"
        path.write_text(json.dumps({"hash": "sha256"}))

        with pytest.raises(ConfigException, match="Unknown config keys"):
            load_config_from_file(path)

    def test_non_mapping(self, cli_env):
        path = cli_env / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigException, match="mapping"):
            load_config_from_file(path)


class TestEnvironment:

    def test_env_overrides_file(self, cli_env, monkeypatch):
        path = cli_env / "custom.json"
        path.write_text(json.dumps({"leaf_encoding": "hex", "log_level": "INFO"}))
        monkeypatch.setenv("MERKLE_LOG_LEVEL", "ERROR")

        config = load_config(path)

        assert config.log_level == "ERROR"
        assert config.leaf_encoding == "hex"

    def test_env_proof_indent(self, cli_env, monkeypatch):
        monkeypatch.setenv("MERKLE_PROOF_INDENT", "4")

        assert load_config().proof_indent == 4

    def test_env_proof_indent_not_int(self, cli_env, monkeypatch):
        monkeypatch.setenv("MERKLE_PROOF_INDENT", "wide")

        with pytest.raises(ConfigException):
            load_config()

    def test_dotenv_file(self, cli_env, monkeypatch):
        _track_env(monkeypatch, "MERKLE_OUTPUT_FORMAT")
        (cli_env / ".env").write_text("MERKLE_OUTPUT_FORMAT=json\n")

        assert load_config().default_output_format == "json"

    def test_real_env_beats_dotenv(self, cli_env, monkeypatch):
        (cli_env / ".env").write_text("MERKLE_LEAF_ENCODING=hex\n")
        monkeypatch.setenv("MERKLE_LEAF_ENCODING", "utf-8")

        assert load_config().leaf_encoding == "utf-8"


class TestValidation:

    def test_normalizes_case(self):
        config = validate_config(CLIConfig(log_level="debug", leaf_encoding="HEX"))

        assert config.log_level == "DEBUG"
        assert config.leaf_encoding == "hex"

    @pytest.mark.parametrize(
        "kwargs,key",
        [
            ({"log_level": "LOUD"}, "log_level"),
            ({"leaf_encoding": "base64"}, "leaf_encoding"),
            ({"default_output_format": "xml"}, "default_output_format"),
            ({"proof_indent": -1}, "proof_indent"),
            ({"proof_indent": True}, "proof_indent"),
        ],
    )
    def test_invalid_values(self, kwargs, key):
        with pytest.raises(ConfigException) as exc_info:
            validate_config(CLIConfig(**kwargs))

        assert exc_info.value.details["key"] == key
