import os
import unittest
from unittest.mock import patch

from depsync.config import Config, evaluate_boolean, load_config
from depsync.exceptions import ConfigurationError


class TestConfig(unittest.TestCase):
    """Test cases for the Config dataclass and related functionality."""

    def test_defaults_are_valid(self):
        """Test that the default configuration passes validation."""
        config = Config()
        config.validate()
        self.assertEqual(config.batch_size, 10)
        self.assertEqual(config.request_timeout, 10.0)

    def test_config_validation_non_positive_batch_size(self):
        """Test that a zero batch size is rejected."""
        with self.assertRaises(ConfigurationError) as cm:
            Config(batch_size=0).validate()
        self.assertIn("batch_size must be a positive integer", str(cm.exception))

    def test_config_validation_negative_delay(self):
        """Test that a negative batch delay is rejected."""
        with self.assertRaises(ConfigurationError) as cm:
            Config(batch_delay=-1).validate()
        self.assertIn("batch_delay cannot be negative", str(cm.exception))

    def test_config_validation_invalid_log_level(self):
        """Test that an unknown log level is rejected."""
        with self.assertRaises(ConfigurationError) as cm:
            Config(log_level="LOUD").validate()
        self.assertIn("Invalid log level", str(cm.exception))

    def test_config_validation_neo4j_credentials(self):
        """Test that a Neo4j URI requires credentials."""
        with self.assertRaises(ConfigurationError):
            Config(neo4j_uri="bolt://localhost:7687").validate()
        Config(neo4j_uri="bolt://localhost:7687", neo4j_user="neo4j", neo4j_password="secret").validate()

    def test_token_for(self):
        """Test provider token selection."""
        config = Config(github_token="gh", codeberg_token="cb")
        self.assertEqual(config.token_for("github"), "gh")
        self.assertEqual(config.token_for("codeberg"), "cb")
        self.assertEqual(config.token_for("gitea"), "cb")


class TestLoadConfig(unittest.TestCase):
    """Test cases for environment-driven configuration."""

    @patch.dict(
        os.environ,
        {
            "DEPSYNC_GITHUB_TOKEN": "ghp_test",
            "DEPSYNC_BATCH_SIZE": "25",
            "DEPSYNC_BATCH_DELAY": "0",
            "DEPSYNC_GITEA_URL": "https://git.example.com",
            "DEPSYNC_STRUCTURED_LOGS": "yes",
        },
        clear=True,
    )
    def test_load_from_environment(self):
        """Test that environment variables populate the config."""
        config = load_config()
        self.assertEqual(config.github_token, "ghp_test")
        self.assertEqual(config.batch_size, 25)
        self.assertEqual(config.batch_delay, 0.0)
        self.assertEqual(config.gitea_instance_url, "https://git.example.com")
        self.assertTrue(config.structured_logs)
        self.assertTrue(config.telemetry)

    @patch.dict(os.environ, {"GITHUB_TOKEN": "fallback"}, clear=True)
    def test_github_token_fallback(self):
        """Test that GITHUB_TOKEN is used when DEPSYNC_GITHUB_TOKEN is unset."""
        self.assertEqual(load_config().github_token, "fallback")

    @patch.dict(os.environ, {"DEPSYNC_BATCH_SIZE": "many"}, clear=True)
    def test_invalid_integer(self):
        """Test that a non-numeric integer setting raises ConfigurationError."""
        with self.assertRaises(ConfigurationError) as cm:
            load_config()
        self.assertIn("DEPSYNC_BATCH_SIZE must be an integer", str(cm.exception))

    @patch.dict(os.environ, {"DEPSYNC_REQUEST_TIMEOUT": "-5"}, clear=True)
    def test_invalid_value_validated(self):
        """Test that loaded values are validated."""
        with self.assertRaises(ConfigurationError):
            load_config()

    @patch.dict(os.environ, {"TELEMETRY": "false"}, clear=True)
    def test_telemetry_disabled(self):
        """Test that TELEMETRY=false disables telemetry."""
        self.assertFalse(load_config().telemetry)

    def test_evaluate_boolean(self):
        """Test boolean string evaluation."""
        for value in ("true", "True", "yes", "1"):
            self.assertTrue(evaluate_boolean(value))
        for value in ("false", "no", "0", ""):
            self.assertFalse(evaluate_boolean(value))
