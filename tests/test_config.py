"""Tests for configuration loading and validation."""
import pytest

from activities_bot.config import COMMANDS, Config, ConfigError
from activities_bot.context import create_context

PUBLIC_KEY = "a" * 64


class TestFromEnv:

    def test_reads_discord_variables(self):
        config = Config.from_env({
            "DISCORD_PUBLIC_KEY": PUBLIC_KEY,
            "DISCORD_BOT_TOKEN": "token",
            "DISCORD_APPLICATION_ID": "123",
            "AUTO_REGISTER_COMMANDS": "false",
            "DISCORD_REQUEST_TIMEOUT": "2.5",
        })

        assert config.public_key == PUBLIC_KEY
        assert config.bot_token == "token"
        assert config.application_id == "123"
        assert config.auto_register_commands is False
        assert config.request_timeout == 2.5

    def test_short_names_are_accepted(self):
        config = Config.from_env({"PUBLIC_KEY": PUBLIC_KEY, "TOKEN": "t", "ID": "42"})

        assert config.public_key == PUBLIC_KEY
        assert config.bot_token == "t"
        assert config.application_id == "42"

    def test_defaults(self):
        config = Config.from_env({})

        assert config.auto_register_commands is True
        assert config.api_base_url == "https://discord.com/api/v10"
        assert config.support_url == "https://discord.gg/WVN2JF2FRv"

    def test_bad_timeout_is_reported_with_other_problems(self):
        config = Config.from_env({"DISCORD_REQUEST_TIMEOUT": "soon"})

        with pytest.raises(ConfigError) as exc_info:
            config.validate()

        problems = exc_info.value.problems
        assert len(problems) == 4
        assert "DISCORD_REQUEST_TIMEOUT must be a number, got 'soon'" in problems
        assert "DISCORD_PUBLIC_KEY is not set" in problems
        assert "DISCORD_BOT_TOKEN is not set" in problems
        assert "DISCORD_APPLICATION_ID is not set" in problems

    @pytest.mark.parametrize("timeout", ["nan", "inf", "0", "-1"])
    def test_unusable_timeout(self, timeout):
        config = Config.from_env({
            "DISCORD_PUBLIC_KEY": PUBLIC_KEY,
            "DISCORD_BOT_TOKEN": "t",
            "DISCORD_APPLICATION_ID": "1",
            "DISCORD_REQUEST_TIMEOUT": timeout,
        })

        with pytest.raises(ConfigError, match="positive number of seconds"):
            config.validate()


class TestValidate:

    def test_valid(self):
        config = Config(public_key=PUBLIC_KEY, bot_token="t", application_id="1")

        assert config.validate() is config

    def test_reports_every_problem(self):
        with pytest.raises(ConfigError) as exc_info:
            Config(public_key=None, bot_token=None, application_id=None).validate()

        assert len(exc_info.value.problems) == 3

    @pytest.mark.parametrize("public_key", ["abc", "z" * 64])
    def test_malformed_public_key(self, public_key):
        with pytest.raises(ConfigError, match="64 hexadecimal"):
            Config(public_key=public_key, bot_token="t", application_id="1").validate()

    def test_non_numeric_application_id(self):
        with pytest.raises(ConfigError, match="snowflake"):
            Config(public_key=PUBLIC_KEY, bot_token="t", application_id="my-app").validate()

    def test_context_requires_valid_config(self):
        with pytest.raises(ConfigError):
            create_context(Config(public_key=None, bot_token="t", application_id="1"))


def test_command_schema():
    assert [command["name"] for command in COMMANDS] == ["invite", "activity"]

    channel, activity = COMMANDS[1]["options"]
    assert channel["type"] == 7 and channel["required"] is True
    assert activity["type"] == 3 and activity["required"] is True
    assert {choice["value"] for choice in activity["choices"]} == {"poker", "betrayal", "youtube", "fishing"}
