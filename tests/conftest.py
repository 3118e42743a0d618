"""Shared fixtures for the Activities bot tests."""
import json
import os
import sys
import time
from unittest.mock import Mock

import pytest
from nacl.signing import SigningKey

# Keep the Cloud Trace exporter out of tests
os.environ.setdefault("LOCAL_DEV", "1")

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from activities_bot.app import create_app  # noqa: E402
from activities_bot.config import Config  # noqa: E402
from activities_bot.context import create_context  # noqa: E402
from activities_bot.discord_service import DiscordService  # noqa: E402
from activities_bot.discord_types import ChannelType, OptionType  # noqa: E402

APPLICATION_ID = "819835984388030464"
GUILD_ID = "111111111111111111"
VOICE_CHANNEL_ID = "333333333333333333"


def make_http_response(status_code=200, payload=None):
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    body = json.dumps(payload) if payload is not None else ""
    response.text = body
    response.content = body.encode()
    response.json.return_value = payload
    return response


def command_payload(name, options=None, guild_id=GUILD_ID, resolved=None):
    data = {"id": "1", "name": name, "type": 1}
    if options is not None:
        data["options"] = options
    if resolved is not None:
        data["resolved"] = resolved

    payload = {
        "id": "999999999999999999",
        "type": 2,
        "token": "interaction-token",
        "application_id": APPLICATION_ID,
        "channel_id": "222222222222222222",
        "data": data,
    }
    if guild_id:
        payload["guild_id"] = guild_id
    return payload


def activity_payload(activity="poker", channel_type=ChannelType.GUILD_VOICE, guild_id=GUILD_ID,
                     channel_name="General"):
    return command_payload(
        "activity",
        options=[
            {"name": "channel", "type": OptionType.CHANNEL, "value": VOICE_CHANNEL_ID},
            {"name": "activity", "type": OptionType.STRING, "value": activity},
        ],
        guild_id=guild_id,
        resolved={
            "channels": {
                VOICE_CHANNEL_ID: {
                    "id": VOICE_CHANNEL_ID,
                    "name": channel_name,
                    "type": channel_type,
                    "permissions": "0",
                }
            }
        },
    )


@pytest.fixture
def signing_key():
    return SigningKey.generate()


@pytest.fixture
def config(signing_key):
    return Config(
        public_key=signing_key.verify_key.encode().hex(),
        bot_token="test-bot-token",
        application_id=APPLICATION_ID,
        auto_register_commands=False,
        environment="test",
    )


@pytest.fixture
def http_session():
    """requests.Session stand-in for Discord REST calls."""
    session = Mock()
    session.request.return_value = make_http_response(200, {"code": "abc123"})
    return session


@pytest.fixture
def discord_service(config, http_session):
    return DiscordService(config, session=http_session)


@pytest.fixture
def context(config, discord_service):
    return create_context(config, discord=discord_service)


@pytest.fixture
def client(context):
    app = create_app(context)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def signed_post(client, signing_key):
    """POST a signed interaction to the webhook endpoint."""
    def post(payload, key=None, path="/discord/interactions"):
        body = json.dumps(payload).encode()
        timestamp = str(int(time.time()))
        signature = (key or signing_key).sign(timestamp.encode() + body).signature.hex()
        return client.post(
            path,
            data=body,
            content_type="application/json",
            headers={
                "X-Signature-Ed25519": signature,
                "X-Signature-Timestamp": timestamp,
            },
        )
    return post
