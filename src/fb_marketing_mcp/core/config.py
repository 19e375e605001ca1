# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Credential loading and validation for the Facebook Marketing API."""


import hashlib
import hmac
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .graph_constants import DEFAULT_GRAPH_API_VERSION, GRAPH_API_HOST, normalize_graph_api_version
from .server_logging import logger

APP_ID_ENV = "FACEBOOK_APP_ID"
APP_SECRET_ENV = "FACEBOOK_APP_SECRET"
ACCESS_TOKEN_ENV = "FACEBOOK_ACCESS_TOKEN"
ACCOUNT_ID_ENV = "FACEBOOK_ACCOUNT_ID"
ACCOUNT_ID_ALIAS_ENV = "FACEBOOK_AD_ACCOUNT_ID"
GRAPH_API_VERSION_ENV = "FACEBOOK_GRAPH_API_VERSION"

MIN_ACCESS_TOKEN_LENGTH = 20


class ConfigurationError(Exception):
    """Raised when required Facebook credentials are missing or malformed."""


def normalize_account_id(ad_account_id: str) -> str:
    ad_account_id = str(ad_account_id or "").strip()
    if not ad_account_id:
        return ""
    if ad_account_id.startswith("act_"):
        return ad_account_id
    return f"act_{ad_account_id}"


@dataclass(frozen=True)
class MarketingConfig:
    app_id: str
    app_secret: str
    access_token: str
    ad_account_id: str
    graph_api_version: str = DEFAULT_GRAPH_API_VERSION

    @property
    def graph_api_base(self) -> str:
        return f"{GRAPH_API_HOST}/{self.graph_api_version}"

    def appsecret_proof(self) -> str:
        """HMAC-SHA256 of the access token keyed by the app secret."""
        return hmac.new(
            self.app_secret.encode("utf-8"),
            msg=self.access_token.encode("utf-8"),
            digestmod=hashlib.sha256,
        ).hexdigest()

    def redacted(self) -> dict:
        return {
            "app_id": self.app_id,
            "ad_account_id": self.ad_account_id,
            "graph_api_version": self.graph_api_version,
            "access_token": "***TOKEN***",
            "app_secret": "***SECRET***",
        }


def load_config(environ: Optional[Mapping[str, str]] = None) -> MarketingConfig:
    """Build a config from the environment, reporting every missing variable at once."""
    if environ is None:
        # Variables already present in the process environment win over .env values.
        load_dotenv(find_dotenv(usecwd=True), override=False)
        environ = os.environ

    values = {
        APP_ID_ENV: str(environ.get(APP_ID_ENV, "")).strip(),
        APP_SECRET_ENV: str(environ.get(APP_SECRET_ENV, "")).strip(),
        ACCESS_TOKEN_ENV: str(environ.get(ACCESS_TOKEN_ENV, "")).strip(),
        ACCOUNT_ID_ENV: str(environ.get(ACCOUNT_ID_ENV) or environ.get(ACCOUNT_ID_ALIAS_ENV) or "").strip(),
    }

    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

    if len(values[ACCESS_TOKEN_ENV]) < MIN_ACCESS_TOKEN_LENGTH:
        raise ConfigurationError(f"{ACCESS_TOKEN_ENV} appears malformed")

    config = MarketingConfig(
        app_id=values[APP_ID_ENV],
        app_secret=values[APP_SECRET_ENV],
        access_token=values[ACCESS_TOKEN_ENV],
        ad_account_id=normalize_account_id(values[ACCOUNT_ID_ENV]),
        graph_api_version=normalize_graph_api_version(environ.get(GRAPH_API_VERSION_ENV, "")),
    )
    logger.info("facebook_config_loaded config=%s", config.redacted())
    return config


_active_config: Optional[MarketingConfig] = None


def get_config() -> MarketingConfig:
    """Return the process-wide config, loading it on first use."""
    global _active_config
    if _active_config is None:
        _active_config = load_config()
    return _active_config


def set_config(config: MarketingConfig) -> None:
    global _active_config
    _active_config = config


def reset_config() -> None:
    global _active_config
    _active_config = None
