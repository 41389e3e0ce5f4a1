# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Credential and region configuration.

An ``S3Config`` is built once at startup and handed to the URL signer.
There is no reload; changing credentials requires a restart.

Two sources are supported:

- The process environment (``AWS_ACCESS_KEY_ID``,
  ``AWS_SECRET_ACCESS_KEY``, ``AWS_REGION``), after loading ``.env``
  files.
- A YAML file, by default ``$XDG_CONFIG_HOME/s3file/s3file.yaml``::

      aws:
        access_key_id: !env AWS_ACCESS_KEY_ID
        secret_access_key: !env AWS_SECRET_ACCESS_KEY
        region: eu-west-1

  ``!env`` tags resolve values from environment variables.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml
from platformdirs import user_config_path

from s3file.dotenv_loader import load_dotenv_once
from s3file.logging import SecretFilter


logger = logging.getLogger(__name__)

#: Application name for XDG path resolution.
_APP_NAME = "s3file"

ENV_ACCESS_KEY = "AWS_ACCESS_KEY_ID"
ENV_SECRET_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_REGION = "AWS_REGION"


class ConfigError(Exception):
    """Base exception for configuration errors."""


def get_config_path() -> Path:
    """Return the default config file path.

    Uses XDG: ``$XDG_CONFIG_HOME/s3file/s3file.yaml`` (typically
    ``~/.config/s3file/s3file.yaml``).
    """
    return user_config_path(_APP_NAME) / "s3file.yaml"


def get_dotenv_path() -> Path:
    """Return the ``.env`` path inside the XDG config directory."""
    return user_config_path(_APP_NAME) / ".env"


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------


class _EnvVar:
    """Placeholder for an unresolved ``!env VAR_NAME`` tag."""

    def __init__(self, var_name: str) -> None:
        self.var_name = var_name


def _env_constructor(loader: yaml.SafeLoader, node: yaml.Node) -> _EnvVar:
    """Handle ``!env VAR_NAME`` in YAML."""
    value = loader.construct_scalar(node)
    return _EnvVar(str(value))


def _make_loader() -> type[yaml.SafeLoader]:
    """Create a YAML loader that understands ``!env``."""

    class EnvLoader(yaml.SafeLoader):
        pass

    EnvLoader.add_constructor("!env", _env_constructor)
    return EnvLoader


def _raw_resolve(value: object) -> str | None:
    """Resolve an ``_EnvVar`` to its string value, or stringify literals.

    Returns None if the value is None or the env var is not set.
    """
    if isinstance(value, _EnvVar):
        return os.environ.get(value.var_name)
    if value is None:
        return None
    return str(value)


def _resolve(value: object, *, required: str = "") -> str:
    """Resolve a YAML string value, handling ``!env`` tags.

    Args:
        value: Raw value from YAML.
        required: Human-readable field name. When set, raises
            ``ConfigError`` if the value is absent or empty.

    Returns:
        The resolved string, ``""`` when optional and absent.
    """
    resolved = _raw_resolve(value)
    if not resolved and required:
        if isinstance(value, _EnvVar):
            raise ConfigError(
                f"Required config '{required}': environment variable "
                f"'{value.var_name}' is not set"
            )
        raise ConfigError(f"Required config '{required}' is missing")
    return resolved or ""


# ---------------------------------------------------------------------------
# Config object
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class S3Config:
    """Credentials and region used to sign URLs.

    Attributes:
        access_key: Access key id, sent in the URL.
        secret_key: Raw secret access key bytes, used as HMAC key.
        region: Region for the endpoint host; empty for the global host.
    """

    access_key: str
    secret_key: bytes
    region: str = ""

    def __post_init__(self) -> None:
        """Register the secret key for log redaction."""
        if isinstance(self.secret_key, (bytes, bytearray)):
            SecretFilter.register_secret(bytes(self.secret_key))

    def __repr__(self) -> str:
        return (
            f"S3Config(access_key={self.access_key!r}, "
            f"secret_key=<{len(self.secret_key or b'')} bytes>, "
            f"region={self.region!r})"
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        require_credentials: bool = False,
    ) -> "S3Config":
        """Build configuration from environment variables.

        ``.env`` files are loaded first when reading ``os.environ``.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            require_credentials: Raise when the access key or secret key
                is missing instead of using empty values.

        Returns:
            S3Config instance.

        Raises:
            ConfigError: If credentials are required but missing.
        """
        if environ is None:
            load_dotenv_once()
            environ = os.environ

        access_key = environ.get(ENV_ACCESS_KEY, "")
        secret_key = environ.get(ENV_SECRET_KEY, "")
        region = environ.get(ENV_REGION, "")

        if require_credentials:
            missing = [
                name
                for name, value in (
                    (ENV_ACCESS_KEY, access_key),
                    (ENV_SECRET_KEY, secret_key),
                )
                if not value
            ]
            if missing:
                raise ConfigError(
                    f"Missing environment variables: {', '.join(missing)}"
                )
        elif not access_key or not secret_key:
            logger.warning(
                "AWS credentials not set; signed URLs will be rejected"
            )

        config = cls(
            access_key=access_key,
            secret_key=secret_key.encode("utf-8"),
            region=region,
        )
        logger.info(
            "S3 config loaded from environment: region=%s",
            region or "(default)",
        )
        return config

    @classmethod
    def from_yaml(cls, config_path: Path | None = None) -> "S3Config":
        """Load configuration from a YAML file.

        A ``.env`` file is loaded first so ``!env`` tags can refer to it.

        Args:
            config_path: Path to YAML config file. Defaults to
                ``~/.config/s3file/s3file.yaml`` (XDG).

        Returns:
            S3Config instance.

        Raises:
            ConfigError: If the file is missing, malformed, or required
                values are absent.
        """
        load_dotenv_once()

        if config_path is None:
            config_path = get_config_path()

        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            try:
                raw = yaml.load(f, Loader=_make_loader())
            except yaml.YAMLError as e:
                raise ConfigError(
                    f"Invalid YAML in {config_path}: {e}"
                ) from e

        if not isinstance(raw, dict):
            raise ConfigError(
                f"Config file must be a YAML mapping: {config_path}"
            )

        return cls._from_raw(raw)

    @classmethod
    def _from_raw(cls, raw: dict) -> "S3Config":
        """Build config from parsed (but unresolved) YAML dict."""
        aws = raw.get("aws", {})
        if not isinstance(aws, dict):
            raise ConfigError("'aws' must be a YAML mapping")

        config = cls(
            access_key=_resolve(
                aws.get("access_key_id"), required="aws.access_key_id"
            ),
            secret_key=_resolve(
                aws.get("secret_access_key"),
                required="aws.secret_access_key",
            ).encode("utf-8"),
            region=_resolve(aws.get("region")),
        )
        logger.info(
            "S3 config loaded from YAML: region=%s",
            config.region or "(default)",
        )
        return config
