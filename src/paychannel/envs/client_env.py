from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import BaseModel, computed_field, field_validator
from urllib.parse import urlparse

from ..crypto.keys import load_private_key_from_pem, public_key_der_b64


def _validate_base_url(name: str, v: str) -> str:
    if not v:
        raise ValueError(f"{name} cannot be empty")
    parsed = urlparse(v)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"{name} must start with http:// or https://")
    if not parsed.netloc:
        raise ValueError(f"{name} must include a host")
    return v


class Settings(BaseModel):
    """Typed channel client settings built from environment variables."""

    channel_private_key_pem: str
    escrow_base_url: str
    state_service_base_url: str
    request_timeout: float = 10.0
    sync_timeout: Optional[float] = None
    log_level: str = "INFO"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def public_key_der_b64(self) -> str:
        """DER-encoded base64 public key of the channel sender."""
        private_key = load_private_key_from_pem(self.channel_private_key_pem)
        return public_key_der_b64(private_key.public_key())

    @field_validator("channel_private_key_pem")
    @classmethod
    def validate_channel_private_key_pem(cls, v: str) -> str:
        """Validate that the private key is a PEM-encoded EC private key."""
        if not v:
            raise ValueError("Channel private key cannot be empty")
        try:
            load_private_key_from_pem(v)
        except Exception as e:
            raise ValueError(f"Invalid channel private key PEM: {e}") from e
        return v

    @field_validator("escrow_base_url")
    @classmethod
    def validate_escrow_base_url(cls, v: str) -> str:
        return _validate_base_url("Escrow base URL", v)

    @field_validator("state_service_base_url")
    @classmethod
    def validate_state_service_base_url(cls, v: str) -> str:
        return _validate_base_url("State service base URL", v)

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Request timeout must be positive")
        return v

    @field_validator("sync_timeout")
    @classmethod
    def validate_sync_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("Sync timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def get_settings() -> Settings:
    channel_private_key_pem = os.environ.get("CHANNEL_PRIVATE_KEY_PEM")
    escrow_base_url = os.environ.get("ESCROW_BASE_URL")
    state_service_base_url = os.environ.get("STATE_SERVICE_BASE_URL")
    if not (channel_private_key_pem and escrow_base_url and state_service_base_url):
        raise ValueError(
            "CHANNEL_PRIVATE_KEY_PEM, ESCROW_BASE_URL, and STATE_SERVICE_BASE_URL are required"
        )

    sync_timeout_str = os.environ.get("CHANNEL_SYNC_TIMEOUT")
    return Settings(
        channel_private_key_pem=channel_private_key_pem,
        escrow_base_url=escrow_base_url,
        state_service_base_url=state_service_base_url,
        request_timeout=float(os.environ.get("CHANNEL_REQUEST_TIMEOUT", "10.0")),
        sync_timeout=float(sync_timeout_str) if sync_timeout_str else None,
        log_level=os.environ.get("CHANNEL_LOG_LEVEL", "INFO"),
    )
