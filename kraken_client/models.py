"""
Data models for the Kraken API client.

Configuration is held in immutable Pydantic models created once per client.
Request data uses plain typed mappings, since the API takes free-form
parameters per method.
"""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_URL = "https://api.kraken.com"
DEFAULT_VERSION = "0"
DEFAULT_TIMEOUT_MS = 5000

Scalar = Union[str, int, float, bool]
ParamValue = Union[Scalar, Sequence[Scalar], None]
RequestParams = Dict[str, ParamValue]


class ClientOptions(BaseModel):
    """Options accepted by ``KrakenClient``.

    Attributes
    ----------
    version: API version path segment.
    otp: Two-factor password sent with every private call.
    timeout: Request timeout in milliseconds.
    """
    model_config = ConfigDict(extra="ignore")

    version: str = DEFAULT_VERSION
    otp: Optional[str] = Field(default=None, repr=False)
    timeout: int = DEFAULT_TIMEOUT_MS

    @field_validator("version", mode="before")
    @classmethod
    def _default_version(cls, value: Any) -> Any:
        return value or DEFAULT_VERSION

    @field_validator("timeout", mode="before")
    @classmethod
    def _default_timeout(cls, value: Any) -> Any:
        return value or DEFAULT_TIMEOUT_MS

    @field_validator("otp", mode="before")
    @classmethod
    def _otp_as_text(cls, value: Any) -> Any:
        # numeric codes such as 123456 are accepted and sent as text
        return value if value is None else str(value)

    @classmethod
    def parse(cls, options: Union["ClientOptions", Mapping[str, Any], str, None]) -> "ClientOptions":
        """Normalize the forms the constructor accepts.

        A bare string is shorthand for ``{"otp": string}``.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, str):
            return cls(otp=options)
        return cls(**dict(options))


class ClientConfig(BaseModel):
    """Immutable client configuration.

    Attributes
    ----------
    url: Base URL of the REST API, without a trailing slash.
    version: API version path segment (e.g. "0").
    key: API key sent in the ``API-Key`` header.
    secret: Base64-encoded API secret.
    otp: Optional two-factor password.
    timeout_ms: Request timeout in milliseconds.
    """
    model_config = ConfigDict(frozen=True)

    url: str = DEFAULT_URL
    version: str = DEFAULT_VERSION
    key: Optional[str] = None
    secret: Optional[str] = Field(default=None, repr=False)
    otp: Optional[str] = Field(default=None, repr=False)
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @classmethod
    def from_options(
        cls,
        key: Optional[str],
        secret: Optional[str],
        options: Union[ClientOptions, Mapping[str, Any], str, None] = None,
        url: str = DEFAULT_URL,
    ) -> "ClientConfig":
        opts = ClientOptions.parse(options)
        return cls(
            url=url,
            version=opts.version,
            key=key,
            secret=secret,
            otp=opts.otp,
            timeout_ms=opts.timeout,
        )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a configuration from ``KRAKEN_API_*`` environment variables."""
        return cls(
            url=os.getenv("KRAKEN_API_URL") or DEFAULT_URL,
            version=os.getenv("KRAKEN_API_VERSION") or DEFAULT_VERSION,
            key=os.getenv("KRAKEN_API_KEY"),
            secret=os.getenv("KRAKEN_API_SECRET"),
            otp=os.getenv("KRAKEN_API_OTP") or None,
            timeout_ms=int(os.getenv("KRAKEN_API_TIMEOUT_MS") or DEFAULT_TIMEOUT_MS),
        )


@dataclass(frozen=True)
class PreparedRequest:
    """A fully built request, ready to hand to a transport.

    ``body`` holds exactly the bytes that were signed for private calls.
    """
    url: str
    path: str
    headers: Dict[str, str]
    body: bytes
    params: RequestParams = field(default_factory=dict)
    nonce: Optional[int] = None
