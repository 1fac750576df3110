"""
Request signing for private API calls.

Private calls are authenticated with an ``API-Sign`` header computed as::

    base64(HMAC-SHA512(secret, path + SHA256(nonce + body)))

where ``body`` is the form-encoded request body and the SHA256 digest is
concatenated as raw bytes. The body produced by ``encode_params`` is the one
sent on the wire, so what is signed and what is sent never diverge.
"""
import base64
import binascii
import hashlib
import hmac
from decimal import Decimal
from typing import Mapping, Optional
from urllib.parse import quote

from .exceptions import ConfigurationError
from .models import ParamValue


def _stringify(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        # plain decimal, never exponent notation; integral floats drop ".0"
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return str(value)


def _quote(text: str) -> str:
    # RFC 3986 unreserved characters only; space becomes %20
    return quote(text, safe="")


def encode_params(params: Optional[Mapping[str, ParamValue]]) -> str:
    """Form-encode ``params`` preserving insertion order.

    Sequence values are expanded with indexed keys (``pair[0]=...``) and
    ``None`` values are dropped.
    """
    if not params:
        return ""

    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if item is None:
                    continue
                pairs.append(f"{_quote(f'{key}[{index}]')}={_quote(_stringify(item))}")
        else:
            pairs.append(f"{_quote(key)}={_quote(_stringify(value))}")
    return "&".join(pairs)


def decode_secret(secret: Optional[str]) -> bytes:
    """Decode the base64 API secret into raw key bytes.

    Raises:
        ConfigurationError: if the secret is missing or not valid base64.
    """
    if not secret:
        raise ConfigurationError("An API secret is required for private methods")
    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ConfigurationError(f"API secret is not valid base64: {exc}") from exc


def compute_signature(
    path: str,
    params: Optional[Mapping[str, ParamValue]],
    nonce: int,
    secret: bytes,
) -> str:
    """Return the base64 ``API-Sign`` value for one private call.

    Args:
        path: Request path exactly as used in the URL, e.g. ``/0/private/Balance``
        params: Final request parameters, already including ``nonce`` (and ``otp``)
        nonce: The nonce value present in ``params``
        secret: Decoded API secret (see ``decode_secret``)

    Raises:
        ConfigurationError: if the inputs cannot be hashed.
    """
    try:
        message = (str(nonce) + encode_params(params)).encode("utf-8")
        digest = hashlib.sha256(message).digest()
        mac = hmac.new(secret, path.encode("utf-8") + digest, hashlib.sha512)
        return base64.b64encode(mac.digest()).decode("ascii")
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Could not sign request for {path}: {exc}") from exc
