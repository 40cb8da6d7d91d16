"""Request signing for the open platform.

Every call carries a ``sign`` query parameter: the SHA-1 hex digest of all
request parameters plus the application secret, rendered as ``key=value``
pairs, sorted and joined with ``&``.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from typing import Any

SIGN_KEY = "sign"
SECRET_KEY = "appsecret"


def canonicalize(
    app_secret: str,
    common_params: Mapping[str, Any],
    business_params: Mapping[str, Any],
) -> str:
    """Build the string that gets hashed.

    Later sources win on key collisions: secret, then common, then business.
    Any existing ``sign`` entry is ignored.
    """
    merged: dict[str, Any] = {SECRET_KEY: app_secret}
    merged.update(common_params)
    merged.update(business_params)

    pairs = sorted(f"{key}={value}" for key, value in merged.items() if key != SIGN_KEY)
    return "&".join(pairs)


def sign(
    app_secret: str,
    common_params: Mapping[str, Any],
    business_params: Mapping[str, Any],
) -> str:
    """Compute the request signature as a lowercase hex SHA-1 digest."""
    payload = canonicalize(app_secret, common_params, business_params)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()
