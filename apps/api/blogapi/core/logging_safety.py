"""Utilities for safe structured logging fields."""

from __future__ import annotations

import hashlib
from typing import Any


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def mask_email(email: str | None) -> str:
    """Keep the domain and first character of the local part: ``a***@example.com``."""
    local, separator, domain = str(email or "").strip().partition("@")
    if not separator or not local or not domain:
        return "email-invalid"
    return f"{local[0]}***@{domain}"
