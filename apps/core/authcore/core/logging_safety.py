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


def safe_email_label(email: Any) -> str:
    """Hash the mailbox part of an address while keeping its domain readable.

    ``alice@example.com`` becomes ``email-<digest>@example.com``. Values without
    a domain are hashed whole.
    """
    text = str(email or "").strip().lower()
    local, sep, domain = text.rpartition("@")
    if not sep or not local or not domain:
        return safe_log_identifier(text, prefix="email")
    return f"{safe_log_identifier(local, prefix='email')}@{domain}"
