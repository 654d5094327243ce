"""Byte-level fingerprints of published files."""

import hashlib
import os
from typing import Optional

from .models import PublishOutcome

_CHUNK_SIZE = 64 * 1024


def fingerprint(path: str) -> Optional[str]:
    """
    SHA-256 hex digest of the file at ``path``, or None if there is no file.

    Only bytes are compared, so a file that parses to the same YAML but is
    formatted differently has a different fingerprint.
    """
    if not os.path.isfile(path):
        return None

    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def classify(before: Optional[str], after: Optional[str]) -> PublishOutcome:
    """Classify a publish from the fingerprints taken around it."""
    if before is None:
        return PublishOutcome.CREATED
    if before == after:
        return PublishOutcome.UNCHANGED
    return PublishOutcome.CHANGED
