"""
License key generation.

Keys are opaque, human-typeable identifiers of the form
XD-XXXX-XXXX-XXXX. Uniqueness is enforced by the license store,
not by the generator.
"""

import re
import secrets
import string

LICENSE_KEY_PREFIX = "XD"
KEY_ALPHABET = string.ascii_uppercase + string.digits
SEGMENT_LENGTH = 4
SEGMENT_COUNT = 3

LICENSE_KEY_PATTERN = re.compile(r"^XD-[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}$")


def generate_license_key(prefix: str = LICENSE_KEY_PREFIX) -> str:
    """
    Generate a license key in format: PREFIX-XXXX-XXXX-XXXX.

    Args:
        prefix: Key prefix (defaults to 'XD')

    Returns:
        Generated license key string
    """
    parts = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(SEGMENT_LENGTH))
        for _ in range(SEGMENT_COUNT)
    ]
    return f"{prefix}-{'-'.join(parts)}"


def normalize_license_key(raw_key: str) -> str:
    """Strip whitespace and upper-case a user-typed key."""
    return (raw_key or "").strip().upper()
