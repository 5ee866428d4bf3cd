"""
ListLicensesByEmailQuery.

Query to list the licenses owned by an email address.
"""

from dataclasses import dataclass


@dataclass
class ListLicensesByEmailQuery:
    """Query to list licenses by owner email."""

    user_email: str
