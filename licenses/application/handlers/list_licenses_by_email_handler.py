"""
ListLicensesByEmailHandler.

Handler for listing licenses owned by an email address.
"""

from typing import List

from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.list_licenses_by_email import ListLicensesByEmailQuery
from licenses.ports.license_repository import LicenseRepository


class ListLicensesByEmailHandler:
    """Handler for ListLicensesByEmailQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesByEmailQuery) -> List[LicenseDTO]:
        """
        Handle list licenses by email query.

        Args:
            query: ListLicensesByEmailQuery

        Returns:
            List of LicenseDTO, newest first
        """
        records = await self.license_repository.find_by_user_email(query.user_email.strip())
        return [LicenseDTO.from_record(record) for record in records]
