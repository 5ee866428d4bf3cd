"""
Licenses module - License issuance and administration.

This module handles:
- LicenseRecord entity and key generation
- Manual and payment-triggered issuance with transaction idempotency
- Administrative device reset and revocation
"""
