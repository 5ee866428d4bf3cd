"""
Activations module - License activation and device binding.

This module handles:
- Validating a (license key, device) pair
- Binding an unbound license to its first device
- Rejecting revoked licenses and foreign devices
"""
