"""
Django settings package.

Pick a module with DJANGO_SETTINGS_MODULE:
- base.py: shared settings, configured from environment variables
- dev.py: local development (console email, in-process notifications)
- test.py: pytest (in-memory SQLite, eager Celery, locmem email)
- prod.py: production (secret key required, signature checks enforced)
"""
