"""Users module - staff accounts for the admin dashboard.

Authentication routes live in ``qrmenu.core.auth``; this module holds the
model, repository and schemas they use.
"""

# Module metadata
__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "Staff accounts",
    "dependencies": ["tenants"],
}
