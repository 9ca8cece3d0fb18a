"""Stores module - Restaurant locations owned by a tenant."""

# Module metadata
__module_info__ = {
    "name": "stores",
    "version": "1.0.0",
    "description": "Store management",
    "dependencies": ["tenants"],
}
