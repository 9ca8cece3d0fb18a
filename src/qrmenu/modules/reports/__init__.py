"""Reports module - Sales figures and product affinity for a store."""

# Module metadata
__module_info__ = {
    "name": "reports",
    "version": "1.0.0",
    "description": "Sales and affinity reports",
    "dependencies": ["orders"],
}
