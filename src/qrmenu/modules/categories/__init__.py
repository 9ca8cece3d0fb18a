"""Categories module - Menu sections within a store."""

# Module metadata
__module_info__ = {
    "name": "categories",
    "version": "1.0.0",
    "description": "Menu categories",
    "dependencies": ["stores"],
}
