"""Menu module - Public, unauthenticated menu for customers."""

# Module metadata
__module_info__ = {
    "name": "menu",
    "version": "1.0.0",
    "description": "Customer-facing menu",
    "dependencies": ["stores", "categories", "products", "tables"],
}
