"""Products module - Menu items with images and live availability."""

# Module metadata
__module_info__ = {
    "name": "products",
    "version": "1.0.0",
    "description": "Menu products",
    "dependencies": ["categories", "stores"],
}
