"""Tables module - Numbered dining tables and their QR menu links."""

# Module metadata
__module_info__ = {
    "name": "tables",
    "version": "1.0.0",
    "description": "Dining tables",
    "dependencies": ["stores"],
}
