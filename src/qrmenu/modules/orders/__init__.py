"""Orders module - Customer orders and their fulfilment status."""

# Module metadata
__module_info__ = {
    "name": "orders",
    "version": "1.0.0",
    "description": "Order placement and status tracking",
    "dependencies": ["stores", "products", "tables"],
}
