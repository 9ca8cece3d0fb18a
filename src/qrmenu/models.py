"""Import every model so Base.metadata and mapper configuration are complete.

Alembic's env.py, the seed script and the test suite import this module.
"""

from qrmenu.core.database.base import Base
from qrmenu.modules.categories.models import Category
from qrmenu.modules.orders.models import Order, OrderItem
from qrmenu.modules.products.models import Product
from qrmenu.modules.stores.models import Store
from qrmenu.modules.tables.models import DiningTable
from qrmenu.modules.tenants.models import Subscription, Tenant
from qrmenu.modules.users.models import User


__all__ = [
    "Base",
    "Category",
    "DiningTable",
    "Order",
    "OrderItem",
    "Product",
    "Store",
    "Subscription",
    "Tenant",
    "User",
]
