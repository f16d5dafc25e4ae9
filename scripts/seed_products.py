"""
Seed the catalog with the sample restaurant menu.

Products already present with the same name are skipped, so the script can
be run more than once. Each created product gets a CREATE_PRODUCT audit
entry attributed to the `system` user.
"""

import sys
from pathlib import Path

# Add parent directory to path so we can import from repositories
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.dependencies import build_services
from api.settings import load_settings
from domain.errors import PosError
from domain.identity import Identity, Role


SYSTEM_IDENTITY = Identity(user_id="system", name="System", role=Role.ADMIN)

SAMPLE_PRODUCTS = [
    {
        "name": "Classic Burger",
        "description": "Beef patty with lettuce, tomato and cheese",
        "price": "12.50",
        "category": "burgers",
    },
    {
        "name": "Margherita Pizza",
        "description": "Tomato sauce, mozzarella and basil",
        "price": "18.00",
        "category": "pizzas",
    },
    {
        "name": "Caesar Salad",
        "description": "Lettuce, chicken, croutons and caesar dressing",
        "price": "10.00",
        "category": "salads",
    },
    {
        "name": "Cola",
        "description": "Soft drink 350ml",
        "price": "2.50",
        "category": "drinks",
    },
    {
        "name": "Still Water",
        "description": "Bottled water 500ml",
        "price": "1.50",
        "category": "drinks",
    },
    {
        "name": "French Fries",
        "description": "A portion of crispy fries",
        "price": "5.00",
        "category": "sides",
    },
]


def seed_products() -> int:
    """Create the sample products that are missing. Returns the number created."""

    catalog = build_services(load_settings()).catalog
    existing = {product.name for product in catalog.list_active_products()}

    created = 0
    for sample in SAMPLE_PRODUCTS:
        if sample["name"] in existing:
            print(f"Product already exists: {sample['name']}")
            continue

        product = catalog.create_product(SYSTEM_IDENTITY, **sample)
        print(f"[SUCCESS] Product created: {product.name} (ID: {product.product_id})")
        created += 1

    return created


if __name__ == "__main__":
    try:
        count = seed_products()
    except (PosError, RuntimeError) as e:
        print(f"[ERROR] Failed to seed products: {e}")
        sys.exit(1)
    print(f"Done. {count} product(s) created.")
