#!/usr/bin/env python
from catalog import config
from sdk.pycatalog import CatalogClient, CatalogAPIError


def main():
    c = CatalogClient(base_url=config.API_URL)

    # -----------------------------
    # Start from an empty store
    # -----------------------------
    print("Resetting store...")
    print(c.reset())

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    gpu = c.create_product("RTX 4060", "Видеокарты", "8 ГБ GDDR6", 32999, 14, 4.7, "https://example.com/4060.jpg")
    cpu = c.create_product("Ryzen 5 7500F", "Процессоры", "AM5, 6 ядер", 13299, 30, 4.8, "https://example.com/7500f.jpg")
    print(gpu)
    print(cpu)

    # -----------------------------
    # List / filter
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())
    print("\nOnly graphics cards...")
    print(c.list_products(category="Видеокарты"))

    # -----------------------------
    # Partial update
    # -----------------------------
    print("\nDropping the GPU price...")
    print(c.update_product(gpu["id"], price=29999, stock=10))

    # -----------------------------
    # Rejected input
    # -----------------------------
    print("\nTrying an out-of-range rating...")
    try:
        c.update_product(cpu["id"], rating=7)
    except CatalogAPIError as e:
        print(f"Rejected: {e.message}")

    # -----------------------------
    # Delete
    # -----------------------------
    print(f"\nDeleting product {gpu['id']}...")
    c.delete_product(gpu["id"])
    try:
        c.get_product(gpu["id"])
    except CatalogAPIError as e:
        print(f"Lookup after delete: {e.status_code} {e.message}")

    print("\nFinal catalogue:")
    print(c.list_products())


if __name__ == "__main__":
    main()
