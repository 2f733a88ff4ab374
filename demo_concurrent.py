import asyncio

import httpx

from catalog import config
from sdk.pycatalog import CatalogClient


async def create(client: httpx.AsyncClient, n: int):
    r = await client.post("/api/products", json={
        "name": f"Product {n}", "category": "Периферия", "description": "concurrent demo",
        "price": 100 + n, "stock": n, "rating": 4.0, "image": "",
    })
    if r.status_code != 201:
        print(f"❌ create {n} failed: {r.status_code} {r.text}")
        return None
    return r.json()["id"]


async def main():
    c = CatalogClient(base_url=config.API_URL)
    c.reset()

    # Fire the creates at once; every product must still get its own id
    print("\n⚡ Creating 20 products concurrently...")
    async with httpx.AsyncClient(base_url=config.API_URL) as client:
        ids = await asyncio.gather(*(create(client, n) for n in range(20)))

    ids = [i for i in ids if i is not None]
    print(f"Assigned ids: {sorted(ids)}")
    print("✅ all unique" if len(ids) == len(set(ids)) else "❌ duplicate ids!")

    products = await c.list_products_async()
    print(f"📦 Store now holds {len(products)} products")


if __name__ == "__main__":
    asyncio.run(main())
