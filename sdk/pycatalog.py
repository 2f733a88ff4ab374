# sdk/pycatalog.py
import requests
import httpx
from typing import Any, Dict, List, Optional
from rich import print


class CatalogAPIError(requests.exceptions.HTTPError):
    """Non-2xx answer from the catalog API, carrying the server's error message."""

    def __init__(self, status_code: int, message: str, response=None):
        super().__init__(f"HTTP {status_code}: {message}", response=response)
        self.status_code = status_code
        self.message = message


def _check(r) -> Any:
    """Return the decoded body of a successful response, raise CatalogAPIError otherwise."""
    if r.status_code >= 400:
        try:
            message = r.json().get("error") or r.text
        except (ValueError, AttributeError):
            message = r.text
        raise CatalogAPIError(r.status_code, message, response=r)
    if r.status_code == 204 or not r.content:
        return None
    return r.json()


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:4000", timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def reset(self, seed: bool = False):
        params = {"seed": "true"} if seed else {}
        return _check(self.session.post(self._url("/reset"), params=params, timeout=self.timeout))

    # Products
    def list_products(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {}
        if category:
            params["category"] = category
        r = self.session.get(self._url("/api/products"), params=params, timeout=self.timeout)
        return _check(r)

    def list_categories(self) -> List[str]:
        r = self.session.get(self._url("/api/categories"), timeout=self.timeout)
        return _check(r)["categories"]

    def get_product(self, product_id: int) -> Dict[str, Any]:
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        return _check(r)

    def create_product(self, name: str, category: str, description: str, price: float,
                       stock: int, rating: float, image: str) -> Dict[str, Any]:
        r = self.session.post(self._url("/api/products"), json={
            "name": name, "category": category, "description": description,
            "price": price, "stock": stock, "rating": rating, "image": image,
        }, timeout=self.timeout)
        return _check(r)

    def update_product(self, product_id: int, **fields) -> Dict[str, Any]:
        # only the fields passed are sent, so the rest stay untouched server-side
        r = self.session.patch(self._url(f"/api/products/{product_id}"), json=fields, timeout=self.timeout)
        return _check(r)

    def delete_product(self, product_id: int) -> None:
        r = self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        _check(r)

    # Async listing (example)
    async def list_products_async(self, category: Optional[str] = None, transport=None) -> List[Dict[str, Any]]:
        params = {"category": category} if category else {}
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport) as client:
            r = await client.get("/api/products", params=params)
            return _check(r)


if __name__ == "__main__":
    import argparse
    from catalog import config

    parser = argparse.ArgumentParser(description="PyCatalog CLI")
    parser.add_argument("--url", default=config.API_URL, help="Base URL of the catalog API")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    lp = subparsers.add_parser("list-products", help="List all products")
    lp.add_argument("--category", help="Filter products by category")

    subparsers.add_parser("list-categories", help="List allowed categories")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--category", required=True, help="Product category")
    cp.add_argument("--description", default="", help="Product description")
    cp.add_argument("--price", type=float, required=True, help="Price")
    cp.add_argument("--stock", type=int, required=True, help="Units in stock")
    cp.add_argument("--rating", type=float, default=0.0, help="Rating between 0 and 5")
    cp.add_argument("--image", default="", help="Image URL")

    up = subparsers.add_parser("update-product", help="Change some fields of a product")
    up.add_argument("--product-id", type=int, required=True, help="ID of the product")
    up.add_argument("--name")
    up.add_argument("--category")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--stock", type=int)
    up.add_argument("--rating", type=float)
    up.add_argument("--image")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    rs = subparsers.add_parser("reset", help="Empty the store")
    rs.add_argument("--seed", action="store_true", help="Reload the demo catalogue")

    # ---------------------------
    # Parse and execute
    # ---------------------------
    args = parser.parse_args()
    c = CatalogClient(base_url=args.url)

    try:
        if args.command == "list-products":
            print(c.list_products(args.category))
        elif args.command == "list-categories":
            print(c.list_categories())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.category, args.description,
                                   args.price, args.stock, args.rating, args.image))
        elif args.command == "update-product":
            fields = {k: getattr(args, k) for k in
                      ("name", "category", "description", "price", "stock", "rating", "image")
                      if getattr(args, k) is not None}
            print(c.update_product(args.product_id, **fields))
        elif args.command == "delete-product":
            c.delete_product(args.product_id)
            print(f"[green]Deleted product {args.product_id}[/green]")
        elif args.command == "reset":
            print(c.reset(args.seed))
    except CatalogAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
