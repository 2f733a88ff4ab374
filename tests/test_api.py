# tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from catalog.database import CatalogStore, SEED_PRODUCTS
from catalog.main import create_app

store = CatalogStore()
app = create_app(store)
client = TestClient(app)

PRODUCT = {
    "name": "A",
    "category": "Видеокарты",
    "description": "d",
    "price": 100,
    "stock": 1,
    "rating": 4.5,
    "image": "u",
}
FIELDS = list(PRODUCT)


def reset():
    client.post("/reset")


def create(**overrides):
    return client.post("/api/products", json={**PRODUCT, **overrides})


def test_create_delete_scenario():
    reset()
    r1 = create()
    assert r1.status_code == 201
    assert r1.json()["id"] == 1
    r2 = create(name="B")
    assert r2.status_code == 201
    assert r2.json()["id"] == 2

    r3 = client.delete("/api/products/1")
    assert r3.status_code == 204
    assert r3.content == b""

    assert client.get("/api/products/1").status_code == 404
    listing = client.get("/api/products").json()
    assert [p["id"] for p in listing] == [2]


def test_created_product_matches_lookup():
    reset()
    created = create().json()
    assert {k: created[k] for k in FIELDS} == PRODUCT
    fetched = client.get(f"/api/products/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_ids_grow_past_highest_resident_id():
    reset()
    for name in ("a", "b", "c"):
        create(name=name)
    client.delete("/api/products/1")
    assert create().json()["id"] == 4
    client.delete("/api/products/4")
    # 4 is gone, so the highest resident id is 3 again
    assert create().json()["id"] == 4


def test_client_supplied_id_is_ignored():
    reset()
    r = create(id=99)
    assert r.status_code == 201
    assert r.json()["id"] == 1


def test_list_keeps_insertion_order_and_filters_by_category():
    reset()
    create(name="gpu")
    create(name="cpu", category="Процессоры")
    create(name="gpu2")
    names = [p["name"] for p in client.get("/api/products").json()]
    assert names == ["gpu", "cpu", "gpu2"]

    gpus = client.get("/api/products", params={"category": "Видеокарты"}).json()
    assert [p["name"] for p in gpus] == ["gpu", "gpu2"]
    assert client.get("/api/products", params={"category": "видеокарты"}).json() == []


def test_get_unknown_product():
    reset()
    r = client.get("/api/products/42")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


@pytest.mark.parametrize("raw_id", ["abc", "0", "-1", "1.5", "1_0", "+1", " 1", "01x", "١"])
def test_unparseable_ids_are_not_found(raw_id):
    reset()
    for n in range(10):
        create(name=f"p{n}")
    assert client.get(f"/api/products/{raw_id}").status_code == 404
    assert client.patch(f"/api/products/{raw_id}", json={}).status_code == 404
    assert client.delete(f"/api/products/{raw_id}").status_code == 404


@pytest.mark.parametrize("missing", FIELDS)
def test_create_requires_every_field(missing):
    reset()
    body = {k: v for k, v in PRODUCT.items() if k != missing}
    r = client.post("/api/products", json=body)
    assert r.status_code == 400
    assert "Missing required fields" in r.json()["error"]
    assert missing in r.json()["error"]
    assert len(store) == 0


def test_missing_fields_are_reported_together():
    reset()
    r = client.post("/api/products", json={"name": "A"})
    assert r.status_code == 400
    error = r.json()["error"]
    for field in FIELDS[1:]:
        assert field in error


@pytest.mark.parametrize("field,value", [
    ("price", 0),
    ("price", -1),
    ("price", "100"),
    ("stock", -1),
    ("stock", 1.5),
    ("stock", True),
    ("rating", 5.0001),
    ("rating", -0.0001),
    ("category", "Холодильники"),
    ("name", ""),
    ("name", "   "),
    ("description", None),
])
def test_create_rejects_invalid_values(field, value):
    reset()
    r = create(**{field: value})
    assert r.status_code == 400
    assert field in r.json()["error"]
    assert len(store) == 0


@pytest.mark.parametrize("field,value", [("rating", 0), ("rating", 5), ("stock", 0), ("price", 0.01)])
def test_create_accepts_boundaries(field, value):
    reset()
    r = create(**{field: value})
    assert r.status_code == 201
    assert r.json()[field] == value


def test_create_without_body():
    reset()
    r = client.post("/api/products")
    assert r.status_code == 400
    assert r.json() == {"error": "Request body is required"}


def test_create_with_malformed_json():
    reset()
    r = client.post("/api/products", content=b'{"name": ', headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Malformed JSON body"}


def test_create_with_non_object_body():
    reset()
    r = client.post("/api/products", json=[PRODUCT])
    assert r.status_code == 400
    assert r.json() == {"error": "Request body must be a JSON object"}


def test_patch_changes_only_given_fields():
    reset()
    original = create().json()
    r = client.patch("/api/products/1", json={"price": 250.5, "stock": 7})
    assert r.status_code == 200
    assert r.json() == {**original, "price": 250.5, "stock": 7}
    assert client.get("/api/products/1").json() == r.json()


@pytest.mark.parametrize("kwargs", [{}, {"json": {}}])
def test_empty_patch_is_a_no_op(kwargs):
    reset()
    original = create().json()
    r = client.patch("/api/products/1", **kwargs)
    assert r.status_code == 200
    assert r.json() == original


def test_patch_ignores_id_and_unknown_keys():
    reset()
    original = create().json()
    r = client.patch("/api/products/1", json={"id": 7, "color": "red"})
    assert r.status_code == 200
    assert r.json() == original
    assert client.get("/api/products/7").status_code == 404


@pytest.mark.parametrize("body", [
    {"rating": 5.0001},
    {"rating": -0.0001},
    {"price": 0},
    {"stock": -3},
    {"stock": 2.5},
    {"category": "Холодильники"},
    {"name": ""},
    {"name": None},
    {"price": 50, "rating": 6},
])
def test_invalid_patch_leaves_product_untouched(body):
    reset()
    original = create().json()
    r = client.patch("/api/products/1", json=body)
    assert r.status_code == 400
    assert "error" in r.json()
    assert client.get("/api/products/1").json() == original


def test_patch_unknown_product():
    reset()
    r = client.patch("/api/products/5", json={"rating": 99})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_delete_twice():
    reset()
    create()
    assert client.delete("/api/products/1").status_code == 204
    r = client.delete("/api/products/1")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_unknown_route_uses_error_body():
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert "error" in r.json()


def test_categories_endpoint():
    r = client.get("/api/categories")
    assert r.status_code == 200
    assert "Видеокарты" in r.json()["categories"]


def test_reset_with_seed_and_health():
    r = client.post("/reset", params={"seed": "true"})
    assert r.json() == {"status": "reset", "products": len(SEED_PRODUCTS)}
    assert client.get("/").json() == {"status": "ok", "products": len(SEED_PRODUCTS)}
    ids = [p["id"] for p in client.get("/api/products").json()]
    assert create().json()["id"] == max(ids) + 1


def test_schema_document_is_published():
    r = client.get("/api-docs/openapi.json")
    assert r.status_code == 200
    paths = r.json()["paths"]
    assert "/api/products" in paths
    assert "/api/products/{product_id}" in paths


def test_unexpected_failure_is_500(monkeypatch):
    failing = CatalogStore()

    def boom(fields):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(failing, "insert", boom)
    c = TestClient(create_app(failing), raise_server_exceptions=False)
    r = c.post("/api/products", json=PRODUCT)
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}


def _raw_product(price_literal):
    # JSON text with the price spliced in verbatim, so non-finite literals reach the server
    return (
        '{"name": "A", "category": "Видеокарты", "description": "d", '
        f'"price": {price_literal}, "stock": 1, "rating": 4.5, "image": "u"}}'
    ).encode()


@pytest.mark.parametrize("literal", ["1e309", "Infinity", "NaN"])
def test_create_rejects_non_finite_price(literal):
    reset()
    r = client.post("/api/products", content=_raw_product(literal),
                    headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert "price" in r.json()["error"]
    assert len(store) == 0
    assert client.get("/api/products").json() == []


@pytest.mark.parametrize("body", [b'{"price": 1e309}', b'{"price": Infinity}', b'{"rating": NaN}'])
def test_patch_rejects_non_finite_numbers(body):
    reset()
    original = create().json()
    r = client.patch("/api/products/1", content=body, headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert client.get("/api/products/1").json() == original


@pytest.mark.parametrize("body", [b"[1]", b'{"name": ', b'"text"'])
def test_patch_unknown_product_wins_over_bad_body(body):
    reset()
    r = client.patch("/api/products/999", content=body, headers={"content-type": "application/json"})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_patch_body_must_be_json_object():
    reset()
    original = create().json()
    r = client.patch("/api/products/1", content=b"[1]", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Request body must be a JSON object"}
    r = client.patch("/api/products/1", content=b'{"name": ', headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Malformed JSON body"}
    assert client.get("/api/products/1").json() == original


def test_patch_schema_is_documented():
    schema = client.get("/api-docs/openapi.json").json()
    body = schema["paths"]["/api/products/{product_id}"]["patch"]["requestBody"]
    assert "rating" in body["content"]["application/json"]["schema"]["properties"]
