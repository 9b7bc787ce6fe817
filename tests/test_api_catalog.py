from decimal import Decimal

import pytest

from localwear.catalog import images

SCARF = {
    "name": "Wool Scarf",
    "description": "Warm scarf",
    "price": 24.5,
    "category": "Accessories",
    "imageUrl": "https://example.com/scarf.jpg",
    "sizes": ["ONE"],
    "quantityInStock": 12,
}


def test_list_products_shows_seeded_catalog(client):
    r = client.get("/products")

    assert r.status_code == 200
    names = [p["name"] for p in r.json()]
    assert names == ["Classic T-Shirt", "Denim Jeans", "Summer Dress"]
    tee = r.json()[0]
    assert Decimal(tee["price"]) == Decimal("29.99")
    assert tee["sizes"] == ["S", "M", "L", "XL"]
    assert tee["quantityInStock"] == 100


def test_get_unknown_product(client):
    r = client.get("/products/999")

    assert r.status_code == 404
    assert r.json()["detail"] == "Product not found with id: 999"


def test_create_product(client, admin_headers):
    r = client.post("/admin/products", json=SCARF, headers=admin_headers)

    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Wool Scarf"
    assert Decimal(body["price"]) == Decimal("24.50")
    assert body["imageUrl"] == "https://example.com/scarf.jpg"
    assert client.get(f"/products/{body['id']}").json()["sizes"] == ["ONE"]


def test_create_product_validation(client, admin_headers):
    bad = {**SCARF, "price": -1}
    assert client.post("/admin/products", json=bad, headers=admin_headers).status_code == 400

    missing = {k: v for k, v in SCARF.items() if k != "name"}
    assert client.post("/admin/products", json=missing, headers=admin_headers).status_code == 400


def test_partial_update_keeps_other_fields(client, admin_headers):
    r = client.put("/admin/products/1", json={"price": 19.99}, headers=admin_headers)

    assert r.status_code == 200
    body = r.json()
    assert Decimal(body["price"]) == Decimal("19.99")
    assert body["name"] == "Classic T-Shirt"
    assert body["category"] == "T-Shirts"
    assert body["sizes"] == ["S", "M", "L", "XL"]
    assert body["quantityInStock"] == 100


def test_update_with_nulls_keeps_fields(client, admin_headers):
    r = client.put("/admin/products/2", json={"name": None, "quantityInStock": 7}, headers=admin_headers)

    assert r.status_code == 200
    assert r.json()["name"] == "Denim Jeans"
    assert r.json()["quantityInStock"] == 7


def test_update_unknown_product(client, admin_headers):
    r = client.put("/admin/products/999", json={"price": 1}, headers=admin_headers)

    assert r.status_code == 404


def test_delete_product(client, admin_headers):
    assert client.delete("/admin/products/3", headers=admin_headers).status_code == 204
    assert client.get("/products/3").status_code == 404
    assert client.delete("/admin/products/3", headers=admin_headers).status_code == 404


def test_catalog_writes_need_admin(client, customer_headers):
    assert client.post("/admin/products", json=SCARF).status_code == 401
    assert client.post("/admin/products", json=SCARF, headers=customer_headers).status_code == 403
    assert client.put("/admin/products/1", json={"price": 1}, headers=customer_headers).status_code == 403
    assert client.delete("/admin/products/1", headers=customer_headers).status_code == 403
    assert client.get("/products/1").json()["quantityInStock"] == 100


@pytest.fixture
def uploads(monkeypatch):
    calls = []

    def fake_upload(data, **options):
        calls.append((data, options))
        return {"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/localwear/products/x.png"}

    monkeypatch.setattr(images.cloudinary.uploader, "upload", fake_upload)
    return calls


def test_upload_image(client, admin_headers, uploads):
    r = client.post(
        "/admin/upload-image",
        files={"image": ("x.png", b"\x89PNG fake bytes", "image/png")},
        headers=admin_headers,
    )

    assert r.status_code == 200
    assert r.json()["imageUrl"].startswith("https://res.cloudinary.com/")
    data, options = uploads[0]
    assert data == b"\x89PNG fake bytes"
    assert options == {"folder": "localwear/products", "resource_type": "image"}


def test_upload_rejects_empty_file(client, admin_headers, uploads):
    r = client.post("/admin/upload-image", files={"image": ("x.png", b"", "image/png")}, headers=admin_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "Please select a file to upload"
    assert uploads == []


def test_upload_rejects_non_images(client, admin_headers, uploads):
    r = client.post("/admin/upload-image", files={"image": ("x.txt", b"hello", "text/plain")}, headers=admin_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "Please upload a valid image file"
    assert uploads == []


def test_upload_failure_is_server_error(client, admin_headers, monkeypatch):
    def broken(data, **options):
        raise RuntimeError("cloud unreachable")

    monkeypatch.setattr(images.cloudinary.uploader, "upload", broken)

    r = client.post("/admin/upload-image", files={"image": ("x.png", b"img", "image/png")}, headers=admin_headers)

    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to upload image: cloud unreachable"


def test_upload_needs_admin(client, customer_headers, uploads):
    r = client.post("/admin/upload-image", files={"image": ("x.png", b"img", "image/png")}, headers=customer_headers)

    assert r.status_code == 403
