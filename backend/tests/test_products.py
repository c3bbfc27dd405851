from datetime import datetime, timedelta, timezone

import pytest

from marketplace.models.product_db import Product

from conftest import BUYER, SELLER


def insert_products(session, settings, count, **fields):
    """Insert rows directly so creation times are strictly increasing."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ids = []
    for n in range(1, count + 1):
        product = Product(
            org_id=settings.org_id,
            app_id=settings.app_id,
            owner_id=fields.get("owner_id", SELLER),
            title=f"Item {n}",
            price=fields.get("price", n),
            category=fields.get("category", "misc"),
            visibility=fields.get("visibility", "public"),
            created_at=start + timedelta(minutes=n),
            updated_at=start + timedelta(minutes=n),
        )
        session.add(product)
        ids.append(product.id)
    session.commit()
    return ids


@pytest.mark.integration
class TestCreateProduct:
    def test_owner_comes_from_token_not_body(self, client, auth):
        response = client.post(
            "/products",
            json={"title": "Road bike", "price": 300, "category": "sports", "ownerId": "someone-else"},
            headers=auth(SELLER),
        )
        assert response.status_code == 201
        product = client.get(f"/products/{response.json()['id']}").json()
        assert product["ownerId"] == SELLER

    def test_defaults_are_applied(self, client, make_product):
        product = client.get(f"/products/{make_product()}").json()
        assert product["inventory"] == 1
        assert product["condition"] == "used"
        assert product["visibility"] == "public"
        assert product["pickup"] is True
        assert product["shipOptions"] == []
        assert product["photos"] == []
        assert product["createdAt"]

    def test_category_is_trimmed(self, client, make_product):
        product = client.get(f"/products/{make_product(category='  books  ')}").json()
        assert product["category"] == "books"

    @pytest.mark.parametrize(
        "body",
        [
            {"title": "A", "price": 1, "category": "misc"},
            {"title": "A" * 81, "price": 1, "category": "misc"},
            {"title": "Chair", "price": -1, "category": "misc"},
            {"title": "Chair", "price": 1, "category": "misc", "inventory": 1.5},
            {"title": "Chair", "price": 1, "category": "misc", "condition": "broken"},
            {"title": "Chair", "price": 1, "category": "misc", "photos": ["p"] * 13},
            {"title": "Chair", "price": "12", "category": "misc"},
            {"title": "Chair", "price": 1, "category": "misc", "pickup": "yes"},
            {"title": "Chair", "price": 1},
        ],
    )
    def test_invalid_bodies_are_rejected(self, client, auth, body):
        response = client.post("/products", json=body, headers=auth(SELLER))
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_infinite_price_is_rejected(self, client, auth):
        response = client.post(
            "/products",
            content='{"title": "Chair", "price": Infinity, "category": "misc"}',
            headers={**auth(SELLER), "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"
        assert client.get("/products").json()["total"] == 0


@pytest.mark.integration
class TestListProducts:
    def test_second_page_of_twenty_five(self, client, session, settings):
        ids = insert_products(session, settings, 25)
        newest_first = list(reversed(ids))

        response = client.get("/products", params={"page": 2, "pageSize": 10})

        body = response.json()
        assert response.status_code == 200
        assert body["total"] == 25
        assert body["page"] == 2
        assert body["pageSize"] == 10
        assert [item["id"] for item in body["items"]] == newest_first[10:20]

    def test_public_listing_hides_private_products(self, client, make_product):
        public_id = make_product(title="Visible chair")
        make_product(title="Hidden chair", visibility="private")

        for params in ({}, {"visibility": "private"}, {"q": "hidden"}):
            body = client.get("/products", params=params).json()
            assert all(item["visibility"] == "public" for item in body["items"])
        assert [i["id"] for i in client.get("/products").json()["items"]] == [public_id]

    def test_owner_listing_includes_private(self, client, auth, make_product):
        make_product(title="Mine public")
        make_product(title="Mine private", visibility="private")
        make_product(uid=BUYER, title="Not mine")

        body = client.get("/products", params={"ownerId": "me"}, headers=auth(SELLER)).json()

        assert body["total"] == 2
        assert {item["title"] for item in body["items"]} == {"Mine public", "Mine private"}

        only_private = client.get(
            "/products", params={"ownerId": "me", "visibility": "private"}, headers=auth(SELLER)
        ).json()
        assert [item["title"] for item in only_private["items"]] == ["Mine private"]

    def test_owner_listing_requires_token(self, client):
        response = client.get("/products", params={"ownerId": "me"})
        assert response.status_code == 401

    def test_filters(self, client, make_product):
        make_product(title="Walnut table", category="furniture", condition="new", price=500)
        make_product(title="Pine table", category="furniture", condition="used", price=80)
        make_product(title="Tennis racket", category="sports", condition="used", price=40)

        def titles(**params):
            return sorted(i["title"] for i in client.get("/products", params=params).json()["items"])

        assert titles(q="TABLE") == ["Pine table", "Walnut table"]
        assert titles(q="sport") == ["Tennis racket"]
        assert titles(category="furniture", condition="used") == ["Pine table"]
        assert titles(minPrice=50, maxPrice=100) == ["Pine table"]
        assert titles(maxPrice=40) == ["Tennis racket"]

    def test_page_size_is_clamped(self, client, session, settings):
        insert_products(session, settings, 60)

        body = client.get("/products", params={"pageSize": 500, "page": 0}).json()
        assert body["pageSize"] == 50
        assert body["page"] == 1
        assert len(body["items"]) == 50

        assert client.get("/products").json()["pageSize"] == 12

    @pytest.mark.parametrize("path", ["/products", "/reviews", "/bookmarks", "/offers"])
    def test_huge_page_is_rejected(self, client, auth, path):
        response = client.get(path, params={"page": 10**20}, headers=auth(SELLER))
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_other_tenants_are_invisible(self, client, session):
        session.add(
            Product(org_id="other-org", app_id="web", owner_id=SELLER, title="Elsewhere", price=1, category="misc")
        )
        session.commit()
        assert client.get("/products").json()["total"] == 0

    def test_me_products(self, client, auth, make_product):
        make_product(title="First")
        make_product(title="Second", visibility="private")
        make_product(uid=BUYER)

        body = client.get("/me/products", headers=auth(SELLER)).json()
        assert {item["title"] for item in body["items"]} == {"First", "Second"}


@pytest.mark.integration
class TestGetUpdateDelete:
    def test_get_missing_product_is_404(self, client):
        response = client.get("/products/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_owner_can_update_some_fields(self, client, auth, make_product):
        product_id = make_product()

        response = client.put(
            f"/products/{product_id}",
            json={"price": 99.5, "shipOptions": ["UPS"], "ownerId": BUYER},
            headers=auth(SELLER),
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        product = client.get(f"/products/{product_id}").json()
        assert product["price"] == 99.5
        assert product["shipOptions"] == ["UPS"]
        assert product["title"] == "Oak desk"
        assert product["ownerId"] == SELLER

    def test_non_owner_update_is_403(self, client, auth, make_product):
        product_id = make_product()
        response = client.put(f"/products/{product_id}", json={"price": 1}, headers=auth(BUYER))
        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}

    def test_update_missing_product_is_404(self, client, auth):
        response = client.put("/products/nope", json={"price": 1}, headers=auth(SELLER))
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "body", [{}, {"ownerId": "x"}, {"title": None}, {"condition": "broken"}, {"price": "5"}, {"pickup": "no"}]
    )
    def test_bad_update_bodies_are_400(self, client, auth, make_product, body):
        product_id = make_product()
        response = client.put(f"/products/{product_id}", json=body, headers=auth(SELLER))
        assert response.status_code == 400

    def test_infinite_price_update_is_rejected(self, client, auth, make_product):
        product_id = make_product()
        response = client.put(
            f"/products/{product_id}",
            content='{"price": Infinity}',
            headers={**auth(SELLER), "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"
        assert client.get(f"/products/{product_id}").json()["price"] == 120

    def test_owner_can_delete(self, client, auth, make_product):
        product_id = make_product()

        assert client.delete(f"/products/{product_id}", headers=auth(BUYER)).status_code == 403
        assert client.delete(f"/products/{product_id}", headers=auth(SELLER)).json() == {"ok": True}
        assert client.get(f"/products/{product_id}").status_code == 404
