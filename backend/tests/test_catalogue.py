from storefront.db import Base
from storefront.services.catalog_service import CatalogService


def _names(products):
    return [p.name for p in products]


def test_list_products_only_active_newest_first(db_session, seeded):
    products = CatalogService(db_session).list_products()
    assert _names(products) == ["Stainless Steel Water Bottle", "Yoga Mat", "Wireless Earbuds"]
    assert all(p.is_active for p in products)


def test_search_matches_name_or_description_case_insensitive(db_session, seeded, make_product):
    make_product("Desk Lamp", 30.0, "Furniture", "Warm light, matte finish")
    svc = CatalogService(db_session)

    assert set(_names(svc.list_products(search="mat"))) == {"Yoga Mat", "Desk Lamp"}
    assert _names(svc.list_products(search="MAT")) == _names(svc.list_products(search="mat"))
    assert "Wireless Earbuds" not in _names(svc.list_products(search="mat"))
    assert _names(svc.list_products(search="cold for 24")) == ["Stainless Steel Water Bottle"]


def test_search_treats_wildcards_literally(db_session, make_product):
    make_product("100% Cotton Tee", 15.0, "Clothing")
    make_product("Cotton Socks", 5.0, "Clothing")
    svc = CatalogService(db_session)
    assert _names(svc.list_products(search="100%")) == ["100% Cotton Tee"]
    assert svc.list_products(search="_") == []


def test_empty_search_imposes_no_filter(db_session, seeded):
    assert len(CatalogService(db_session).list_products(search="")) == 3


def test_category_filter_is_exact_and_case_sensitive(db_session, seeded):
    svc = CatalogService(db_session)
    sports = svc.list_products(category="Sports")
    assert set(_names(sports)) == {"Yoga Mat", "Stainless Steel Water Bottle"}
    assert svc.list_products(category="sports") == []
    assert len(svc.list_products(category="all")) == 3


def test_filters_compose(db_session, seeded):
    svc = CatalogService(db_session)
    assert _names(svc.list_products(search="mat", category="Sports")) == ["Yoga Mat"]
    assert svc.list_products(search="mat", category="Electronics") == []


def test_price_sorting(db_session, seeded, make_product):
    make_product("Bargain Band", 24.99, "Sports")
    svc = CatalogService(db_session)
    asc = [p.price for p in svc.list_products(sort="price-asc")]
    desc = [p.price for p in svc.list_products(sort="price-desc")]
    assert asc == sorted(asc)
    assert desc == sorted(desc, reverse=True)
    assert asc[0] == 24.99


def test_equal_prices_are_ordered_by_id(db_session, make_product):
    a = make_product("Alpha", 10.0)
    b = make_product("Beta", 10.0)
    ids = [p.id for p in CatalogService(db_session).list_products(sort="price-asc")]
    assert ids == sorted([a.id, b.id])


def test_name_sorting(db_session, seeded):
    svc = CatalogService(db_session)
    assert _names(svc.list_products(sort="name-asc")) == [
        "Stainless Steel Water Bottle",
        "Wireless Earbuds",
        "Yoga Mat",
    ]
    assert _names(svc.list_products(sort="name-desc")) == [
        "Yoga Mat",
        "Wireless Earbuds",
        "Stainless Steel Water Bottle",
    ]


def test_unknown_sort_falls_back_to_newest(db_session, seeded):
    svc = CatalogService(db_session)
    assert _names(svc.list_products(sort="bogus")) == _names(svc.list_products())


def test_limit_caps_results(db_session, seeded):
    assert _names(CatalogService(db_session).list_products(limit=1)) == ["Stainless Steel Water Bottle"]


def test_get_product_hides_inactive(db_session, seeded):
    svc = CatalogService(db_session)
    assert svc.get_product(seeded["mat"].id).name == "Yoga Mat"
    assert svc.get_product(seeded["hidden"].id) is None
    assert svc.get_product("does-not-exist") is None


def test_related_products_same_category_excluding_self(db_session, seeded):
    svc = CatalogService(db_session)
    related = svc.get_related_products("Sports", seeded["mat"].id)
    assert _names(related) == ["Stainless Steel Water Bottle"]
    assert svc.get_related_products(None, seeded["mat"].id) == []


def test_related_products_respects_limit(db_session, make_product):
    items = [make_product(f"Ball {i}", 5.0, "Sports") for i in range(6)]
    related = CatalogService(db_session).get_related_products("Sports", items[0].id)
    assert len(related) == 4
    assert items[0].id not in {p.id for p in related}


def test_reads_fail_open_on_store_error(engine, db_session, seeded):
    product_id = seeded["mat"].id
    db_session.close()
    Base.metadata.drop_all(bind=engine)

    svc = CatalogService(db_session)
    assert svc.list_products(search="mat") == []
    assert svc.get_product(product_id) is None
    assert svc.get_related_products("Sports", product_id) == []


# --- HTTP ---


def test_list_products_endpoint(client, seeded):
    res = client.get("/api/products", params={"category": "Sports", "sort": "price-asc"})
    assert res.status_code == 200
    body = res.json()
    assert [p["name"] for p in body["products"]] == ["Stainless Steel Water Bottle", "Yoga Mat"]
    first = body["products"][0]
    assert first["price"] == 24.99
    assert first["stock_quantity"] == 80
    assert first["is_active"] is True


def test_list_products_endpoint_returns_empty_on_store_error(client, engine, db_session, seeded):
    db_session.close()
    Base.metadata.drop_all(bind=engine)
    res = client.get("/api/products")
    assert res.status_code == 200
    assert res.json() == {"products": []}


def test_get_product_endpoint(client, seeded):
    res = client.get(f"/api/products/{seeded['earbuds'].id}")
    assert res.status_code == 200
    assert res.json()["name"] == "Wireless Earbuds"

    res = client.get(f"/api/products/{seeded['hidden'].id}")
    assert res.status_code == 404
    assert res.json()["detail"] == "Product not found"


def test_related_products_endpoint(client, seeded):
    res = client.get(f"/api/products/{seeded['bottle'].id}/related")
    assert res.status_code == 200
    assert [p["name"] for p in res.json()["products"]] == ["Yoga Mat"]

    assert client.get("/api/products/missing/related").status_code == 404
