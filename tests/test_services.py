import asyncio
import json
from urllib.parse import parse_qsl

import pytest

from store2.adapters.request_builder import CallOptions
from store2.core.domain.area import Area
from store2.core.domain.availabilities import UpsertAvailability
from store2.core.domain.catalogs import CreateCatalog
from store2.core.domain.products import CreateProduct, ReplaceProduct, UpdateProduct, UpsertProduct
from store2.core.domain.update import UpdateField
from store2.core.errors import HTTPStatusError, ScrollProtocolError, TransportError
from store2.core.services import (
    CatalogSearchOptions,
    JobSearchOptions,
    ProductSearchOptions,
    ScrollMode,
    ScrollOptions,
)

PIN = "AD8CCDD5F9"


def query(request):
    return parse_qsl(request.url.query.decode("ascii"), keep_blank_values=True)


async def test_me(store, api):
    api.add("GET", "/", fixture="me.success")
    me = await store.root.me()
    assert me.user.email == "jane@acme.example"
    assert me.merchant.order_unit == "PCE"
    assert me.catalogs_link.endswith("/catalogs")


async def test_ping(store, api):
    api.add("HEAD", "/")
    assert await store.root.ping() is None
    assert api.last.method == "HEAD"


async def test_ping_unauthorized(store, api):
    api.add("HEAD", "/", status=401)
    with pytest.raises(HTTPStatusError) as excinfo:
        await store.root.ping()
    assert excinfo.value.code == 401


async def test_catalog_search(store, api):
    api.add("GET", "/catalogs", fixture="catalogs.search.success")
    res = await store.catalogs.search(CatalogSearchOptions(skip=0, take=2, sort="-created,id"))
    assert res.total_items == 3
    assert [c.pin for c in res.items] == ["AD8CCDD5F9", "BEEF1C0DE1"]
    assert query(api.last) == [("skip", "0"), ("take", "2"), ("sort", "-created,id")]


async def test_catalog_search_without_options_sends_no_query(store, api):
    api.add("GET", "/catalogs", fixture="catalogs.search.success")
    await store.catalogs.search()
    assert api.last.url.query == b""


async def test_catalog_get_keeps_unknown_fields(store, api):
    api.add("GET", f"/catalogs/{PIN}", fixture="catalogs.get.success")
    cat = await store.catalogs.get(PIN)
    assert cat.pin == PIN
    assert cat.num_products_work == 120
    assert cat.project.mpbc == "buyer"
    assert cat.model_extra["someFutureField"] == "kept"


async def test_call_options_reach_the_request(store, api):
    api.add("GET", f"/catalogs/{PIN}", fixture="catalogs.get.success")
    await store.catalogs.get(PIN, call=CallOptions(timeout=1.5))
    assert api.last.extensions["timeout"]["read"] == 1.5


async def test_cancelled_call_raises_transport_error(store, api):
    cancel = asyncio.Event()
    cancel.set()
    with pytest.raises(TransportError) as excinfo:
        await store.jobs.get("1", call=CallOptions(cancel=cancel))
    assert excinfo.value.cancelled
    assert api.requests == []


async def test_catalog_create(store, api):
    api.add("POST", "/catalogs", fixture="catalogs.get.success")
    await store.catalogs.create(CreateCatalog(name="Office supplies", project_id=7, currency="EUR"))
    assert json.loads(api.last.content) == {"name": "Office supplies", "currency": "EUR", "projectId": 7}


async def test_catalog_publish_and_status(store, api):
    api.add("POST", f"/catalogs/{PIN}/publish", fixture="catalogs.publish.success")
    api.add("GET", f"/catalogs/{PIN}/publish/status", fixture="catalogs.publish.status.busy")
    published = await store.catalogs.publish(PIN)
    assert published.status_link.endswith("/publish/status")
    status = await store.catalogs.publish_status(PIN)
    assert status.busy and not status.done
    assert status.percent == 30


async def test_catalog_purge(store, api):
    api.add("DELETE", f"/catalogs/{PIN}/work", json_body={"kind": "store#catalogPurge"})
    res = await store.catalogs.purge(PIN, Area.WORK)
    assert res.kind == "store#catalogPurge"


async def test_product_get(store, api):
    api.add("GET", f"/catalogs/{PIN}/work/products/50763599", fixture="products.get.success")
    product = await store.products.get(PIN, Area.WORK, "50763599")
    assert product.order_unit == "PCE"
    assert product.content_unit == "PCE"
    assert product.image_url == "https://cdn.example/pen.jpg"
    assert product.blobs[0].language == "de"
    assert product.eclasses[0].code == "24-32-01-01"


async def test_product_spn_is_percent_encoded(store, api):
    api.add("GET", f"/catalogs/{PIN}/work/products/A%2FB%20C", fixture="products.get.success")
    await store.products.get(PIN, "work", "A/B C")
    assert api.last.url.raw_path.decode().endswith("/products/A%2FB%20C")


async def test_product_search(store, api):
    api.add("GET", f"/catalogs/{PIN}/work/products", fixture="products.search.success")
    res = await store.products.search(PIN, Area.WORK, ProductSearchOptions(skip=10))
    assert res.total_items == 2
    assert str(api.last.url).endswith(f"/catalogs/{PIN}/work/products?skip=10")


async def test_product_create_sends_plain_values(store, api):
    api.add("POST", f"/catalogs/{PIN}/work/products", fixture="products.create.success")
    res = await store.products.create(
        PIN, Area.WORK, CreateProduct(spn="1000", name="Product 1000", price=19.5, order_unit="PCE")
    )
    assert res.link.endswith("/products/1000")
    assert json.loads(api.last.content) == {
        "spn": "1000",
        "name": "Product 1000",
        "price": 19.5,
        "ou": "PCE",
    }


async def test_product_create_server_validation_error(store, api):
    api.add("POST", f"/catalogs/{PIN}/work/products", status=400, fixture="products.create.blank_spn")
    with pytest.raises(HTTPStatusError) as excinfo:
        await store.products.create(PIN, Area.WORK, CreateProduct(name="No SPN"))
    err = excinfo.value
    assert err.status_code == 400
    assert err.message == "SPN must not be blank"
    assert "SPN must not be blank" in err.raw_body


async def test_product_update_is_selective(store, api):
    api.add("POST", f"/catalogs/{PIN}/work/products/1000", fixture="products.update.success")
    await store.products.update(
        PIN, Area.WORK, "1000", UpdateProduct(price=0.49, description=UpdateField.clear())
    )
    assert api.last.method == "POST"
    assert json.loads(api.last.content) == {"description": None, "price": 0.49}


async def test_product_replace_uses_put(store, api):
    api.add("PUT", f"/catalogs/{PIN}/work/products/1000", json_body={"link": "x"})
    await store.products.replace(PIN, Area.WORK, "1000", ReplaceProduct(name="New"))
    assert api.last.method == "PUT"
    assert json.loads(api.last.content) == {"name": "New"}


async def test_product_upsert(store, api):
    api.add("POST", f"/catalogs/{PIN}/work/products/upsert", json_body={"link": "x"})
    await store.products.upsert(PIN, Area.WORK, UpsertProduct(spn="1000", name="Pen"))
    assert json.loads(api.last.content) == {"spn": "1000", "name": "Pen"}


async def test_product_delete(store, api):
    api.add("DELETE", f"/catalogs/{PIN}/work/products/1000")
    assert await store.products.delete(PIN, Area.WORK, "1000") is None


async def test_product_delete_not_found(store, api):
    with pytest.raises(HTTPStatusError) as excinfo:
        await store.products.delete(PIN, Area.WORK, "missing")
    assert excinfo.value.status_code == 404


async def test_scroll_first_page_has_no_token(store, api):
    api.add("GET", f"/catalogs/{PIN}/live/products/scroll", fixture="products.scroll.page1")
    page = await store.products.scroll(PIN, Area.LIVE, ScrollOptions(mode=ScrollMode.FULL, version=4))
    assert page.page_token == "T1"
    assert query(api.last) == [("mode", "full"), ("version", "4")]


async def test_iter_products_follows_tokens(store, api):
    api.add("GET", f"/catalogs/{PIN}/live/products/scroll", fixture="products.scroll.page1")
    api.add("GET", f"/catalogs/{PIN}/live/products/scroll", fixture="products.scroll.page2")

    spns = [p.spn async for p in store.products.iter_products(PIN, Area.LIVE)]

    assert spns == ["1000", "2000", "3000"]
    assert len(api.requests) == 2
    assert query(api.requests[0]) == []
    assert query(api.requests[1]) == [("pageToken", "T1")]


async def test_iter_pages_aborts_on_repeated_token(store, api):
    api.add("GET", f"/catalogs/{PIN}/live/products/scroll", fixture="products.scroll.page1")
    with pytest.raises(ScrollProtocolError):
        async for _ in store.products.iter_pages(PIN, Area.LIVE):
            pass
    assert len(api.requests) == 2


async def test_iter_pages_resumes_from_token(store, api):
    api.add("GET", f"/catalogs/{PIN}/live/products/scroll", fixture="products.scroll.page2")
    pages = [p async for p in store.products.iter_pages(PIN, Area.LIVE, ScrollOptions(page_token="T1"))]
    assert len(pages) == 1
    assert query(api.last) == [("pageToken", "T1")]


async def test_jobs(store, api):
    api.add("GET", "/jobs/a8d5e2f0", fixture="jobs.get.success")
    api.add("GET", "/jobs", fixture="jobs.search.success")

    job = await store.jobs.get("a8d5e2f0")
    assert job.topic == "catalog.publish"
    res = await store.jobs.search(JobSearchOptions(merchant_id=1, state="succeeded"))
    assert res.items[0].state == "succeeded"
    assert query(api.last) == [("merchantId", "1"), ("state", "succeeded")]


async def test_availabilities_double_prefix(store, api):
    api.add("GET", "/api/v2/products/50763599/availabilities", fixture="availabilities.get.success")
    res = await store.availabilities.get("50763599", region="DE", zip_code="12345")
    assert res.items[0].zip_code == "12345"
    assert api.last.url.path == "/api/v2/api/v2/products/50763599/availabilities"
    assert query(api.last) == [("region", "DE"), ("zipCode", "12345")]


async def test_availabilities_upsert_and_delete(store, api):
    api.add("POST", "/api/v2/products/50763599/availabilities", json_body={"link": "x"})
    api.add("DELETE", "/api/v2/products/50763599/availabilities", json_body={"kind": "store#deleted"})

    await store.availabilities.upsert("50763599", UpsertAvailability(quantity=5, zip_code="12345"))
    assert json.loads(api.last.content) == {"quantity": 5.0, "zipCode": "12345"}
    res = await store.availabilities.delete("50763599", region="DE")
    assert res.kind == "store#deleted"
    assert query(api.last) == [("region", "DE")]
