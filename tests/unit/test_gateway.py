"""
Unit tests for the read-only and mutating entry points.
"""

import json

import pytest

from marketplace_api.app.api.gateway import build_http_response


def decode(response):
    return json.loads(response.body.decode("utf-8"))


class TestBuildHttpResponse:
    """Tests for build_http_response."""

    def test_json_body_and_header(self):
        response = build_http_response(200, {"data": []})

        assert response.status_code == 200
        assert response.headers == [("Content-type", "application/json")]
        assert response.body == b'{"data":[]}'
        assert response.upgrade is None

    def test_utf8_body(self):
        response = build_http_response(200, {"msg": "Stühle"})
        assert response.body.decode("utf-8") == '{"msg":"Stühle"}'


class TestHttpRequest:
    """Tests for the read-only entry point."""

    def test_list_empty(self, gateway, make_request):
        response = gateway.http_request(make_request("GET", "/marketplace/products"))

        assert response.status_code == 200
        assert decode(response) == {"data": []}

    @pytest.mark.parametrize("method", ["PUT", "POST", "DELETE"])
    def test_mutating_methods_request_upgrade(self, gateway, store, make_request, make_product, method):
        request = make_request(method, "/marketplace/products", make_product("1").model_dump())
        response = gateway.http_request(request)

        assert response.status_code == 200
        assert response.upgrade is True
        assert response.body == b""
        assert response.headers == [("Content-type", "application/json")]
        assert store.values() == []

    @pytest.mark.parametrize("method", ["PATCH", "HEAD", "OPTIONS"])
    def test_invalid_method(self, gateway, make_request, method):
        response = gateway.http_request(make_request(method, "/marketplace/products"))

        assert response.status_code == 400
        assert decode(response) == {"msg": "invalid get method"}

    def test_unknown_path(self, gateway, make_request):
        response = gateway.http_request(make_request("GET", "/marketplace/unknown"))

        assert response.status_code == 400
        assert decode(response) == {"msg": "get handler not found"}

    def test_get_existing_and_missing(self, gateway, store, make_request, make_product):
        store.insert("1", make_product("1"))

        found = gateway.http_request(make_request("GET", "/marketplace/products/1"))
        missing = gateway.http_request(make_request("GET", "/marketplace/products/2"))

        assert decode(found) == {"data": make_product("1").model_dump()}
        assert missing.status_code == 200
        assert decode(missing) == {"data": {"msg": "a product with id=2 not found"}}


class TestHttpRequestUpdate:
    """Tests for the mutating entry point."""

    @pytest.mark.parametrize("method", ["GET", "PATCH"])
    def test_invalid_method(self, gateway, make_request, method):
        response = gateway.http_request_update(make_request(method, "/marketplace/products"))

        assert response.status_code == 400
        assert decode(response) == {"msg": "invalid update method"}

    def test_unknown_route(self, gateway, make_request):
        response = gateway.http_request_update(make_request("DELETE", "/marketplace/products"))

        assert response.status_code == 400
        assert decode(response) == {"msg": "update handler not found"}

    def test_create_and_conflict(self, gateway, make_request, make_product):
        payload = make_product("1").model_dump()

        created = gateway.http_request_update(make_request("POST", "/marketplace/products", payload))
        repeated = gateway.http_request_update(make_request("POST", "/marketplace/products", payload))

        assert created.status_code == 200
        assert decode(created) == {"data": {"product": payload}}
        assert repeated.status_code == 200
        assert decode(repeated) == {"data": {"msg": "a product id=1 already exists"}}

    def test_delete_twice(self, gateway, store, make_request, make_product):
        store.insert("1", make_product("1"))

        first = gateway.http_request_update(make_request("DELETE", "/marketplace/products/1"))
        second = gateway.http_request_update(make_request("DELETE", "/marketplace/products/1"))

        assert decode(first) == {"data": {"id": "1", "deleted": True}}
        assert decode(second) == {
            "data": {"msg": "couldn't delete a product with id=1. there is no such product."}
        }

    def test_put_overrides_body_id(self, gateway, store, make_request, make_product):
        store.insert("A", make_product("A"))

        response = gateway.http_request_update(
            make_request("PUT", "/marketplace/products/A", make_product("B", price="99").model_dump())
        )

        assert decode(response)["data"]["product"]["id"] == "A"
        assert store.get("A").price == "99"
        assert store.get("B") is None

    def test_malformed_json_is_rejected(self, gateway, store, make_request):
        response = gateway.http_request_update(
            make_request("POST", "/marketplace/products", b"{broken")
        )

        assert response.status_code == 400
        assert decode(response)["msg"].startswith("invalid json body")
        assert store.values() == []
