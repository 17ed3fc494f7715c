import json

import httpx
import pytest

from atol_online.core.transport import AtolResponse, AtolTransport


def make_transport(handler) -> AtolTransport:
    return AtolTransport(httpx.Client(transport=httpx.MockTransport(handler)))


def test_post_sends_utf8_json():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    transport = make_transport(handler)
    response = transport.send_request("post", "https://atol.test/x", {"name": "Чай"}, {"Token": "t"})

    request = seen[0]
    assert request.method == "POST"
    assert request.headers["Token"] == "t"
    assert request.headers["Content-type"] == "application/json; charset=utf-8"
    assert "Чай" in request.content.decode("utf-8")
    assert json.loads(request.content) == {"name": "Чай"}
    assert response.is_successful()
    assert transport.last_request["json"] == {"name": "Чай"}
    assert transport.last_response is response


def test_error_status_does_not_raise():
    transport = make_transport(
        lambda request: httpx.Response(400, json={"error": {"code": 32, "text": "Ошибка"}})
    )
    response = transport.send_request("GET", "https://atol.test/report/1")

    assert response.status_code == 400
    assert not response.is_successful()
    assert response.error == {"code": 32, "text": "Ошибка"}
    assert "json" not in transport.last_request


@pytest.mark.parametrize(
    "body",
    [b"<html>Bad gateway</html>", b"[1, 2]", b""],
)
def test_unparsable_body_gives_empty_content(body):
    response = AtolResponse.from_httpx(httpx.Response(200, content=body))
    assert response.content is None
    assert not response.is_successful()
    assert response.get("status") is None


def test_network_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timeout", request=request)

    transport = make_transport(handler)
    with pytest.raises(httpx.ConnectTimeout):
        transport.send_request("GET", "https://atol.test/report/1")


def test_injected_client_is_not_closed():
    client = httpx.Client()
    with AtolTransport(client):
        pass
    assert not client.is_closed
    client.close()
