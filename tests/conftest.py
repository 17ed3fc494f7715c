import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from atol_online.apps.documents.domain.collections import Items, Payments
from atol_online.apps.documents.domain.documents import Correction, Receipt
from atol_online.apps.documents.domain.entities import (
    Client,
    Company,
    CorrectionInfo,
    Item,
    Payment,
)
from atol_online.apps.documents.schemas import CorrectionType, PaymentType, SnoType

DOCUMENT_UUID = "4f1c2b8a-6d3e-4a5b-9c7d-0e1f2a3b4c5d"


@pytest.fixture
def company() -> Company:
    return Company(
        inn="7707083893",
        sno=SnoType.osn,
        payment_address="https://shop.example.ru",
        email="shop@example.ru",
    )


@pytest.fixture
def items() -> Items:
    return Items([Item("Чай", 10.00, 2), Item("Печенье", 5.50, 1)])


@pytest.fixture
def payments() -> Payments:
    return Payments([Payment(PaymentType.electronic, 25.50)])


@pytest.fixture
def receipt(company, items, payments) -> Receipt:
    return Receipt(company, items, payments, client=Client(email="buyer@example.ru"))


@pytest.fixture
def correction(company, items, payments) -> Correction:
    info = CorrectionInfo(CorrectionType.self_, "01.02.2024", "ПР-1")
    return Correction(company, info, items, payments)


class FakeAtolServer:
    """Заглушка API АТОЛ Онлайн для httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.statuses: List[str] = ["complete"]
        self.token_status_code = 200
        self.token_body: Optional[Dict[str, Any]] = None
        self.report_error: Any = None
        self.fail_reports = 0
        self.answered_reports = 0

    def count(self, suffix: str) -> int:
        return sum(1 for request in self.requests if request.url.path.endswith(suffix))

    def reports(self) -> List[httpx.Request]:
        return [request for request in self.requests if "/report/" in request.url.path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/getToken"):
            if self.token_status_code != 200:
                return httpx.Response(
                    self.token_status_code,
                    json={"error": {"code": 12, "text": "Неверный логин или пароль"}},
                )
            if self.token_body is not None:
                return httpx.Response(200, json=self.token_body)
            return httpx.Response(200, json={"token": "test-token", "error": None})

        if "/report/" in path:
            if self.fail_reports:
                self.fail_reports -= 1
                raise httpx.ConnectError("connection refused", request=request)
            index = min(self.answered_reports, len(self.statuses) - 1)
            self.answered_reports += 1
            body = {"uuid": path.rsplit("/", 1)[-1], "status": self.statuses[index]}
            if self.report_error is not None and body["status"] != "complete":
                body["error"] = self.report_error
            return httpx.Response(200, json=body)

        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={"uuid": DOCUMENT_UUID, "status": "wait", "external_id": body["external_id"]},
        )


@pytest.fixture
def server() -> FakeAtolServer:
    return FakeAtolServer()


@pytest.fixture
def http(server) -> httpx.Client:
    client = httpx.Client(transport=httpx.MockTransport(server.handler))
    yield client
    client.close()


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps) -> Callable[[float], None]:
    return sleeps.append
