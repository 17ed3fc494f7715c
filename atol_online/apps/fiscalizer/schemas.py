from enum import Enum

from pydantic import BaseModel, ConfigDict

from ...core.transport import AtolResponse
from ..documents.schemas import DocumentType


class ApiMethod(str, Enum):
    sell = "sell"                                      # Приход
    sell_refund = "sell_refund"                        # Возврат прихода
    buy = "buy"                                        # Расход
    buy_refund = "buy_refund"                          # Возврат расхода
    sell_correction = "sell_correction"                # Коррекция прихода
    sell_refund_correction = "sell_refund_correction"  # Коррекция возврата прихода
    buy_correction = "buy_correction"                  # Коррекция расхода
    buy_refund_correction = "buy_refund_correction"    # Коррекция возврата расхода

    @property
    def document_type(self) -> DocumentType:
        """Тип документа, который принимает метод."""
        if self.value.endswith("_correction"):
            return DocumentType.correction
        return DocumentType.receipt


class ReportContent(BaseModel):
    """Тело ответа на регистрацию документа и запрос его статуса."""

    model_config = ConfigDict(extra="allow")

    uuid: str | None = None
    status: str | None = None
    error: dict | None = None
    payload: dict | None = None
    timestamp: str | None = None
    group_code: str | None = None
    daemon_code: str | None = None
    device_code: str | None = None
    external_id: str | None = None
    callback_url: str | None = None

    @classmethod
    def from_response(cls, response: AtolResponse) -> "ReportContent":
        return cls.model_validate(response.content or {})

    @property
    def is_complete(self) -> bool:
        return self.status == "complete"
