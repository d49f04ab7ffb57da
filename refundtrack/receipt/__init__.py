"""Receipt extractor base class, data types, and factory."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import TrackerConfig


@dataclass
class ExtractedItem:
    name: str
    price: float | None = None
    quantity: int = 1


@dataclass
class ExtractedOrder:
    """Best-effort fields read from an order receipt image. Any may be missing."""

    order_number: str | None = None
    order_date: date | None = None
    order_total: float | None = None
    items: list[ExtractedItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items and self.order_date is None and self.order_total is None


PROMPT = """\
This image is a screenshot or photo of an Amazon order receipt.
Extract the order details and reply with JSON only, in this shape:
{
  "order_number": "111-1234567-1234567" or null,
  "order_date": "YYYY-MM-DD" or null,
  "order_total": 12.34 or null,
  "items": [
    {"name": "full product title", "price": 12.34, "quantity": 1}
  ]
}
Use the grand total for order_total. Leave a field null if it is not visible.
"""


class ReceiptExtractor(ABC):
    """Abstract base for reading order data from a receipt image."""

    @abstractmethod
    async def extract(self, image_path: str) -> ExtractedOrder:
        """Extract order fields from a single receipt image."""
        ...


def create_extractor(config: TrackerConfig) -> ReceiptExtractor:
    """Create a receipt extractor based on configuration."""
    backend_name = config.receipt.backend

    match backend_name:
        case "claude":
            from .claude import ClaudeReceiptExtractor

            return ClaudeReceiptExtractor(
                api_key=config.receipt.claude.api_key,
                model=config.receipt.claude.model,
            )
        case "gemini":
            from .gemini import GeminiReceiptExtractor

            return GeminiReceiptExtractor(
                api_key=config.receipt.gemini.api_key,
                model=config.receipt.gemini.model,
            )
        case _:
            raise ValueError(
                f"Unknown receipt backend: {backend_name!r} "
                f"(choose claude or gemini)"
            )


_DATE_FORMATS = ("%Y-%m-%d", "%B %d, %Y", "%b %d, %Y", "%m/%d/%Y")


def parse_date(value: Any) -> date | None:
    """Parse the date spellings receipts and models commonly use."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_amount(value: Any) -> float | None:
    """Parse ``12.5``, ``"12.50"`` or ``"$1,234.50"``; None when unreadable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = re.sub(r"[$,\s]", "", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_order_response(text: str) -> ExtractedOrder:
    """Parse the JSON object returned by a vision model.

    Raises:
        ValueError: If the reply is not a JSON object.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"Receipt reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Receipt reply must be a JSON object")

    items: list[ExtractedItem] = []
    for raw in data.get("items") or []:
        if not isinstance(raw, dict):
            continue
        name = str(raw.get("name") or "").strip()
        if not name:
            continue
        quantity = raw.get("quantity") or 1
        items.append(
            ExtractedItem(
                name=name,
                price=parse_amount(raw.get("price")),
                quantity=int(quantity) if isinstance(quantity, (int, float)) else 1,
            )
        )

    order_number = data.get("order_number")
    return ExtractedOrder(
        order_number=str(order_number) if order_number else None,
        order_date=parse_date(data.get("order_date")),
        order_total=parse_amount(data.get("order_total")),
        items=items,
    )
