"""Gemini API receipt extractor."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

from . import PROMPT, ExtractedOrder, ReceiptExtractor, parse_order_response

logger = logging.getLogger(__name__)


class GeminiReceiptExtractor(ReceiptExtractor):
    """Read Amazon order receipts using Google Gemini's vision capability."""

    def __init__(self, api_key: str = "", model: str = "gemini-2.0-flash") -> None:
        self._api_key = api_key
        self._model = model

    async def extract(self, image_path: str) -> ExtractedOrder:
        if not self._api_key:
            raise ValueError(
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model)

        data = Path(image_path).read_bytes()
        mime_type = mimetypes.guess_type(image_path)[0] or "image/jpeg"

        logger.info("Extracting receipt %s with %s", image_path, self._model)
        response = await model.generate_content_async(
            [{"mime_type": mime_type, "data": data}, PROMPT]
        )
        logger.debug("Gemini receipt reply: %s", response.text)
        return parse_order_response(response.text)
