"""Claude API receipt extractor."""

from __future__ import annotations

import base64
import logging
import mimetypes
from pathlib import Path

from . import PROMPT, ExtractedOrder, ReceiptExtractor, parse_order_response

logger = logging.getLogger(__name__)


class ClaudeReceiptExtractor(ReceiptExtractor):
    """Read Amazon order receipts using Claude's vision capability."""

    def __init__(self, api_key: str = "", model: str = "claude-sonnet-4-5-20250929") -> None:
        self._api_key = api_key
        self._model = model

    async def extract(self, image_path: str) -> ExtractedOrder:
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        data = Path(image_path).read_bytes()
        media_type = mimetypes.guess_type(image_path)[0] or "image/jpeg"
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": media_type,
                    "data": base64.standard_b64encode(data).decode(),
                },
            },
            {"type": "text", "text": PROMPT},
        ]

        logger.info("Extracting receipt %s with %s", image_path, self._model)
        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        response = await client.messages.create(
            model=self._model,
            max_tokens=2048,
            messages=[{"role": "user", "content": content}],
        )

        text = response.content[0].text
        logger.debug("Claude receipt reply: %s", text)
        return parse_order_response(text)
