"""Google Gemini API interactions for receipt scanning and insights."""

import base64
import json
import mimetypes
import os
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

import requests

from pocketfin.config import DEFAULT_MODEL, DEFAULT_TIMEOUT
from pocketfin.dates import ISO_DATE_FORMAT, parse_iso_date
from pocketfin.domain.form import ReceiptData
from pocketfin.domain.insights import INSIGHT_ERROR_MESSAGE, INSIGHT_FALLBACK, build_insight_prompt
from pocketfin.domain.models import Currency, ExpenseCategory, Transaction
from pocketfin.logging_setup import get_logger

logger = get_logger(__name__)

API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

RECEIPT_PROMPT = (
    "Analyze this receipt image and extract the following details. If the date is missing, use today's date."
)

RECEIPT_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "amount": {"type": "NUMBER", "description": "Total amount of the receipt"},
        "date": {"type": "STRING", "description": "Date of purchase in YYYY-MM-DD format"},
        "merchant": {"type": "STRING", "description": "Name of the merchant or store"},
        "description": {"type": "STRING", "description": "Brief description of items purchased"},
        "category": {
            "type": "STRING",
            "description": "Best fitting category from: " + ", ".join(cat.value for cat in ExpenseCategory),
            "enum": [cat.value for cat in ExpenseCategory],
        },
    },
    "required": ["amount", "merchant", "category"],
}


class GeminiError(Exception):
    """Raised when the Gemini API cannot produce a usable answer."""


def get_api_key() -> Optional[str]:
    """Get the Gemini API key from the environment.

    Returns:
        GEMINI_API_KEY, else API_KEY, or None if neither is set.
    """
    return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")


def generate_content(
    api_key: str,
    contents: list[dict[str, Any]],
    model: str = DEFAULT_MODEL,
    generation_config: dict[str, Any] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Call generateContent and return the text of the first candidate.

    Args:
        api_key: Gemini API key.
        contents: Request contents (list of role/parts objects).
        model: Model name.
        generation_config: Optional generationConfig block.
        timeout: Request timeout in seconds.

    Returns:
        Concatenated text parts of the first candidate (may be empty).

    Raises:
        GeminiError: If the request fails or the response is malformed.
    """
    headers = {
        "x-goog-api-key": api_key,
        "Content-Type": "application/json",
    }
    body: dict[str, Any] = {"contents": contents}
    if generation_config:
        body["generationConfig"] = generation_config

    url = f"{API_BASE_URL}/models/{model}:generateContent"
    try:
        response = requests.post(url, headers=headers, json=body, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        raise GeminiError(f"Gemini request failed: {e}") from e
    except ValueError as e:
        raise GeminiError("Gemini returned a non-JSON response") from e

    try:
        candidates = payload.get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(part.get("text", "") for part in parts)
    except (AttributeError, TypeError) as e:
        raise GeminiError("Unexpected Gemini response shape") from e


def receipt_from_json(text: str) -> ReceiptData:
    """Decode the structured receipt answer.

    Args:
        text: JSON text returned by the model.

    Returns:
        ReceiptData with the fields that were present and valid.

    Raises:
        GeminiError: If the text is not a JSON object.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise GeminiError("Receipt response is not valid JSON") from e
    if not isinstance(data, dict):
        raise GeminiError("Receipt response is not a JSON object")

    amount: Decimal | None = None
    raw_amount = data.get("amount")
    if raw_amount is not None and not isinstance(raw_amount, bool):
        try:
            amount = abs(Decimal(str(raw_amount)))
        except InvalidOperation:
            logger.warning("Ignoring unreadable receipt amount %r", raw_amount)

    date: str | None = None
    raw_date = data.get("date")
    if raw_date is not None:
        parsed_date = parse_iso_date(str(raw_date))
        if parsed_date is None:
            logger.warning("Ignoring unreadable receipt date %r", raw_date)
        else:
            date = parsed_date.strftime(ISO_DATE_FORMAT)

    def text_field(name: str) -> str | None:
        value = data.get(name)
        if value is None:
            return None
        return str(value).strip() or None

    return ReceiptData(
        amount=amount,
        date=date,
        merchant=text_field("merchant"),
        description=text_field("description"),
        category=text_field("category"),
    )


def parse_receipt_image(
    image_path: Path,
    api_key: str,
    model: str = DEFAULT_MODEL,
    timeout: float = DEFAULT_TIMEOUT,
) -> ReceiptData:
    """Extract transaction fields from a receipt image.

    Args:
        image_path: Receipt image file.
        api_key: Gemini API key.
        model: Model name.
        timeout: Request timeout in seconds.

    Returns:
        Extracted ReceiptData. Category is restricted to the expense vocabulary.

    Raises:
        GeminiError: If the image cannot be read or the API call fails.
    """
    mime_type = mimetypes.guess_type(image_path.name)[0] or "image/jpeg"
    try:
        data = base64.b64encode(image_path.read_bytes()).decode("ascii")
    except OSError as e:
        raise GeminiError(f"Could not read receipt image {image_path}: {e}") from e

    contents = [
        {
            "parts": [
                {"inline_data": {"mime_type": mime_type, "data": data}},
                {"text": RECEIPT_PROMPT},
            ]
        }
    ]
    generation_config = {
        "responseMimeType": "application/json",
        "responseSchema": RECEIPT_SCHEMA,
    }

    try:
        text = generate_content(api_key, contents, model, generation_config, timeout)
        if not text:
            raise GeminiError("No response from AI")
        return receipt_from_json(text)
    except GeminiError as e:
        logger.error("Error parsing receipt %s: %s", image_path, e)
        raise


def generate_insights(
    transactions: Iterable[Transaction],
    currency: Currency,
    api_key: str,
    model: str = DEFAULT_MODEL,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Ask the model for a financial summary and saving tips.

    Never raises: failures are logged and replaced by a static message.

    Args:
        transactions: Full collection; the 60 most recent are sent.
        currency: Display currency.
        api_key: Gemini API key.
        model: Model name.
        timeout: Request timeout in seconds.

    Returns:
        Markdown text.
    """
    prompt = build_insight_prompt(transactions, currency)
    contents = [{"parts": [{"text": prompt}]}]

    try:
        text = generate_content(api_key, contents, model, timeout=timeout)
    except GeminiError as e:
        logger.error("Error generating insights: %s", e)
        return INSIGHT_ERROR_MESSAGE

    return text or INSIGHT_FALLBACK
