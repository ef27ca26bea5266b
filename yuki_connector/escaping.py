"""Escaping of invoice values for inclusion in XML text content."""

from enum import Enum
from typing import Any

from .models import YukiSalesInvoice


class PayloadEscaping(Enum):
    """How the values of an invoice should be treated by the builder.

    RAW: values are trimmed and XML-escaped by the connector.
    PRE_ESCAPED: the caller guarantees values are already trimmed and
        escaped; they are written exactly as given.
    """
    RAW = "raw"
    PRE_ESCAPED = "pre_escaped"


def escape_value(value: Any) -> str:
    """Trim a scalar value and escape the five XML special characters.

    Args:
        value: Raw scalar (strings, numbers)

    Returns:
        String safe to use as XML element text
    """
    s = str(value).strip()
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _escape_leaves(data: Any) -> Any:
    """Escape every string leaf of dumped model data, keeping its shape."""
    if isinstance(data, dict):
        return {key: _escape_leaves(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_escape_leaves(item) for item in data]
    if isinstance(data, str):
        return escape_value(data)
    return data


def escape_invoice(invoice: YukiSalesInvoice) -> YukiSalesInvoice:
    """Return a copy of the invoice with all string values escaped.

    Booleans and numeric amounts are left untouched; the input is not modified.
    """
    return YukiSalesInvoice.model_validate(_escape_leaves(invoice.model_dump()))
