"""Interpretation of Yuki operation results.

The interesting operations answer with an XML fragment inside their
'<Operation>Result' element. These helpers pull that fragment out of a
structured result, read the few values the connector needs and raise the
matching error when the service signals a failure.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from lxml import etree

from .errors import AdministrationAccessError, AuthenticationError, InvoiceRejectedError
from .gateway import Operation

logger = logging.getLogger(__name__)

# Payloads are decoded text, re-encoded as UTF-8 before parsing. .NET services
# often keep an encoding="utf-16" declaration on such strings, which must not win.
_PARSER = etree.XMLParser(
    encoding="utf-8", resolve_entities=False, no_network=True, huge_tree=False
)

DEFAULT_REJECTION_MESSAGE = "Yuki did not accept the invoice"


def result_payload(result: Optional[Mapping[str, Any]], operation: Operation) -> str:
    """Get the '<Operation>Result' payload of a structured result as text.

    Args:
        result: Structured result of the operation
        operation: Operation the result belongs to

    Returns:
        Payload text; empty string when the result carries none
    """
    if not result:
        return ""
    payload = result.get(f"{Operation(operation).value}Result")
    if payload is None:
        return ""
    if isinstance(payload, bytes):
        return payload.decode("utf-8")
    if isinstance(payload, etree._Element):
        return etree.tostring(payload, encoding="unicode", with_tail=False)
    return str(payload)


def _parse(xml: str) -> Optional[etree._Element]:
    """Parse an XML fragment, returning None when it is not XML."""
    if not xml.strip():
        return None
    try:
        return etree.fromstring(xml.encode("utf-8"), parser=_PARSER)
    except etree.XMLSyntaxError:
        return None


def _child(element: Optional[etree._Element], name: str) -> Optional[etree._Element]:
    """First child element with the given local name, ignoring namespaces."""
    if element is None:
        return None
    for child in element:
        if isinstance(child.tag, str) and etree.QName(child).localname == name:
            return child
    return None


def _child_text(element: Optional[etree._Element], name: str) -> str:
    child = _child(element, name)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _to_float(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


# =============================================================================
# SESSION
# =============================================================================

def parse_session_id(result: Optional[Mapping[str, Any]]) -> str:
    """Read the session identifier from an Authenticate result.

    Raises:
        AuthenticationError: If no session identifier was returned
    """
    session_id = result_payload(result, Operation.AUTHENTICATE).strip()
    if not session_id:
        raise AuthenticationError(
            "Authentication failed. Please check your company's Yuki accessKey."
        )
    return session_id


def parse_administration_id(result: Optional[Mapping[str, Any]]) -> str:
    """Read the ID of the first administration from an Administrations result.

    Raises:
        AdministrationAccessError: If the result cannot be read or lists no administration
    """
    root = _parse(result_payload(result, Operation.ADMINISTRATIONS))
    administration = _child(root, "Administration")
    if root is not None and etree.QName(root).localname == "Administration":
        administration = root
    administration_id = (administration.get("ID") or "").strip() if administration is not None else ""

    if not administration_id:
        raise AdministrationAccessError(
            "Yuki authentication failed. The API key works, but it does not seem "
            "to have access to any Administration."
        )
    return administration_id


# =============================================================================
# SALES INVOICES
# =============================================================================

def interpret_invoice_submission(result: Optional[Mapping[str, Any]]) -> None:
    """Check a ProcessSalesInvoices result for success.

    Raises:
        InvoiceRejectedError: If no invoice succeeded; carries the message Yuki
            reported for the invoice and the raw response document
    """
    payload = result_payload(result, Operation.PROCESS_SALES_INVOICES)
    root = _parse(payload)
    if root is None:
        raise InvoiceRejectedError(
            "Unreadable ProcessSalesInvoices response from Yuki", payload
        )

    try:
        succeeded = int(_child_text(root, "TotalSucceeded") or 0)
    except ValueError:
        succeeded = 0

    if succeeded > 0:
        logger.debug(f"Yuki accepted {succeeded} invoice(s)")
        return

    message = _child_text(_child(root, "Invoice"), "Message") or DEFAULT_REJECTION_MESSAGE
    raise InvoiceRejectedError(message, payload)


def parse_invoice_balance(result: Optional[Mapping[str, Any]]) -> Dict[str, float]:
    """Read the open and original amount from a CheckOutstandingItem result.

    Missing or unreadable amounts are reported as 0.0, so an unknown
    reference looks the same as a fully paid invoice.

    Returns:
        {"openAmount": float, "originalAmount": float}
    """
    root = _parse(result_payload(result, Operation.CHECK_OUTSTANDING_ITEM))
    item = _child(root, "Item")
    return {
        "openAmount": _to_float(_child_text(item, "OpenAmount")),
        "originalAmount": _to_float(_child_text(item, "OriginalAmount")),
    }
