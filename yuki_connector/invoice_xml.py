"""Builds the SalesInvoices XML document sent to ProcessSalesInvoices.

Only a subset of http://www.yukiworks.nl/schemas/SalesInvoices.xsd is
written. Elements appear in the fixed order of constants.py regardless of
how the invoice was constructed, and the same invoice always yields the
same bytes.
"""

import logging
from typing import Any, Optional, Union

from .constants import (
    INVOICE_FIELDS,
    CONTACT_FIELDS,
    INVOICE_LINE_FIELDS,
    PRODUCT_REQUIRED_FIELDS,
    PRODUCT_FIELDS,
    MIN_LENGTH_PLACEHOLDER,
    SALES_INVOICES_NS,
    XSI_NS,
)
from .escaping import PayloadEscaping, escape_invoice
from .models import YukiSalesInvoice, YukiContact, YukiInvoiceLine

logger = logging.getLogger(__name__)


def _render(value: Any) -> str:
    """Render a model value as element text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_set(value: Any) -> bool:
    """True for anything but None and the empty string, so 0 counts as set."""
    return value is not None and _render(value) != ""


def _element(tag: str, value: Any) -> str:
    return f"<{tag}>{_render(value)}</{tag}>"


def _optional_element(tag: str, value: Any) -> str:
    return _element(tag, value) if _is_set(value) else ""


def _contact_xml(contact: Optional[YukiContact]) -> str:
    # Yuki expects the Contact element even when nothing is known about it
    content = ""
    if contact is not None:
        for tag in CONTACT_FIELDS:
            content += _optional_element(tag, getattr(contact, tag))
    return f"<Contact>{content}</Contact>"


def _invoice_line_xml(line: YukiInvoiceLine) -> str:
    content = ""
    for tag in INVOICE_LINE_FIELDS:
        content += _optional_element(tag, getattr(line, tag))

    product = line.Product
    product_content = ""
    for tag in PRODUCT_REQUIRED_FIELDS:
        value = getattr(product, tag)
        if not _is_set(value):
            value = MIN_LENGTH_PLACEHOLDER
        product_content += _element(tag, value)
    for tag in PRODUCT_FIELDS:
        product_content += _optional_element(tag, getattr(product, tag))

    return f"<InvoiceLine>{content}<Product>{product_content}</Product></InvoiceLine>"


def build_sales_invoice_xml(invoice: YukiSalesInvoice) -> str:
    """Serialise the SalesInvoice element of an invoice, values written as given."""
    content = ""
    for tag in INVOICE_FIELDS:
        content += _optional_element(tag, getattr(invoice, tag))

        if tag == "PaymentMethod":
            if _is_set(invoice.PaymentMethod):
                content += _optional_element("PaymentID", invoice.PaymentID)
            # Marks the invoice as fully prepared, so Yuki processes it directly
            content += _element("Process", True)
            if invoice.EmailToCustomer is True:
                content += _element("EmailToCustomer", True)
            content += _optional_element("SentToPeppol", invoice.SentToPeppol)

    content += _contact_xml(invoice.Contact)

    person = invoice.ContactPerson
    if person is not None and _is_set(person.FullName):
        content += f"<ContactPerson>{_element('FullName', person.FullName)}</ContactPerson>"

    if invoice.InvoiceLines:
        lines = "".join(_invoice_line_xml(line) for line in invoice.InvoiceLines)
        content += f"<InvoiceLines>{lines}</InvoiceLines>"

    return f"<SalesInvoice>{content}</SalesInvoice>"


def build_invoice_xml(
    invoice: YukiSalesInvoice,
    escaping: Union[PayloadEscaping, bool] = PayloadEscaping.RAW,
) -> str:
    """Build the SalesInvoices document for a single invoice.

    Args:
        invoice: Invoice to serialise
        escaping: PayloadEscaping.RAW to trim and escape all values here,
            PayloadEscaping.PRE_ESCAPED if the caller already did so.
            A bool is read as "already escaped".

    Returns:
        XML document string, without XML declaration, ready to be embedded
        in the ProcessSalesInvoices request
    """
    if isinstance(escaping, bool):
        escaping = PayloadEscaping.PRE_ESCAPED if escaping else PayloadEscaping.RAW
    escaping = PayloadEscaping(escaping)
    if escaping is not PayloadEscaping.PRE_ESCAPED:
        invoice = escape_invoice(invoice)

    document = (
        f'<SalesInvoices xmlns="{SALES_INVOICES_NS}" xmlns:xsi="{XSI_NS}">'
        f"{build_sales_invoice_xml(invoice)}"
        "</SalesInvoices>"
    )

    logger.debug(
        f"Built SalesInvoices document for invoice {invoice.Reference!r} "
        f"({len(invoice.InvoiceLines)} lines, {len(document)} chars)"
    )
    return document
