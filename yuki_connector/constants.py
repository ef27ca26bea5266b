"""Constants for the Yuki webservices.

Endpoint descriptors, XML namespaces and the fixed tag orders of the
SalesInvoices subset this connector supports. See
http://www.yukiworks.nl/schemas/SalesInvoices.xsd for the full schema.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


# =============================================================================
# ENDPOINTS
# =============================================================================

SALES_WSDL = "https://api.yukiworks.nl/ws/Sales.asmx?WSDL"
ACCOUNTING_WSDL = "https://api.yukiworks.nl/ws/Accounting.asmx?WSDL"
ACCOUNTING_INFO_WSDL = "https://api.yukiworks.nl/ws/AccountingInfo.asmx?WSDL"

SERVICE_SALES = "sales"
SERVICE_ACCOUNTING = "accounting"
SERVICE_ACCOUNTING_INFO = "accountinginfo"

SERVICE_WSDL: dict[str, str] = {
    SERVICE_SALES: SALES_WSDL,
    SERVICE_ACCOUNTING: ACCOUNTING_WSDL,
    SERVICE_ACCOUNTING_INFO: ACCOUNTING_INFO_WSDL,
}

# Older integrations never passed a service, so sales stays the default
DEFAULT_SERVICE = SERVICE_SALES


def get_wsdl_url(service: Optional[str] = None) -> str:
    """Get the WSDL URL for a Yuki service variant.

    Args:
        service: 'sales', 'accounting' or 'accountinginfo' (case-insensitive).
            None selects the sales service.

    Returns:
        WSDL URL of the service. Unknown variants fall back to sales.

    Example:
        >>> get_wsdl_url("accountinginfo")
        'https://api.yukiworks.nl/ws/AccountingInfo.asmx?WSDL'
    """
    if not service:
        return SERVICE_WSDL[DEFAULT_SERVICE]

    key = service.lower().strip()
    if key not in SERVICE_WSDL:
        logger.warning(f"Unknown Yuki service '{service}', using {DEFAULT_SERVICE}")
        return SERVICE_WSDL[DEFAULT_SERVICE]

    return SERVICE_WSDL[key]


def service_url_from_wsdl(wsdl_url: str) -> str:
    """Strip the ?WSDL query from a descriptor URL to get the SOAP endpoint."""
    return wsdl_url.split("?", 1)[0]


# =============================================================================
# NAMESPACES
# =============================================================================

SOAP_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
YUKI_WEBSERVICE_NS = "http://www.theyukicompany.com/"
SALES_INVOICES_NS = "urn:xmlns:http://www.theyukicompany.com:salesinvoices"


# =============================================================================
# SALES INVOICE TAG ORDER
# =============================================================================
# The webservice is tag-name strict, so these tuples double as the model's
# field names and the order in which the elements are written.

# PaymentID, Process, EmailToCustomer and SentToPeppol follow PaymentMethod
INVOICE_FIELDS = (
    "Reference",
    "Subject",
    "PaymentMethod",
    "PurchaseOrderNumber",
    "Date",
    "DueDate",
    "Currency",
    "ProjectCode",
    "Remarks",
    "DocumentFileName",
    "DocumentBase64",
)

CONTACT_FIELDS = (
    "ContactCode",
    "FullName",
    "CountryCode",
    "City",
    "Zipcode",
    "AddressLine_1",
    "AddressLine_2",
    "EmailAddress",
    "CoCNumber",
    "VATNumber",
    "ContactType",
)

INVOICE_LINE_FIELDS = (
    "ProductQuantity",
    "LineAmount",
    "LineVATAmount",
)

# Rejected by Yuki when empty; a single space is written instead
PRODUCT_REQUIRED_FIELDS = (
    "Description",
    "Reference",
)

PRODUCT_FIELDS = (
    "SalesPrice",
    "VATPercentage",
    "VATType",
    "GLAccountCode",
    "Remarks",
)

MIN_LENGTH_PLACEHOLDER = " "
