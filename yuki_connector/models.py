"""Pydantic data models for Yuki sales invoices.

Field names follow the Yuki SalesInvoices XML tags, so a model can be
filled straight from an exported invoice and serialised tag by tag.
Only the subset of the schema supported by the invoice builder is modelled.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, List, Union
from pydantic import BaseModel, Field, field_validator


# Quantities and amounts are passed through as written, so "1.50" stays "1.50"
Amount = Union[str, int, float, Decimal]


def number_to_str(value):
    """Accept numeric codes and references, e.g. a ContactCode of 1001."""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


# =============================================================================
# INVOICE MODELS
# =============================================================================

class YukiContact(BaseModel):
    """Invoiced company or person. Only non-empty fields are sent."""
    ContactCode: Optional[str] = None
    FullName: Optional[str] = None
    CountryCode: Optional[str] = None
    City: Optional[str] = None
    Zipcode: Optional[str] = None
    AddressLine_1: Optional[str] = None
    AddressLine_2: Optional[str] = None
    EmailAddress: Optional[str] = None
    CoCNumber: Optional[str] = None  # Chamber of Commerce number
    VATNumber: Optional[str] = None
    ContactType: Optional[str] = None  # Person or Company

    @field_validator("ContactCode", "Zipcode", "CoCNumber", "VATNumber", mode="before")
    @classmethod
    def parse_code(cls, value):
        return number_to_str(value)


class YukiContactPerson(BaseModel):
    """Contact person at the invoiced company."""
    FullName: Optional[str] = None


class YukiProduct(BaseModel):
    """Product referenced by an invoice line.

    Description and Reference must not be empty in Yuki; the builder writes
    a single space when they are.
    """
    Description: Optional[str] = None
    Reference: Optional[str] = None
    SalesPrice: Optional[Amount] = None
    VATPercentage: Optional[Amount] = None
    VATType: Optional[Amount] = None
    GLAccountCode: Optional[str] = None
    Remarks: Optional[str] = None

    @field_validator("Reference", "GLAccountCode", mode="before")
    @classmethod
    def parse_code(cls, value):
        return number_to_str(value)


class YukiInvoiceLine(BaseModel):
    """One billable row of a sales invoice."""
    ProductQuantity: Optional[Amount] = None
    LineAmount: Optional[Amount] = None
    LineVATAmount: Optional[Amount] = None
    Product: YukiProduct = Field(default_factory=YukiProduct)


class YukiSalesInvoice(BaseModel):
    """Sales invoice to be created through ProcessSalesInvoices.

    EmailToCustomer is only sent when True. SentToPeppol is tri-state:
    None (absent) and "" (empty) are both left out, any other value is sent.
    """
    Reference: Optional[str] = None
    Subject: Optional[str] = None
    PaymentMethod: Optional[str] = None
    PaymentID: Optional[str] = None  # only sent together with PaymentMethod
    EmailToCustomer: Optional[bool] = None
    SentToPeppol: Optional[str] = None
    PurchaseOrderNumber: Optional[str] = None
    Date: Optional[str] = None
    DueDate: Optional[str] = None
    Currency: Optional[str] = None
    ProjectCode: Optional[str] = None
    Remarks: Optional[str] = None
    DocumentFileName: Optional[str] = None
    DocumentBase64: Optional[str] = None
    Contact: YukiContact = Field(default_factory=YukiContact)
    ContactPerson: Optional[YukiContactPerson] = None
    InvoiceLines: List[YukiInvoiceLine] = Field(default_factory=list)

    @field_validator("Reference", "PaymentID", "PurchaseOrderNumber", "ProjectCode", mode="before")
    @classmethod
    def parse_code(cls, value):
        return number_to_str(value)


# =============================================================================
# SESSION
# =============================================================================

@dataclass
class Session:
    """Identifiers of the logged in Yuki user, owned by one connector instance."""
    session_id: Optional[str] = None
    administration_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session_id) and bool(self.administration_id)
