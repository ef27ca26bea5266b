"""Unit tests for invoice models.

Tests verify that:
- Models can be built from plain mappings with Yuki tag names
- Defaults give an empty contact, product and no lines
- Amounts keep the type they were given
- Numeric codes and references are accepted as strings
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from yuki_connector.models import (
    Session,
    YukiContact,
    YukiInvoiceLine,
    YukiProduct,
    YukiSalesInvoice,
)


class TestYukiSalesInvoice:
    """Tests for the invoice model."""

    def test_defaults(self):
        """Test an empty invoice has an empty contact and no lines."""
        invoice = YukiSalesInvoice()

        assert invoice.Contact.FullName is None
        assert invoice.ContactPerson is None
        assert invoice.InvoiceLines == []
        assert invoice.EmailToCustomer is None
        assert invoice.SentToPeppol is None

    def test_from_mapping(self):
        """Test nested mappings are converted to models."""
        invoice = YukiSalesInvoice.model_validate({
            "Reference": "INV-1",
            "Contact": {"FullName": "Acme", "AddressLine_1": "Damrak 1"},
            "ContactPerson": {"FullName": "Jan"},
            "InvoiceLines": [{"ProductQuantity": "2", "Product": {"Description": "Support"}}],
        })

        assert invoice.Contact.AddressLine_1 == "Damrak 1"
        assert invoice.ContactPerson.FullName == "Jan"
        assert invoice.InvoiceLines[0].Product.Description == "Support"


class TestYukiInvoiceLine:
    """Tests for invoice lines."""

    def test_default_product(self):
        """Test a line without product gets an empty one."""
        line = YukiInvoiceLine()

        assert isinstance(line.Product, YukiProduct)
        assert line.Product.Description is None

    def test_amount_types_preserved(self):
        """Test amounts keep their given representation."""
        line = YukiInvoiceLine(ProductQuantity=2, LineAmount="1.50", LineVATAmount=Decimal("0.32"))

        assert line.ProductQuantity == 2
        assert line.LineAmount == "1.50"
        assert line.LineVATAmount == Decimal("0.32")


class TestNumericCodes:
    """Tests for codes given as numbers, as JSON exports often do."""

    def test_contact_codes(self):
        """Test numeric contact codes become strings."""
        contact = YukiContact(ContactCode=1001, Zipcode=1012)

        assert contact.ContactCode == "1001"
        assert contact.Zipcode == "1012"

    def test_invoice_from_json_mapping(self):
        """Test an invoice with numeric codes validates."""
        invoice = YukiSalesInvoice.model_validate({
            "Reference": 2024001,
            "Contact": {"ContactCode": 1001},
            "InvoiceLines": [{"Product": {"GLAccountCode": 8000, "Reference": 42}}],
        })

        assert invoice.Reference == "2024001"
        assert invoice.Contact.ContactCode == "1001"
        assert invoice.InvoiceLines[0].Product.GLAccountCode == "8000"
        assert invoice.InvoiceLines[0].Product.Reference == "42"

    def test_bool_not_taken_as_code(self):
        """Test booleans are still rejected for code fields."""
        with pytest.raises(ValidationError):
            YukiContact(ContactCode=True)


class TestSession:
    """Tests for the session state."""

    def test_empty_session(self):
        """Test a new session is not authenticated."""
        assert not Session().is_authenticated

    def test_session_without_administration(self):
        """Test a session id alone is not enough."""
        assert not Session(session_id="sid").is_authenticated

    def test_authenticated(self):
        """Test both identifiers make the session authenticated."""
        assert Session(session_id="sid", administration_id="aid").is_authenticated
