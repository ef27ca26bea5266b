"""Unit tests for constants and endpoint lookup.

Tests verify that:
- Each service variant maps to its WSDL
- Missing and unknown variants fall back to the sales service
- Tag orders match the supported SalesInvoices subset
"""

import pytest

from yuki_connector.constants import (
    ACCOUNTING_INFO_WSDL,
    ACCOUNTING_WSDL,
    CONTACT_FIELDS,
    INVOICE_FIELDS,
    SALES_WSDL,
    get_wsdl_url,
    service_url_from_wsdl,
)
from yuki_connector.models import YukiContact, YukiSalesInvoice


class TestGetWsdlUrl:
    """Tests for get_wsdl_url."""

    @pytest.mark.parametrize(
        "service,expected",
        [
            ("sales", SALES_WSDL),
            ("accounting", ACCOUNTING_WSDL),
            ("accountinginfo", ACCOUNTING_INFO_WSDL),
            ("ACCOUNTING", ACCOUNTING_WSDL),
        ],
    )
    def test_known_services(self, service, expected):
        """Test known services map to their WSDL."""
        assert get_wsdl_url(service) == expected

    def test_default_is_sales(self):
        """Test no service means sales."""
        assert get_wsdl_url() == SALES_WSDL
        assert get_wsdl_url(None) == SALES_WSDL

    def test_unknown_falls_back_to_sales(self, caplog):
        """Test an unknown service falls back to sales with a warning."""
        assert get_wsdl_url("payroll") == SALES_WSDL
        assert "payroll" in caplog.text


class TestServiceUrl:
    """Tests for service_url_from_wsdl."""

    def test_strips_query(self):
        """Test the ?WSDL query is removed."""
        assert service_url_from_wsdl(SALES_WSDL) == "https://api.yukiworks.nl/ws/Sales.asmx"


class TestTagOrder:
    """Tests for tag order constants."""

    def test_invoice_fields_are_model_fields(self):
        """Test every invoice tag is a model field."""
        assert set(INVOICE_FIELDS) <= set(YukiSalesInvoice.model_fields)

    def test_contact_fields_are_model_fields(self):
        """Test contact tags match the contact model exactly."""
        assert list(CONTACT_FIELDS) == list(YukiContact.model_fields)

    def test_invoice_order(self):
        """Test the declared top-level order."""
        assert INVOICE_FIELDS == (
            "Reference", "Subject", "PaymentMethod", "PurchaseOrderNumber", "Date",
            "DueDate", "Currency", "ProjectCode", "Remarks", "DocumentFileName",
            "DocumentBase64",
        )
