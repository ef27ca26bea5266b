"""Pytest configuration and shared fixtures.

Provides common fixtures for:
- Mock environment variables and settings
- A stub transport recording every remote call
- Sample invoice models
- Logged in clients
"""

import pytest

from tests.fixtures.yuki_fixtures import (
    StubTransport,
    make_authenticate_result,
    make_administrations_result,
)


# =============================================================================
# STUB TRANSPORT
# =============================================================================

@pytest.fixture
def stub_transport():
    """Create a stub transport that accepts the login handshake."""
    return StubTransport({
        "Authenticate": make_authenticate_result(),
        "Administrations": make_administrations_result(),
    })


# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    monkeypatch.setenv("YUKI_API_KEY", "test_access_key")
    monkeypatch.setenv("YUKI_SERVICE", "sales")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")


@pytest.fixture
def mock_settings(mock_env_vars):
    """Create settings from mock environment variables."""
    from yuki_connector.config import Settings

    return Settings()


@pytest.fixture
def mock_settings_no_key(monkeypatch):
    """Create settings without an API key."""
    from yuki_connector.config import Settings

    monkeypatch.delenv("YUKI_API_KEY", raising=False)
    return Settings()


# =============================================================================
# CLIENTS
# =============================================================================

@pytest.fixture
def client(mock_settings, stub_transport):
    """Create a client on the stub transport, not yet logged in."""
    from yuki_connector.client import YukiClient

    return YukiClient(mock_settings, transport=stub_transport)


@pytest.fixture
def logged_in_client(client):
    """Create a client on the stub transport that completed login."""
    client.login()
    return client


# =============================================================================
# SAMPLE MODELS
# =============================================================================

@pytest.fixture
def sample_invoice():
    """Create a realistic sales invoice for testing."""
    from yuki_connector.models import (
        YukiSalesInvoice,
        YukiContact,
        YukiContactPerson,
        YukiInvoiceLine,
        YukiProduct,
    )

    return YukiSalesInvoice(
        Reference="INV-2024-001",
        Subject="Consultancy March 2024",
        PaymentMethod="ElectronicTransfer",
        Date="2024-03-31",
        DueDate="2024-04-30",
        Currency="EUR",
        Contact=YukiContact(
            ContactCode="C-1001",
            FullName="Acme B.V.",
            CountryCode="NL",
            City="Amsterdam",
            Zipcode="1012 AB",
            AddressLine_1="Damrak 1",
            EmailAddress="billing@acme.example",
            VATNumber="NL123456789B01",
            ContactType="Company",
        ),
        ContactPerson=YukiContactPerson(FullName="Jan Jansen"),
        InvoiceLines=[
            YukiInvoiceLine(
                ProductQuantity=8,
                LineAmount="760.00",
                LineVATAmount="159.60",
                Product=YukiProduct(
                    Description="Consultancy",
                    Reference="CONS",
                    SalesPrice="95.00",
                    VATPercentage=21,
                    VATType=1,
                    GLAccountCode="8000",
                ),
            ),
        ],
    )


@pytest.fixture
def minimal_invoice():
    """Create an invoice with a single empty line and nothing else."""
    from yuki_connector.models import YukiSalesInvoice, YukiInvoiceLine

    return YukiSalesInvoice(InvoiceLines=[YukiInvoiceLine()])
