"""Yuki webservice connector.

Creates sales invoices through the Yuki Sales webservice and reads
outstanding items, net revenue and GL account data from the
AccountingInfo webservice. One client talks to one service endpoint and
holds one session; it is meant to be used from a single thread.
"""

import logging
from datetime import date
from typing import Any, Dict, Mapping, Optional, Union

from .config import Settings
from .errors import RemoteCallError
from .escaping import PayloadEscaping
from .gateway import Operation, RemoteOperationGateway, Transport
from .invoice_xml import build_invoice_xml
from .models import YukiSalesInvoice
from .responses import interpret_invoice_submission, parse_invoice_balance
from .session import SessionManager
from .transport import RawXml, SoapTransport, StructuredResult

logger = logging.getLogger(__name__)

DateLike = Union[str, date]


class YukiClient:
    """Client for the Yuki SOAP webservices.

    Usage:
        with YukiClient(settings) as client:
            client.process_invoice(invoice)
    """

    def __init__(self, settings: Settings, transport: Optional[Transport] = None):
        """Initialize the client.

        Args:
            settings: Application settings with the Yuki key and service
            transport: Transport to use; a SoapTransport for the configured
                service is created when omitted
        """
        self.settings = settings
        self._owns_transport = transport is None
        if transport is None:
            transport = SoapTransport(settings.service_url, timeout=settings.yuki_timeout)
        self._transport = transport
        self.gateway = RemoteOperationGateway(transport)
        self.sessions = SessionManager(self.gateway)

    def __enter__(self) -> "YukiClient":
        """Context manager entry - log in when an API key is configured."""
        if self.settings.yuki_api_key and not self.is_authenticated:
            try:
                self.login()
            except Exception:
                self.close()
                raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, SoapTransport):
            self._transport.close()

    # =========================================================================
    # SESSION
    # =========================================================================

    def login(self, api_key: Optional[str] = None) -> None:
        """Log in to Yuki and resolve the administration.

        Args:
            api_key: Access key; the configured key is used when omitted
        """
        if api_key is None:
            api_key = self.settings.yuki_api_key
        self.sessions.login(api_key)

    @property
    def is_authenticated(self) -> bool:
        return self.sessions.is_authenticated

    @property
    def session_id(self) -> Optional[str]:
        return self.sessions.session_id

    @property
    def administration_id(self) -> Optional[str]:
        return self.sessions.administration_id

    # =========================================================================
    # SALES INVOICES
    # =========================================================================

    def process_invoice(
        self,
        invoice: Union[YukiSalesInvoice, Mapping[str, Any]],
        escaping: Union[PayloadEscaping, bool] = PayloadEscaping.RAW,
    ) -> bool:
        """Create a sales invoice in Yuki.

        Args:
            invoice: Invoice model, or a mapping with Yuki tag names as keys
            escaping: Whether the connector should escape the invoice values
                (RAW) or the caller already did (PRE_ESCAPED)

        Returns:
            True when Yuki accepted the invoice

        Raises:
            InvoiceRejectedError: If Yuki did not accept the invoice
                (e.g. duplicate invoice number)
            RemoteCallError: If the webservice call failed
        """
        if not isinstance(invoice, YukiSalesInvoice):
            invoice = YukiSalesInvoice.model_validate(invoice)

        session = self.sessions.require_session()
        xml_doc = build_invoice_xml(invoice, escaping)

        result = self.gateway.invoke(
            Operation.PROCESS_SALES_INVOICES,
            {
                "sessionId": session.session_id,
                "administrationId": session.administration_id,
                "xmlDoc": RawXml(xml_doc),
            },
        )
        interpret_invoice_submission(result)

        logger.info(f"Created Yuki sales invoice {invoice.Reference or '(no reference)'}")
        return True

    def get_invoice_balance(self, reference: str) -> Dict[str, float]:
        """Get the outstanding and original amount of an invoice.

        An unknown reference yields zero amounts, just like a paid invoice.

        Args:
            reference: Invoice reference

        Returns:
            {"openAmount": float, "originalAmount": float}
        """
        session = self.sessions.require_session()
        result = self.gateway.invoke(
            Operation.CHECK_OUTSTANDING_ITEM,
            {"sessionID": session.session_id, "Reference": reference},
        )
        return parse_invoice_balance(result)

    # =========================================================================
    # ACCOUNTING INFO
    # =========================================================================

    def _invoke_with_context(
        self,
        operation: Operation,
        params: Dict[str, Any],
        context: str,
    ) -> StructuredResult:
        """Invoke an operation, replacing the failure message with a readable context."""
        try:
            return self.gateway.invoke(operation, params)
        except RemoteCallError as e:
            raise RemoteCallError(
                context,
                operation=e.operation,
                fault_code=e.fault_code,
                fault_message=e.fault_message,
            ) from e

    def get_administration_net_revenue(self, start: DateLike, end: DateLike) -> StructuredResult:
        """Get the net revenue of the administration for a period.

        Args:
            start: First day of the period
            end: Last day of the period

        Returns:
            NetRevenue result as returned by Yuki
        """
        session = self.sessions.require_session()
        aid = session.administration_id
        return self._invoke_with_context(
            Operation.NET_REVENUE,
            {
                "sessionID": session.session_id,
                "administrationID": aid,
                "StartDate": start,
                "EndDate": end,
            },
            f"Could not retrieve Net Revenue for administration {aid} from {start} until {end}",
        )

    def get_gl_account_balance(self, transaction_date: DateLike) -> StructuredResult:
        """Get the balance of all GL accounts on a date."""
        session = self.sessions.require_session()
        aid = session.administration_id
        return self._invoke_with_context(
            Operation.GL_ACCOUNT_BALANCE,
            {
                "sessionID": session.session_id,
                "administrationID": aid,
                "transactionDate": transaction_date,
            },
            f"Could not retrieve GL account balance for administration {aid} on {transaction_date}",
        )

    def get_gl_account_transactions(
        self,
        gl_account_code: str,
        start: DateLike,
        end: DateLike,
    ) -> StructuredResult:
        """Get the transactions booked on a GL account during a period."""
        session = self.sessions.require_session()
        aid = session.administration_id
        return self._invoke_with_context(
            Operation.GL_ACCOUNT_TRANSACTIONS,
            {
                "sessionID": session.session_id,
                "administrationID": aid,
                "GLAccountCode": gl_account_code,
                "StartDate": start,
                "EndDate": end,
            },
            f"Could not retrieve GL account transactions for {gl_account_code} "
            f"in administration {aid} from {start} until {end}",
        )

    def get_gl_account_scheme(self) -> StructuredResult:
        """Get the chart of accounts of the administration."""
        session = self.sessions.require_session()
        aid = session.administration_id
        return self._invoke_with_context(
            Operation.GET_GL_ACCOUNT_SCHEME,
            {"sessionID": session.session_id, "administrationID": aid},
            f"Could not retrieve GL account scheme for administration {aid}",
        )
