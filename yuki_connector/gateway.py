"""Single funnel for every Yuki remote operation.

The supported operations form a closed set, each with the parameter names
the webservice declares for it. Transport faults are turned into
RemoteCallError here and nowhere else.
"""

import logging
from enum import Enum
from typing import Any, Dict, Mapping, Protocol, Tuple

from .errors import RemoteCallError
from .transport import RemoteFault, StructuredResult

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """Remote operations, valued by their webservice names."""
    AUTHENTICATE = "Authenticate"
    ADMINISTRATIONS = "Administrations"
    PROCESS_SALES_INVOICES = "ProcessSalesInvoices"
    CHECK_OUTSTANDING_ITEM = "CheckOutstandingItem"
    NET_REVENUE = "NetRevenue"
    GL_ACCOUNT_BALANCE = "GLAccountBalance"
    GL_ACCOUNT_TRANSACTIONS = "GLAccountTransactions"
    GET_GL_ACCOUNT_SCHEME = "GetGLAccountScheme"


# Request shape per operation, in the order the service expects the elements.
# The casing differs between operations and must be kept as is.
OPERATION_PARAMETERS: Dict[Operation, Tuple[str, ...]] = {
    Operation.AUTHENTICATE: ("accessKey",),
    Operation.ADMINISTRATIONS: ("sessionID",),
    Operation.PROCESS_SALES_INVOICES: ("sessionId", "administrationId", "xmlDoc"),
    Operation.CHECK_OUTSTANDING_ITEM: ("sessionID", "Reference"),
    Operation.NET_REVENUE: ("sessionID", "administrationID", "StartDate", "EndDate"),
    Operation.GL_ACCOUNT_BALANCE: ("sessionID", "administrationID", "transactionDate"),
    Operation.GL_ACCOUNT_TRANSACTIONS: (
        "sessionID",
        "administrationID",
        "GLAccountCode",
        "StartDate",
        "EndDate",
    ),
    Operation.GET_GL_ACCOUNT_SCHEME: ("sessionID", "administrationID"),
}


class Transport(Protocol):
    """Anything able to perform a named remote call."""

    def call(self, operation: str, params: Mapping[str, Any]) -> StructuredResult:
        ...


class RemoteOperationGateway:
    """Dispatches operations to a transport and normalises its faults."""

    def __init__(self, transport: Transport):
        self.transport = transport

    def invoke(self, operation: Operation, params: Mapping[str, Any]) -> StructuredResult:
        """Perform a single remote operation.

        Args:
            operation: Operation to perform
            params: Parameter bag; keys must match the operation's declared shape

        Returns:
            Structured result returned by the transport

        Raises:
            ValueError: If the parameters do not match the declared shape
            RemoteCallError: If the transport reports a fault
        """
        operation = Operation(operation)
        expected = OPERATION_PARAMETERS[operation]
        if set(params) != set(expected):
            raise ValueError(
                f"{operation.value} expects parameters {list(expected)}, got {sorted(params)}"
            )

        ordered = {name: params[name] for name in expected}
        logger.debug(f"Calling Yuki operation {operation.value}")

        try:
            return self.transport.call(operation.value, ordered)
        except RemoteFault as e:
            logger.warning(f"Yuki operation {operation.value} failed: [{e.code}] {e.message}")
            raise RemoteCallError(
                f"{operation.value} failed: [{e.code}] {e.message}",
                operation=operation.value,
                fault_code=e.code,
                fault_message=e.message,
            ) from e
