"""SOAP 1.1 transport for the Yuki webservices over httpx.

Issues a single call per invocation and turns the response into a plain
mapping of ``{"<Operation>Result": value}``. Any failure on the wire or in
the SOAP envelope is raised as RemoteFault; nothing is retried here.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

import httpx
from lxml import etree

from .constants import SOAP_ENVELOPE_NS, XSI_NS, YUKI_WEBSERVICE_NS
from .escaping import escape_value

logger = logging.getLogger(__name__)

StructuredResult = Dict[str, Any]

# Hardened parser: responses never need DTDs, entities or network access
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


class RemoteFault(Exception):
    """Raised when the webservice call fails at transport or SOAP level."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class RawXml(str):
    """Parameter value embedded in the request body without escaping."""
    pass


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _find_fault(body: etree._Element) -> Optional[RemoteFault]:
    """Return the SOAP Fault of a response Body as RemoteFault, if any."""
    for element in body:
        if isinstance(element.tag, str) and _local_name(element) == "Fault":
            code = element.findtext("faultcode") or "Server"
            message = element.findtext("faultstring") or "Unknown SOAP fault"
            return RemoteFault(code.strip(), message.strip())
    return None


def _find_fault_in(content: bytes) -> Optional[RemoteFault]:
    try:
        root = etree.fromstring(content, parser=_PARSER)
    except etree.XMLSyntaxError:
        return None
    for element in root:
        if isinstance(element.tag, str) and _local_name(element) == "Body":
            return _find_fault(element)
    return None


def _serialize_param(key: str, value: Any) -> str:
    """Serialize a single operation parameter to XML."""
    if value is None:
        return f'<{key} xsi:nil="true" />'
    if isinstance(value, RawXml):
        return f"<{key}>{value}</{key}>"
    if isinstance(value, bool):
        return f"<{key}>{str(value).lower()}</{key}>"
    if isinstance(value, (date, datetime)):
        return f"<{key}>{value.isoformat()}</{key}>"
    return f"<{key}>{escape_value(value)}</{key}>"


def build_envelope(operation: str, params: Mapping[str, Any]) -> str:
    """Build the SOAP envelope for an operation call.

    Args:
        operation: Remote operation name (e.g. 'Authenticate')
        params: Parameters, written in iteration order

    Returns:
        Complete SOAP XML envelope as string
    """
    params_xml = "".join(_serialize_param(k, v) for k, v in params.items())
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<soap:Envelope xmlns:soap="{SOAP_ENVELOPE_NS}" xmlns:xsi="{XSI_NS}">'
        "<soap:Body>"
        f'<{operation} xmlns="{YUKI_WEBSERVICE_NS}">{params_xml}</{operation}>'
        "</soap:Body>"
        "</soap:Envelope>"
    )


def parse_response(operation: str, content: bytes) -> StructuredResult:
    """Turn a SOAP response body into a structured result.

    Args:
        operation: Remote operation name the response belongs to
        content: Raw response body

    Returns:
        Mapping with a single '<operation>Result' entry. Element content is
        returned as the XML string of its first child element, text content
        as a string, and a missing result as None.

    Raises:
        RemoteFault: If the body is not XML or carries a SOAP Fault
    """
    try:
        root = etree.fromstring(content, parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise RemoteFault("Client", f"Unreadable response for {operation}: {e}")

    body = next(
        (el for el in root if isinstance(el.tag, str) and _local_name(el) == "Body"),
        None,
    )
    if body is None:
        raise RemoteFault("Client", f"Response for {operation} has no SOAP Body")

    fault = _find_fault(body)
    if fault is not None:
        raise fault

    result_tag = f"{operation}Result"
    result_value: Any = None
    for result in body.iter():
        if not isinstance(result.tag, str) or _local_name(result) != result_tag:
            continue
        children = [child for child in result if isinstance(child.tag, str)]
        if children:
            result_value = etree.tostring(children[0], encoding="unicode", with_tail=False)
        else:
            result_value = result.text or ""
        break

    return {result_tag: result_value}


class SoapTransport:
    """Performs named Yuki operations against one service endpoint."""

    def __init__(
        self,
        service_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the transport.

        Args:
            service_url: SOAP endpoint, e.g. https://api.yukiworks.nl/ws/Sales.asmx
            timeout: Request timeout in seconds
            client: Pre-configured httpx client (created when omitted)
        """
        self.service_url = service_url
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def __enter__(self) -> "SoapTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client and not self._client.is_closed:
            self._client.close()

    def call(self, operation: str, params: Mapping[str, Any]) -> StructuredResult:
        """Call a remote operation.

        Args:
            operation: Remote operation name
            params: Operation parameters in the order the service declares them

        Returns:
            Structured result of the operation

        Raises:
            RemoteFault: On network errors, HTTP errors and SOAP faults
        """
        envelope = build_envelope(operation, params)
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"{YUKI_WEBSERVICE_NS}{operation}"',
        }

        try:
            response = self._client.post(
                self.service_url,
                content=envelope.encode("utf-8"),
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise RemoteFault("HTTP", f"Request to {self.service_url} failed: {e}")

        if response.is_success:
            return parse_response(operation, response.content)

        # SOAP faults come back as HTTP 500 with a Fault body
        fault = _find_fault_in(response.content)
        if fault is not None:
            raise fault
        raise RemoteFault(
            str(response.status_code),
            f"HTTP {response.status_code} from {self.service_url}",
        )
