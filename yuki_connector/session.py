"""Session handling: the two-step Yuki login handshake.

A session starts unauthenticated. login() authenticates with the access key
and then resolves the administration the key belongs to; once both are known
the session stays authenticated for the lifetime of the manager. There is
no logout or refresh, a different administration needs a new manager.
"""

import logging
from typing import Optional

from .errors import AuthenticationError, ConfigurationError, SessionNotEstablishedError
from .gateway import Operation, RemoteOperationGateway
from .models import Session
from .responses import parse_administration_id, parse_session_id

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns the session and administration identifiers of one connector."""

    def __init__(self, gateway: RemoteOperationGateway):
        self.gateway = gateway
        self.session = Session()

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    @property
    def session_id(self) -> Optional[str]:
        return self.session.session_id

    @property
    def administration_id(self) -> Optional[str]:
        return self.session.administration_id

    def login(self, api_key: Optional[str]) -> None:
        """Authenticate and resolve the administration.

        Args:
            api_key: Yuki webservice access key

        Raises:
            ConfigurationError: If no API key is given (nothing is sent to Yuki)
            AuthenticationError: If Yuki returns no session, or the session is
                already established
            AdministrationAccessError: If the key gives access to no administration
            RemoteCallError: If either remote call fails
        """
        if not api_key:
            raise ConfigurationError(
                "Yuki API key not set. Please check your company's settings. "
                "You can find or create a Yuki API key (of type Administration) "
                "under Settings > Webservices in Yuki."
            )
        if self.session.session_id is not None:
            raise AuthenticationError(
                "A Yuki session is already established; create a new connector "
                "to use a different key or administration"
            )

        result = self.gateway.invoke(Operation.AUTHENTICATE, {"accessKey": api_key})
        session_id = parse_session_id(result)
        self.session.session_id = session_id
        logger.debug("Yuki session established")

        try:
            result = self.gateway.invoke(Operation.ADMINISTRATIONS, {"sessionID": session_id})
            self.session.administration_id = parse_administration_id(result)
        except Exception:
            # session_id is only kept together with an administration
            self.session.session_id = None
            raise

        logger.info(f"Logged in to Yuki administration {self.session.administration_id}")

    def require_session(self) -> Session:
        """Get the established session.

        Raises:
            SessionNotEstablishedError: If login() has not completed
        """
        if not self.session.is_authenticated:
            raise SessionNotEstablishedError(
                "Not logged in to Yuki. Call login() with a valid API key first."
            )
        return self.session
