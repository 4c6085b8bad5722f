"""
Base class for API gateway families.

Each family (REST APIs, HTTP APIs) implements:
- list_gateways(): Yield the ids of every gateway in the family
- list_stages(): Return logging snapshots for every stage of a gateway

Failures are raised as ConnectorError so the audit can report them and move on.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterator, List

if TYPE_CHECKING:
    from ..audit.verifier import StageLogging


class ConnectorError(Exception):
    """Exception raised by gateway families when an SDK call fails."""
    pass


class GatewayFamily(ABC):
    """Abstract base class for a family of API gateways.

    Subclasses must implement:
        - name: Family label used in diagnostics ("REST", "HTTP")
        - list_gateways(): Gateway ids in catalog order
        - list_stages(): Stage logging snapshots for one gateway

    Optional overrides:
        - supports_execution_logging: Whether stages carry execution logs
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the family label."""
        pass

    @property
    def supports_execution_logging(self) -> bool:
        return False

    @abstractmethod
    def list_gateways(self) -> Iterator[str]:
        """Yield gateway ids.

        May raise ConnectorError part way through; ids yielded before the
        failure are still valid.
        """
        pass

    @abstractmethod
    def list_stages(self, api_id: str) -> List["StageLogging"]:
        """Fetch the logging configuration of every stage of a gateway.

        Raises:
            ConnectorError: If the stages cannot be fetched
        """
        pass
