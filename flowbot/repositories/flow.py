import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from ..domain.models import FlowDefinition
from ..exceptions import DuplicateFlowError, FlowNotFoundError

logger = logging.getLogger(__name__)


# The Interface
class FlowRepository(ABC):
    """
    Defines how the application accesses Flow definitions.
    Populated once at startup and read-only while messages are served.
    """

    @abstractmethod
    def register(self, flow: FlowDefinition):
        """
        Adds a flow.
        Raises DuplicateFlowError if the name is already taken.
        """
        pass

    @abstractmethod
    def get_flow(self, flow_name: str) -> FlowDefinition:
        """
        Retrieves a flow by name.
        Raises FlowNotFoundError if not found.
        """
        pass

    @abstractmethod
    def list_flows(self) -> List[FlowDefinition]:
        """Returns every flow in registration order."""
        pass

    def contains(self, flow_name: str) -> bool:
        try:
            self.get_flow(flow_name)
        except FlowNotFoundError:
            return False
        return True

    def register_all(self, flows: Iterable[FlowDefinition]):
        for flow in flows:
            self.register(flow)


class InMemoryFlowRegistry(FlowRepository):
    """
    Keeps flows in a dict. Insertion order doubles as the detection tie-break.
    """

    def __init__(self):
        # Index for O(1) lookup
        self._index: Dict[str, FlowDefinition] = {}

    def register(self, flow: FlowDefinition):
        if flow.name in self._index:
            raise DuplicateFlowError(flow.name)
        self._index[flow.name] = flow
        logger.info(f"Registered flow '{flow.name}' with {len(flow.states)} states")

    def get_flow(self, flow_name: str) -> FlowDefinition:
        if flow_name not in self._index:
            raise FlowNotFoundError(flow_name)
        return self._index[flow_name]

    def list_flows(self) -> List[FlowDefinition]:
        return list(self._index.values())
