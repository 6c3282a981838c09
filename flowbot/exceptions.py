"""
Flowbot Exceptions

Error taxonomy shared by the registry, session store, engine and tool layers.
"""


class FlowbotError(Exception):
    """Base class for all flowbot errors."""
    pass


class DuplicateFlowError(FlowbotError):
    """Raised when two flows are registered under the same name."""

    def __init__(self, flow_name: str):
        super().__init__(f"Flow '{flow_name}' is already registered.")
        self.flow_name = flow_name


class FlowNotFoundError(FlowbotError):
    """Raised when a flow name does not resolve in the registry."""

    def __init__(self, flow_name: str):
        super().__init__(f"Flow '{flow_name}' not found.")
        self.flow_name = flow_name


class DuplicateSessionError(FlowbotError):
    """Raised when a session is created for a user that already has one."""

    def __init__(self, user_id: str):
        super().__init__(f"Session for user '{user_id}' already exists.")
        self.user_id = user_id


class CorruptedStateError(FlowbotError):
    """Raised when a session points at a state missing from its flow graph."""

    def __init__(self, flow_name: str, state_id: str):
        super().__init__(f"State '{state_id}' does not exist in flow '{flow_name}'.")
        self.flow_name = flow_name
        self.state_id = state_id


class ToolNotFoundError(FlowbotError):
    """Raised when a tool name is not registered with the dispatcher."""

    def __init__(self, tool_name: str):
        super().__init__(f"Tool {tool_name} not found")
        self.tool_name = tool_name


class ToolExecutionError(FlowbotError):
    """Raised by a tool handler that could not produce a result."""
    pass
