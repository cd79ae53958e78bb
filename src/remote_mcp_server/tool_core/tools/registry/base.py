"""Tool registry abstraction and the invocation envelope."""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel

from ..execution import run_handler
from ..models import ToolDefinition, ToolHandler, ToolResult
from ..schema import SchemaValidator
from ...exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

DEFAULT_TOOL_TIMEOUT = 30.0


class ToolRegistry(ABC):
    """
    A registry mapping tool names to their input shapes and handlers.

    The registry is built once at process start and handed to the transport layer,
    which calls `invoke` for every incoming tool call. Registering a name twice
    replaces the earlier definition (last registration wins).
    """

    def __init__(self, tool_timeout: float = DEFAULT_TOOL_TIMEOUT) -> None:
        """Initialize the ToolRegistry.

        Args:
            tool_timeout: Timeout in seconds applied to every handler execution.
        """
        self.tools: Dict[str, ToolDefinition] = {}
        self.tool_timeout = tool_timeout

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition],
        args_model: Optional[Type[BaseModel]] = None,
        func: Optional[ToolHandler] = None,
        description: Optional[str] = None,
    ) -> None:
        """
        Register a tool.

        A tool is registered either from a ready `ToolDefinition` or from its parts:
        a name, the pydantic model describing its input, and the handler.

        Args:
            name_or_tool: Either a `ToolDefinition` object or the name of the tool.
            args_model: The pydantic model validating the tool input. Required with a name.
            func: The handler receiving the validated model instance. Required with a name.
            description: What the tool does. Defaults to the handler's docstring.

        Raises:
            ToolRegistrationError: If a name is given without a handler or input model.
            ToolValidationError: If no description is available or the input model is recursive.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        else:
            if func is None or args_model is None:
                raise ToolRegistrationError(
                    f"Tool '{name_or_tool}': both args_model and func are required when registering by name."
                )
            tool = self._generate_tool_definition(name_or_tool, args_model, func, description)

        if tool.name in self.tools:
            logger.warning(f"Tool '{tool.name}' is already registered. Replacing the previous definition.")

        self.tools[tool.name] = tool
        logger.info(f"Successfully registered tool: '{tool.name}'")

    def get(self, tool_name: str) -> ToolDefinition:
        """Look up a tool definition by name.

        Args:
            tool_name: The name of the tool.

        Returns:
            The registered definition.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        tool = self.tools.get(tool_name)
        if tool is None:
            msg = f"Tool '{tool_name}' not found in the registry."
            logger.warning(msg)
            raise ToolNotFoundError(msg)
        return tool

    @property
    def names(self) -> List[str]:
        """Names of all registered tools, in registration order."""
        return list(self.tools)

    async def invoke(self, tool_name: str, raw_args: Any) -> ToolResult:
        """
        Validate arguments and run a tool, returning its response envelope.

        Unknown tools and invalid arguments are the caller's problem and raise.
        Anything that goes wrong inside the handler is converted into an error
        text result, so a faulty handler never reaches the transport as an exception.

        Args:
            tool_name: The name of the tool to invoke.
            raw_args: The untyped arguments as received from the transport.

        Returns:
            The ToolResult produced by the handler, or an error text result.

        Raises:
            ToolNotFoundError: If the tool is not registered.
            ToolValidationError: If the arguments do not match the tool's input model.
        """
        tool = self.get(tool_name)

        outcome = SchemaValidator.validate(tool.args_model, raw_args)
        if not outcome.ok:
            msg = f"Invalid arguments for tool '{tool_name}': {outcome.error}"
            logger.warning(msg)
            raise ToolValidationError(msg)

        logger.info(f"Executing tool '{tool_name}'...")
        try:
            result = await run_handler(tool.func, outcome.value, timeout=self.tool_timeout)
            if not isinstance(result, ToolResult):
                result = ToolResult.model_validate(result)
        except Exception as e:
            logger.error(f"Tool '{tool_name}' raised an error: {e}", exc_info=True)
            return ToolResult.from_text(f"Error executing tool '{tool_name}': {e}")

        logger.info(f"Tool '{tool_name}' executed successfully.")
        return result

    @property
    @abstractmethod
    def tool_object(self) -> Any:
        """Constructs the tool catalog in the representation a transport needs.

        Returns:
            The transport-specific tool representation.
        """
        pass

    def _generate_tool_definition(
        self,
        name: str,
        args_model: Type[BaseModel],
        func: ToolHandler,
        description: Optional[str] = None,
    ) -> ToolDefinition:
        """Generate a ToolDefinition from its parts.

        Args:
            name: The tool name.
            args_model: The pydantic model validating the tool input.
            func: The handler.
            description: Optional description override for the tool.

        Returns:
            A ToolDefinition object containing the tool's metadata and schema.

        Raises:
            ToolValidationError: If there is no description or the input model is recursive.
        """
        if description is None:
            description = self._get_docstring_from_func(func, name)

        return ToolDefinition(
            name=name,
            description=description,
            func=func,
            args_model=args_model,
            parameters=SchemaValidator.build_parameters(args_model),
        )

    @staticmethod
    def _get_docstring_from_func(func: Callable[..., Any], tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. Clients need a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc
