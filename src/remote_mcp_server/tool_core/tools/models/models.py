from typing import Any, Awaitable, Callable, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict


class TextContent(BaseModel):
    """A single text item of a tool response.

    Attributes:
        type: Content discriminator, always "text".
        text: The text payload.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """
    The uniform response envelope every tool returns.

    Domain errors (division by zero, missing credentials, upstream failures)
    are ordinary results whose text describes the problem, so a caller always
    receives something it can read.

    Attributes:
        content: Ordered content items of the response.
    """

    content: List[TextContent]

    @classmethod
    def from_text(cls, *texts: str) -> "ToolResult":
        """Builds a result with one text item per argument.

        Args:
            *texts: The text payloads, in order.

        Returns:
            A new ToolResult.
        """
        return cls(content=[TextContent(text=text) for text in texts])

    @property
    def texts(self) -> List[str]:
        """The text payloads of all content items, in order."""
        return [item.text for item in self.content]


ToolHandler = Callable[[Any], Union[ToolResult, Awaitable[ToolResult]]]


class ToolDefinition(BaseModel):
    """
    Represents the definition of a tool that can be exposed to a remote caller.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        func: The handler implementing the tool's logic. It receives the validated
              `args_model` instance and returns a `ToolResult` (directly or awaitable).
        args_model: Pydantic model describing and validating the tool's input.
        parameters: JSON schema derived from `args_model`, advertised to clients.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    func: ToolHandler
    args_model: Type[BaseModel]
    parameters: Optional[dict[str, Any]] = None
