"""Operation table and the single dispatch point for tool calls."""

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from googleapiclient.errors import HttpError
from mcp.shared.exceptions import McpError
from mcp.types import TextContent
from pydantic import BaseModel, ValidationError

from . import errors

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[dict]]


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: Handler

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)


def to_json_content(payload: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


class OperationRegistry:
    """Name -> (schema, handler, description) table.

    Populated once at startup; ``freeze()`` makes it read-only.
    """

    def __init__(self) -> None:
        self._operations: dict[str, Operation] = {}
        self._frozen = False

    def register(
        self,
        name: str,
        description: str,
        input_model: type[BaseModel],
        handler: Handler,
    ) -> Operation:
        if self._frozen:
            raise RuntimeError("Operation registry is frozen")
        if name in self._operations:
            raise ValueError(f"Operation {name!r} is already registered")
        operation = Operation(name, description, input_model, handler)
        self._operations[name] = operation
        return operation

    def freeze(self) -> "OperationRegistry":
        self._operations = MappingProxyType(self._operations)
        self._frozen = True
        return self

    @property
    def operations(self) -> Mapping[str, Operation]:
        return self._operations

    def __contains__(self, name: str) -> bool:
        return name in self._operations

    async def invoke(self, name: str, arguments: dict[str, Any] | None = None) -> list[TextContent]:
        """Validate ``arguments``, run the handler, and wrap its result.

        Raises McpError with INVALID_PARAMS for bad input (the handler is not
        called) and INTERNAL_ERROR for anything the handler raises.
        """
        operation = self._operations.get(name)
        if operation is None:
            raise errors.unknown_tool(name)

        logger.debug("Invoking %s", name)
        try:
            params = operation.input_model.model_validate(arguments or {})
        except ValidationError as e:
            message = errors.format_validation_error(e)
            logger.info("Rejected %s arguments: %s", name, message)
            raise errors.invalid_params(message) from e

        try:
            payload = await operation.handler(params)
        except McpError:
            raise
        except ValidationError as e:
            raise errors.invalid_params(errors.format_validation_error(e)) from e
        except HttpError as e:
            logger.exception("%s failed", name)
            raise errors.internal_error(errors.backend_failure(e)) from e
        except Exception as e:
            logger.exception("%s failed", name)
            message = str(e)
            raise errors.internal_error(message or errors.UNEXPECTED_FAILURE) from e

        return to_json_content(payload)
