# myqnapcloud/api/destinations.py

"""
Sinks a successful response body is written into.

There are exactly two kinds. The dispatcher looks at ``kind`` to decide
whether the body is JSON-decoded or copied through untouched.
"""

from typing import Any, BinaryIO, Generic, Optional, Type, TypeVar, Union
from enum import Enum
import io
import json

from .errors import DecodeError
from .response_handler import decode_model

T = TypeVar('T')

class DestinationKind(Enum):
    JSON = "json"
    RAW = "raw"

class JSONDestination(Generic[T]):
    """Decodes the body as JSON into ``model`` (a dataclass, ``dict`` or ``list``)"""

    kind = DestinationKind.JSON

    def __init__(self, model: Type[T]):
        self.model = model
        self.value: Optional[T] = None

    def decode(self, data: Union[bytes, str]) -> T:
        try:
            raw = json.loads(data)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Response body is not valid JSON: {str(e)}") from e
        value = decode_model(self.model, raw)
        self.value = value
        return value

class RawDestination:
    """Receives the body bytes verbatim"""

    kind = DestinationKind.RAW

    def __init__(self, sink: Optional[BinaryIO] = None):
        self.sink = sink if sink is not None else io.BytesIO()

    def write(self, chunk: bytes) -> None:
        self.sink.write(chunk)

    def getvalue(self) -> bytes:
        return self.sink.getvalue()

Destination = Union[JSONDestination[Any], RawDestination]
