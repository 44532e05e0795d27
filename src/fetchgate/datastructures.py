import typing
from dataclasses import dataclass
from starlette.datastructures import MutableHeaders


@dataclass
class ProxyResponse:
    status_code: int
    headers: MutableHeaders
    content: bytes
    json_data: typing.Any = None
