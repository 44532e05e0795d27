from fetchgate.proxy import FetchGate, fetch_resource
from fetchgate.version import VERSION

__all__ = ["FetchGate", "fetch_resource", "VERSION"]
