class FetchGateException(Exception):
    status_code: int = 500
    message: str = "Internal Server Error"
    source: str = "proxy"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ClientInputException(FetchGateException):
    status_code = 400
    source = "client"


class UpstreamStatusException(FetchGateException):
    source = "upstream"


class ProxyFailureException(FetchGateException):
    pass
