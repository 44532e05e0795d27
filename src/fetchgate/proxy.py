import functools
import logging
import time
import uuid
import json

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fetchgate.logging import setup_logging
from starlette.datastructures import MutableHeaders

from fetchgate.config import ConfigManager
from fetchgate.datastructures import ProxyResponse
from fetchgate.exceptions import (
    ClientInputException,
    FetchGateException,
    ProxyFailureException,
    UpstreamStatusException,
)
from fetchgate.ui_config import UIConfig, load_ui_config
from fetchgate.variants import ProxyVariant, VariantSet, default_variants, load_variants
from fetchgate.version import VERSION
from fetchgate.constants import MISSING_URL_MESSAGE, PROXY_ERROR_HEADER


META_ROUTE = "/_fetchgate/meta"


setup_logging(ConfigManager.LOG_LEVEL)

logger = logging.getLogger("fetchgate")


def _find_request(args, kwargs) -> Request:
    request = kwargs.get("request")
    if request is not None:
        return request
    return next(a for a in args if isinstance(a, Request))


def error_response(exc: FetchGateException, correlation_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "statusCode": exc.status_code,
            "message": exc.message,
        },
        headers={
            PROXY_ERROR_HEADER: exc.source,
            "X-Correlation-Id": correlation_id,
        },
    )


def fetchgate_route(variant_name: str | None = None):
    def wrapper(func):
        @functools.wraps(func)
        async def wrapped(*args, **kwargs):
            request = _find_request(args, kwargs)
            correlation_id = str(uuid.uuid4())
            request.state.correlation_id = correlation_id
            logger.info(
                "Incoming fetchgate request",
                extra={
                    "correlation_id": correlation_id,
                    "variant": variant_name,
                    "method": request.method,
                    "url": str(request.url),
                    "client_host": request.client.host if request.client else "unknown",
                }
            )
            start_time = time.time()

            try:
                response = await func(*args, **kwargs)
                elapsed_time = time.time() - start_time
                logger.info(
                    "Fetchgate request processed successfully",
                    extra={
                        "correlation_id": correlation_id,
                        "variant": variant_name,
                        "status_code": response.status_code,
                        "content_type": response.headers.get("Content-Type", "unknown"),
                        "elapsed_time": f"{elapsed_time:.3f}s",
                    }
                )
                return response
            except FetchGateException as fe:
                # Access-log line only; proxy failures were logged where they happened
                elapsed_time = time.time() - start_time
                logger.info(
                    "Fetchgate request failed",
                    extra={
                        "correlation_id": correlation_id,
                        "variant": variant_name,
                        "status_code": fe.status_code,
                        "source": fe.source,
                        "elapsed_time": f"{elapsed_time:.3f}s",
                    }
                )
                return error_response(fe, correlation_id)
            except Exception as exc:
                elapsed_time = time.time() - start_time
                logger.error(
                    "Unexpected error occurred",
                    exc_info=True,
                    extra={
                        "correlation_id": correlation_id,
                        "variant": variant_name,
                        "exception": str(exc),
                        "elapsed_time": f"{elapsed_time:.3f}s",
                    }
                )
                return error_response(FetchGateException(), correlation_id)
        return wrapped
    return wrapper


async def fetch_resource(
    variant: ProxyVariant,
    target_url: str | None,
    *,
    client: httpx.AsyncClient,
    correlation_id: str | None = None,
) -> ProxyResponse:
    """Fetch the upstream resource for ``variant`` and build the relayed response.

    Raises ``ClientInputException`` when a caller URL is required but absent,
    ``UpstreamStatusException`` when the upstream answers with a non-2xx status,
    and ``ProxyFailureException`` for anything else. The caller URL and the
    underlying error only ever reach the log, never the exception message.
    """
    if variant.requires_url and not target_url:
        raise ClientInputException(MISSING_URL_MESSAGE)

    url = target_url if variant.requires_url else variant.fixed_url

    try:
        response = await client.get(url, headers=variant.headers)

        if not response.is_success:
            raise UpstreamStatusException(
                f"Failed to fetch {variant.label}", status_code=response.status_code,
            )

        headers = MutableHeaders()
        cache_control = variant.cache_control()
        if cache_control is not None:
            headers["Cache-Control"] = cache_control
        if variant.cors_origin is not None:
            headers["Access-Control-Allow-Origin"] = variant.cors_origin

        if variant.json_passthrough:
            return ProxyResponse(
                status_code=response.status_code,
                headers=headers,
                content=response.content,
                json_data=response.json(),
            )

        content_type = response.headers.get("content-type") or variant.default_content_type
        if content_type:
            headers["Content-Type"] = content_type

        return ProxyResponse(
            status_code=response.status_code, headers=headers, content=response.content,
        )
    except UpstreamStatusException:
        raise
    except Exception as exc:
        logger.error(
            f"{variant.label.capitalize()} proxy error",
            exc_info=True,
            extra={
                "correlation_id": correlation_id,
                "variant": variant.name,
                "exception": str(exc),
            }
        )
        raise ProxyFailureException(f"Failed to proxy {variant.label}") from exc


class FetchGate:
    def __init__(
        self,
        variants_path: str | None = None,
        ui_config_path: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = ConfigManager()
        self.transport = transport

        variants_path = variants_path or self.config.VARIANTS_PATH
        if variants_path:
            self.variants: VariantSet = load_variants(variants_path)
        else:
            self.variants: VariantSet = default_variants(self.config)

        self.ui_config: UIConfig = load_ui_config(ui_config_path or self.config.UI_CONFIG_PATH)

        logger.info(
            "Fetchgate variants loaded",
            extra={"variants": json.dumps([v.describe() for v in self.variants.variants])},
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.PROXY_CLIENT_TIMEOUT_SECS,
            follow_redirects=True,
            transport=self.transport,
        )

    @fetchgate_route()
    async def _meta_route(self, request: Request):
        return JSONResponse(
            content={
                "version": VERSION,
                "variants": [v.describe() for v in self.variants.variants],
                "ui": self.ui_config.model_dump(),
            },
            status_code=200,
        )

    async def _proxy_route(self, request: Request, variant: ProxyVariant):
        target_url = request.query_params.get(variant.url_param) if variant.requires_url else None

        async with self._client() as client:
            proxy_response = await fetch_resource(
                variant,
                target_url,
                client=client,
                correlation_id=request.state.correlation_id,
            )

        if variant.json_passthrough:
            return JSONResponse(
                content=proxy_response.json_data,
                status_code=proxy_response.status_code,
                headers=dict(proxy_response.headers),
            )
        return Response(
            content=proxy_response.content,
            status_code=proxy_response.status_code,
            headers=dict(proxy_response.headers),
        )

    def _variant_route(self, variant: ProxyVariant):
        @fetchgate_route(variant.name)
        async def route(request: Request):
            return await self._proxy_route(request, variant)

        return route

    def to_fastapi(self, app: FastAPI):
        app.api_route(META_ROUTE, methods=["GET"])(self._meta_route)
        for variant in self.variants.variants:
            app.api_route(variant.route, methods=["GET"], name=variant.name)(
                self._variant_route(variant)
            )
