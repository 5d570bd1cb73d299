import logging
from typing import Callable, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from clnurl.config import ServiceConfig
from clnurl.error_codes import ErrorCode
from clnurl.exceptions import ClnurlException, NodeException
from clnurl.invoice_creator import ClnInvoiceCreator, INodeInvoiceCreator
from clnurl.lnurl import create_lnurlp_response, create_pay_req_response
from clnurl.protocol.payreq import PayRequest

log = logging.getLogger(__name__)

InvoiceCreatorFactory = Callable[[ServiceConfig], INodeInvoiceCreator]


def _cln_invoice_creator(config: ServiceConfig) -> INodeInvoiceCreator:
    return ClnInvoiceCreator(config.rpc_socket)


def get_config(request: Request) -> ServiceConfig:
    return request.app.state.config


def get_invoice_creator(
    request: Request, config: ServiceConfig = Depends(get_config)
) -> INodeInvoiceCreator:
    return request.app.state.invoice_creator_factory(config)


def _error_response(exc: ClnurlException) -> JSONResponse:
    return JSONResponse(status_code=exc.to_http_status_code(), content=exc.to_dict())


def create_app(
    config: ServiceConfig,
    invoice_creator_factory: Optional[InvoiceCreatorFactory] = None,
) -> FastAPI:
    """
    Builds the HTTP application serving the LNURL-pay endpoints.

    Args:
        config: the service configuration, shared read-only by all requests.
        invoice_creator_factory: builds the invoice creator used by one request.
            Defaults to a `ClnInvoiceCreator` on the configured RPC socket.
    """
    app = FastAPI(title="clnurl", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = config
    app.state.invoice_creator_factory = invoice_creator_factory or _cln_invoice_creator

    @app.exception_handler(ClnurlException)
    async def handle_clnurl_exception(
        request: Request, exc: ClnurlException
    ) -> JSONResponse:
        if isinstance(exc, NodeException):
            log.error("%s %s failed: %s", request.method, request.url.path, exc.reason)
        else:
            log.warning(
                "%s %s rejected: %s", request.method, request.url.path, exc.reason
            )
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unhandled error serving %s", request.url.path)
        return _error_response(
            ClnurlException("Internal server error", ErrorCode.INTERNAL_ERROR)
        )

    @app.get("/lnurl")
    def get_lnurl(config: ServiceConfig = Depends(get_config)) -> JSONResponse:
        return JSONResponse(create_lnurlp_response(config).to_dict())

    @app.get("/invoice")
    def get_invoice(
        request: Request,
        config: ServiceConfig = Depends(get_config),
        invoice_creator: INodeInvoiceCreator = Depends(get_invoice_creator),
    ) -> JSONResponse:
        pay_request = PayRequest.from_query_params(request.query_params)
        response = create_pay_req_response(pay_request, config, invoice_creator)
        return JSONResponse(response.to_dict())

    return app
