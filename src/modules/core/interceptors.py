import uuid

import grpc
import structlog

logger = structlog.get_logger()

REQUEST_ID_KEY = "x-request-id"


class CorrelationIdInterceptor(grpc.ServerInterceptor):
    """Interceptor that extracts or generates a correlation ID for each RPC.

    Reads the x-request-id metadata key from the incoming call. If absent,
    generates a new UUID4. The ID is bound into structlog contextvars so
    every log line carries it, and it is returned to the client as
    initial metadata. Only unary-unary handlers are wrapped.
    """

    def intercept_service(self, continuation, handler_call_details):
        handler = continuation(handler_call_details)
        if handler is None or handler.unary_unary is None:
            return handler

        metadata = dict(handler_call_details.invocation_metadata or ())
        cid = metadata.get(REQUEST_ID_KEY) or str(uuid.uuid4())
        method = handler_call_details.method
        behavior = handler.unary_unary

        def with_correlation_id(request, context):
            # handlers run on pool threads; bind per call
            structlog.contextvars.clear_contextvars()
            structlog.contextvars.bind_contextvars(correlation_id=cid)

            context.send_initial_metadata(((REQUEST_ID_KEY, cid),))
            logger.info("rpc_started", method=method)
            try:
                return behavior(request, context)
            finally:
                code = context.code() or grpc.StatusCode.OK
                logger.info("rpc_finished", method=method, status_code=code.name)
                structlog.contextvars.clear_contextvars()

        return grpc.unary_unary_rpc_method_handler(
            with_correlation_id,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
