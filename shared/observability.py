import time
import uuid

from fastapi import FastAPI, Request, Response
from loguru import logger
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from shared.config import Settings

TRACE_HEADER = "X-Trace-ID"

# Métricas Prometheus compartidas, etiquetadas por servicio
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["service", "method", "endpoint"]
)
ERROR_COUNT = Counter(
    "http_errors_total",
    "Total HTTP errors",
    ["service", "endpoint", "error_type"]
)
EXTERNAL_CALL_COUNT = Counter(
    "external_service_calls_total",
    "Total external service calls",
    ["service", "target_service", "status"]
)
EXTERNAL_CALL_LATENCY = Histogram(
    "external_service_call_duration_seconds",
    "External service call latency in seconds",
    ["service", "target_service"]
)


def configure_logging(settings: Settings) -> None:
    """Replace loguru's default handler with a JSON file sink."""
    logger.remove()  # Quita el handler por defecto
    logger.add(
        sink=settings.log_file,
        format="{time:YYYY-MM-DDTHH:mm:ss.SSSZ} | {level} | {message} | {extra}",
        level=settings.log_level,
        serialize=True,  # Formato JSON
        rotation="1 day",  # Rotación diaria
    )


def instrument_app(app: FastAPI, service_name: str) -> None:
    """
    Attach the correlation-id middleware and the /metrics and /health routes.

    The trace id is taken from the incoming X-Trace-ID header (or generated),
    stored on ``request.state.trace_id`` for handlers that call other
    services, and echoed back in the response headers.
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        trace_id = request.headers.get(TRACE_HEADER, str(uuid.uuid4()))
        start_time = time.time()
        request.state.trace_id = trace_id

        with logger.contextualize(trace_id=trace_id, service=service_name):
            logger.info(
                "Request: {} {}", request.method, request.url.path,
                extra={"method": request.method, "url": str(request.url), "trace_id": trace_id}
            )

            response = await call_next(request)

            latency = time.time() - start_time
            REQUEST_COUNT.labels(
                service=service_name,
                method=request.method,
                endpoint=request.url.path,
                status=response.status_code
            ).inc()
            REQUEST_LATENCY.labels(
                service=service_name,
                method=request.method,
                endpoint=request.url.path
            ).observe(latency)

            logger.info(
                "Response status: {}", response.status_code,
                extra={"status": response.status_code, "latency": latency, "trace_id": trace_id}
            )

            response.headers[TRACE_HEADER] = trace_id
            return response

    @app.get("/metrics")
    async def metrics():
        """Endpoint /metrics compatible con Prometheus"""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "healthy", "service": service_name}
