"""Prometheus metrics for application intake and document uploads"""

from prometheus_client import Counter, Histogram

# Application metrics
application_counter = Counter(
    "loanyfy_applications_total",
    "Loan applications created",
    ["product_type"],  # Overdraft Limit | Term Loan | unspecified
)

# Document metrics
document_upload_counter = Counter(
    "loanyfy_document_uploads_total",
    "Document upload requests",
    ["outcome"],  # success | not_found | empty | error
)

documents_stored_counter = Counter(
    "loanyfy_documents_stored_total",
    "Documents stored by slot",
    ["slot"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_application(product_type: str | None) -> None:
    application_counter.labels(product_type=product_type or "unspecified").inc()


def record_upload(outcome: str, slots: dict | None = None) -> None:
    """Record upload outcome and, on success, how many files landed in each slot"""
    document_upload_counter.labels(outcome=outcome).inc()
    for slot, value in (slots or {}).items():
        count = len(value) if isinstance(value, list) else 1
        documents_stored_counter.labels(slot=slot).inc(count)
