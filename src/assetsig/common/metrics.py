"""Prometheus metrics for AssetSig.

Provides pre-defined metrics for API performance, query latency and
signing throughput.
"""

from prometheus_client import Counter, Histogram, Info

# Application info
APP_INFO = Info(
    "assetsig",
    "AssetSig application information",
)

# API metrics
API_REQUESTS = Counter(
    "assetsig_api_requests_total",
    "Total number of API requests",
    ["method", "endpoint", "status"],
)

API_REQUEST_DURATION = Histogram(
    "assetsig_api_request_duration_seconds",
    "API request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Inventory metrics
ASSETS_SIGNED = Counter(
    "assetsig_assets_signed_total",
    "Total number of assets assembled and signed",
)

PORT_PARSE_FALLBACKS = Counter(
    "assetsig_port_parse_fallbacks_total",
    "Total number of port tokens that failed to parse and defaulted to 0",
)

# Database metrics
DB_QUERY_DURATION = Histogram(
    "assetsig_db_query_duration_seconds",
    "Database query duration in seconds",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)


def set_app_info(version: str, environment: str, build_hash: str = "") -> None:
    """Set application info metric.

    Args:
        version: Application version.
        environment: Deployment environment.
        build_hash: Git commit hash or build identifier.
    """
    APP_INFO.info({
        "version": version,
        "environment": environment,
        "build_hash": build_hash,
    })
