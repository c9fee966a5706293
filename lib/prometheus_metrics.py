"""
Prometheus metrics for the data gateway
Following standard naming conventions: https://prometheus.io/docs/practices/naming/
"""
from prometheus_client import Counter, Histogram, Gauge, Info
import time

from lib.settings import settings

# ============================================================================
# HTTP Metrics (following Prometheus naming standards)
# ============================================================================

# Total HTTP requests
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

# HTTP request duration
http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# HTTP response size
http_response_size_bytes = Histogram(
    'http_response_size_bytes',
    'HTTP response size in bytes',
    ['method', 'endpoint'],
    buckets=[100, 1000, 10000, 100000, 1000000, 10000000]
)

# ============================================================================
# Database Metrics
# ============================================================================

# Statements executed by the query runner
database_queries_total = Counter(
    'database_queries_total',
    'Total statements executed',
    ['query_type', 'outcome']  # outcome: success, error
)

# Database query duration
database_query_duration_seconds = Histogram(
    'database_query_duration_seconds',
    'Database query execution time in seconds',
    ['query_type'],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Failed connection checkouts
database_pool_acquire_failures_total = Counter(
    'database_pool_acquire_failures_total',
    'Connection acquisitions that failed',
    ['reason']  # reason: timeout, connect
)

# Database connection pool
database_connections_active = Gauge(
    'database_connections_active',
    'Number of checked out database connections'
)

database_connections_idle = Gauge(
    'database_connections_idle',
    'Number of idle database connections'
)

database_connections_total = Gauge(
    'database_connections_total',
    'Total number of open database connections'
)

# ============================================================================
# Upstream Metrics
# ============================================================================

say_proxy_requests_total = Counter(
    'say_proxy_requests_total',
    'Calls forwarded to the say function',
    ['outcome']  # outcome: success, error
)

# ============================================================================
# Application Info & Health
# ============================================================================

# Application info
app_info = Info(
    'app',
    'Application information'
)
app_info.info({
    'version': settings.app_version,
    'name': settings.app_name,
    'environment': settings.environment
})

# Application uptime
app_uptime_seconds = Gauge(
    'app_uptime_seconds',
    'Application uptime in seconds'
)

# Health check status
health_check_status = Gauge(
    'health_check_status',
    'Health check status (1 = healthy, 0 = unhealthy)',
    ['check_type']
)

# ============================================================================
# Helper Functions
# ============================================================================

def track_database_query(query_type: str):
    """Context manager to track database query duration"""
    class QueryTimer:
        def __enter__(self):
            self.start_time = time.time()
            return self

        def __exit__(self, exc_type, *args):
            duration = time.time() - self.start_time
            database_query_duration_seconds.labels(
                query_type=query_type
            ).observe(duration)
            database_queries_total.labels(
                query_type=query_type,
                outcome="error" if exc_type else "success"
            ).inc()

    return QueryTimer()


def update_pool_gauges(size: int, idle: int):
    """Refresh connection pool gauges"""
    database_connections_total.set(size)
    database_connections_idle.set(idle)
    database_connections_active.set(size - idle)


# Initialize app start time for uptime tracking
APP_START_TIME = time.time()

def update_uptime():
    """Update application uptime metric"""
    app_uptime_seconds.set(time.time() - APP_START_TIME)
