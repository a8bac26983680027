from prometheus_client import Counter, Histogram

DB_WRITE_TOTAL = Counter(
    "cruddemo_db_write_total",
    "Repository write operations by table, operation type and outcome.",
    ["table", "op_type", "status"],
)

DB_WRITE_LATENCY_SECONDS = Histogram(
    "cruddemo_db_write_latency_seconds",
    "Repository write latency in seconds.",
    ["table", "op_type"],
)
