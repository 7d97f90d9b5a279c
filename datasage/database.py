"""
In-memory mock database for the DataSage assistant.

Queries are not parsed. The lower-cased query string is matched against an
ordered list of substring pairs and the first hit picks a canned dataset:

- failed + last week  -> most frequently failing test cases
- performance + login -> login test execution times
- error + api         -> API error log entries
- anything else       -> recent test runs
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from datasage.model import Query, QueryResult

logger = logging.getLogger(__name__)

Dataset = Tuple[List[str], List[List[str]]]

FAILED_TESTS_LAST_WEEK: Dataset = (
    ["TestCaseID", "ModuleName", "FailureCount", "LastFailedTimestamp"],
    [
        ["TC001", "AuthService", "15", "2024-07-25 10:30:00"],
        ["TC105", "PaymentGateway", "12", "2024-07-24 15:00:00"],
        ["TC003", "UserProfile", "8", "2024-07-26 08:15:00"],
        ["TC210", "AuthService", "5", "2024-07-23 11:45:00"],
    ],
)

LOGIN_PERFORMANCE: Dataset = (
    ["TestRunID", "TestCaseID", "ExecutionTime(ms)", "Timestamp"],
    [
        ["RUN001", "TC_Login_Valid", "150", "2024-07-26 09:00:00"],
        ["RUN001", "TC_Login_Invalid", "180", "2024-07-26 09:01:00"],
        ["RUN002", "TC_Login_Valid", "165", "2024-07-25 09:00:00"],
        ["RUN002", "TC_Login_Invalid", "190", "2024-07-25 09:01:00"],
        ["RUN003", "TC_Login_Valid", "145", "2024-07-24 09:00:00"],
        ["RUN003", "TC_Login_Invalid", "175", "2024-07-24 09:01:00"],
    ],
)

API_ERRORS: Dataset = (
    ["Timestamp", "LogLevel", "ServiceName", "ErrorCode", "Message"],
    [
        ["2024-07-26 11:05:12", "ERROR", "OrderAPI", "500", "Internal Server Error processing order 123"],
        ["2024-07-26 10:58:45", "ERROR", "PaymentAPI", "401", "Unauthorized access attempt"],
        ["2024-07-25 16:30:01", "ERROR", "ProductAPI", "404", "Product not found: XYZ"],
    ],
)

RECENT_TEST_RUNS: Dataset = (
    ["TestCaseID", "Status", "Duration(s)", "Timestamp"],
    [
        ["TC001", "Failed", "5.2", "2024-07-26 14:00:00"],
        ["TC002", "Passed", "3.1", "2024-07-26 14:01:00"],
        ["TC003", "Passed", "4.5", "2024-07-26 14:02:00"],
        ["TC004", "Failed", "10.8", "2024-07-26 14:03:00"],
        ["TC005", "Passed", "2.9", "2024-07-26 14:04:00"],
    ],
)

# Checked top to bottom; a query mentioning several topics gets the first.
PATTERNS: List[Tuple[Tuple[str, str], Dataset]] = [
    (("failed", "last week"), FAILED_TESTS_LAST_WEEK),
    (("performance", "login"), LOGIN_PERFORMANCE),
    (("error", "api"), API_ERRORS),
]

DEFAULT_DATASET = RECENT_TEST_RUNS


def match_dataset(query_string: str) -> Dataset:
    """Return the canned dataset for a query string (no copy)."""
    lowered = query_string.lower()
    for needles, dataset in PATTERNS:
        if all(needle in lowered for needle in needles):
            return dataset
    return DEFAULT_DATASET


def execute_query(query: Query) -> QueryResult:
    """Run a query against the mock database and return a fresh result."""
    logger.info("Executing mock query: %s", query.query_string)
    columns, rows = match_dataset(query.query_string)
    return QueryResult(columns=list(columns), rows=[list(r) for r in rows])
