"""Batch EOL lookup.

Each request is resolved end to end (map -> fetch -> resolve -> format) and
emitted before the next one starts, so output order always follows input order
and rows already written survive an interrupted run.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from ._lifecycle import (
    LifecycleClient,
    OutputRow,
    ProductVersionRequest,
    format_row,
    map_product,
    resolve_release,
)
from .exceptions import APIError
from .logging_config import logger


@dataclass
class RowFailure:
    """A request whose lookup failed."""

    product: str
    version: str
    reason: str


@dataclass
class LookupOutcome:
    """Result of a single successful lookup."""

    row: OutputRow
    found: bool


@dataclass
class BatchResult:
    """
    Aggregate result of a batch run.

    Attributes:
        processed: Number of requests handled
        emitted: Number of rows written to the output
        not_found: Emitted rows whose version matched no release
        failures: Requests that produced no row
    """

    processed: int = 0
    emitted: int = 0
    not_found: int = 0
    failures: List[RowFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every request produced a row."""
        return not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def lookup_request(request: ProductVersionRequest, client: LifecycleClient) -> LookupOutcome:
    """
    Resolve one request into an output row.

    A version without a matching release is not an error: the row is built from
    the sentinel defaults instead.

    Raises:
        APIError: If the product could not be fetched
    """
    slug = map_product(request.product)
    payload = client.fetch_product(slug)
    metadata = payload.metadata(request.product)

    resolved = resolve_release(payload.releases, request.version)
    if resolved is None:
        logger.info(f"{request.product} {request.version}: no matching release")

    row = format_row(metadata, resolved, request.version, request.product)
    return LookupOutcome(row=row, found=resolved is not None)


def process_requests(
    requests: Iterable[ProductVersionRequest],
    client: LifecycleClient,
    emit: Callable[[OutputRow], None],
    report_failure: Callable[[RowFailure], None],
    rate_limit: float = 0,
    sleep: Optional[Callable[[float], None]] = None,
) -> BatchResult:
    """
    Look up every request in order.

    Args:
        requests: Requests in input order
        client: Lifecycle API client
        emit: Called with each successful row as soon as it is ready
        report_failure: Called with each failed request as soon as it fails
        rate_limit: Fixed delay in seconds applied before each lookup
        sleep: Delay function, time.sleep when not given

    Returns:
        BatchResult with counts and the list of failures
    """
    result = BatchResult()
    sleep = sleep or time.sleep

    for request in requests:
        result.processed += 1
        if rate_limit > 0:
            sleep(rate_limit)

        try:
            outcome = lookup_request(request, client)
        except APIError as e:
            logger.debug(f"Lookup failed for {request.product} {request.version}: {e}")
            failure = RowFailure(product=request.product, version=request.version, reason=e.reason)
            result.failures.append(failure)
            report_failure(failure)
            continue

        if not outcome.found:
            result.not_found += 1
        result.emitted += 1
        emit(outcome.row)

    logger.info(
        f"Processed {result.processed} request(s): {result.emitted} row(s), "
        f"{result.not_found} without matching release, {len(result.failures)} failure(s)"
    )
    return result
