"""Batch extraction over many document texts.

Each document is an independent orchestrator call, so documents run in a
thread pool with no shared mutable state. Results come back in input order.
A failing or unfinished document becomes a BatchItemFailure; it never
aborts the rest of the batch. Nothing is retried.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel

from config import get_settings
from domain.extraction.models import DocumentExtraction

from .orchestrator import ExtractionOrchestrator

logger = logging.getLogger(__name__)


class BatchItemFailure(BaseModel):
    """A batch item that produced no DocumentExtraction"""
    index: int
    error_type: str
    message: str


BatchItemResult = Union[DocumentExtraction, BatchItemFailure]


def extract_batch(
    texts: Sequence[str],
    template_id: Optional[str] = None,
    max_workers: Optional[int] = None,
    timeout_seconds: Optional[float] = None,
    orchestrator: Optional[ExtractionOrchestrator] = None,
) -> List[BatchItemResult]:
    """Extract many documents concurrently.

    Args:
        texts: Document texts
        template_id: Template used for every document
        max_workers: Worker threads (defaults to BATCH_MAX_WORKERS)
        timeout_seconds: Deadline for the whole batch (defaults to BATCH_TIMEOUT_SECONDS)
        orchestrator: Orchestrator to use (defaults to a new one)

    Returns:
        One result per input text, in input order

    Example:
        results = extract_batch([text_a, text_b], max_workers=2)
        failures = [r for r in results if isinstance(r, BatchItemFailure)]
    """
    if not texts:
        return []

    settings = get_settings()
    workers = max_workers or settings.BATCH_MAX_WORKERS
    timeout = timeout_seconds if timeout_seconds is not None else settings.BATCH_TIMEOUT_SECONDS
    orchestrator = orchestrator or ExtractionOrchestrator()

    logger.info(f"Processing batch of {len(texts)} documents with {workers} workers")
    start_time = time.perf_counter()

    results: List[Optional[BatchItemResult]] = [None] * len(texts)
    executor = ThreadPoolExecutor(max_workers=min(workers, len(texts)))
    try:
        futures = {
            executor.submit(orchestrator.extract, text, template_id): index
            for index, text in enumerate(texts)
        }
        done, not_done = wait(futures, timeout=timeout)

        for future in done:
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as e:
                logger.error(
                    f"Batch item {index} failed: {e}",
                    extra={"document_key": index, "template_id": template_id},
                )
                results[index] = BatchItemFailure(
                    index=index, error_type=type(e).__name__, message=str(e)
                )

        for future in not_done:
            index = futures[future]
            future.cancel()
            logger.error(
                f"Batch item {index} did not finish within {timeout}s",
                extra={"document_key": index, "template_id": template_id},
            )
            results[index] = BatchItemFailure(
                index=index,
                error_type="TimeoutError",
                message=f"Extraction did not finish within {timeout}s",
            )
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    failed = sum(1 for r in results if isinstance(r, BatchItemFailure))
    elapsed_ms = (time.perf_counter() - start_time) * 1000
    logger.info(
        f"Batch complete: {len(texts) - failed}/{len(texts)} successful in {elapsed_ms:.0f}ms"
    )
    return results
