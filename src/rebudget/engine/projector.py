#!/usr/bin/env python3
"""
Transfer Projector

Folds an ordered queue of transfer requests through the ledger applier. Each
transfer sees the cumulative effect of the ones before it, so order matters.

project() is all-or-nothing: the first rejected transfer aborts the batch and
its error is re-raised with transfer_id and position set. Callers that prefer
to drop offending requests and keep going use project_skipping_rejected().
"""

import logging
from collections.abc import Iterable, Sequence

from ..core.models import (
    BudgetLineItem,
    MappingRow,
    PolicyRateDocument,
    ProjectionResult,
    RejectedTransfer,
    TransferRequest,
)
from .errors import TransferError
from .ledger import apply_request

logger = logging.getLogger(__name__)


def project(
    policy: PolicyRateDocument,
    baseline: Sequence[BudgetLineItem],
    encumbrance_snapshot: Iterable[BudgetLineItem],
    requests: Iterable[TransferRequest],
) -> ProjectionResult:
    """
    Apply every request in order and return final line items plus the audit trail.

    Raises:
        RebudgetError: The first failure, with transfer_id/position annotated.
            No partial result is returned.
    """
    snapshot = tuple(encumbrance_snapshot)
    working = tuple(baseline)
    mapping_log: list[MappingRow] = []

    for position, request in enumerate(requests):
        try:
            step = apply_request(policy, working, snapshot, request)
        except TransferError as e:
            e.transfer_id = request.id
            e.position = position
            logger.warning("Projection aborted at transfer %s (#%d): %s", request.id, position + 1, e)
            raise
        working = step.line_items
        mapping_log.append(step.mapping_row)

    logger.info("Projected %d transfers", len(mapping_log))
    return ProjectionResult(line_items=working, mapping_log=tuple(mapping_log))


def project_skipping_rejected(
    policy: PolicyRateDocument,
    baseline: Sequence[BudgetLineItem],
    encumbrance_snapshot: Iterable[BudgetLineItem],
    requests: Iterable[TransferRequest],
) -> ProjectionResult:
    """
    Apply requests in order, dropping any that are rejected.

    A dropped request leaves the working budget as it was, and the remaining
    requests continue from there. Rejections are reported on the result.
    ReconciliationFailure is a defect and still propagates.
    """
    snapshot = tuple(encumbrance_snapshot)
    working = tuple(baseline)
    mapping_log: list[MappingRow] = []
    rejected: list[RejectedTransfer] = []

    for position, request in enumerate(requests):
        try:
            step = apply_request(policy, working, snapshot, request)
        except TransferError as e:
            e.transfer_id = request.id
            e.position = position
            logger.warning("Skipping transfer %s (#%d): %s", request.id, position + 1, e)
            rejected.append(RejectedTransfer(request=request, position=position, error=e))
            continue
        working = step.line_items
        mapping_log.append(step.mapping_row)

    logger.info("Projected %d transfers, skipped %d", len(mapping_log), len(rejected))
    return ProjectionResult(line_items=working, mapping_log=tuple(mapping_log), rejected=tuple(rejected))
