"""Conflict-safe commit of metadata onto the dataset status."""

from __future__ import annotations

from typing import TYPE_CHECKING

from datasetsync.cluster.retry import DEFAULT_BACKOFF, retry_on_conflict

if TYPE_CHECKING:
    from datasetsync.metadata.context import EngineContext


def commit_status(ctx: EngineContext, ufs_total: str, file_num: str) -> None:
    """Set UfsTotal and FileNum on the dataset status.

    Each attempt fetches the current record, applies the change to a copy
    and submits it. Version conflicts restart the cycle under the context's
    backoff policy; an unchanged status is not submitted.

    Raises:
        ConflictExhaustedError: If every attempt conflicted.
        APIError: On any other fetch or update failure.
    """
    backoff = ctx.backoff or DEFAULT_BACKOFF

    def _update() -> None:
        dataset = ctx.get_dataset()
        to_update = dataset.deep_copy()
        to_update.status.ufs_total = ufs_total
        to_update.status.file_num = file_num
        if to_update.status == dataset.status:
            ctx.logger.debug(f"Status of dataset {ctx.key} already up to date")
            return
        ctx.client.update_status(to_update)

    retry_on_conflict(_update, backoff=backoff)
    ctx.logger.info(
        f"Committed metadata of dataset {ctx.key}: "
        f"UfsTotal={ufs_total}, FileNum={file_num}"
    )
