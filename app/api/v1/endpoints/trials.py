from operator import attrgetter
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Response, status
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import SweepAbortedError
from app.dependencies import SolverDep, TrialArchiveDep, TrialLockDep, TrialStoreDep
from app.models.schemas import (
    ArchiveResponse,
    ErrorResponse,
    RecordTrialRequest,
    TrialListResponse,
    TrialSchema,
    WordCountResponse,
)

router = APIRouter()


@router.get(
    "",
    response_model=TrialListResponse,
    summary="List recorded trials",
)
async def list_trials(
    store: TrialStoreDep,
    lock: TrialLockDep,
    order: Literal["index", "count"] = "index",
    descending: bool = False,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
) -> TrialListResponse:
    """
    Page through the trial store.

    The store itself is left in the order it was in; equal counts keep
    their stored order.
    """
    async with lock:
        key = attrgetter("count") if order == "count" else attrgetter("index")
        trials = sorted(store.trials, key=key, reverse=descending)
        total = len(store)

    return TrialListResponse(
        items=[TrialSchema.model_validate(t) for t in trials[offset:offset + limit]],
        total=total,
        order=order,
        offset=offset,
        limit=limit,
    )


@router.post(
    "",
    response_model=TrialSchema,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Invalid keyword reported, sweep aborted"},
    },
    summary="Record one permutation",
)
async def record_trial(
    request: RecordTrialRequest,
    solver: SolverDep,
    lock: TrialLockDep,
) -> TrialSchema:
    """Record a permutation produced by an external enumeration driver."""
    try:
        async with lock:
            trial = solver.record_permutation(request.keyword, request.plaintext, request.count)
    except SweepAbortedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    return TrialSchema.model_validate(trial)


@router.post(
    "/count-words",
    response_model=WordCountResponse,
    summary="Recount common words for every trial",
)
async def count_words(solver: SolverDep, lock: TrialLockDep) -> WordCountResponse:
    async with lock:
        total = await run_in_threadpool(solver.count_words)
        trials = len(solver.store)
    return WordCountResponse(trials=trials, total_words=total)


@router.post(
    "/save",
    response_model=ArchiveResponse,
    summary="Save trials to the database",
)
async def save_trials(
    store: TrialStoreDep,
    archive: TrialArchiveDep,
    lock: TrialLockDep,
) -> ArchiveResponse:
    async with lock:
        await run_in_threadpool(store.save, archive)
        return ArchiveResponse(ok=True, trials=len(store))


@router.post(
    "/restore",
    response_model=ArchiveResponse,
    summary="Restore saved trials",
    description="Replace the trial store with the last saved trials. Word counts are reset to 0.",
)
async def restore_trials(
    store: TrialStoreDep,
    archive: TrialArchiveDep,
    lock: TrialLockDep,
) -> ArchiveResponse:
    async with lock:
        restored = await run_in_threadpool(store.restore, archive)
        return ArchiveResponse(ok=restored, trials=len(store))


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear all trials",
)
async def clear_trials(store: TrialStoreDep, lock: TrialLockDep) -> Response:
    async with lock:
        store.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
