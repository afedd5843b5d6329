import asyncio
from typing import Annotated

from fastapi import Depends, Request

from app.core.config import Settings
from app.services.pipeline.orchestrator import KeywordSolver
from app.services.pipeline.scorer import CommonWordScorer
from app.services.pipeline.trials import KeyValueTrialArchive, TrialStore


# Settings dependency
def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings

SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# Word scorer dependency (dictionary loaded once at startup)
def get_scorer(request: Request) -> CommonWordScorer:
    return CommonWordScorer(request.app.state.word_index)

ScorerDep = Annotated[CommonWordScorer, Depends(get_scorer)]


# Shared trial store
def get_trial_store(request: Request) -> TrialStore:
    return request.app.state.trial_store

TrialStoreDep = Annotated[TrialStore, Depends(get_trial_store)]


def get_solver(
    scorer: ScorerDep,
    store: TrialStoreDep,
    settings: SettingsDep,
) -> KeywordSolver:
    return KeywordSolver(scorer, store, materialize_limit=settings.materialize_limit)

SolverDep = Annotated[KeywordSolver, Depends(get_solver)]


# Trial archive over the database key-value store
def get_trial_archive(request: Request) -> KeyValueTrialArchive:
    return KeyValueTrialArchive(request.app.state.kv_store)

TrialArchiveDep = Annotated[KeyValueTrialArchive, Depends(get_trial_archive)]


# Serializes access to the trial store across requests
def get_trial_lock(request: Request) -> asyncio.Lock:
    return request.app.state.trial_lock

TrialLockDep = Annotated[asyncio.Lock, Depends(get_trial_lock)]
