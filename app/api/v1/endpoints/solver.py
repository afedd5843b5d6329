from fastapi import APIRouter, HTTPException, status
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import (
    EngineNotFoundError,
    InvalidKeyError,
    KeywordTooLongError,
    TextTooLongError,
    ValidationError,
)
from app.dependencies import ScorerDep, SettingsDep, SolverDep, TrialLockDep
from app.models.schemas import (
    ErrorResponse,
    KeyedAlphabetRequest,
    KeyedAlphabetResponse,
    ScoreRequest,
    ScoreResponse,
    SweepRequest,
    SweepResponse,
    TrialSchema,
    TryKeyRequest,
    TryKeyResponse,
)
from app.services.engines.alphabet import build_keyed_alphabet
from app.services.pipeline.scorer import split_words
from app.services.preprocessing.normalizer import TextNormalizer

router = APIRouter()


def _check_length(text: str, max_length: int) -> None:
    if len(text) > max_length:
        raise TextTooLongError(len(text), max_length)


@router.post(
    "/keyed-alphabet",
    response_model=KeyedAlphabetResponse,
    summary="Build a keyed alphabet",
)
async def keyed_alphabet(request: KeyedAlphabetRequest) -> KeyedAlphabetResponse:
    """Key symbols first (without repeats), then the rest of the alphabet."""
    return KeyedAlphabetResponse(alphabet=build_keyed_alphabet(request.alphabet, request.key))


@router.post(
    "/try-key",
    response_model=TryKeyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Decrypt with a single keyword",
)
async def try_key(
    request: TryKeyRequest,
    solver: SolverDep,
    settings: SettingsDep,
) -> TryKeyResponse:
    """Decrypt with one keyword and count the common words in the result."""
    normalizer = TextNormalizer()
    keyword = normalizer.clean_keyword(request.keyword, max_length=settings.max_keyword_letters)

    try:
        _check_length(request.ciphertext, settings.max_text_length)
        if not keyword:
            raise InvalidKeyError(request.cipher_type.value, request.keyword)

        attempt = solver.try_key(request.ciphertext, keyword, request.cipher_type)

    except EngineNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return TryKeyResponse(
        keyword=attempt.keyword,
        keyed_alphabet=attempt.keyed_alphabet,
        plaintext=attempt.plaintext,
        common_word_count=attempt.common_word_count,
    )


@router.post(
    "/sweep",
    response_model=SweepResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Try every permutation of a keyword",
    description=(
        "Decrypt the ciphertext with every ordering of the keyword's letters, "
        "record each trial and return the best ones by common-word count."
    ),
)
async def sweep(
    request: SweepRequest,
    solver: SolverDep,
    settings: SettingsDep,
    lock: TrialLockDep,
) -> SweepResponse:
    """
    Run a keyword sweep.

    Repeated letters are dropped from the keyword before permuting. Letters in
    ``fixed_letters`` keep their position. The number of permutations tried is
    capped by ``max_sweep_permutations``. The sweep runs in a worker thread
    while holding the trial store lock.
    """
    normalizer = TextNormalizer()
    keyword = normalizer.clean_text(request.keyword, remove_duplicates=True)
    fixed_letters = normalizer.clean_text(request.fixed_letters)

    limit = settings.max_sweep_permutations
    if request.max_permutations is not None:
        limit = min(limit, request.max_permutations)

    try:
        _check_length(request.ciphertext, settings.max_text_length)
        if len(keyword) > settings.max_keyword_letters:
            raise KeywordTooLongError(keyword, settings.max_keyword_letters)
        if len(keyword) < settings.min_keyword_letters:
            raise InvalidKeyError(request.cipher_type.value, request.keyword)

        async with lock:
            result = await run_in_threadpool(
                solver.sweep,
                request.ciphertext,
                keyword,
                fixed_letters=fixed_letters,
                kind=request.cipher_type,
                count_words=request.count_words,
                max_permutations=limit,
            )
            best = solver.ranked(request.limit)

    except EngineNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return SweepResponse(
        keyword=result.keyword,
        total_permutations=result.total_permutations,
        recorded=result.recorded,
        stored=result.stored,
        truncated=result.truncated,
        best=[TrialSchema.model_validate(trial) for trial in best],
    )


@router.post(
    "/score",
    response_model=ScoreResponse,
    summary="Count common words in a text",
)
async def score(request: ScoreRequest, scorer: ScorerDep) -> ScoreResponse:
    return ScoreResponse(
        count=scorer.score(request.text),
        words=len(split_words(request.text)),
    )
