from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import EngineNotFoundError, InvalidKeyError, TextTooLongError
from app.dependencies import SettingsDep
from app.models.schemas import DecryptRequest, DecryptResponse, ErrorResponse
from app.services.engines import codec

router = APIRouter()


@router.post(
    "",
    response_model=DecryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Decrypt ciphertext",
    description="Decrypt ciphertext using a specified cipher type and key.",
)
async def decrypt_ciphertext(
    request: DecryptRequest,
    settings: SettingsDep,
) -> DecryptResponse:
    """
    Decrypt ciphertext with a known key.

    An empty key is passed through to the cipher, which then leaves the text
    unchanged (or, for Vigenère, returns an empty string).
    """
    try:
        if len(request.ciphertext) > settings.max_text_length:
            raise TextTooLongError(len(request.ciphertext), settings.max_text_length)

        engine = codec.get_engine(request.cipher_type)
        if request.key and engine.requires_key and not engine.validate_key(request.key):
            raise InvalidKeyError(request.cipher_type.value, request.key)

        result = engine.decrypt_with_key(request.ciphertext, request.key)

    except EngineNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        )
    except (TextTooLongError, InvalidKeyError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )

    return DecryptResponse(
        plaintext=result.plaintext,
        key_used=result.key,
        explanation=result.explanation,
    )
