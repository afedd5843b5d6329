from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import EngineNotFoundError, InvalidKeyError, TextTooLongError
from app.dependencies import SettingsDep
from app.models.schemas import EncryptRequest, EncryptResponse, ErrorResponse
from app.services.engines import codec

router = APIRouter()


@router.post(
    "",
    response_model=EncryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Encrypt plaintext",
    description="Encrypt plaintext using a specified cipher type. A random key is generated when none is given.",
)
async def encrypt_plaintext(
    request: EncryptRequest,
    settings: SettingsDep,
) -> EncryptResponse:
    """
    Encrypt plaintext with a specified cipher type.

    Useful for producing ciphertexts to feed the keyword solver.
    """
    try:
        if len(request.plaintext) > settings.max_text_length:
            raise TextTooLongError(len(request.plaintext), settings.max_text_length)

        engine = codec.get_engine(request.cipher_type)

        # Generate key if not provided
        key = request.key
        if key is None:
            key = engine.generate_random_key()
        elif engine.requires_key and not engine.validate_key(key):
            raise InvalidKeyError(request.cipher_type.value, key)

        ciphertext = engine.encrypt(request.plaintext, key)

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

    return EncryptResponse(
        ciphertext=ciphertext,
        cipher_type=request.cipher_type,
        key_used=key,
    )
