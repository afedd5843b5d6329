from fastapi import APIRouter

from app.models.schemas import CipherInfo
from app.services.engines.registry import EngineRegistry

router = APIRouter()


@router.get(
    "",
    response_model=list[CipherInfo],
    summary="List supported ciphers",
)
async def list_ciphers() -> list[CipherInfo]:
    return [
        CipherInfo(
            cipher_type=engine.cipher_kind,
            name=engine.name,
            family=engine.cipher_family,
            description=engine.description,
            requires_key=engine.requires_key,
        )
        for engine in EngineRegistry().get_all_engines()
    ]
