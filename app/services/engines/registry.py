from typing import Type

from app.models.schemas import CipherFamily, CipherKind
from app.services.engines.base import CipherEngine


class EngineRegistry:
    """
    Registry for cipher engines, keyed by ``CipherKind``.

    Every kind must have exactly one engine; ``missing_kinds`` reports any
    gap and the test suite checks it stays empty.
    """

    _engines: dict[CipherKind, Type[CipherEngine]] = {}
    _instances: dict[CipherKind, CipherEngine] = {}

    @classmethod
    def register(cls, engine_class: Type[CipherEngine]) -> Type[CipherEngine]:
        """
        Register a cipher engine class.

        Used as a decorator:
            @EngineRegistry.register
            class CaesarEngine(CipherEngine):
                ...
        """
        cls._engines[engine_class.cipher_kind] = engine_class
        return engine_class

    def get_engine(self, cipher_kind: CipherKind) -> CipherEngine | None:
        """Shared engine instance for a kind, or None if none is registered."""
        engine_class = self._engines.get(cipher_kind)
        if engine_class is None:
            return None

        # Lazy instantiation with caching
        if cipher_kind not in self._instances:
            self._instances[cipher_kind] = engine_class()
        return self._instances[cipher_kind]

    def get_engines_by_family(self, family: CipherFamily) -> list[CipherEngine]:
        return [
            self.get_engine(kind)
            for kind, engine_class in self._engines.items()
            if engine_class.cipher_family == family
        ]

    def get_all_engines(self) -> list[CipherEngine]:
        """All registered engines, in ``CipherKind`` order."""
        return [self.get_engine(kind) for kind in CipherKind if kind in self._engines]

    @classmethod
    def list_registered(cls) -> list[CipherKind]:
        return list(cls._engines)

    @classmethod
    def is_registered(cls, cipher_kind: CipherKind) -> bool:
        return cipher_kind in cls._engines

    @classmethod
    def missing_kinds(cls) -> list[CipherKind]:
        """Cipher kinds that have no registered engine."""
        return [kind for kind in CipherKind if kind not in cls._engines]


# Import engines to trigger registration
def _load_engines() -> None:
    from app.services.engines import identity  # noqa: F401
    from app.services.engines import monoalphabetic  # noqa: F401
    from app.services.engines import polyalphabetic  # noqa: F401
    from app.services.engines import polygraphic  # noqa: F401
    from app.services.engines import fractionating  # noqa: F401


_load_engines()
