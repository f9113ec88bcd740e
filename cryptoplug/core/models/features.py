"""Feature descriptor models.

A backend advertises what it can construct as a flat, ordered list of
feature descriptors:

- REGISTER introduces a constructor for an algorithm family.
- PROVIDE names one concrete algorithm (and optional key size) that the
  most recently registered constructor can build.

Internally tables are authored as ProviderRecords (one constructor plus the
ordered list of things it provides) so the PROVIDE -> REGISTER binding is
structural rather than positional. The flat sequence the loader consumes is
derived from records with ProviderRecord.descriptors().
"""

import importlib
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, field_validator

from .algorithms import AlgorithmId


class FeatureKind(str, Enum):
    REGISTER = "register"
    PROVIDE = "provide"


class Family(str, Enum):
    DH = "dh"
    AEAD = "aead"
    CRYPTER = "crypter"
    HASHER = "hasher"
    PRF = "prf"
    SIGNER = "signer"
    PUBKEY = "pubkey"
    PUBKEY_VERIFY = "pubkey_verify"
    PUBKEY_ENCRYPT = "pubkey_encrypt"
    PRIVKEY = "privkey"
    PRIVKEY_GEN = "privkey_gen"
    PRIVKEY_SIGN = "privkey_sign"
    PRIVKEY_DECRYPT = "privkey_decrypt"
    RNG = "rng"


class ConstructorResolutionError(ImportError):
    """Raised when a constructor reference does not point at anything importable."""


class ConstructorRef(BaseModel, frozen=True):
    """Lazy reference to a factory, written as ``"package.module:attr.path"``.

    The registry only carries these around. Consumers call resolve() when
    they actually need to build something.
    """

    path: str

    @field_validator("path")
    @classmethod
    def check_path(cls, v: str) -> str:
        module, sep, attr = v.partition(":")
        if not module or not sep or not attr:
            raise ValueError(
                f"Invalid constructor path: {v!r}. "
                f"Expected format: 'package.module:attribute'"
            )
        return v

    @property
    def module(self) -> str:
        return self.path.partition(":")[0]

    @property
    def attribute(self) -> str:
        return self.path.partition(":")[2]

    def resolve(self) -> Callable[..., Any]:
        """Import the module and walk the attribute path."""
        try:
            target: Any = importlib.import_module(self.module)
            for part in self.attribute.split("."):
                target = getattr(target, part)
        except (ImportError, AttributeError) as exc:
            raise ConstructorResolutionError(
                f"Cannot resolve constructor {self.path!r}: {exc}"
            ) from exc
        return target

    def __str__(self) -> str:
        return self.path


class Provide(BaseModel, frozen=True):
    """One concrete capability offered by a provider record."""

    family: Family
    algorithm_id: AlgorithmId
    key_size: int | None = None


class FeatureDescriptor(BaseModel, frozen=True):
    """A single REGISTER or PROVIDE entry of a feature table."""

    kind: FeatureKind
    family: Family
    constructor: ConstructorRef
    algorithm_id: AlgorithmId | None = None
    key_size: int | None = None
    exclusive: bool = False

    @property
    def is_register(self) -> bool:
        return self.kind == FeatureKind.REGISTER

    def describe(self) -> str:
        """Short human-readable form, e.g. ``PROVIDE aead aes-gcm16/32``."""
        if self.is_register:
            suffix = " (exclusive)" if self.exclusive else ""
            return f"REGISTER {self.family.value} {self.constructor}{suffix}"
        text = f"PROVIDE {self.family.value} {self.algorithm_id.value}"
        if self.key_size is not None:
            text += f"/{self.key_size}"
        return text


class ProviderRecord(BaseModel, frozen=True):
    """A constructor and the ordered capabilities it provides."""

    family: Family
    constructor: ConstructorRef
    exclusive: bool = False
    provides: tuple[Provide, ...] = ()

    def descriptors(self) -> tuple[FeatureDescriptor, ...]:
        """Flatten to REGISTER followed by one PROVIDE per capability."""
        register = FeatureDescriptor(
            kind=FeatureKind.REGISTER,
            family=self.family,
            constructor=self.constructor,
            exclusive=self.exclusive,
        )
        return (register,) + tuple(
            FeatureDescriptor(
                kind=FeatureKind.PROVIDE,
                family=p.family,
                constructor=self.constructor,
                algorithm_id=p.algorithm_id,
                key_size=p.key_size,
            )
            for p in self.provides
        )

    @property
    def size(self) -> int:
        return 1 + len(self.provides)
