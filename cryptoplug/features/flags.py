"""Build flags: what the backend library makes available.

BuildFlags is the explicit replacement for compile-time feature macros.
Sub-table builders read it and nothing else, so a flag profile fully
determines which capabilities a table can contain.

Profiles can be written to / read from YAML, or probed from the installed
``cryptography`` library.
"""

import functools
import logging
from pathlib import Path
from typing import Callable

import yaml
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class BuildFlags(BaseModel):
    """Availability of algorithm families and variants in the backend.

    Every flag defaults to True (a fully featured backend).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Key exchange
    diffie_hellman: bool = True
    ecdh: bool = True
    x25519: bool = True

    # Symmetric ciphers and AEAD
    aes: bool = True
    mode_cbc: bool = True
    aead_gcm: bool = True
    aead_ccm: bool = True
    chacha20_poly1305: bool = True

    # Hashes and MACs
    md5: bool = True
    sha1: bool = True
    sha2_32: bool = True
    sha2_64: bool = True
    sha3: bool = True
    hmac: bool = True

    # Public key
    rsa: bool = True
    ecdsa: bool = True
    ed25519: bool = True

    # Padding / encoding schemes
    emsa_pkcs1: bool = True
    emsa_pssr: bool = True
    eme_oaep: bool = True
    emsa_raw: bool = True
    emsa1: bool = True

    # Random number generation
    system_rng: bool = True
    hmac_drbg: bool = True

    @classmethod
    def none(cls) -> "BuildFlags":
        """A backend with nothing available."""
        return cls(**{name: False for name in cls.model_fields})

    @classmethod
    def only(cls, *names: str) -> "BuildFlags":
        """A backend where exactly the named flags are available."""
        unknown = sorted(set(names) - set(cls.model_fields))
        if unknown:
            raise ValueError(
                f"Unknown build flag(s): {', '.join(unknown)}. "
                f"Available: {', '.join(cls.model_fields)}"
            )
        return cls(**{name: name in names for name in cls.model_fields})

    def enabled(self) -> list[str]:
        return [name for name in type(self).model_fields if getattr(self, name)]

    def disabled(self) -> list[str]:
        return [name for name in type(self).model_fields if not getattr(self, name)]

    # ── YAML I/O ──

    def to_yaml(self, path: Path | str) -> None:
        """Save the profile as a YAML mapping of flag -> bool."""
        path = Path(path)
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(), f, sort_keys=False)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "BuildFlags":
        """Load a profile. Missing flags keep their default (available)."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Build flag profile {path} must be a mapping")
        return cls.model_validate(data)


# =============================================================================
# Probing the installed cryptography library
# =============================================================================


def _supported(check: Callable[[], object]) -> bool:
    from cryptography.exceptions import UnsupportedAlgorithm

    try:
        check()
    except UnsupportedAlgorithm:
        return False
    return True


def _probe_checks() -> dict[str, Callable[[], object]]:
    from cryptography.hazmat.primitives import hashes, hmac
    from cryptography.hazmat.primitives.asymmetric import ec, ed25519, x25519
    from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
    from cryptography.hazmat.primitives.ciphers.aead import (
        AESCCM,
        AESGCM,
        ChaCha20Poly1305,
    )

    return {
        "ecdh": lambda: ec.generate_private_key(ec.SECP256R1()),
        "x25519": lambda: x25519.X25519PrivateKey.generate(),
        "aes": lambda: algorithms.AES(bytes(16)),
        "mode_cbc": lambda: Cipher(
            algorithms.AES(bytes(16)), modes.CBC(bytes(16))
        ).encryptor(),
        "aead_gcm": lambda: AESGCM(bytes(16)),
        "aead_ccm": lambda: AESCCM(bytes(16)),
        "chacha20_poly1305": lambda: ChaCha20Poly1305(bytes(32)),
        "md5": lambda: hashes.Hash(hashes.MD5()),
        "sha1": lambda: hashes.Hash(hashes.SHA1()),
        "sha2_32": lambda: hashes.Hash(hashes.SHA256()),
        "sha2_64": lambda: hashes.Hash(hashes.SHA512()),
        "sha3": lambda: hashes.Hash(hashes.SHA3_256()),
        "hmac": lambda: hmac.HMAC(bytes(32), hashes.SHA256()),
        "ecdsa": lambda: ec.generate_private_key(ec.SECP256R1()),
        "ed25519": lambda: ed25519.Ed25519PrivateKey.generate(),
    }


@functools.lru_cache(maxsize=1)
def probe_build_flags() -> BuildFlags:
    """Detect which flags the installed ``cryptography`` library supports.

    Anything the library rejects with UnsupportedAlgorithm (FIPS builds,
    LibreSSL, trimmed OpenSSL) is reported unavailable. Families that the
    library always ships (finite-field DH, RSA, the padding schemes and the
    OS random source) are reported available without a check since
    exercising them means slow parameter or key generation.

    Cached: the installed library cannot change within a process.
    """
    values = {
        name: _supported(check) for name, check in _probe_checks().items()
    }
    flags = BuildFlags(**values)
    missing = flags.disabled()
    if missing:
        logger.debug("cryptography backend lacks: %s", ", ".join(missing))
    else:
        logger.debug("cryptography backend supports every known flag")
    return flags
