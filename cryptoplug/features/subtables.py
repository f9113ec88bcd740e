"""Per-family sub-tables of the cryptography backend.

Each builder is a pure function of BuildFlags returning one SubTable. An
unavailable variant is simply left out; a provider record left with nothing
to provide is dropped entirely, so a sub-table never carries a REGISTER
without at least one PROVIDE.
"""

from typing import Callable

from pydantic import BaseModel

from ..core.models import (
    AlgorithmId,
    ConstructorRef,
    DiffieHellmanGroup as DH,
    EncryptionAlgorithm as ENCR,
    EncryptionScheme as ENCRYPT,
    Family,
    FeatureDescriptor,
    HashAlgorithm as HASH,
    IntegrityAlgorithm as AUTH,
    KeyType as KEY,
    Provide,
    ProviderRecord,
    PseudoRandomFunction as PRF,
    RandomQuality as RNG,
    SignatureScheme as SIGN,
)
from .flags import BuildFlags


class SubTable(BaseModel, frozen=True):
    """Ordered provider records for one algorithm family."""

    name: str
    records: tuple[ProviderRecord, ...] = ()

    @classmethod
    def of(cls, name: str, *records: ProviderRecord | None) -> "SubTable":
        return cls(name=name, records=tuple(r for r in records if r is not None))

    def descriptors(self) -> tuple[FeatureDescriptor, ...]:
        return tuple(d for record in self.records for d in record.descriptors())

    @property
    def size(self) -> int:
        return sum(record.size for record in self.records)


# =============================================================================
# Constructors
# =============================================================================

_PRIMITIVES = "cryptography.hazmat.primitives"


def _ref(path: str) -> ConstructorRef:
    return ConstructorRef(path=f"{_PRIMITIVES}.{path}")


def null_constructor(*args, **kwargs) -> None:
    """Pro forma constructor for features that are advertised but never built."""
    return None


DH_CREATE = _ref("asymmetric.dh:DHParameterNumbers")
ECDH_CREATE = _ref("asymmetric.ec:generate_private_key")
X25519_CREATE = _ref("asymmetric.x25519:X25519PrivateKey.generate")
CRYPTER_CREATE = _ref("ciphers:Cipher")
AES_GCM_CREATE = _ref("ciphers.aead:AESGCM")
AES_CCM_CREATE = _ref("ciphers.aead:AESCCM")
CHACHA20_POLY1305_CREATE = _ref("ciphers.aead:ChaCha20Poly1305")
HASHER_CREATE = _ref("hashes:Hash")
HMAC_PRF_CREATE = _ref("hmac:HMAC")
HMAC_SIGNER_CREATE = _ref("hmac:HMAC")
PUBLIC_KEY_LOAD = _ref("serialization:load_der_public_key")
PRIVATE_KEY_LOAD = _ref("serialization:load_der_private_key")
RSA_PUBLIC_KEY_LOAD = _ref("asymmetric.rsa:RSAPublicNumbers")
RSA_PRIVATE_KEY_LOAD = _ref("asymmetric.rsa:RSAPrivateNumbers")
RSA_PRIVATE_KEY_GEN = _ref("asymmetric.rsa:generate_private_key")
EC_PRIVATE_KEY_LOAD = _ref("asymmetric.ec:derive_private_key")
EC_PRIVATE_KEY_GEN = _ref("asymmetric.ec:generate_private_key")
ED_PUBLIC_KEY_LOAD = _ref("asymmetric.ed25519:Ed25519PublicKey.from_public_bytes")
ED_PRIVATE_KEY_LOAD = _ref("asymmetric.ed25519:Ed25519PrivateKey.from_private_bytes")
ED_PRIVATE_KEY_GEN = _ref("asymmetric.ed25519:Ed25519PrivateKey.generate")
IDENTITY_HASHER = ConstructorRef(path=f"{__name__}:null_constructor")
RNG_CREATE = ConstructorRef(path="secrets:SystemRandom")


# =============================================================================
# Authoring helpers
# =============================================================================


def _provide(
    family: Family, *algorithms: AlgorithmId, key_sizes: tuple[int, ...] = ()
) -> list[Provide]:
    """One Provide per algorithm, times each key size when given."""
    if not key_sizes:
        return [Provide(family=family, algorithm_id=a) for a in algorithms]
    return [
        Provide(family=family, algorithm_id=a, key_size=size)
        for a in algorithms
        for size in key_sizes
    ]


def _when(flag: bool, *groups: list[Provide]) -> list[Provide]:
    return [p for group in groups for p in group] if flag else []


def _register(
    family: Family,
    constructor: ConstructorRef,
    provides: list[Provide],
    exclusive: bool = False,
) -> ProviderRecord | None:
    if not provides:
        return None
    return ProviderRecord(
        family=family,
        constructor=constructor,
        exclusive=exclusive,
        provides=tuple(provides),
    )


_AES_KEYS = (16, 24, 32)


# =============================================================================
# Sub-table builders
# =============================================================================


def dh_table(flags: BuildFlags) -> SubTable:
    """MODP Diffie-Hellman groups."""
    return SubTable.of(
        "dh",
        _register(
            Family.DH,
            DH_CREATE,
            _when(
                flags.diffie_hellman,
                _provide(
                    Family.DH,
                    DH.MODP_3072_BIT,
                    DH.MODP_4096_BIT,
                    DH.MODP_6144_BIT,
                    DH.MODP_8192_BIT,
                    DH.MODP_2048_BIT,
                    DH.MODP_2048_224,
                    DH.MODP_2048_256,
                    DH.MODP_1536_BIT,
                    DH.MODP_1024_BIT,
                    DH.MODP_1024_160,
                    DH.MODP_768_BIT,
                    DH.MODP_CUSTOM,
                ),
            ),
        ),
    )


def ecdh_table(flags: BuildFlags) -> SubTable:
    """Elliptic curve DH groups and X25519."""
    return SubTable.of(
        "ecdh",
        _register(
            Family.DH,
            ECDH_CREATE,
            _when(
                flags.ecdh,
                _provide(
                    Family.DH,
                    DH.ECP_256_BIT,
                    DH.ECP_384_BIT,
                    DH.ECP_521_BIT,
                    DH.ECP_256_BP,
                    DH.ECP_384_BP,
                    DH.ECP_512_BP,
                ),
            ),
        ),
        _register(
            Family.DH,
            X25519_CREATE,
            _when(flags.x25519, _provide(Family.DH, DH.CURVE_25519)),
        ),
    )


def crypt_table(flags: BuildFlags) -> SubTable:
    """CBC crypter plus the AEAD constructions."""
    return SubTable.of(
        "crypt",
        _register(
            Family.CRYPTER,
            CRYPTER_CREATE,
            _when(
                flags.aes and flags.mode_cbc,
                _provide(Family.CRYPTER, ENCR.AES_CBC, key_sizes=_AES_KEYS),
            ),
        ),
        _register(
            Family.AEAD,
            AES_GCM_CREATE,
            _when(
                flags.aes and flags.aead_gcm,
                _provide(
                    Family.AEAD,
                    ENCR.AES_GCM_ICV16,
                    ENCR.AES_GCM_ICV12,
                    ENCR.AES_GCM_ICV8,
                    key_sizes=_AES_KEYS,
                ),
            ),
        ),
        _register(
            Family.AEAD,
            AES_CCM_CREATE,
            _when(
                flags.aes and flags.aead_ccm,
                _provide(
                    Family.AEAD,
                    ENCR.AES_CCM_ICV16,
                    ENCR.AES_CCM_ICV12,
                    ENCR.AES_CCM_ICV8,
                    key_sizes=_AES_KEYS,
                ),
            ),
        ),
        _register(
            Family.AEAD,
            CHACHA20_POLY1305_CREATE,
            _when(
                flags.chacha20_poly1305,
                _provide(Family.AEAD, ENCR.CHACHA20_POLY1305, key_sizes=(32,)),
            ),
        ),
    )


def hash_table(flags: BuildFlags) -> SubTable:
    return SubTable.of(
        "hash",
        _register(
            Family.HASHER,
            HASHER_CREATE,
            _when(flags.md5, _provide(Family.HASHER, HASH.MD5))
            + _when(flags.sha1, _provide(Family.HASHER, HASH.SHA1))
            + _when(flags.sha2_32, _provide(Family.HASHER, HASH.SHA224, HASH.SHA256))
            + _when(flags.sha2_64, _provide(Family.HASHER, HASH.SHA384, HASH.SHA512))
            + _when(
                flags.sha3,
                _provide(
                    Family.HASHER,
                    HASH.SHA3_224,
                    HASH.SHA3_256,
                    HASH.SHA3_384,
                    HASH.SHA3_512,
                ),
            ),
        ),
    )


def prf_table(flags: BuildFlags) -> SubTable:
    return SubTable.of(
        "prf",
        _register(
            Family.PRF,
            HMAC_PRF_CREATE,
            _when(
                flags.hmac,
                _when(flags.sha1, _provide(Family.PRF, PRF.HMAC_SHA1)),
                _when(flags.sha2_32, _provide(Family.PRF, PRF.HMAC_SHA2_256)),
                _when(
                    flags.sha2_64,
                    _provide(Family.PRF, PRF.HMAC_SHA2_384, PRF.HMAC_SHA2_512),
                ),
            ),
        ),
    )


def hmac_table(flags: BuildFlags) -> SubTable:
    """HMAC integrity signers."""
    return SubTable.of(
        "hmac",
        _register(
            Family.SIGNER,
            HMAC_SIGNER_CREATE,
            _when(
                flags.hmac,
                _when(
                    flags.sha1,
                    _provide(
                        Family.SIGNER,
                        AUTH.HMAC_SHA1_96,
                        AUTH.HMAC_SHA1_128,
                        AUTH.HMAC_SHA1_160,
                    ),
                ),
                _when(
                    flags.sha2_32,
                    _provide(
                        Family.SIGNER, AUTH.HMAC_SHA2_256_128, AUTH.HMAC_SHA2_256_256
                    ),
                ),
                _when(
                    flags.sha2_64,
                    _provide(
                        Family.SIGNER,
                        AUTH.HMAC_SHA2_384_192,
                        AUTH.HMAC_SHA2_384_384,
                        AUTH.HMAC_SHA2_512_256,
                        AUTH.HMAC_SHA2_512_512,
                    ),
                ),
            ),
        ),
    )


def _generic_key_types(family: Family, flags: BuildFlags) -> list[Provide]:
    if not (flags.rsa or flags.ecdsa or flags.ed25519):
        return []
    return (
        _provide(family, KEY.ANY)
        + _when(flags.rsa, _provide(family, KEY.RSA))
        + _when(flags.ecdsa, _provide(family, KEY.ECDSA))
        + _when(flags.ed25519, _provide(family, KEY.ED25519))
    )


def pubkey_table(flags: BuildFlags) -> SubTable:
    """Generic public key loader (any supported key type)."""
    return SubTable.of(
        "pubkey",
        _register(
            Family.PUBKEY,
            PUBLIC_KEY_LOAD,
            _generic_key_types(Family.PUBKEY, flags),
            exclusive=True,
        ),
    )


def privkey_table(flags: BuildFlags) -> SubTable:
    """Generic private key loader (any supported key type)."""
    return SubTable.of(
        "privkey",
        _register(
            Family.PRIVKEY,
            PRIVATE_KEY_LOAD,
            _generic_key_types(Family.PRIVKEY, flags),
            exclusive=True,
        ),
    )


def _sign_and_verify(*schemes: SIGN) -> list[Provide]:
    return _provide(Family.PRIVKEY_SIGN, *schemes) + _provide(
        Family.PUBKEY_VERIFY, *schemes
    )


def rsa_table(flags: BuildFlags) -> SubTable:
    """RSA key loading/generation with its signature and encryption schemes.

    The schemes ride on the generator record, as every scheme needs a
    loaded or generated RSA key anyway.
    """
    if not flags.rsa:
        return SubTable(name="rsa")

    pkcs1 = _when(
        flags.emsa_pkcs1,
        _sign_and_verify(SIGN.RSA_EMSA_PKCS1_NULL),
        _when(flags.sha1, _sign_and_verify(SIGN.RSA_EMSA_PKCS1_SHA1)),
        _when(
            flags.sha2_32,
            _sign_and_verify(SIGN.RSA_EMSA_PKCS1_SHA2_224, SIGN.RSA_EMSA_PKCS1_SHA2_256),
        ),
        _when(
            flags.sha2_64,
            _sign_and_verify(SIGN.RSA_EMSA_PKCS1_SHA2_384, SIGN.RSA_EMSA_PKCS1_SHA2_512),
        ),
        _when(
            flags.sha3,
            _sign_and_verify(
                SIGN.RSA_EMSA_PKCS1_SHA3_224,
                SIGN.RSA_EMSA_PKCS1_SHA3_256,
                SIGN.RSA_EMSA_PKCS1_SHA3_384,
                SIGN.RSA_EMSA_PKCS1_SHA3_512,
            ),
        ),
    )
    pss = _when(flags.emsa_pssr, _sign_and_verify(SIGN.RSA_EMSA_PSS))
    encryption = (
        _provide(Family.PRIVKEY_DECRYPT, ENCRYPT.RSA_PKCS1)
        + _provide(Family.PUBKEY_ENCRYPT, ENCRYPT.RSA_PKCS1)
        + _when(
            flags.eme_oaep,
            _when(
                flags.sha2_32,
                _provide(
                    Family.PUBKEY_ENCRYPT,
                    ENCRYPT.RSA_OAEP_SHA224,
                    ENCRYPT.RSA_OAEP_SHA256,
                ),
            ),
            _when(
                flags.sha2_64,
                _provide(
                    Family.PUBKEY_ENCRYPT,
                    ENCRYPT.RSA_OAEP_SHA384,
                    ENCRYPT.RSA_OAEP_SHA512,
                ),
            ),
        )
    )

    return SubTable.of(
        "rsa",
        _register(
            Family.PUBKEY,
            RSA_PUBLIC_KEY_LOAD,
            _provide(Family.PUBKEY, KEY.RSA),
            exclusive=True,
        ),
        _register(
            Family.PRIVKEY,
            RSA_PRIVATE_KEY_LOAD,
            _provide(Family.PRIVKEY, KEY.RSA, KEY.ANY),
            exclusive=True,
        ),
        _register(
            Family.PRIVKEY_GEN,
            RSA_PRIVATE_KEY_GEN,
            _provide(Family.PRIVKEY_GEN, KEY.RSA) + pkcs1 + pss + encryption,
        ),
    )


def ecdsa_table(flags: BuildFlags) -> SubTable:
    """EC key loading/generation and ECDSA signature schemes."""
    if not flags.ecdsa:
        return SubTable(name="ecdsa")

    schemes = _when(flags.emsa_raw, _sign_and_verify(SIGN.ECDSA_WITH_NULL)) + _when(
        flags.emsa1,
        _when(flags.sha1, _sign_and_verify(SIGN.ECDSA_WITH_SHA1_DER)),
        _when(
            flags.sha2_32,
            _sign_and_verify(SIGN.ECDSA_WITH_SHA256_DER),
            _sign_and_verify(SIGN.ECDSA_256),
        ),
        _when(
            flags.sha2_64,
            _sign_and_verify(SIGN.ECDSA_WITH_SHA384_DER, SIGN.ECDSA_WITH_SHA512_DER),
            _sign_and_verify(SIGN.ECDSA_384, SIGN.ECDSA_521),
        ),
    )

    return SubTable.of(
        "ecdsa",
        _register(
            Family.PRIVKEY,
            EC_PRIVATE_KEY_LOAD,
            _provide(Family.PRIVKEY, KEY.ECDSA, KEY.ANY),
            exclusive=True,
        ),
        _register(
            Family.PRIVKEY_GEN,
            EC_PRIVATE_KEY_GEN,
            _provide(Family.PRIVKEY_GEN, KEY.ECDSA) + schemes,
        ),
    )


def ed25519_table(flags: BuildFlags) -> SubTable:
    """EdDSA key loading/generation, Ed25519 signatures.

    Also registers an identity hasher that is never instantiated: Ed25519
    signs the message itself, and consumers look up a hasher for every
    signature scheme.
    """
    if not flags.ed25519:
        return SubTable(name="ed25519")

    return SubTable.of(
        "ed25519",
        _register(
            Family.PUBKEY,
            ED_PUBLIC_KEY_LOAD,
            _provide(Family.PUBKEY, KEY.ED25519),
            exclusive=True,
        ),
        _register(
            Family.PRIVKEY,
            ED_PRIVATE_KEY_LOAD,
            _provide(Family.PRIVKEY, KEY.ED25519),
            exclusive=True,
        ),
        _register(
            Family.PRIVKEY_GEN,
            ED_PRIVATE_KEY_GEN,
            _provide(Family.PRIVKEY_GEN, KEY.ED25519)
            + _sign_and_verify(SIGN.ED25519),
        ),
        _register(
            Family.HASHER,
            IDENTITY_HASHER,
            _provide(Family.HASHER, HASH.IDENTITY),
        ),
    )


def rng_table(flags: BuildFlags) -> SubTable:
    return SubTable.of(
        "rng",
        _register(
            Family.RNG,
            RNG_CREATE,
            _when(
                flags.system_rng and flags.hmac_drbg,
                _provide(Family.RNG, RNG.WEAK, RNG.STRONG, RNG.TRUE),
            ),
        ),
    )


# =============================================================================
# Table order
# =============================================================================

SubTableBuilder = Callable[[BuildFlags], SubTable]

# Every sub-table the backend defines, in table order.
SUBTABLE_BUILDERS: dict[str, SubTableBuilder] = {
    "dh": dh_table,
    "ecdh": ecdh_table,
    "crypt": crypt_table,
    "hash": hash_table,
    "prf": prf_table,
    "hmac": hmac_table,
    "pubkey": pubkey_table,
    "privkey": privkey_table,
    "rsa": rsa_table,
    "ecdsa": ecdsa_table,
    "ed25519": ed25519_table,
    "rng": rng_table,
}

# Assembled unconditionally. "pubkey" is defined but not part of the default
# assembly; see FeaturePublisher(include_generic_pubkey=...).
DEFAULT_ASSEMBLY_ORDER: tuple[str, ...] = (
    "dh",
    "ecdh",
    "crypt",
    "hash",
    "prf",
    "hmac",
    "privkey",
    "rsa",
    "ecdsa",
    "ed25519",
)

# Assembled last, only when the runtime RNG setting is on.
RNG_SUBTABLE = "rng"


def build_subtables(flags: BuildFlags) -> dict[str, SubTable]:
    """Build every sub-table for a flag profile, in table order."""
    return {name: builder(flags) for name, builder in SUBTABLE_BUILDERS.items()}


def static_capacity() -> int:
    """Upper bound on table size: every sub-table with every flag available."""
    full = BuildFlags()
    return sum(builder(full).size for builder in SUBTABLE_BUILDERS.values())
