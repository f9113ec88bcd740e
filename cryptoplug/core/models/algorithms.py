"""Algorithm identifiers advertised by backend plugins.

Values follow the proposal keywords used by IKE/IPsec tooling so that a
table dump is readable next to a connection config. The identifiers are
opaque to the registry: nothing here knows how to run an algorithm.
"""

from enum import Enum


class DiffieHellmanGroup(str, Enum):
    MODP_768_BIT = "modp768"
    MODP_1024_BIT = "modp1024"
    MODP_1024_160 = "modp1024s160"
    MODP_1536_BIT = "modp1536"
    MODP_2048_BIT = "modp2048"
    MODP_2048_224 = "modp2048s224"
    MODP_2048_256 = "modp2048s256"
    MODP_3072_BIT = "modp3072"
    MODP_4096_BIT = "modp4096"
    MODP_6144_BIT = "modp6144"
    MODP_8192_BIT = "modp8192"
    MODP_CUSTOM = "modpcustom"
    ECP_256_BIT = "ecp256"
    ECP_384_BIT = "ecp384"
    ECP_521_BIT = "ecp521"
    ECP_256_BP = "ecp256bp"
    ECP_384_BP = "ecp384bp"
    ECP_512_BP = "ecp512bp"
    CURVE_25519 = "curve25519"


class EncryptionAlgorithm(str, Enum):
    AES_CBC = "aes-cbc"
    AES_GCM_ICV8 = "aes-gcm8"
    AES_GCM_ICV12 = "aes-gcm12"
    AES_GCM_ICV16 = "aes-gcm16"
    AES_CCM_ICV8 = "aes-ccm8"
    AES_CCM_ICV12 = "aes-ccm12"
    AES_CCM_ICV16 = "aes-ccm16"
    CHACHA20_POLY1305 = "chacha20poly1305"


class HashAlgorithm(str, Enum):
    IDENTITY = "identity"
    MD5 = "md5"
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_224 = "sha3_224"
    SHA3_256 = "sha3_256"
    SHA3_384 = "sha3_384"
    SHA3_512 = "sha3_512"


class PseudoRandomFunction(str, Enum):
    HMAC_SHA1 = "prfsha1"
    HMAC_SHA2_256 = "prfsha256"
    HMAC_SHA2_384 = "prfsha384"
    HMAC_SHA2_512 = "prfsha512"


class IntegrityAlgorithm(str, Enum):
    HMAC_SHA1_96 = "sha1_96"
    HMAC_SHA1_128 = "sha1_128"
    HMAC_SHA1_160 = "sha1_160"
    HMAC_SHA2_256_128 = "sha256_128"
    HMAC_SHA2_256_256 = "sha256_256"
    HMAC_SHA2_384_192 = "sha384_192"
    HMAC_SHA2_384_384 = "sha384_384"
    HMAC_SHA2_512_256 = "sha512_256"
    HMAC_SHA2_512_512 = "sha512_512"


class KeyType(str, Enum):
    ANY = "any"
    RSA = "rsa"
    ECDSA = "ecdsa"
    ED25519 = "ed25519"


class SignatureScheme(str, Enum):
    RSA_EMSA_PKCS1_NULL = "rsa-pkcs1-null"
    RSA_EMSA_PKCS1_SHA1 = "rsa-pkcs1-sha1"
    RSA_EMSA_PKCS1_SHA2_224 = "rsa-pkcs1-sha224"
    RSA_EMSA_PKCS1_SHA2_256 = "rsa-pkcs1-sha256"
    RSA_EMSA_PKCS1_SHA2_384 = "rsa-pkcs1-sha384"
    RSA_EMSA_PKCS1_SHA2_512 = "rsa-pkcs1-sha512"
    RSA_EMSA_PKCS1_SHA3_224 = "rsa-pkcs1-sha3_224"
    RSA_EMSA_PKCS1_SHA3_256 = "rsa-pkcs1-sha3_256"
    RSA_EMSA_PKCS1_SHA3_384 = "rsa-pkcs1-sha3_384"
    RSA_EMSA_PKCS1_SHA3_512 = "rsa-pkcs1-sha3_512"
    RSA_EMSA_PSS = "rsa-pss"
    ECDSA_WITH_NULL = "ecdsa-null"
    ECDSA_WITH_SHA1_DER = "ecdsa-sha1-der"
    ECDSA_WITH_SHA256_DER = "ecdsa-sha256-der"
    ECDSA_WITH_SHA384_DER = "ecdsa-sha384-der"
    ECDSA_WITH_SHA512_DER = "ecdsa-sha512-der"
    ECDSA_256 = "ecdsa-256"
    ECDSA_384 = "ecdsa-384"
    ECDSA_521 = "ecdsa-521"
    ED25519 = "ed25519"


class EncryptionScheme(str, Enum):
    RSA_PKCS1 = "rsa-pkcs1"
    RSA_OAEP_SHA224 = "rsa-oaep-sha224"
    RSA_OAEP_SHA256 = "rsa-oaep-sha256"
    RSA_OAEP_SHA384 = "rsa-oaep-sha384"
    RSA_OAEP_SHA512 = "rsa-oaep-sha512"


class RandomQuality(str, Enum):
    WEAK = "weak"
    STRONG = "strong"
    TRUE = "true"


AlgorithmId = (
    DiffieHellmanGroup
    | EncryptionAlgorithm
    | HashAlgorithm
    | PseudoRandomFunction
    | IntegrityAlgorithm
    | KeyType
    | SignatureScheme
    | EncryptionScheme
    | RandomQuality
)
