"""Pydantic models shared across cryptoplug.

- algorithms.py: algorithm identifier enumerations
- features.py: feature descriptors, provider records, constructor references
"""

from .algorithms import (
    AlgorithmId,
    DiffieHellmanGroup,
    EncryptionAlgorithm,
    EncryptionScheme,
    HashAlgorithm,
    IntegrityAlgorithm,
    KeyType,
    PseudoRandomFunction,
    RandomQuality,
    SignatureScheme,
)
from .features import (
    ConstructorRef,
    ConstructorResolutionError,
    Family,
    FeatureDescriptor,
    FeatureKind,
    Provide,
    ProviderRecord,
)

__all__ = [
    "AlgorithmId",
    "DiffieHellmanGroup",
    "EncryptionAlgorithm",
    "EncryptionScheme",
    "HashAlgorithm",
    "IntegrityAlgorithm",
    "KeyType",
    "PseudoRandomFunction",
    "RandomQuality",
    "SignatureScheme",
    "ConstructorRef",
    "ConstructorResolutionError",
    "Family",
    "FeatureDescriptor",
    "FeatureKind",
    "Provide",
    "ProviderRecord",
]
