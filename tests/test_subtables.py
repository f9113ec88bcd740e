"""Tests for the per-family sub-tables and their flag gating."""

import pytest

from cryptoplug.core.models import (
    DiffieHellmanGroup,
    Family,
    FeatureKind,
    HashAlgorithm,
    KeyType,
    SignatureScheme,
)
from cryptoplug.features import (
    DEFAULT_ASSEMBLY_ORDER,
    RNG_SUBTABLE,
    SUBTABLE_BUILDERS,
    BuildFlags,
    build_subtables,
    static_capacity,
)
from cryptoplug.features.subtables import (
    IDENTITY_HASHER,
    null_constructor,
)


FULL_SIZES = {
    "dh": 13,
    "ecdh": 9,
    "crypt": 26,
    "hash": 11,
    "prf": 5,
    "hmac": 10,
    "pubkey": 5,
    "privkey": 5,
    "rsa": 35,
    "ecdsa": 21,
    "ed25519": 10,
    "rng": 4,
}


def _algorithms(subtable, family=None):
    return [
        d.algorithm_id
        for d in subtable.descriptors()
        if d.kind == FeatureKind.PROVIDE and (family is None or d.family == family)
    ]


class TestFullProfile:
    """Every flag available."""

    @pytest.mark.parametrize("name,size", sorted(FULL_SIZES.items()))
    def test_subtable_size(self, name, size):
        assert build_subtables(BuildFlags())[name].size == size

    def test_subtables_in_table_order(self):
        assert list(build_subtables(BuildFlags())) == list(SUBTABLE_BUILDERS)

    def test_static_capacity_is_sum_of_full_tables(self):
        assert static_capacity() == sum(FULL_SIZES.values()) == 154

    def test_every_constructor_resolves(self):
        for subtable in build_subtables(BuildFlags()).values():
            for record in subtable.records:
                assert callable(record.constructor.resolve()), record.constructor

    def test_dh_group_order(self):
        dh = build_subtables(BuildFlags())["dh"]
        assert _algorithms(dh) == [
            DiffieHellmanGroup.MODP_3072_BIT,
            DiffieHellmanGroup.MODP_4096_BIT,
            DiffieHellmanGroup.MODP_6144_BIT,
            DiffieHellmanGroup.MODP_8192_BIT,
            DiffieHellmanGroup.MODP_2048_BIT,
            DiffieHellmanGroup.MODP_2048_224,
            DiffieHellmanGroup.MODP_2048_256,
            DiffieHellmanGroup.MODP_1536_BIT,
            DiffieHellmanGroup.MODP_1024_BIT,
            DiffieHellmanGroup.MODP_1024_160,
            DiffieHellmanGroup.MODP_768_BIT,
            DiffieHellmanGroup.MODP_CUSTOM,
        ]

    def test_key_loaders_are_exclusive(self):
        subtables = build_subtables(BuildFlags())
        for name in ("pubkey", "privkey", "rsa", "ecdsa", "ed25519"):
            for record in subtables[name].records:
                if record.family in (Family.PUBKEY, Family.PRIVKEY):
                    assert record.exclusive, (name, record.family)

    def test_signatures_listed_sign_then_verify(self):
        ed = build_subtables(BuildFlags())["ed25519"]
        families = [
            d.family
            for d in ed.descriptors()
            if d.algorithm_id == SignatureScheme.ED25519
        ]
        assert families == [Family.PRIVKEY_SIGN, Family.PUBKEY_VERIFY]


class TestGating:
    """Unavailable variants are simply absent."""

    def test_nothing_available(self):
        subtables = build_subtables(BuildFlags.none())
        assert all(s.size == 0 for s in subtables.values())

    def test_no_register_without_provide(self):
        # hmac flag on but no digests: the HMAC records drop out entirely
        subtables = build_subtables(BuildFlags.only("hmac"))
        assert subtables["prf"].records == ()
        assert subtables["hmac"].records == ()

    def test_single_digest(self):
        hash_table = build_subtables(BuildFlags.only("sha1"))["hash"]
        assert hash_table.size == 2
        assert _algorithms(hash_table) == [HashAlgorithm.SHA1]

    def test_rsa_disabled(self):
        subtables = build_subtables(BuildFlags().model_copy(update={"rsa": False}))
        assert subtables["rsa"].size == 0
        assert KeyType.RSA not in _algorithms(subtables["privkey"])

    def test_rsa_without_pkcs1_padding(self):
        flags = BuildFlags().model_copy(update={"emsa_pkcs1": False})
        rsa = build_subtables(flags)["rsa"]
        assert rsa.size == FULL_SIZES["rsa"] - 20
        assert SignatureScheme.RSA_EMSA_PSS in _algorithms(rsa)

    def test_ecdsa_without_sha2_64(self):
        flags = BuildFlags().model_copy(update={"sha2_64": False})
        ecdsa = build_subtables(flags)["ecdsa"]
        algorithms = _algorithms(ecdsa)
        assert SignatureScheme.ECDSA_256 in algorithms
        assert SignatureScheme.ECDSA_384 not in algorithms
        assert SignatureScheme.ECDSA_WITH_SHA512_DER not in algorithms
        assert ecdsa.size == FULL_SIZES["ecdsa"] - 8

    def test_generic_loaders_need_a_key_type(self):
        flags = BuildFlags().model_copy(
            update={"rsa": False, "ecdsa": False, "ed25519": False}
        )
        subtables = build_subtables(flags)
        assert subtables["pubkey"].size == 0
        assert subtables["privkey"].size == 0

    def test_generic_loader_lists_available_key_types(self):
        privkey = build_subtables(BuildFlags.only("ed25519"))["privkey"]
        assert _algorithms(privkey) == [KeyType.ANY, KeyType.ED25519]

    def test_rng_needs_system_rng_and_drbg(self):
        assert build_subtables(BuildFlags.only("system_rng"))["rng"].size == 0
        assert build_subtables(BuildFlags.only("system_rng", "hmac_drbg"))["rng"].size == 4

    def test_x25519_independent_of_ecdh(self):
        ecdh = build_subtables(BuildFlags.only("x25519"))["ecdh"]
        assert _algorithms(ecdh) == [DiffieHellmanGroup.CURVE_25519]


class TestAssemblyOrder:
    def test_default_order_skips_generic_pubkey_and_rng(self):
        assert "pubkey" not in DEFAULT_ASSEMBLY_ORDER
        assert RNG_SUBTABLE not in DEFAULT_ASSEMBLY_ORDER
        assert set(DEFAULT_ASSEMBLY_ORDER) | {"pubkey", RNG_SUBTABLE} == set(
            SUBTABLE_BUILDERS
        )

    def test_identity_hasher_is_never_built(self):
        assert IDENTITY_HASHER.resolve() is null_constructor
        assert null_constructor(b"ignored") is None
