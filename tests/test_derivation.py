"""Tests for deterministic wallet derivation and hex helpers."""

import pytest
from unittest.mock import patch

from keepix_xrpl.crypto import bytes_to_hex, create_entropy, sha256_hex
from keepix_xrpl.hdwallet import (
    DerivationError,
    DerivationPath,
    EntropyUnavailable,
    derive_identity,
)
from keepix_xrpl.hdwallet.ripple import (
    entropy_to_mnemonic,
    from_mnemonic,
    from_password,
    from_private_key,
    from_random,
    get_public_key,
    to_signing_key,
)

from tests.conftest import (
    REFERENCE_ADDRESS,
    REFERENCE_MNEMONIC,
    REFERENCE_PASSWORD,
    REFERENCE_PRIVATE_KEY,
)


class TestHexHelpers:
    """Tests for sha256_hex and bytes_to_hex."""

    def test_bytes_to_hex_pads_and_uppercases(self):
        """Each byte becomes exactly two upper-case digits."""
        assert bytes_to_hex([0, 255, 16]) == "00FF10"

    def test_bytes_to_hex_accepts_bytes(self):
        """bytes objects are accepted as well as int lists."""
        assert bytes_to_hex(b"\x01\xab") == "01AB"
        assert bytes_to_hex(b"") == ""

    def test_sha256_hex_known_digest(self):
        """Digest is lower-case hex of the UTF-8 input."""
        assert sha256_hex("abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )
        assert sha256_hex(b"abc") == sha256_hex("abc")

    def test_create_entropy_is_32_bytes(self):
        """Password entropy is 64 hex characters."""
        entropy = create_entropy("template", "password")

        assert len(entropy) == 64
        assert entropy == sha256_hex("templatepassword")

    def test_entropy_to_mnemonic_gives_24_words(self):
        """256 bits of entropy encode to 24 words."""
        mnemonic = entropy_to_mnemonic("00" * 32)

        assert len(mnemonic.split()) == 24
        assert mnemonic.split()[0] == "abandon"


class TestPasswordPath:
    """Tests for password based derivation."""

    def test_reference_vector(self):
        """Password "toto" gives the known mnemonic, key and address."""
        identity = from_password(REFERENCE_PASSWORD)

        assert identity.mnemonic == REFERENCE_MNEMONIC
        assert identity.private_key == REFERENCE_PRIVATE_KEY
        assert identity.address == REFERENCE_ADDRESS
        assert identity.derivation_path == DerivationPath.PASSWORD

    def test_deterministic(self):
        """Repeated derivation gives identical identities."""
        first = from_password("correct horse")
        second = from_password("correct horse")

        assert first == second

    def test_template_changes_wallet(self):
        """A different template constant gives a different wallet."""
        default = from_password(REFERENCE_PASSWORD)
        custom = from_password(REFERENCE_PASSWORD, "0xdeadbeef")

        assert default.address != custom.address
        assert default.mnemonic != custom.mnemonic

    def test_empty_password_is_a_password(self):
        """An empty password still selects the password path."""
        identity = derive_identity(password="", mnemonic=REFERENCE_MNEMONIC)

        assert identity.derivation_path == DerivationPath.PASSWORD
        assert identity.address != REFERENCE_ADDRESS


class TestMnemonicPath:
    """Tests for mnemonic based derivation."""

    def test_reference_vector(self):
        """Reference mnemonic gives the reference key and address."""
        identity = from_mnemonic(REFERENCE_MNEMONIC)

        assert identity.private_key == REFERENCE_PRIVATE_KEY
        assert identity.address == REFERENCE_ADDRESS
        assert identity.mnemonic == REFERENCE_MNEMONIC
        assert identity.derivation_path == DerivationPath.MNEMONIC

    def test_password_and_mnemonic_paths_agree(self):
        """Deriving from a password-derived mnemonic gives the same wallet."""
        by_password = from_password("another secret")
        by_mnemonic = from_mnemonic(by_password.mnemonic)

        assert by_mnemonic.address == by_password.address
        assert by_mnemonic.private_key == by_password.private_key
        assert by_mnemonic.public_key == by_password.public_key

    def test_key_format(self):
        """Private key is "00" plus 64 upper-case hex digits."""
        identity = from_mnemonic(REFERENCE_MNEMONIC)

        assert len(identity.private_key) == 66
        assert identity.private_key.startswith("00")
        assert identity.private_key == identity.private_key.upper()
        assert len(identity.public_key) == 66
        assert identity.public_key[:2] in ("02", "03")

    def test_bad_checksum_raises(self):
        """Swapping the last word breaks the checksum."""
        words = REFERENCE_MNEMONIC.split()
        words[-1] = "abandon"

        with pytest.raises(DerivationError) as exc_info:
            from_mnemonic(" ".join(words))

        assert exc_info.value.path == DerivationPath.MNEMONIC

    def test_unknown_word_raises(self):
        """Words outside the BIP39 list are rejected."""
        with pytest.raises(DerivationError):
            from_mnemonic("notaword " * 23 + "notaword")

    def test_wrong_word_count_raises(self):
        """Truncated phrases are rejected."""
        with pytest.raises(DerivationError):
            from_mnemonic(" ".join(REFERENCE_MNEMONIC.split()[:5]))


class TestPrivateKeyPath:
    """Tests for raw private key construction."""

    def test_reference_vector(self):
        """Reference key gives the reference address and no mnemonic."""
        identity = from_private_key(REFERENCE_PRIVATE_KEY)

        assert identity.address == REFERENCE_ADDRESS
        assert identity.private_key == REFERENCE_PRIVATE_KEY
        assert identity.mnemonic is None
        assert not identity.has_mnemonic
        assert identity.derivation_path == DerivationPath.PRIVATE_KEY

    def test_public_key_matches_mnemonic_path(self):
        """secp256k1 recovery matches the BIP44 public key."""
        assert get_public_key(REFERENCE_PRIVATE_KEY) == from_mnemonic(
            REFERENCE_MNEMONIC
        ).public_key

    def test_raw_64_char_key(self):
        """A key without the 00 prefix gives the same address."""
        identity = from_private_key(REFERENCE_PRIVATE_KEY[2:])

        assert identity.address == REFERENCE_ADDRESS
        assert identity.private_key == REFERENCE_PRIVATE_KEY[2:]

    def test_bad_length_raises(self):
        """Keys of the wrong length are rejected."""
        with pytest.raises(DerivationError, match="length"):
            from_private_key("00ABCD")

    def test_bad_hex_raises(self):
        """Non-hex keys are rejected."""
        with pytest.raises(DerivationError, match="hex"):
            from_private_key("00" + "ZZ" * 32)

    def test_zero_scalar_raises(self):
        """The zero scalar is not a valid curve key."""
        with pytest.raises(DerivationError, match="curve"):
            from_private_key("00" * 33)

    def test_signing_key_is_prefixed(self):
        """Signing keys always carry the 00 prefix in upper case."""
        assert to_signing_key(REFERENCE_PRIVATE_KEY) == REFERENCE_PRIVATE_KEY
        assert to_signing_key(REFERENCE_PRIVATE_KEY[2:].lower()) == REFERENCE_PRIVATE_KEY
        assert to_signing_key("ed" + "11" * 31) == "00ED" + "11" * 31


class TestRandomPath:
    """Tests for random wallet creation."""

    def test_random_wallets_differ(self):
        """Two random wallets have different addresses."""
        first = from_random()
        second = from_random()

        assert first.address != second.address
        assert first.mnemonic != second.mnemonic
        assert first.derivation_path == DerivationPath.RANDOM

    def test_random_wallet_round_trips(self):
        """A random wallet can be restored from its mnemonic."""
        identity = from_random()

        assert len(identity.mnemonic.split()) == 24
        assert from_mnemonic(identity.mnemonic).address == identity.address

    def test_entropy_failure(self):
        """OS randomness failure raises EntropyUnavailable."""
        with patch(
            "keepix_xrpl.hdwallet.ripple.os.urandom",
            side_effect=NotImplementedError("no source"),
        ):
            with pytest.raises(EntropyUnavailable):
                from_random()


class TestDerivationPriority:
    """Tests for derive_identity path selection."""

    def test_password_beats_mnemonic(self):
        """Password wins when both password and mnemonic are given."""
        other = from_password("someone else").mnemonic

        identity = derive_identity(password=REFERENCE_PASSWORD, mnemonic=other)

        assert identity.address == REFERENCE_ADDRESS
        assert identity.derivation_path == DerivationPath.PASSWORD

    def test_mnemonic_beats_private_key(self):
        """Mnemonic wins over private key."""
        identity = derive_identity(
            mnemonic=REFERENCE_MNEMONIC, private_key="not a key"
        )

        assert identity.derivation_path == DerivationPath.MNEMONIC

    def test_lower_priority_inputs_not_validated(self):
        """An invalid mnemonic is ignored when a password is given."""
        identity = derive_identity(password=REFERENCE_PASSWORD, mnemonic="garbage")

        assert identity.address == REFERENCE_ADDRESS

    def test_no_inputs_is_random(self):
        """Without inputs a random wallet is created."""
        identity = derive_identity()

        assert identity.derivation_path == DerivationPath.RANDOM
        assert identity.mnemonic is not None

    def test_repr_hides_secrets(self):
        """repr does not leak the private key or mnemonic."""
        identity = derive_identity(password=REFERENCE_PASSWORD)

        assert REFERENCE_PRIVATE_KEY not in repr(identity)
        assert "celery" not in repr(identity)
