"""XRP Ledger wallet derivation.

Derivation path: m/44'/144'/0'/0/0 (secp256k1)
Address format: base58 with 'r' prefix

Four ways to obtain a wallet, checked in this order:

    1. password    -> sha256(template + password) -> entropy -> mnemonic
    2. mnemonic    -> BIP39 seed -> BIP44 keypair
    3. private key -> secp256k1 public key (no mnemonic)
    4. random      -> os.urandom(32) -> entropy -> mnemonic

The first parameter that is not None wins. Nothing here performs I/O.
"""

import logging
import os
from typing import Optional

from bip_utils import (
    Bip39Languages,
    Bip39MnemonicGenerator,
    Bip39MnemonicValidator,
    Bip39SeedGenerator,
    Bip44,
    Bip44Changes,
    Bip44Coins,
    MnemonicChecksumError,
    Secp256k1PrivateKey,
    XrpAddrEncoder,
)

from keepix_xrpl.config import DEFAULT_PRIVATE_KEY_TEMPLATE
from keepix_xrpl.crypto import bytes_to_hex, create_entropy
from keepix_xrpl.hdwallet.base import (
    DerivationError,
    DerivationPath,
    EntropyUnavailable,
    WalletIdentity,
)

logger = logging.getLogger(__name__)

ENTROPY_BYTES = 32
# XRPL prefixes secp256k1 private keys with a zero byte
SECP256K1_KEY_PREFIX = "00"


def entropy_to_mnemonic(entropy_hex: str) -> str:
    """Encode hex entropy as an English BIP39 mnemonic.

    32 bytes of entropy give 24 words.
    """
    entropy = bytes.fromhex(entropy_hex)
    return Bip39MnemonicGenerator(Bip39Languages.ENGLISH).FromEntropy(entropy).ToStr()


def from_mnemonic(
    mnemonic: str, path: DerivationPath = DerivationPath.MNEMONIC
) -> WalletIdentity:
    """Derive the first XRPL account of a BIP39 mnemonic.

    Args:
        mnemonic: Space separated BIP39 words
        path: Path recorded on the identity (password/random reuse this)

    Raises:
        DerivationError: Unknown words, bad word count or bad checksum
    """
    try:
        Bip39MnemonicValidator(Bip39Languages.ENGLISH).Validate(mnemonic)
    except MnemonicChecksumError as e:
        raise DerivationError(path, f"invalid mnemonic checksum: {e}") from e
    except ValueError as e:
        raise DerivationError(path, f"invalid mnemonic: {e}") from e

    seed = Bip39SeedGenerator(mnemonic).Generate()
    account = (
        Bip44.FromSeed(seed, Bip44Coins.RIPPLE)
        .Purpose()
        .Coin()
        .Account(0)
        .Change(Bip44Changes.CHAIN_EXT)
        .AddressIndex(0)
    )

    private_key = SECP256K1_KEY_PREFIX + account.PrivateKey().Raw().ToHex().upper()
    public_key = bytes_to_hex(account.PublicKey().RawCompressed().ToBytes())

    return WalletIdentity(
        address=account.PublicKey().ToAddress(),
        private_key=private_key,
        public_key=public_key,
        derivation_path=path,
        mnemonic=mnemonic,
    )


def from_password(
    password: str, private_key_template: str = DEFAULT_PRIVATE_KEY_TEMPLATE
) -> WalletIdentity:
    """Derive a wallet from a password.

    The same (password, template) pair always yields the same mnemonic,
    private key and address.
    """
    entropy = create_entropy(private_key_template, password)
    return from_mnemonic(entropy_to_mnemonic(entropy), DerivationPath.PASSWORD)


def _secp256k1_key_hex(private_key: str) -> str:
    """Strip the XRPL "00" prefix and check the key is 32 bytes of hex."""
    key_hex = private_key
    if len(key_hex) == 66 and key_hex.startswith(SECP256K1_KEY_PREFIX):
        key_hex = key_hex[2:]

    if len(key_hex) != 64:
        raise DerivationError(
            DerivationPath.PRIVATE_KEY,
            f"invalid hex length {len(private_key)}, expected 64 or 66",
        )

    try:
        bytes.fromhex(key_hex)
    except ValueError as e:
        raise DerivationError(DerivationPath.PRIVATE_KEY, f"invalid hex: {e}") from e

    return key_hex


def to_signing_key(private_key: str) -> str:
    """Get the XRPL form ("00" + 64 upper-case hex) of a secp256k1 key.

    xrpl-py treats keys starting with "ED" as ed25519, so raw 64 character
    keys must be prefixed before signing.
    """
    return SECP256K1_KEY_PREFIX + _secp256k1_key_hex(private_key).upper()


def get_public_key(private_key: str) -> str:
    """Recover the compressed secp256k1 public key of a private key.

    Accepts the XRPL form ("00" + 64 hex) or 64 raw hex characters.

    Raises:
        DerivationError: Bad hex, bad length, or scalar outside the curve order
    """
    raw = bytes.fromhex(_secp256k1_key_hex(private_key))

    try:
        key = Secp256k1PrivateKey.FromBytes(raw)
    except ValueError as e:
        raise DerivationError(
            DerivationPath.PRIVATE_KEY, f"invalid curve point: {e}"
        ) from e

    return bytes_to_hex(key.PublicKey().RawCompressed().ToBytes())


def from_private_key(private_key: str) -> WalletIdentity:
    """Build a wallet from a raw private key.

    The key is kept verbatim. No mnemonic can be recovered from it.
    """
    public_key = get_public_key(private_key)
    address = XrpAddrEncoder.EncodeKey(bytes.fromhex(public_key))

    return WalletIdentity(
        address=address,
        private_key=private_key,
        public_key=public_key,
        derivation_path=DerivationPath.PRIVATE_KEY,
        mnemonic=None,
    )


def from_random() -> WalletIdentity:
    """Create a fresh wallet from OS randomness.

    Raises:
        EntropyUnavailable: The OS random source failed
    """
    try:
        entropy = os.urandom(ENTROPY_BYTES)
    except (OSError, NotImplementedError) as e:
        raise EntropyUnavailable(f"Cannot read {ENTROPY_BYTES} random bytes: {e}") from e

    return from_mnemonic(entropy_to_mnemonic(entropy.hex()), DerivationPath.RANDOM)


def derive_identity(
    password: Optional[str] = None,
    mnemonic: Optional[str] = None,
    private_key: Optional[str] = None,
    private_key_template: str = DEFAULT_PRIVATE_KEY_TEMPLATE,
) -> WalletIdentity:
    """Pick a derivation path and build the wallet identity.

    Priority: password -> mnemonic -> private_key -> random.
    """
    if password is not None:
        identity = from_password(password, private_key_template)
    elif mnemonic is not None:
        identity = from_mnemonic(mnemonic)
    elif private_key is not None:
        identity = from_private_key(private_key)
    else:
        identity = from_random()

    logger.debug(
        f"Derived XRPL wallet {identity.address} from {identity.derivation_path.value}"
    )
    return identity
