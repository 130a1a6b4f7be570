#!/usr/bin/env python3
"""Print the XRPL wallet derived from a password or mnemonic.

Usage:
    python scripts/derive_wallet.py --password        # prompts for password
    python scripts/derive_wallet.py --mnemonic        # prompts for phrase
    python scripts/derive_wallet.py --random
    python scripts/derive_wallet.py --password --balance wss://s.altnet.rippletest.net:51233

Secrets are read with getpass so they never end up in shell history.
"""

import argparse
import asyncio
import logging
import sys
from getpass import getpass

from keepix_xrpl import DerivationError, Wallet
from keepix_xrpl.config import get_settings


def build_wallet(args: argparse.Namespace) -> Wallet:
    rpc = {"url": args.balance} if args.balance else None

    if args.password:
        return Wallet(type="xrpl", password=getpass("Password: "), rpc=rpc)
    if args.mnemonic:
        phrase = getpass("Seed phrase: ").strip()
        words = phrase.split()
        if len(words) not in [12, 24]:
            print(f"Error: Expected 12 or 24 words, got {len(words)}")
            sys.exit(1)
        return Wallet(type="xrpl", mnemonic=" ".join(words), rpc=rpc)
    return Wallet(type="xrpl", rpc=rpc)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Derive an XRPL wallet")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--password", action="store_true", help="Derive from a password")
    source.add_argument("--mnemonic", action="store_true", help="Derive from a seed phrase")
    source.add_argument("--random", action="store_true", help="Create a new random wallet")
    parser.add_argument("--balance", metavar="URL", help="Also fetch the XRP balance from this node")
    parser.add_argument("--show-secrets", action="store_true", help="Print private key and mnemonic")
    args = parser.parse_args()

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        wallet = build_wallet(args)
    except DerivationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("=" * 60)
    print(f"Address:    {wallet.get_address()}")
    print(f"Public key: {wallet.get_public_key()}")
    if args.show_secrets:
        print(f"Private key: {wallet.get_private_key()}")
        print(f"Mnemonic:    {wallet.get_mnemonic()}")
    print("=" * 60)

    if args.balance:
        balance = asyncio.run(wallet.get_coin_balance())
        print(f"Balance:    {balance} XRP")


if __name__ == "__main__":
    main()
