# main.py
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import aiohttp
from solders.pubkey import Pubkey

from config import (
    CHECK_MINTS,
    COMMITMENT_LEVEL,
    CONSECUTIVE_FILTER_MATCHES,
    FILTER_CHECK_DURATION_SECS,
    FILTER_CHECK_INTERVAL_SECS,
    LOG_LEVEL,
    METADATA_FETCH_TIMEOUT_SECS,
    SOLANA_RPC_URL,
    FilterSettings,
)
from constants import SOL_MINT, USDC_MINT
from ledger import make_client
from pool_filters import PoolFilters, PoolKeys
from socials import SocialsChecker

TRUSTED_MINTS = {SOL_MINT, USDC_MINT}


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_banner(settings: FilterSettings, mints: List[str]) -> None:
    print("=== Membot Trust Filter ===")
    print(f"RPC URL: {SOLANA_RPC_URL}")
    print(f"COMMITMENT: {COMMITMENT_LEVEL}")

    print("\n# === Filters ===")
    print(f"CHECK_IF_MUTABLE={settings.check_mutable}")
    print(f"CHECK_IF_SOCIALS={settings.check_socials}")
    print(f"HAS_ANY_SOCIAL={settings.any_social}")
    if not settings.any_social:
        print(f"HAS_IMAGE={settings.check_image}")
        print(f"HAS_DESCRIPTION={settings.check_description}")
        print(f"HAS_TELEGRAM={settings.check_telegram}")
        print(f"HAS_TWITTER={settings.check_twitter}")
        print(f"HAS_WEBSITE={settings.check_website}")
    print(f"METADATA_FETCH_TIMEOUT_SECS={METADATA_FETCH_TIMEOUT_SECS}")

    print("\n# === Mints ===")
    for m in mints:
        print(f"  - {m}")
    print("=====================================\n")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Check whether token metadata is immutable and advertises socials.")
    p.add_argument("mints", nargs="*", help="base mint addresses (defaults to CHECK_MINTS)")
    p.add_argument("--wait", action="store_true",
                   help="poll until CONSECUTIVE_FILTER_MATCHES passes in a row (or the check window ends)")
    return p.parse_args(argv)


async def check_mints(mints: List[str], settings: FilterSettings, *, wait: bool = False) -> bool:
    """Evaluate each mint with its own PoolFilters; True when all pass."""
    all_ok = True
    client = make_client()
    try:
        async with aiohttp.ClientSession() as session:
            socials = SocialsChecker(settings, session=session)

            async def _one(mint: str) -> bool:
                if mint in TRUSTED_MINTS:
                    print(f"✅ {mint}: trusted mint, skipped")
                    return True
                pool_filters = PoolFilters(client, settings, socials=socials)
                keys = PoolKeys(base_mint=Pubkey.from_string(mint))
                if wait:
                    ok = await pool_filters.wait_for_match(
                        keys,
                        interval=FILTER_CHECK_INTERVAL_SECS,
                        duration=FILTER_CHECK_DURATION_SECS,
                        consecutive=CONSECUTIVE_FILTER_MATCHES,
                    )
                else:
                    ok = await pool_filters.execute(keys)
                print(f"{'✅' if ok else '❌'} {mint}: {'passed' if ok else 'rejected'}")
                return ok

            for ok in await asyncio.gather(*(_one(m) for m in mints)):
                all_ok = all_ok and ok
    finally:
        await client.close()
    return all_ok


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging()
    mints = args.mints or CHECK_MINTS
    if not mints:
        print("⚠️ No mints given; pass them as arguments or set CHECK_MINTS.")
        return 2

    for m in mints:
        try:
            Pubkey.from_string(m)
        except ValueError:
            print(f"❌ Not a valid mint address: {m}")
            return 2

    settings = FilterSettings()
    _print_banner(settings, mints)
    ok = asyncio.run(check_mints(mints, settings, wait=args.wait))
    return 0 if ok else 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("❌ Stopped by user.")
