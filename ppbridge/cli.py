"""
ppbridge - Score Preview CLI

Command-line tool for recomputing a stored score against its beatmap and
for checking the password hashing path.
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from ppbridge.calculator import CalculationError, ScoreAssembler
from ppbridge.offload import CredentialHasher, OffloadBridge, OffloadError, WorkerPool
from ppbridge.types import DERIVED_FIELDS, ScoreRecord, decode_mods
from ppbridge.utils.config import add_args, check_config
from ppbridge.utils.logging_config import setup_logging


class ScorePreview:
    """Score recomputation and comparison tool"""

    def __init__(self, pool: WorkerPool, beatmap_dir: Optional[str] = None, profile: str = "interactive"):
        self.pool = pool
        self.bridge = OffloadBridge(pool, name="preview")
        self.assembler = ScoreAssembler(self.bridge, beatmap_dir=beatmap_dir)
        self.hasher = CredentialHasher(self.bridge, profile=profile)

    async def preview_score(self, score_file: str, beatmap: Optional[str] = None) -> int:
        """Recompute a score loaded from JSON and print old vs new values"""
        try:
            with open(score_file, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"❌ Error reading score file: {e}")
            return 1

        # Accept a bare record or a {"items": [...]} listing
        if isinstance(data, dict) and isinstance(data.get('items'), list):
            if not data['items']:
                print("❌ No scores found in file")
                return 1
            data = data['items'][0]

        try:
            score = ScoreRecord.from_dict(data)
        except ValueError as e:
            print(f"❌ Invalid score record: {e}")
            return 1

        try:
            updated = await self.assembler.calc_full(score, beatmap_path=beatmap)
        except (CalculationError, OffloadError) as e:
            print(f"❌ Calculation failed: {type(e).__name__}: {e}")
            return 1

        self._print_comparison(score, updated)
        return 0

    async def check_password(self, password: str) -> int:
        """Hash a password on the pool and verify it round-trips"""
        hashed = await self.hasher.hash(password)
        ok = await self.hasher.verify(password, hashed)
        wrong = await self.hasher.verify(password + "x", hashed)
        print(f"🔐 Hash: {hashed}")
        print(f"   Verify (same password): {'✅' if ok else '❌'}")
        print(f"   Verify (other password): {'❌ accepted' if wrong else '✅ rejected'}")
        return 0 if ok and not wrong else 1

    def _print_comparison(self, before: ScoreRecord, after: ScoreRecord):
        mods = decode_mods(before.mods)
        print(f"\n📊 Score {before.id} ({before.uuid})")
        print("=" * 50)
        print(f"Map: {before.map_md5}  Mods: {mods.acronym}  Speed: {before.speed_multiplier}x")
        print(f"Accuracy: {before.accuracy:.2f}%  Combo: {before.combo}/{before.max_combo}")
        print(f"Judgements: {before.count_300}/{before.count_100}/{before.count_50}/{before.count_miss}")
        print("-" * 50)
        for field in DERIVED_FIELDS:
            old = getattr(before, field)
            new = getattr(after, field)
            print(f"{field:<12} {old:>12.4f} -> {new:>12.4f} ({new - old:+.4f})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ppbridge score preview",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Recompute a stored score against a beatmap file
  ppbridge-preview score --score score.json --beatmap map.osu

  # Resolve <map_md5>.osu from a beatmap directory
  ppbridge-preview score --score score.json --beatmaps.dir ~/beatmaps

  # Check password hashing
  ppbridge-preview password --password hunter2
        """,
    )
    add_args(parser)

    subparsers = parser.add_subparsers(dest="command", required=True)

    score_parser = subparsers.add_parser("score", help="Recompute a score")
    score_parser.add_argument("--score", required=True, help="Score JSON file")
    score_parser.add_argument("--beatmap", help="Beatmap .osu file")

    password_parser = subparsers.add_parser("password", help="Hash and verify a password")
    password_parser.add_argument("--password", required=True, help="Password to hash")

    return parser


async def _run(args: argparse.Namespace) -> int:
    with WorkerPool(
        max_workers=getattr(args, "pool.max_workers"),
        kind=getattr(args, "pool.kind"),
    ) as pool:
        preview = ScorePreview(
            pool,
            beatmap_dir=getattr(args, "beatmaps.dir"),
            profile=getattr(args, "credentials.profile"),
        )
        if args.command == "score":
            return await preview.preview_score(args.score, args.beatmap)
        return await preview.check_password(args.password)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = check_config(parser.parse_args(argv))
    except ValueError as e:
        parser.error(str(e))

    setup_logging(
        level=getattr(args, "logging.level"),
        logging_dir=getattr(args, "logging.logging_dir"),
        rotation=getattr(args, "logging.rotation"),
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
