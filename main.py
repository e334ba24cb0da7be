#!/usr/bin/env python3
"""
Launchpad Engine - Command Line Entry Point
===========================================

Inspect bonding curves and fee rules, or replay a scripted
trading session through the in-memory store.

Usage:
    # Show fee constants and engine settings
    python main.py --show-config

    # Price at a given supply
    python main.py --curve quadratic --supply 25000

    # Curve table for charting
    python main.py --curve exponential --sample --max-supply 2000000 --points 11

    # Replay buys and sells, then run a fee payout pass 8 days later
    python main.py --curve linear --simulate
"""
import argparse
import logging
import sys
from datetime import timedelta

from launchpad.claims import process_distributions, summarize
from launchpad.config import EngineConfig
from launchpad.core import FeeModel, curve_price, sample_curve
from launchpad.errors import LaunchpadError
from launchpad.models import CurveType, TradeRequest, TradeSide, utcnow
from launchpad.store import MemoryStore


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )


def show_config(config: EngineConfig):
    """Display fee rules and ledger settings."""
    fees = config.fees
    model = FeeModel(fees)
    high_pct, high_delay = model.tier(fees.market_cap_threshold + 1)
    low_pct, low_delay = model.tier(fees.market_cap_threshold)

    print(f"\n{'='*60}")
    print(f"  LAUNCHPAD ENGINE CONFIGURATION")
    print(f"{'='*60}")

    print(f"\nFEES:")
    print(f"  Platform Fee:     {fees.platform_fee_percentage*100:.1f}% of trade value")
    print(f"  Market Cap Tier:  {fees.market_cap_threshold:,.0f}")
    print(f"  Above Tier:       {high_pct*100:.0f}% to creator after {high_delay.total_seconds()/3600:.0f}h")
    print(f"  At/Below Tier:    {low_pct*100:.0f}% to creator after {low_delay.days}d")

    print(f"\nLEDGER:")
    print(f"  Clamp Policy:     {config.clamp_policy.value}")
    print(f"  Strict Curves:    {config.strict_curve_types}")
    print(f"  Default Curve:    {config.default_curve.value}")

    print(f"\nCURVES (price at supply 0 / 10k / 1M):")
    for curve in CurveType:
        prices = [curve_price(s, curve) for s in (0, 10_000, 1_000_000)]
        print(f"  {curve.value:12}  " + "  ".join(f"{p:>14.6f}" for p in prices))

    print(f"{'='*60}\n")


def show_sample(curve: CurveType, max_supply: float, points: int):
    supplies, prices = sample_curve(curve, max_supply, points)
    print(f"\n{curve.value.upper()} CURVE")
    print("-" * 40)
    print(f"{'Supply':>16} | {'Price (SOL)':>16}")
    print("-" * 40)
    for supply, price in zip(supplies, prices):
        print(f"{supply:>16,.0f} | {price:>16.8f}")
    print("-" * 40)


def simulate(curve: CurveType, config: EngineConfig):
    """Scripted session: a few buys, a sell, then a payout pass."""
    store = MemoryStore(config)
    token = store.add_token("demo", "DEMO", "creator-wallet", curve)

    start = utcnow()
    script = [
        TradeRequest(token.id, "alice", TradeSide.BUY, amount_sol=1.0),
        TradeRequest(token.id, "bob", TradeSide.BUY, amount_sol=5.0),
        TradeRequest(token.id, "carol", TradeSide.BUY, amount_tokens=250.0),
        TradeRequest(token.id, "alice", TradeSide.SELL, amount_tokens=50.0),
        TradeRequest(token.id, "mallory", TradeSide.SELL, amount_tokens=1e12),
    ]

    print(f"\n{'='*60}")
    print(f"  SIMULATED SESSION ({curve.value})")
    print(f"{'='*60}")

    for i, request in enumerate(script):
        try:
            result = store.execute_trade(request, now=start + timedelta(minutes=i))
        except LaunchpadError as e:
            print(f"  REJECTED {request.side.value:4} {request.wallet:8} -> {type(e).__name__}: {e}")
            continue
        tx = result.transaction
        print(
            f"  {tx.side.value.upper():4} {tx.wallet:8} | "
            f"{tx.amount:>12,.4f} tokens @ {tx.price:.6f} | "
            f"fee {tx.fee:.6f} (creator {result.fee.creator_fee:.6f}) | "
            f"mcap {result.updated_market_cap:,.4f}"
        )

    stats = store.recorder.get_stats()
    print(f"\n  Trades: {stats['successful_trades']} ok / {stats['rejected_trades']} rejected")
    print(f"  Volume: {stats['volume_sol']:.6f} SOL | Fees: {stats['total_fees']:.6f} SOL")

    later = start + timedelta(days=8)
    before = summarize(store.distributions(), now=start)
    claimed, skipped = process_distributions(store.distributions(), now=later)
    for d in claimed:
        store.replace_distribution(d)
    after = summarize(store.distributions(), now=later)

    days, hours = before.next_eligible_in or (0, 0)
    print(f"\n  Unclaimed at start: {before.total_unclaimed:.6f} SOL (next payout in {days}d {hours}h)")
    print(f"  Paid out after 8d:  {sum(d.amount for d in claimed):.6f} SOL in {len(claimed)} records")
    print(f"  Still unclaimed:    {after.total_unclaimed:.6f} SOL")
    print(f"{'='*60}\n")


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Launchpad bonding-curve and fee engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --show-config
  python main.py --curve logarithmic --supply 500
  python main.py --curve quadratic --sample --points 21
  python main.py --simulate
        """,
    )

    parser.add_argument(
        "--curve",
        default="linear",
        help="Curve type: linear, quadratic, exponential, logarithmic (default: linear)",
    )
    parser.add_argument(
        "--supply",
        type=float,
        help="Print the price at this circulating supply",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Print a table of the curve from 0 to --max-supply",
    )
    parser.add_argument(
        "--max-supply",
        type=float,
        default=1_000_000,
        help="Upper supply for --sample (default: 1,000,000)",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=11,
        help="Number of rows for --sample (default: 11)",
    )
    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Replay a scripted trading session",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show configuration and exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = EngineConfig.from_env()
        curve = CurveType.parse(args.curve, strict=config.strict_curve_types, default=config.default_curve)

        if args.show_config:
            show_config(config)
            return 0

        if args.supply is not None:
            print(f"{curve.value} price at supply {args.supply:,.2f}: {curve_price(args.supply, curve):.10f} SOL")
            return 0

        if args.sample:
            show_sample(curve, args.max_supply, args.points)
            return 0

        if args.simulate:
            simulate(curve, config)
            return 0

    except (LaunchpadError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
