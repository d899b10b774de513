#!/usr/bin/env python3
"""
PAGE REPLACEMENT BENCHMARK
==========================
Runs FIFO, LRU, OPT and CLOCK over synthetic reference strings and ranks them.

Usage:
    python bench.py                     # Default run
    python bench.py --quick             # Short reference strings
    python bench.py -a fifo,opt         # Specific policies in the tables
    python bench.py --capacity 8        # Slots per run (1-50)
    python bench.py --list              # List available policies
    python bench.py --sweep             # FIFO capacity sweep (Belady's anomaly)

Examples:
    python bench.py --quick --capacity 4
    python bench.py --sweep -a fifo,lru
"""

import argparse
import random
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from pagesim import (  # noqa: E402
    MAX_CAPACITY,
    available_policies,
    belady_anomalies,
    compare_all,
    fault_curve,
)

# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class BenchConfig:
    policies: list = field(default_factory=list)  # empty = all

    capacity: int = 8
    length: int = 2_000
    seed: int = 42
    sweep: bool = False

    # Output
    verbose: bool = True
    color: bool = True


# ============================================================================
# OUTPUT HELPERS
# ============================================================================

class Colors:
    BOLD = '\033[1m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    RED = '\033[91m'
    END = '\033[0m'
    GRAY = '\033[90m'

def c(text, color, cfg):
    """Colorize text if enabled."""
    if cfg.color and sys.stdout.isatty():
        return f"{color}{text}{Colors.END}"
    return text

def p(msg="", cfg=None):
    """Print with flush."""
    if cfg is None or cfg.verbose:
        print(msg, flush=True)


# ============================================================================
# SYNTHETIC WORKLOADS
# ============================================================================

def gen_loop(capacity: int, n: int, extra: int = 1) -> list:
    """Loop pattern: cycles through capacity + extra pages."""
    loop_len = capacity + extra
    return [i % loop_len for i in range(n)]

def gen_zipf(n_pages: int, n: int, alpha: float = 0.99) -> list:
    """Zipfian page popularity."""
    weights = [1.0 / (i + 1) ** alpha for i in range(n_pages)]
    total = sum(weights)
    weights = [w / total for w in weights]
    return random.choices(range(n_pages), weights=weights, k=n)

def gen_temporal(n_pages: int, n: int, phases: int = 5) -> list:
    """Temporal locality: the hot set moves between phases."""
    pages = []
    per_phase = max(1, n // phases)
    pages_per = max(1, n_pages // phases)
    for phase in range(phases):
        start = phase * pages_per
        pages.extend(random.randint(start, start + pages_per - 1) for _ in range(per_phase))
    return pages

def gen_sequential(n_pages: int, n: int) -> list:
    """Sequential scan."""
    return [i % n_pages for i in range(n)]


# ============================================================================
# REPORTING
# ============================================================================

def print_table(rows: list, title: str, cfg: BenchConfig):
    """Print a ranked comparison table."""
    p(f"\n{c(title, Colors.BOLD, cfg)}", cfg)
    p(f"  {'#':<3} {'Policy':<7} {'Hits':>7} {'Faults':>7} {'Hit %':>8} {'Fault %':>8}", cfg)
    p("  " + "-" * 44, cfg)

    for row in rows:
        if cfg.policies and row.policy.lower() not in cfg.policies:
            continue
        line = (f"  {row.rank:<3} {row.policy:<7} {row.hits:>7} {row.faults:>7} "
                f"{row.hit_ratio:>7.2%} {row.fault_ratio:>8.2%}")
        if row.rank == 1:
            line = c(line, Colors.GREEN, cfg) + f" {c('* BEST', Colors.YELLOW, cfg)}"
        p(line, cfg)


def print_sweep(trace: list, cfg: BenchConfig):
    """Print fault counts across every capacity, flagging Belady's anomaly."""
    caps = range(1, MAX_CAPACITY + 1)
    names = [name.upper() for name in cfg.policies] or [name for name, _ in available_policies()]

    for name in names:
        curve = fault_curve(name, trace, caps)
        anomalies = belady_anomalies(name, trace, caps)
        p(f"\n{c(name, Colors.BOLD, cfg)}: "
          f"{len(anomalies)} anomal{'y' if len(anomalies) == 1 else 'ies'}", cfg)
        flagged = {large for _, large in anomalies}
        for cap, faults in curve.items():
            mark = c(f'  <- more faults than capacity {cap - 1}', Colors.RED, cfg) if cap in flagged else ''
            p(f"  capacity {cap:>2}: {faults:>6} faults{mark}", cfg)


# ============================================================================
# MAIN
# ============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Page replacement benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --quick                Short reference strings
  %(prog)s -a fifo,opt            Show only some policies
  %(prog)s --list                 Show available policies
  %(prog)s --sweep                Capacity sweep on the classic anomaly string
        """
    )
    parser.add_argument("--quick", action="store_true", help="Quick mode (300 references)")
    parser.add_argument("-a", "--policies", type=str, help="Comma-separated policies")
    parser.add_argument("-c", "--capacity", type=int, help="Slots per run (1-50)")
    parser.add_argument("-n", "--length", type=int, help="References per workload")
    parser.add_argument("--seed", type=int, help="Random seed for workloads")
    parser.add_argument("--sweep", action="store_true", help="Capacity sweep instead of workloads")
    parser.add_argument("--list", action="store_true", help="List available policies")
    parser.add_argument("--no-color", action="store_true", help="Disable colors")
    parser.add_argument("-q", "--quiet", action="store_true", help="Less output")
    args = parser.parse_args()

    if args.list:
        print("\nAvailable policies:")
        print("-" * 60)
        for name, desc in available_policies():
            print(f"  {name:<8} {desc}")
        print()
        return

    # Build config
    cfg = BenchConfig()

    if args.quick:
        cfg.length = 300
    if args.length is not None:
        cfg.length = args.length
    if args.capacity is not None:
        cfg.capacity = args.capacity
    if args.seed is not None:
        cfg.seed = args.seed
    if args.policies:
        cfg.policies = [a.strip().lower() for a in args.policies.split(",")]
    if args.sweep:
        cfg.sweep = True
    if args.no_color:
        cfg.color = False
    if args.quiet:
        cfg.verbose = False

    known = {name.lower() for name, _ in available_policies()}
    unknown = [a for a in cfg.policies if a not in known]
    if unknown:
        print(f"Unknown policies: {', '.join(unknown)}")
        return
    if not 1 <= cfg.capacity <= MAX_CAPACITY:
        print(f"Capacity must be between 1 and {MAX_CAPACITY}")
        return
    if cfg.length < 1:
        print("Length must be at least 1")
        return

    random.seed(cfg.seed)

    p(c("\n+==================================================+", Colors.BLUE, cfg), cfg)
    p(c("|          PAGE REPLACEMENT BENCHMARK              |", Colors.BLUE, cfg), cfg)
    p(c("+==================================================+", Colors.BLUE, cfg), cfg)

    start_time = time.time()

    if cfg.sweep:
        trace = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]
        p(f"\nReference string: {trace}", cfg)
        print_sweep(trace, cfg)
        p(f"\n{c(f'Completed in {time.time() - start_time:.1f}s', Colors.GRAY, cfg)}", cfg)
        return

    C = cfg.capacity
    N = cfg.length

    workloads = [
        ("LOOP-N+1", gen_loop(C, N, 1)),
        ("LOOP-N+3", gen_loop(C, N, 3)),
        ("ZIPF-0.8", gen_zipf(C * 4, N, 0.8)),
        ("ZIPF-0.99", gen_zipf(C * 4, N, 0.99)),
        ("TEMPORAL", gen_temporal(C * 5, N, 5)),
        ("SEQUENTIAL", gen_sequential(C * 2, N)),
    ]

    p(f"\nCapacity: {c(C, Colors.YELLOW, cfg)} | References per workload: {N:,}", cfg)

    wins = {name: 0 for name, _ in available_policies()}
    for name, trace in workloads:
        rows = compare_all(C, trace)
        print_table(rows, f"{name}: {len(trace):,} references, {len(set(trace))} pages", cfg)
        for row in rows:
            if row.faults == rows[0].faults:
                wins[row.policy] += 1

    p(c("\n+==================================================+", Colors.BLUE, cfg), cfg)
    p(c("|                    SUMMARY                       |", Colors.BLUE, cfg), cfg)
    p(c("+==================================================+", Colors.BLUE, cfg), cfg)
    for name, count in sorted(wins.items(), key=lambda kv: -kv[1]):
        p(f"  {name:<7} fewest faults on {count}/{len(workloads)} workloads", cfg)

    p(f"\n{c(f'Completed in {time.time() - start_time:.1f}s', Colors.GRAY, cfg)}", cfg)


if __name__ == "__main__":
    main()
