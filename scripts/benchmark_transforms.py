#!/usr/bin/env python3
"""
Transform Engine Benchmark.

Times the cached DFT, brute force DFT and radix-2 FFT on random input and
checks them against numpy.fft.rfft and scipy.fft.rfft, both rescaled to
this package's one-sided convention.

Usage:
    python scripts/benchmark_transforms.py
    python scripts/benchmark_transforms.py --lengths 256 1024 4096 --repeats 20
"""

import sys
import json
import time
import argparse
from pathlib import Path
from typing import Callable, Dict, List

# Add project root
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
import scipy.fft

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table
from rich.panel import Panel
from rich import box

from spectrallab.dsp_core import DFT, FFT

console = Console()


def scale_reference(raw: np.ndarray, n: int) -> np.ndarray:
    """Rescale an rfft result to sqrt(2)/N with DC and Nyquist divided by sqrt(2)."""
    ref = raw * np.sqrt(2.0) / n
    ref[0] = ref[0].real / np.sqrt(2.0)
    ref[-1] = ref[-1].real / np.sqrt(2.0)
    return ref


def time_call(fn: Callable, x: np.ndarray, repeats: int) -> float:
    """Mean wall time in ms; the first call (JIT compilation) is not timed."""
    fn(x)
    start = time.perf_counter()
    for _ in range(repeats):
        fn(x)
    return (time.perf_counter() - start) * 1000 / repeats


def benchmark_length(n: int, repeats: int, rng: np.random.Generator) -> List[Dict]:
    x = rng.standard_normal(n)
    reference = scale_reference(np.fft.rfft(x), n)

    cached = DFT().initialize(n)
    brute = DFT().initialize(n, force_no_cache=True)
    engines = {
        'DFT (cached)': cached.direct,
        'DFT (brute force)': brute.direct,
        'FFT (radix-2)': FFT().initialize(n).direct,
        'numpy.fft.rfft': lambda s: scale_reference(np.fft.rfft(s), n),
        'scipy.fft.rfft': lambda s: scale_reference(scipy.fft.rfft(s), n),
    }

    rows = []
    for name, fn in engines.items():
        elapsed = time_call(fn, x, repeats)
        error = float(np.abs(fn(x) - reference).max())
        rows.append({'length': n, 'engine': name, 'time_ms': elapsed, 'max_error': error})
    rows[0]['using_cache'] = cached.is_using_cache
    return rows


def main():
    parser = argparse.ArgumentParser(description="Transform Engine Benchmark")
    parser.add_argument(
        '--lengths',
        type=int,
        nargs='+',
        default=[64, 256, 1024, 4096],
        help='Transform lengths (powers of two)'
    )
    parser.add_argument('--repeats', type=int, default=10, help='Timed calls per engine')
    parser.add_argument('--seed', type=int, default=0, help='Random seed')
    parser.add_argument('--output', type=str, default=None, help='Optional JSON output path')
    args = parser.parse_args()

    console.print(Panel.fit(
        "[bold blue]Transform Engine Benchmark[/bold blue]\n"
        f"Lengths: {args.lengths} | Repeats: {args.repeats}",
        border_style="blue"
    ))

    rng = np.random.default_rng(args.seed)
    results = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=30),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("[cyan]Benchmarking", total=len(args.lengths))
        for n in args.lengths:
            progress.update(task, description=f"[cyan]N={n}")
            results.extend(benchmark_length(n, args.repeats, rng))
            progress.advance(task)

    table = Table(title="Transform Timing", box=box.ROUNDED)
    table.add_column("N", style="bold", justify="right")
    table.add_column("Engine")
    table.add_column("Time (ms)", justify="right")
    table.add_column("Max |error|", justify="right")

    for row in results:
        style = "green" if row['max_error'] < 1e-9 else "red"
        table.add_row(
            str(row['length']),
            row['engine'],
            f"{row['time_ms']:.4f}",
            f"{row['max_error']:.2e}",
            style=style
        )
    console.print(table)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(results, f, indent=2)
        console.print(f"\n[green]✓[/green] Results saved to {output_path}")


if __name__ == '__main__':
    main()
