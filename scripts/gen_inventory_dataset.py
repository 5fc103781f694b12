#!/usr/bin/env python3
"""Dataset generation script for performance testing.

Generates a synthetic device inventory CSV in the sparse spreadsheet layout
the analyzer expects:
- Row 1: header row with the seven canonical column labels
- Device rows: device code + work location + first component
- Continuation rows: blank device cells, one component each
- Optional blank lines and repeated header rows (pasted-sheet artefacts)
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

COLUMNS = ["设备编号", "工作部位", "零部件名称", "型号规格", "数量及米数", "电机功率", "备注"]

LOCATIONS = ["1#真空回潮机", "1#西门电机", "2#切丝机", "3#烘丝机", "包装线", "Loc-A"]
PARTS = ["密封圈", "加湿电磁阀", "减速机电机", "气缸", "轴承", "皮带", "PartX"]
POWER_TEXTS = ["", "", "0.37KW", "1.5kw", "5.5KW", "11KW", "22千瓦", "约3KW"]


def generate_inventory_frame(
    devices: int,
    max_components: int = 6,
    seed: int = 42,
    header_repeat_every: int = 0,
) -> pd.DataFrame:
    """Generate the sparse inventory as a DataFrame of strings.

    Args:
        devices: Number of devices to generate
        max_components: Upper bound of components per device (0..max)
        seed: Random seed for reproducible data
        header_repeat_every: Insert a repeated header row every N devices (0 = never)

    Returns:
        DataFrame whose columns are the canonical labels
    """
    rng = np.random.default_rng(seed)
    rows: list[list[str]] = []
    for i in range(devices):
        if header_repeat_every and i and i % header_repeat_every == 0:
            rows.append(list(COLUMNS))
        n_components = int(rng.integers(0, max_components + 1))
        code = f"HC-{i + 1:04d}"
        location = str(rng.choice(LOCATIONS))
        if n_components == 0:
            rows.append([code, location, "", "", "", "", ""])
            continue
        for j in range(n_components):
            head = [code, location] if j == 0 else ["", ""]
            rows.append(
                head
                + [
                    str(rng.choice(PARTS)),
                    f"型号 {int(rng.integers(10, 999))}",
                    str(int(rng.integers(1, 10))),
                    str(rng.choice(POWER_TEXTS)),
                    "",
                ]
            )
    return pd.DataFrame(rows, columns=COLUMNS)


def create_csv_file(output_path: Path, devices: int, max_components: int, seed: int) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_inventory_frame(devices, max_components, seed)
    df.to_csv(output_path, index=False, encoding="utf-8")
    print(f"Created CSV file: {output_path}")
    print(f"  Devices: {devices:,}")
    print(f"  Rows: {len(df):,} (+ 1 header row)")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic inventory CSV datasets for performance testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default 5k devices
  %(prog)s inventory.csv

  # Larger inventory with up to 12 components per device
  %(prog)s big.csv --devices 50000 --max-components 12 --seed 123
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV file path")
    parser.add_argument("--devices", type=int, default=5_000, help="Number of devices (default: 5,000)")
    parser.add_argument(
        "--max-components", type=int, default=6, help="Max components per device (default: 6)"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without writing")
    args = parser.parse_args()

    if args.devices <= 0:
        print("Error: --devices must be positive", file=sys.stderr)
        return 1
    if args.max_components < 0:
        print("Error: --max-components must not be negative", file=sys.stderr)
        return 1

    print("Dataset generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Devices: {args.devices:,}")
    print(f"  Components per device: 0..{args.max_components}")
    print(f"  Random seed: {args.seed}")
    if args.dry_run:
        print("\n[DRY RUN] Would generate the file but not creating it.")
        return 0

    try:
        create_csv_file(args.output, args.devices, args.max_components, args.seed)
    except OSError as e:
        print(f"\nError generating dataset: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
