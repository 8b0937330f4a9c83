# experiments/run_experiments.py
# Uniformity experiment for the bounded draw: for every (seed, max) pair draw
# `samples` values, count each outcome and save the counts as CSV.
# Feed the CSV to plot_heatmap.py.

import argparse
import csv
import os
import sys
import time
from pathlib import Path

import numpy as np

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

from msws import Generator

OUT_DIR = 'results'
COLUMNS = ['seed', 'max', 'outcome', 'count', 'samples']


def parse_int_list(value):
    return [int(x, 0) for x in value.split(',') if x.strip()]


def count_outcomes(seed, max_value, samples):
    rng = Generator(seed)
    draws = np.fromiter((rng.draw_u32_bounded(max_value) for _ in range(samples)),
                        dtype=np.int64, count=samples)
    return np.bincount(draws, minlength=max_value)


def chi_square(counts):
    expected = counts.sum() / len(counts)
    return float(((counts - expected) ** 2 / expected).sum())


def run_grid(seeds, bounds, samples):
    # yields CSV rows and prints a chi-square line per (seed, max)
    for seed in seeds:
        for max_value in bounds:
            counts = count_outcomes(seed, max_value, samples)
            print(f"seed={seed:08x} max={max_value} chi2={chi_square(counts):.2f} (dof={max_value - 1})")
            for outcome, count in enumerate(counts):
                yield [seed, max_value, outcome, int(count), samples]


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--seeds', type=str, default='0,1,0xffffffff', help='comma list')
    parser.add_argument('--bounds', type=str, default='2,3,5,6,7,10,12', help='comma list')
    parser.add_argument('--samples', type=int, default=100000, help='draws per (seed, max)')
    parser.add_argument('--out', default=None, help='CSV path (default results/uniformity_<time>.csv)')
    args = parser.parse_args(argv)

    seeds = parse_int_list(args.seeds)
    bounds = parse_int_list(args.bounds)
    csv_path = args.out or os.path.join(OUT_DIR, f'uniformity_{int(time.time())}.csv')
    os.makedirs(os.path.dirname(csv_path) or '.', exist_ok=True)
    with open(csv_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(COLUMNS)
        for row in run_grid(seeds, bounds, args.samples):
            writer.writerow(row)
    print("Experiments complete. CSV saved at:", csv_path)
    return csv_path


if __name__ == '__main__':
    main()
