# experiments/plot_heatmap.py
"""
Heatmap of bounded-draw uniformity: rows = max (the bound), columns = outcome,
cell = mean normalised frequency (count * max / samples, 1.0 is perfectly uniform).

CSV expected columns: seed, max, outcome, count, samples
 - seed: int (generator seed)
 - max: int (bound passed to draw_u32_bounded)
 - outcome: int in [0, max)
 - count: int (times this outcome was drawn)
 - samples: int (draws for this seed/max pair)

Usage:
    python plot_heatmap.py --csv results/uniformity_XXXX.csv --out heatmap.png
"""

import argparse
import os

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

REQUIRED = {'seed', 'max', 'outcome', 'count', 'samples'}


def prepare_pivot(df):
    df = df.assign(freq=df['count'] * df['max'] / df['samples'])
    # mean over seeds for each (max, outcome)
    agg = df.groupby(['max', 'outcome'], as_index=False)['freq'].mean()
    pivot = agg.pivot(index='max', columns='outcome', values='freq')
    return pivot.sort_index(ascending=True)


def plot_heatmap(pivot, title='Bounded draw uniformity', out_file=None, annotate=True, spread=0.05, show=True):
    rows = pivot.index.tolist()
    cols = pivot.columns.tolist()
    data = pivot.values  # NaN where outcome >= max

    fig, ax = plt.subplots(figsize=(0.8*len(cols)+3, 0.6*len(rows)+2))
    im = ax.imshow(data, aspect='auto', interpolation='nearest', cmap='coolwarm',
                   vmin=1.0 - spread, vmax=1.0 + spread)

    ax.set_xticks(np.arange(len(cols)))
    ax.set_yticks(np.arange(len(rows)))
    ax.set_xticklabels(cols)
    ax.set_yticklabels(rows)
    ax.set_xlabel('Outcome')
    ax.set_ylabel('Bound (max)')
    ax.set_title(title)

    if annotate:
        for i in range(len(rows)):
            for j in range(len(cols)):
                val = data[i, j]
                if np.isnan(val):
                    continue
                ax.text(j, i, f"{val:.3f}", ha='center', va='center', color='black', fontsize=8)

    cbar = fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    cbar.set_label('count * max / samples')

    plt.tight_layout()
    if out_file:
        os.makedirs(os.path.dirname(out_file) or '.', exist_ok=True)
        plt.savefig(out_file, dpi=300)
        print(f"Heatmap saved to {out_file}")
    if show:
        plt.show()
    plt.close(fig)


def load_results(path):
    df = pd.read_csv(path)
    if not REQUIRED.issubset(set(df.columns)):
        raise SystemExit(f"CSV must contain columns: {REQUIRED}. Found: {df.columns.tolist()}")
    for col in REQUIRED:
        df[col] = df[col].astype(int)
    return df


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--csv', required=True, help='Path to experiments CSV')
    parser.add_argument('--out', default='results/heatmap_uniformity.png', help='Output PNG path')
    parser.add_argument('--title', default='Bounded draw uniformity', help='Plot title')
    parser.add_argument('--no-show', action='store_true', help='Only save the PNG')
    args = parser.parse_args(argv)

    if args.no_show:
        matplotlib.use('Agg')
    pivot = prepare_pivot(load_results(args.csv))
    plot_heatmap(pivot, title=args.title, out_file=args.out, annotate=True, show=not args.no_show)


if __name__ == '__main__':
    main()
