"""
Analysis tools for simulation results.
"""

import json
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd
from scipy import stats


def calculate_confidence_interval(wins: int, total: int, confidence: float = 0.95) -> Tuple[float, float]:
    """
    Calculate Wilson score interval for binomial proportion.

    Args:
        wins: Number of wins
        total: Total number of games
        confidence: Confidence level (default: 0.95)

    Returns:
        Tuple of (lower_bound, upper_bound)
    """
    if total == 0:
        return (0.0, 0.0)

    p = wins / total
    z = stats.norm.ppf(1 - (1 - confidence) / 2)

    denominator = 1 + z**2 / total
    center = (p + z**2 / (2 * total)) / denominator
    spread = z * np.sqrt(p * (1 - p) / total + z**2 / (4 * total**2)) / denominator

    return (float(center - spread), float(center + spread))

def load_results(csv_path: str) -> pd.DataFrame:
    df = pd.read_csv(csv_path, keep_default_na=False)
    if df.empty:
        raise ValueError(f"No games found in {csv_path}")
    return df

def summarize_results(csv_path: str) -> List[Dict[str, Any]]:
    """
    Win statistics per agent configuration, best first.

    Returns:
        One dict per configuration with games, wins, draws, win rates as A,
        as B and overall, the Wilson 95% interval of the overall rate and the
        average game length.
    """
    df = load_results(csv_path)
    configs = pd.unique(pd.concat([df['a_config'], df['b_config']]))

    summary = []
    for config_str in configs:
        a_games = df[df['a_config'] == config_str]
        b_games = df[df['b_config'] == config_str]
        a_wins = int((a_games['winner'] == 'A').sum())
        b_wins = int((b_games['winner'] == 'B').sum())

        # Mirror matches count once per side
        total_games = len(a_games) + len(b_games)
        total_wins = a_wins + b_wins
        draws = int((a_games['winner'] == 'DRAW').sum() + (b_games['winner'] == 'DRAW').sum())

        summary.append({
            'config': json.loads(config_str),
            'games': total_games,
            'wins': total_wins,
            'draws': draws,
            'a_win_rate': a_wins / len(a_games) if len(a_games) > 0 else 0,
            'b_win_rate': b_wins / len(b_games) if len(b_games) > 0 else 0,
            'win_rate': total_wins / total_games if total_games > 0 else 0,
            'win_rate_ci': calculate_confidence_interval(total_wins, total_games),
            'avg_moves': float(pd.concat([a_games['moves'], b_games['moves']]).mean()),
        })

    summary.sort(key=lambda s: s['win_rate'], reverse=True)
    return summary

def print_summary(csv_path: str):
    """Print detailed analysis of simulation results."""
    print("\nSimulation Analysis:")
    print("====================")
    for i, entry in enumerate(summarize_results(csv_path), 1):
        low, high = entry['win_rate_ci']
        print(f"\n{i}. {json.dumps(entry['config'], sort_keys=True)}")
        print(f"   Games: {entry['games']} (draws: {entry['draws']})")
        print(f"   Win Rate: {entry['win_rate']:.2%}  95% CI: [{low:.2%}, {high:.2%}]")
        print(f"   As A: {entry['a_win_rate']:.2%}  As B: {entry['b_win_rate']:.2%}")
        print(f"   Average game length: {entry['avg_moves']:.1f} moves")
