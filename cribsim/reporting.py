import os
import json
from typing import Dict, Sequence
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from logging import getLogger

logger = getLogger(__name__)


def save_simulation_report(results: Dict, out_path: str) -> None:
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(out_path, "w") as f:
        json.dump(results, f, indent=2)
    logger.info(f"Saved simulation report to {out_path}")


def plot_score_margins(diffs: Sequence[int], out_path_prefix: str) -> str:
    # diffs: final score of player a minus player b, one per game
    plt.figure()
    plt.hist(list(diffs), bins=30)
    plt.axvline(0, color="black", linewidth=1)
    plt.xlabel('Final score margin (a - b)')
    plt.ylabel('Games')
    plt.title('Score Margin Distribution')
    plt.tight_layout()
    out_path = out_path_prefix + "_margins.png"
    plt.savefig(out_path)
    logger.info(f"Saved margin plot to {out_path}")
    plt.close()
    return out_path
