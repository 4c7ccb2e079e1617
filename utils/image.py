import matplotlib.pyplot as plt
import numpy as np
from pathlib import Path
from typing import Optional

from utils.logger_config import get_logger

logger = get_logger(__name__)


class ScoreProfileChartGenerator:
    def __init__(self, xlabel: str = "candidate x [pixel]", ylabel: str = "SSD",
                 save_path_result: Optional[Path] = None):
        # frame
        self.fig = None
        self.ax = None
        self.figsize = (12, 5)
        self.dpi = 100
        self.pad_inches = 0.3
        self.fontsize = 12

        self.xlabel = xlabel
        self.ylabel = ylabel
        self.save_path_result = Path(save_path_result) if save_path_result else None
        self.photo_name = None

    def create_score_profile(self, profile: np.ndarray, best_offset: int,
                             photo_name: str = None, title: str = None) -> Optional[Path]:
        """Plot SSD against candidate offset and mark the selected match.

        Skipped offsets are NaN in ``profile`` and show up as gaps.
        """
        self.photo_name = "score_profile" if photo_name is None else photo_name
        self._setup_figure()

        offsets = np.arange(len(profile))
        self.ax.plot(offsets, profile, color='tab:blue', linewidth=1)
        if 0 <= best_offset < len(profile):
            self.ax.scatter([best_offset], [profile[best_offset]], color='green', s=60,
                            marker='o', zorder=3, label=f"match x={best_offset}")
            self.ax.legend(fontsize=self.fontsize)
        if title:
            self.ax.set_title(title, fontsize=self.fontsize)

        return self._save_and_close()

    def _setup_figure(self):
        self.fig, self.ax = plt.subplots(1, 1, figsize=self.figsize, dpi=self.dpi)
        self.ax.set_xlabel(self.xlabel, fontsize=self.fontsize)
        self.ax.set_ylabel(self.ylabel, fontsize=self.fontsize)
        self.ax.tick_params(axis='both', which='major', labelsize=self.fontsize)
        self.ax.grid(True, alpha=0.3)

    def _save_and_close(self) -> Optional[Path]:
        output = None
        if self.save_path_result is not None:
            self.save_path_result.mkdir(parents=True, exist_ok=True)
            output = self.save_path_result / f"{self.photo_name}.png"
            self.fig.savefig(output, bbox_inches='tight', pad_inches=self.pad_inches)
            logger.debug(f"Saved chart to {output}")
        plt.close(self.fig)
        self.fig, self.ax = None, None
        return output
