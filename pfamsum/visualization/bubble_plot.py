#!/usr/bin/env python3
"""
Bubble scatter of domain mutation counts against gene counts.

x: nMuts, y: nGenes, bubble area scaled by nGenes. Highlighted domains are
drawn in color and labelled with their DomainLabel.
"""

import logging
import os
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from pfamsum.exceptions import FileOperationError
from pfamsum.utils.file import ensure_dir


class BubblePlotRenderer:
    """Renders the domain summary scatter to a file"""

    MIN_BUBBLE = 20.0
    MAX_BUBBLE = 300.0
    BASE_FONT_SIZE = 8.0

    def __init__(self, dpi: int = 300):
        self.dpi = dpi
        self.logger = logging.getLogger("pfamsum.visualization")

    def bubble_sizes(self, values: pd.Series) -> np.ndarray:
        values = values.to_numpy(dtype=float)
        if values.size == 0:
            return values
        lo, hi = values.min(), values.max()
        if hi == lo:
            return np.full(values.shape, (self.MIN_BUBBLE + self.MAX_BUBBLE) / 2)
        return np.interp(values, [lo, hi], [self.MIN_BUBBLE, self.MAX_BUBBLE])

    def draw(self, domain_summary: pd.DataFrame, highlighted: pd.DataFrame,
             width: float = 5.0, height: float = 5.0, label_size: float = 1.0):
        """Draw the scatter and return the matplotlib figure"""
        fig, ax = plt.subplots(figsize=(width, height))

        sizes = self.bubble_sizes(domain_summary['nGenes'])
        is_label = domain_summary['DomainLabel'].isin(set(highlighted['DomainLabel'])).to_numpy()

        ax.scatter(domain_summary['nMuts'][~is_label], domain_summary['nGenes'][~is_label],
                   s=sizes[~is_label], color='#bdbdbd', alpha=0.6, edgecolors='#636363', linewidths=0.5)
        ax.scatter(domain_summary['nMuts'][is_label], domain_summary['nGenes'][is_label],
                   s=sizes[is_label], color='#e41a1c', alpha=0.7, edgecolors='black', linewidths=0.5)

        for _, row in domain_summary[is_label].iterrows():
            ax.annotate(str(row['DomainLabel']), (row['nMuts'], row['nGenes']),
                        xytext=(4, 4), textcoords='offset points',
                        fontsize=self.BASE_FONT_SIZE * label_size)

        ax.set_xlabel('# mutations', fontsize=12)
        ax.set_ylabel('# genes', fontsize=12)
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        return fig

    def render(self, domain_summary: pd.DataFrame, highlighted: pd.DataFrame, path: str,
               width: float = 5.0, height: float = 5.0, label_size: float = 1.0,
               dpi: Optional[int] = None) -> str:
        """Draw and save the scatter; the format follows the file extension

        Raises:
            FileOperationError: If the figure cannot be saved
        """
        ensure_dir(os.path.dirname(path))
        fig = self.draw(domain_summary, highlighted, width=width, height=height, label_size=label_size)
        try:
            fig.savefig(path, dpi=dpi or self.dpi, bbox_inches='tight')
        except (OSError, ValueError) as e:
            raise FileOperationError(f"Error saving plot {path}: {str(e)}", {'path': path}) from e
        finally:
            plt.close(fig)

        self.logger.info(f"Domain summary plot saved to {path}")
        return path
