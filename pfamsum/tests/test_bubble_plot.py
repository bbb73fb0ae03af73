#!/usr/bin/env python3
"""
Tests for the domain summary bubble plot
"""
import os

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from pfamsum.exceptions import FileOperationError
from pfamsum.visualization import BubblePlotRenderer


@pytest.fixture
def domain_summary():
    return pd.DataFrame({
        'DomainLabel': ['Pkinase_Tyr', 'P-loop', 'PI3_PI4_kinase'],
        'nMuts': [5, 2, 1],
        'nGenes': [2, 1, 1],
        'pfam': ['PF07714', 'PF00071', 'PF00454'],
        'Description': [None, None, None],
    })


class TestBubblePlotRenderer:

    def test_bubble_sizes(self):
        renderer = BubblePlotRenderer()
        sizes = renderer.bubble_sizes(pd.Series([1, 2, 3]))
        assert list(sizes) == [20.0, 160.0, 300.0]
        assert list(renderer.bubble_sizes(pd.Series([4, 4]))) == [160.0, 160.0]

    def test_labels_only_highlighted(self, domain_summary):
        fig = BubblePlotRenderer().draw(domain_summary, domain_summary.head(1), label_size=1.5)
        ax = fig.axes[0]
        assert [t.get_text() for t in ax.texts] == ['Pkinase_Tyr']
        assert ax.texts[0].get_fontsize() == pytest.approx(12.0)
        assert ax.get_xlabel() == '# mutations'
        plt.close(fig)

    def test_render_pdf(self, domain_summary, tmp_path):
        path = str(tmp_path / 'plots' / 'run_domainSummary.pdf')
        assert BubblePlotRenderer(dpi=72).render(domain_summary, domain_summary.head(2), path) == path
        assert os.path.getsize(path) > 0

    def test_render_unwritable(self, domain_summary, tmp_path):
        blocker = tmp_path / 'file'
        blocker.write_text('')
        with pytest.raises(FileOperationError):
            BubblePlotRenderer().render(domain_summary, domain_summary, str(blocker / 'plot.pdf'))
