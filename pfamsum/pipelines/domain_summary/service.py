#!/usr/bin/env python3
"""
High-level service interface for Pfam domain summarization.

Runs position parsing, aggregation, interval matching and domain rollup
over a mutation store and returns the protein and domain summary tables.
Report writing and plotting are delegated to a writer and a renderer.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from pfamsum.config import ConfigManager
from pfamsum.error_handlers import log_exception
from pfamsum.exceptions import FieldResolutionError, PfamSumError
from pfamsum.io.maf import MafTable
from pfamsum.io.reference import DomainReferenceTable
from pfamsum.io.writer import SummaryWriter
from pfamsum.visualization.bubble_plot import BubblePlotRenderer

from .aggregator import MutationAggregator
from .matcher import IntervalMatcher
from .models import (
    DomainSummaryResult, SummaryOptions, VariantClassFilter
)
from .parser import PositionParser
from .summarizer import DomainSummarizer


PLOT_SUFFIX = '_domainSummary.pdf'


class PfamDomainService:
    """
    Annotates mutations with Pfam domains and summarizes them.

    The domain reference is loaded by the caller and shared read-only
    across summarize() calls.
    """

    def __init__(self, reference: DomainReferenceTable,
                 config: Optional[Union[ConfigManager, Dict[str, Any]]] = None,
                 writer: Optional[SummaryWriter] = None,
                 renderer: Optional[BubblePlotRenderer] = None):
        """
        Args:
            reference: Domain interval reference
            config: ConfigManager or plain config dict; defaults if omitted
            writer: Table writer used when a base name is given
            renderer: Plot renderer used when a base name is given
        """
        if config is None:
            config = ConfigManager()
        self.config: Dict[str, Any] = config.config if isinstance(config, ConfigManager) else config
        self.logger = logging.getLogger(__name__)

        self.reference = reference
        self.parser = PositionParser()
        self.aggregator = MutationAggregator()
        self.matcher = IntervalMatcher(reference)
        self.summarizer = DomainSummarizer()

        plot_config = self.config.get('plot', {})
        self.writer = writer or SummaryWriter()
        self.renderer = renderer or BubblePlotRenderer(dpi=plot_config.get('dpi', 300))

        self.logger.info(f"PfamDomainService initialized with {len(reference)} domain intervals")

    @property
    def aa_candidates(self) -> List[str]:
        return list(self.config.get('summary', {}).get(
            'aa_candidates', ['HGVSp_Short', 'Protein_Change', 'AAChange']))

    def resolve_aa_column(self, columns: List[str], aa_col: Optional[str] = None) -> str:
        """Pick the protein change column

        An explicit column must exist; otherwise the first configured
        candidate present in the table is used.

        Raises:
            FieldResolutionError: If no usable column exists
        """
        if aa_col is not None:
            if aa_col not in columns:
                raise FieldResolutionError(
                    f"Column {aa_col} not found in MAF. Available fields: {', '.join(columns)}",
                    {'aa_col': aa_col, 'available': list(columns)}
                )
            return aa_col

        for candidate in self.aa_candidates:
            if candidate in columns:
                self.logger.info(f"Assuming protein change information are stored under column {candidate}. "
                                 f"Use aa_col to override if necessary.")
                return candidate

        raise FieldResolutionError(
            "AAChange field not found in MAF. Use aa_col to manually specify field name "
            f"containing protein changes. Available fields: {', '.join(columns)}",
            {'candidates': self.aa_candidates, 'available': list(columns)}
        )

    def select_mutations(self, store: MafTable, var_class: VariantClassFilter) -> pd.DataFrame:
        """Rows of the store that feed the summary, excluded variant types removed"""
        if var_class is VariantClassFilter.SYN:
            return store.silent()
        return store.subset(include_syn=var_class is VariantClassFilter.ALL)

    def gene_totals(self, store: MafTable, var_class: VariantClassFilter) -> pd.DataFrame:
        """Per-gene denominators for fraction

        nonSyn counts non-synonymous rows only. Syn and all count every row
        of the gene, so their fraction is not comparable with maftools
        pfamDomains output, which always divides by the non-synonymous total.
        """
        return store.gene_summary(include_syn=var_class is not VariantClassFilter.NON_SYN)

    def summarize(self, store: MafTable, options: Optional[SummaryOptions] = None,
                  **kwargs) -> DomainSummaryResult:
        """Summarize mutations of a store by amino acid position and domain

        Args:
            store: Mutation store
            options: Run options; built from config and kwargs if omitted
            **kwargs: SummaryOptions fields (aa_col, summarize_by, top,
                domains_to_label, base_name, var_class, width, height,
                label_size)

        Returns:
            DomainSummaryResult

        Raises:
            ConfigurationError: If a selector is invalid
            FieldResolutionError: If no protein change column is found
            JoinIntegrityError: If a mutated gene has no total
            FileOperationError: If writing or plotting fails
        """
        if options is None:
            options = SummaryOptions.from_config(self.config, **kwargs)
        elif kwargs:
            options = SummaryOptions(**{**options.to_dict(), **kwargs})

        self.logger.info(f"Summarizing {options.var_class.value} mutations by {options.summarize_by.value}")

        mutations = self.select_mutations(store, options.var_class)
        aa_col = self.resolve_aa_column(list(mutations.columns), options.aa_col)

        parsed, diagnostics = self.parser.parse(mutations, aa_col)
        aggregated = self.aggregator.aggregate(parsed, self.gene_totals(store, options.var_class),
                                               options.summarize_by)
        protein_summary = self.matcher.annotate(aggregated, options.summarize_by)

        domain_summary = self.summarizer.summarize(protein_summary, self.reference.label_metadata())
        highlighted = self.summarizer.select_labels(domain_summary, top=options.top,
                                                    domains_to_label=options.domains_to_label)

        result = DomainSummaryResult(
            protein_summary=protein_summary,
            domain_summary=domain_summary,
            highlighted=highlighted,
            options=options,
            diagnostics=diagnostics,
            aa_col=aa_col
        )

        if options.base_name:
            result.output_files = self.export(result, self.output_base(options.base_name))

        return result

    def output_base(self, base_name: str) -> str:
        """Resolve a relative base name against paths.output_dir"""
        output_dir = self.config.get('paths', {}).get('output_dir')
        if os.path.isabs(base_name) or not output_dir or output_dir == '.':
            return base_name
        return os.path.join(output_dir, base_name)

    def export(self, result: DomainSummaryResult, base_name: str) -> List[str]:
        """Write both tables and render the plot, one attempt each"""
        options = result.options
        try:
            written = self.writer.write(result.protein_summary, result.domain_summary, base_name)
            written.append(self.renderer.render(
                result.domain_summary, result.highlighted, f"{base_name}{PLOT_SUFFIX}",
                width=options.width, height=options.height, label_size=options.label_size
            ))
        except PfamSumError as e:
            log_exception(self.logger, e, context={'base_name': base_name})
            raise
        return written


def pfam_domains(maf: Union[MafTable, pd.DataFrame],
                 reference: Union[DomainReferenceTable, pd.DataFrame],
                 config: Optional[Union[ConfigManager, Dict[str, Any]]] = None,
                 **kwargs) -> DomainSummaryResult:
    """Convenience wrapper: build a service and summarize one mutation table

    Args:
        maf: MafTable or raw MAF rows
        reference: DomainReferenceTable or raw reference rows
        config: Optional configuration
        **kwargs: SummaryOptions fields

    Returns:
        DomainSummaryResult
    """
    if isinstance(reference, pd.DataFrame):
        reference = DomainReferenceTable.from_frame(reference)

    service = PfamDomainService(reference, config=config)
    if isinstance(maf, pd.DataFrame):
        maf = MafTable(maf, service.config.get('variants'))
    return service.summarize(maf, **kwargs)
