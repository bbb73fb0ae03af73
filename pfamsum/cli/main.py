# pfamsum/cli/main.py
import argparse
import json
import sys
from typing import List, Optional

from ..config import ConfigManager
from ..core.logging_config import LoggingManager
from ..error_handlers import cli_error_handler
from ..exceptions import ConfigurationError
from ..io.maf import MafTable
from ..io.reference import DomainReferenceTable
from ..models import DomainSummaryRecord
from ..pipelines.domain_summary import PfamDomainService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pfamsum',
        description='Summarize MAF mutations by amino acid position and Pfam domain'
    )

    parser.add_argument('--config', type=str, help='Path to configuration file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--log-file', type=str,
                        help='Log to file in addition to stderr')
    parser.add_argument('--log-dir', type=str,
                        help='Directory for log files')
    parser.add_argument('--json', action='store_true',
                        help='Print run diagnostics and top domains as JSON')

    parser.add_argument('--maf', type=str, required=True,
                        help='Tab-delimited MAF file')
    parser.add_argument('--domains', type=str,
                        help='Domain reference table (default: reference.domain_table from config)')
    parser.add_argument('--aa-col', type=str,
                        help='Column holding protein changes (default: first known candidate)')
    parser.add_argument('--summarize-by', type=str, choices=['AAPos', 'AAChange'],
                        help='Summarize by amino acid position or by protein change')
    parser.add_argument('--var-class', type=str, choices=['nonSyn', 'Syn', 'all'],
                        help='Variant classes to include')
    parser.add_argument('--top', type=int,
                        help='Number of top mutated domains to label')
    parser.add_argument('--label', dest='domains_to_label', action='append',
                        help='Domain label to highlight (repeatable, overrides --top)')
    parser.add_argument('--base-name', type=str,
                        help='Write <base>_AAPos_summary.txt, <base>_domainSummary.txt and .pdf')
    parser.add_argument('--width', type=float, help='Plot width in inches')
    parser.add_argument('--height', type=float, help='Plot height in inches')
    parser.add_argument('--label-size', type=float, help='Font scale for plot labels')
    return parser


@cli_error_handler
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    logger = LoggingManager.configure(
        verbose=args.verbose,
        log_file=args.log_file,
        log_dir=args.log_dir,
        component="pfamsum",
        config=config_manager.config
    )

    domains_path = args.domains or config_manager.get_reference_path('domain_table')
    if not domains_path:
        raise ConfigurationError("No domain reference given. Use --domains or set reference.domain_table")

    reference = DomainReferenceTable.from_file(domains_path)
    store = MafTable.read_maf(args.maf, config_manager.get_section('variants'))
    service = PfamDomainService(reference, config=config_manager)

    result = service.summarize(
        store,
        aa_col=args.aa_col,
        summarize_by=args.summarize_by,
        var_class=args.var_class,
        top=args.top,
        domains_to_label=args.domains_to_label,
        base_name=args.base_name,
        width=args.width,
        height=args.height,
        label_size=args.label_size
    )

    if args.json:
        print(json.dumps({
            'diagnostics': result.diagnostics.to_dict(),
            'protein_rows': len(result.protein_summary),
            'unmatched_rows': result.unmatched_count,
            'top_positions': [record.to_dict() for record in result.protein_records(limit=result.options.top)],
            'highlighted': [DomainSummaryRecord.from_row(row).to_dict()
                            for row in result.highlighted.to_dict('records')],
            'output_files': result.output_files
        }, indent=2))
    else:
        print(f"Protein summary: {len(result.protein_summary)} rows "
              f"({result.unmatched_count} outside Pfam domains)")
        print(f"Domain summary: {len(result.domain_summary)} domains")
        if not result.highlighted.empty:
            print(result.highlighted.to_string(index=False))
        for path in result.output_files:
            print(f"Wrote {path}")

    logger.info("pfamsum finished")
    return 0


if __name__ == '__main__':
    sys.exit(main())
