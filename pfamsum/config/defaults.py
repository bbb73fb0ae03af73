#!/usr/bin/env python3
"""
Default configuration values for pfamsum
"""

DEFAULT_CONFIG = {
    'reference': {
        'domain_table': '',
    },
    'paths': {
        'output_dir': '.',
    },
    'summary': {
        'summarize_by': 'AAPos',
        'var_class': 'nonSyn',
        'top': 5,
        # Tried in order when no protein change column is given
        'aa_candidates': ['HGVSp_Short', 'Protein_Change', 'AAChange'],
    },
    'variants': {
        'non_synonymous': [
            'Frame_Shift_Del',
            'Frame_Shift_Ins',
            'Splice_Site',
            'Translation_Start_Site',
            'Nonsense_Mutation',
            'Nonstop_Mutation',
            'In_Frame_Del',
            'In_Frame_Ins',
            'Missense_Mutation',
        ],
        'exclude_types': ['CNV'],
    },
    'plot': {
        'width': 5.0,
        'height': 5.0,
        'label_size': 1.0,
        'dpi': 300,
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    },
}
