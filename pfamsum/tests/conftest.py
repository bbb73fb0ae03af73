#!/usr/bin/env python3
"""
Shared fixtures for the pfamsum test suite
"""

import matplotlib
matplotlib.use('Agg')

import pandas as pd
import pytest

from pfamsum.io.maf import MafTable
from pfamsum.io.reference import DomainReferenceTable


def make_maf(rows):
    """Build MAF rows from (gene, classification, variant_type, protein_change) tuples"""
    return pd.DataFrame(rows, columns=['Hugo_Symbol', 'Variant_Classification',
                                       'Variant_Type', 'HGVSp_Short'])


@pytest.fixture
def reference_frame():
    """Small domain reference, deliberately unsorted"""
    return pd.DataFrame([
        {'HGNC': 'KRAS', 'Start': 1, 'End': 50, 'Label': 'P-loop',
         'pfam': 'PF00071', 'Description': 'Ras family'},
        {'HGNC': 'BRAF', 'Start': 457, 'End': 717, 'Label': 'Pkinase_Tyr',
         'pfam': 'PF07714', 'Description': 'Protein tyrosine kinase'},
        {'HGNC': 'BRAF', 'Start': 155, 'End': 227, 'Label': 'RBD',
         'pfam': 'PF02196', 'Description': 'Raf-like Ras-binding domain'},
        {'HGNC': 'EGFR', 'Start': 712, 'End': 968, 'Label': 'Pkinase_Tyr',
         'pfam': 'PF07714', 'Description': 'Protein tyrosine kinase'},
        {'HGNC': 'PIK3CA', 'Start': 797, 'End': 1068, 'Label': 'PI3_PI4_kinase',
         'pfam': 'PF00454', 'Description': 'Phosphatidylinositol 3- and 4-kinase'},
    ])


@pytest.fixture
def reference(reference_frame):
    return DomainReferenceTable.from_frame(reference_frame)


@pytest.fixture
def maf_frame():
    return make_maf([
        ('TP53', 'Missense_Mutation', 'SNP', 'p.R175H'),
        ('TP53', 'Missense_Mutation', 'SNP', 'p.R175H'),
        ('TP53', 'Missense_Mutation', 'SNP', 'p.R248Q'),
        ('KRAS', 'Missense_Mutation', 'SNP', 'p.G12D'),
        ('KRAS', 'Missense_Mutation', 'SNP', 'p.G12V'),
        ('BRAF', 'Missense_Mutation', 'SNP', 'p.V600E'),
        ('BRAF', 'Missense_Mutation', 'SNP', 'p.V600E'),
        ('BRAF', 'Missense_Mutation', 'SNP', 'p.K601E'),
        ('EGFR', 'In_Frame_Del', 'DEL', 'p.E746_A750del'),
        ('EGFR', 'Missense_Mutation', 'SNP', 'p.L858R'),
        ('PIK3CA', 'Missense_Mutation', 'SNP', 'p.H1047R'),
        ('PIK3CA', 'Frame_Shift_Del', 'DEL', 'p.C229Lfs*18'),
        ('PIK3CA', 'Missense_Mutation', 'SNP', ''),
        ('TP53', 'Silent', 'SNP', 'p.P72P'),
        ('KRAS', 'Amp', 'CNV', None),
    ])


@pytest.fixture
def maf(maf_frame):
    return MafTable(maf_frame)


@pytest.fixture
def scenario_maf():
    """TP53 175, 175, 248 outside any domain and KRAS 12 in P-loop"""
    return MafTable(make_maf([
        ('TP53', 'Missense_Mutation', 'SNP', 'p.R175H'),
        ('TP53', 'Missense_Mutation', 'SNP', 'p.R175H'),
        ('TP53', 'Missense_Mutation', 'SNP', 'p.R248Q'),
        ('KRAS', 'Missense_Mutation', 'SNP', 'p.G12D'),
    ]))


@pytest.fixture
def scenario_reference():
    return DomainReferenceTable.from_frame(pd.DataFrame([
        {'HGNC': 'KRAS', 'Start': 1, 'End': 50, 'Label': 'P-loop',
         'pfam': 'PF00071', 'Description': 'Ras family'},
    ]))
