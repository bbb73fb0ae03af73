#!/usr/bin/env python3
"""
Tests for configuration loading
"""
import json

import pytest
import yaml

from pfamsum.config import ConfigManager, ConfigSchema, DEFAULT_CONFIG
from pfamsum.exceptions import ConfigurationError
from pfamsum.pipelines.domain_summary.models import SummaryOptions, SummarizeBy


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    import os
    for key in list(os.environ):
        if key.startswith('PFAMSUM_'):
            monkeypatch.delenv(key)


class TestConfigManager:

    def test_defaults(self):
        config = ConfigManager()
        assert config.get('summary.top') == 5
        assert config.get('summary.aa_candidates') == ['HGVSp_Short', 'Protein_Change', 'AAChange']
        assert 'Missense_Mutation' in config.get('variants.non_synonymous')
        assert config.get('missing.key', 'fallback') == 'fallback'

    def test_defaults_are_not_shared(self):
        config = ConfigManager()
        config.config['summary']['top'] = 99
        assert DEFAULT_CONFIG['summary']['top'] == 5
        assert ConfigManager().get('summary.top') == 5

    def test_yaml_file_and_local_override(self, tmp_path):
        path = tmp_path / 'pfamsum.yml'
        path.write_text(yaml.safe_dump({
            'reference': {'domain_table': '/data/protein_domains.tsv'},
            'summary': {'top': 10},
        }))
        (tmp_path / 'pfamsum.local.yml').write_text(yaml.safe_dump({'summary': {'top': 3}}))

        config = ConfigManager(str(path))
        assert config.get_reference_path('domain_table') == '/data/protein_domains.tsv'
        assert config.get('summary.top') == 3
        # untouched defaults survive the merge
        assert config.get('summary.var_class') == 'nonSyn'

    def test_json_file(self, tmp_path):
        path = tmp_path / 'pfamsum.json'
        path.write_text(json.dumps({'plot': {'width': 8}}))
        assert ConfigManager(str(path)).get('plot.width') == 8

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv('PFAMSUM_SUMMARY__TOP', '7')
        monkeypatch.setenv('PFAMSUM_SUMMARY__AA_CANDIDATES', 'Protein_Change, HGVSp')
        config = ConfigManager()
        assert config.get('summary.top') == 7
        assert config.get('summary.aa_candidates') == ['Protein_Change', 'HGVSp']

    def test_environment_values_follow_schema_types(self, monkeypatch):
        monkeypatch.setenv('PFAMSUM_SUMMARY__AA_CANDIDATES', 'HGVSp')
        monkeypatch.setenv('PFAMSUM_PLOT__WIDTH', '7.5')
        monkeypatch.setenv('PFAMSUM_REFERENCE__DOMAIN_TABLE', '/data/1,2.tsv')
        config = ConfigManager()
        assert config.get('summary.aa_candidates') == ['HGVSp']
        assert config.get('plot.width') == 7.5
        assert config.get_reference_path() == '/data/1,2.tsv'

    def test_environment_value_of_wrong_type(self, monkeypatch):
        monkeypatch.setenv('PFAMSUM_SUMMARY__TOP', 'five')
        with pytest.raises(ConfigurationError, match='summary.top'):
            ConfigManager()

    def test_malformed_environment_key_ignored(self, monkeypatch):
        monkeypatch.setenv('PFAMSUM_TOP', '10')
        assert ConfigManager().get('summary.top') == 5

    def test_section_replaced_by_scalar(self, tmp_path):
        path = tmp_path / 'scalar.yml'
        path.write_text(yaml.safe_dump({'summary': 5}))
        with pytest.raises(ConfigurationError, match='must be a mapping'):
            ConfigManager(str(path))

    def test_get_section(self):
        config = ConfigManager()
        assert config.get('plot')['dpi'] == 300
        assert config.get_section('variants')['exclude_types'] == ['CNV']
        assert config.get_section('absent') == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager(str(tmp_path / 'absent.yml'))

    def test_malformed_file(self, tmp_path):
        path = tmp_path / 'bad.yml'
        path.write_text('summary: [unclosed')
        with pytest.raises(ConfigurationError):
            ConfigManager(str(path))

    def test_invalid_type(self, tmp_path):
        path = tmp_path / 'bad_type.yml'
        path.write_text(yaml.safe_dump({'summary': {'top': 'five'}}))
        with pytest.raises(ConfigurationError) as excinfo:
            ConfigManager(str(path))
        assert any('summary.top' in e for e in excinfo.value.details['errors'])


class TestConfigSchema:

    def test_default_config_is_valid(self):
        assert ConfigSchema.validate(DEFAULT_CONFIG) == []

    def test_missing_required_section(self):
        errors = ConfigSchema.validate({'paths': {'output_dir': '.'}, 'variants': []})
        assert 'Missing required configuration section: summary' in errors
        assert 'Configuration section variants must be a mapping' in errors

    def test_bool_is_not_a_number(self):
        config = json.loads(json.dumps(DEFAULT_CONFIG))
        config['plot']['dpi'] = True
        assert ConfigSchema.validate(config)


class TestSummaryOptionsFromConfig:

    def test_config_values_and_overrides(self):
        config = ConfigManager().config
        config['summary']['summarize_by'] = 'AAChange'
        config['plot']['width'] = 7.5

        options = SummaryOptions.from_config(config, top=2, width=None)
        assert options.summarize_by is SummarizeBy.AA_CHANGE
        assert options.top == 2
        assert options.width == 7.5
