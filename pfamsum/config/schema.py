#!/usr/bin/env python3
"""
Configuration schema definition for validation
"""
from typing import Dict, Any, List, Optional, Tuple, Union


class ConfigSchema:
    """Configuration schema for validation"""

    SCHEMA = {
        'reference': {
            'domain_table': {'type': str, 'required': False},
        },
        'paths': {
            'output_dir': {'type': str, 'required': False},
        },
        'summary': {
            'summarize_by': {'type': str, 'required': True},
            'var_class': {'type': str, 'required': True},
            'top': {'type': int, 'required': True},
            'aa_candidates': {'type': list, 'required': True},
        },
        'variants': {
            'non_synonymous': {'type': list, 'required': True},
            'exclude_types': {'type': list, 'required': False},
        },
        'plot': {
            'width': {'type': (int, float), 'required': False},
            'height': {'type': (int, float), 'required': False},
            'label_size': {'type': (int, float), 'required': False},
            'dpi': {'type': int, 'required': False},
        },
        'logging': {
            'level': {'type': str, 'required': False},
            'format': {'type': str, 'required': False},
            'log_dir': {'type': str, 'required': False},
        },
    }

    @classmethod
    def field_type(cls, section: str, field: str) -> Optional[Union[type, Tuple[type, ...]]]:
        """Declared type of a field, None if the schema does not know it"""
        return cls.SCHEMA.get(section, {}).get(field, {}).get('type')

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> List[str]:
        """Validate configuration against schema

        Args:
            config: Configuration to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for section, fields in cls.SCHEMA.items():
            if section not in config:
                if any(props.get('required', False) for props in fields.values()):
                    errors.append(f"Missing required configuration section: {section}")
                continue

            section_config = config[section]
            if not isinstance(section_config, dict):
                errors.append(f"Configuration section {section} must be a mapping")
                continue
            for field, props in fields.items():
                if field not in section_config:
                    if props.get('required', False):
                        errors.append(f"Missing required configuration field: {section}.{field}")
                    continue

                expected_type = props.get('type')
                value = section_config[field]
                # bool is an int subclass, never a valid number here
                if expected_type and (not isinstance(value, expected_type) or isinstance(value, bool)):
                    names = (expected_type.__name__ if isinstance(expected_type, type)
                             else '/'.join(t.__name__ for t in expected_type))
                    errors.append(
                        f"Invalid type for {section}.{field}: expected {names}, "
                        f"got {type(value).__name__}"
                    )

        return errors
