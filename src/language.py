"""
Language catalog used to resolve language variables into display text.

Items are plain strings that may contain ``{name}`` placeholders. Unknown
items resolve to their own key, so literal text can be passed anywhere a
language variable is expected.
"""

import logging
import string
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger(__name__)


class Language:
    """Lookup table of language items."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})
        self._formatter = string.Formatter()

    @classmethod
    def from_file(cls, path: str) -> 'Language':
        """Load language items from a YAML mapping."""
        with open(path, 'r', encoding='utf-8') as f:
            items = yaml.safe_load(f) or {}
        if not isinstance(items, dict):
            raise ValueError(f"Language file {path} must contain a mapping")
        logger.debug(f"Loaded {len(items)} language items from {path}")
        return cls({str(k): str(v) for k, v in items.items()})

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'Language':
        language_config = config.get('language', {}) or {}
        items = {}
        if language_config.get('file'):
            items.update(cls.from_file(language_config['file']).items)
        items.update(language_config.get('items') or {})
        return cls(items)

    def get(self, item: str) -> str:
        return self.items.get(item, item)

    def get_dynamic_variable(self, item: str, variables: Optional[Dict[str, Any]] = None) -> str:
        """Resolve ``item`` and substitute ``{name}`` placeholders from ``variables``."""
        text = self.get(item)
        variables = variables or {}

        try:
            parts = []
            for literal, field_name, format_spec, conversion in self._formatter.parse(text):
                parts.append(literal)
                if field_name is not None:
                    parts.append(self._substitute(field_name, format_spec, conversion, variables))
            return ''.join(parts)
        except ValueError as e:
            # Malformed braces: keep the raw text
            logger.warning(f"Could not substitute variables in language item '{item}': {e}")
            return text

    def _substitute(self, field_name: str, format_spec: str, conversion: Optional[str],
                    variables: Dict[str, Any]) -> str:
        """Format a single placeholder, leaving it untouched when it cannot be resolved."""
        placeholder = '{' + field_name
        if conversion:
            placeholder += '!' + conversion
        if format_spec:
            placeholder += ':' + format_spec
        placeholder += '}'

        try:
            value, _ = self._formatter.get_field(field_name, (), variables)
            value = self._formatter.convert_field(value, conversion)
            return self._formatter.format_field(value, format_spec)
        except (KeyError, IndexError, AttributeError, ValueError, TypeError):
            return placeholder
