#!/usr/bin/env python3
"""
Document Generators Package
===========================

Generators that turn a document description into an output file.

A document description is a mapping with a ``blocks`` list, usually loaded
from YAML. Every block has a ``type``:

- font: select font family, size and emphasis
- text: place a text or language variable at absolute coordinates
- image: place an image (the style's page logo when no path is given)
- table: draw a table with header descriptors, rows and sub-rows
- page: start a new page
- break: move the cursor to the next line

Base Classes:
- BaseGenerator: Abstract interface for all generators
- DocumentValidator: Validates document descriptions before generation
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Tuple
import logging

BLOCK_TYPES = ('font', 'text', 'image', 'table', 'page', 'break')


class BaseGenerator(ABC):
    """Abstract base class for all document generators."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def generate(self, document: Dict[str, Any], output_path: str, **kwargs) -> bool:
        """Generate output from a document description.

        Args:
            document: Document description with a ``blocks`` list
            output_path: Path for output file
            **kwargs: Generator-specific options

        Returns:
            bool: True if generation successful, False otherwise
        """
        pass

    @abstractmethod
    def validate_config(self) -> bool:
        """Validate generator configuration.

        Returns:
            bool: True if config is valid, False otherwise
        """
        pass

    def get_supported_formats(self) -> List[str]:
        """Return list of supported output formats."""
        return []


class DocumentValidator:
    """Validates document descriptions before generation."""

    REQUIRED_FIELDS = {
        'text': ('text', 'x', 'y'),
        'font': ('family',),
        'table': ('header',),
    }

    @staticmethod
    def validate_block(block: Any, index: int) -> List[str]:
        """Validate a single block, returning a list of problems."""
        if not isinstance(block, dict):
            return [f"Block {index} is not a mapping"]

        block_type = block.get('type')
        if block_type not in BLOCK_TYPES:
            return [f"Block {index} has unknown type '{block_type}'"]

        return [f"Block {index} ({block_type}) is missing '{field}'"
                for field in DocumentValidator.REQUIRED_FIELDS.get(block_type, ())
                if field not in block]

    @staticmethod
    def validate_font(font: Any, index: int) -> List[str]:
        """Validate a TrueType font registration entry."""
        if not isinstance(font, dict):
            return [f"Font {index} is not a mapping"]
        return [f"Font {index} is missing '{field}'" for field in ('family', 'file') if not font.get(field)]

    @staticmethod
    def validate_document(document: Any) -> Tuple[bool, List[str]]:
        """Validate an entire document description.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        if not isinstance(document, dict):
            return False, ["Document must be a mapping"]

        blocks = document.get('blocks')
        if not isinstance(blocks, list) or not blocks:
            return False, ["Document has no blocks"]

        errors = []
        fonts = document.get('fonts') or []
        if not isinstance(fonts, list):
            errors.append("Document fonts must be a list")
            fonts = []
        for i, font in enumerate(fonts):
            errors.extend(DocumentValidator.validate_font(font, i))

        for i, block in enumerate(blocks):
            errors.extend(DocumentValidator.validate_block(block, i))

        return len(errors) == 0, errors


from .pdf import PDFDocumentGenerator

__all__ = ['BaseGenerator', 'DocumentValidator', 'PDFDocumentGenerator', 'BLOCK_TYPES']

__version__ = "1.0.0"
