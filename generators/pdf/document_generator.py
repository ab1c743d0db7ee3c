"""
PDF Document Generator

Walks a document description block by block and drives a PDFWriter.
"""

import logging
from typing import Dict, Any, Optional

import yaml

from .. import BaseGenerator, DocumentValidator
from src.exceptions import PDFWriterError
from src.language import Language
from src.pdf_writer import PDFWriter


def load_document(path: str) -> Dict[str, Any]:
    """Load a document description from a YAML file."""
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


class PDFDocumentGenerator(BaseGenerator):
    """Renders document descriptions to PDF."""

    def __init__(self, config: Dict[str, Any], language: Optional[Language] = None):
        super().__init__(config)
        self.language = language

    def validate_config(self) -> bool:
        return isinstance(self.config.get('pdf', {}), dict)

    def get_supported_formats(self):
        return ['pdf']

    def build(self, document: Dict[str, Any]) -> PDFWriter:
        """Render ``document`` and return the writer holding the result."""
        is_valid, errors = DocumentValidator.validate_document(document)
        if not is_valid:
            raise PDFWriterError("Invalid document: " + "; ".join(errors))

        writer = PDFWriter(self.config, language=self.language)

        for font in document.get('fonts', []) or []:
            writer.register_font(font['family'], font['file'], font.get('style', ''))

        for index, block in enumerate(document['blocks']):
            handler = getattr(self, f"_render_{block['type']}")
            try:
                handler(writer, block)
            except PDFWriterError as e:
                self.logger.error(f"Block {index} ({block['type']}) failed: {e}")
                raise

        self.logger.info(f"Rendered {len(document['blocks'])} blocks on {writer.page_count} page(s)")
        return writer

    def render(self, document: Dict[str, Any]) -> bytes:
        """Render ``document`` and return the PDF source."""
        return self.build(document).get_source_code()

    def generate(self, document: Dict[str, Any], output_path: str, **kwargs) -> bool:
        try:
            writer = self.build(document)
            writer.save_on_disk(output_path)
            return True
        except PDFWriterError as e:
            self.logger.error(f"Error generating PDF: {e}")
            return False

    def _render_font(self, writer: PDFWriter, block: Dict[str, Any]) -> None:
        writer.set_font(
            block['family'],
            block.get('size', 8),
            bold=block.get('bold', False),
            italic=block.get('italic', False),
            underline=block.get('underline', False),
        )

    def _render_text(self, writer: PDFWriter, block: Dict[str, Any]) -> None:
        writer.add_text(block['text'], block['x'], block['y'], block.get('variables'))

    def _render_image(self, writer: PDFWriter, block: Dict[str, Any]) -> None:
        writer.add_image(
            block.get('path', ''),
            x=block.get('x'),
            y=block.get('y'),
            height=block.get('height', 0),
            width=block.get('width', 0),
            link=block.get('link', ''),
        )

    def _render_table(self, writer: PDFWriter, block: Dict[str, Any]) -> None:
        writer.add_table(block['header'], block.get('rows') or (), block.get('sub_rows'))

    def _render_page(self, writer: PDFWriter, block: Dict[str, Any]) -> None:
        writer.add_page()

    def _render_break(self, writer: PDFWriter, block: Dict[str, Any]) -> None:
        writer.line_break(block.get('height'))
