#!/usr/bin/env python3
"""
PDF Document Generator
======================

Renders document descriptions to PDF with the fpdf2 based PDFWriter.

Features:
- Text placement with language variables
- Tables with coloured headers and sub-rows
- Local, remote and style logo images
- TrueType font registration for Unicode text

Dependencies:
- fpdf2: PDF engine
- PyYAML: document descriptions

Usage:
    from generators.pdf import PDFDocumentGenerator

    generator = PDFDocumentGenerator(config)
    success = generator.generate(document, "output.pdf")
"""

from .document_generator import PDFDocumentGenerator, load_document

__all__ = ['PDFDocumentGenerator', 'load_document']
__version__ = "1.0.0"
