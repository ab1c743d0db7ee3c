#!/usr/bin/env python3
"""
PDF Writer Exception Classes
"""

class PDFWriterError(Exception):
    """Base exception for PDF writer errors"""
    pass

class PDFConfigurationError(PDFWriterError):
    """Raised when orientation, unit or page size is not supported"""
    pass

class TableLayoutError(PDFWriterError):
    """Raised when table header or table data is malformed"""
    pass

class MissingPageLogoError(PDFWriterError):
    """Raised when no image path is given and the active style has no page logo"""
    pass

class ImageLoadError(PDFWriterError):
    """Raised when an image cannot be found, downloaded or decoded"""
    pass

class PDFOutputError(PDFWriterError):
    """Raised when the document cannot be written to its destination"""
    pass
