"""
fpdfwriter - convenience layer over the fpdf2 PDF engine
"""

__version__ = "1.0.0"
