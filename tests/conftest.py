"""
Test configuration and shared fixtures for fpdfwriter tests
"""
import io
import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image

@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)

@pytest.fixture
def png_bytes():
    """A small PNG image"""
    buffer = io.BytesIO()
    Image.new('RGB', (20, 10), (200, 30, 30)).save(buffer, format='PNG')
    return buffer.getvalue()

@pytest.fixture
def png_file(temp_dir, png_bytes):
    """A small PNG image on disk"""
    path = temp_dir / 'logo.png'
    path.write_bytes(png_bytes)
    return path

@pytest.fixture
def sample_config():
    """Default configuration for tests"""
    return {
        'pdf': {
            'orientation': 'Portrait',
            'unit': 'mm',
            'page_size': 'A4',
            'margins': {'left': 10, 'right': 10},
        },
        'logging': {
            'level': 'WARNING',
            'log_to_file': False,
        }
    }

@pytest.fixture
def sample_header():
    """Table header descriptors with one coloured column"""
    return [
        {'value': 'Product', 'width': 60, 'height': 7, 'border': 1, 'alignment': 'left'},
        {'value': 'Units', 'width': 30, 'height': 7, 'border': 'bottom', 'alignment': 'right',
         'backgroundColor': '52,73,94', 'textColor': '255,255,255'},
    ]

@pytest.fixture
def sample_document():
    """Document description covering every block type"""
    return {
        'title': 'sample',
        'blocks': [
            {'type': 'font', 'family': 'times', 'size': 12, 'bold': True},
            {'type': 'text', 'text': 'report.title', 'x': 10, 'y': 15, 'variables': {'quarter': 'Q3'}},
            {'type': 'break', 'height': 10},
            {'type': 'table',
             'header': [
                 {'value': 'report.column.product', 'width': 60, 'height': 7, 'border': 1},
                 {'value': 'report.column.units', 'width': 30, 'height': 7, 'border': 1,
                  'alignment': 'right', 'backgroundColor': '0,0,0', 'textColor': '255,255,255'},
             ],
             'rows': [['Widgets', 120], ['Gadgets', 75]],
             'sub_rows': {0: [['Widgets small', 80], ['Widgets large', 40]]}},
            {'type': 'page'},
            {'type': 'text', 'text': 'Second page', 'x': 10, 'y': 10},
        ]
    }
