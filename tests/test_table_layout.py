"""
Unit tests for table validation and cell emission
"""
import pytest
from unittest.mock import Mock, call

from src.exceptions import TableLayoutError
from src.table_layout import (
    TableHeader,
    TableRenderer,
    normalize_alignment,
    normalize_border,
    normalize_header,
    parse_color,
    validate_table_data,
)


class TestNormalization:
    """Test header value normalization"""

    def test_parse_color_from_string(self):
        assert parse_color('10, 20 ,30', 'Color') == (10, 20, 30)

    def test_parse_color_from_sequence(self):
        assert parse_color([0, 128, 255], 'Color') == (0, 128, 255)

    @pytest.mark.parametrize('value', ['300,0,0', '1,2', 'a,b,c', '-1,0,0', 42, '1,2,3,4'])
    def test_parse_color_rejects_invalid(self, value):
        with pytest.raises(TableLayoutError, match='Color is invalid'):
            parse_color(value, 'Color')

    @pytest.mark.parametrize('value,expected', [
        ('center', 'C'),
        ('Right', 'R'),
        ('l', 'L'),
        ('justify', 'L'),
        ('', 'L'),
        (None, 'L'),
        (3, 'L'),
    ])
    def test_normalize_alignment(self, value, expected):
        assert normalize_alignment(value) == expected

    @pytest.mark.parametrize('value,expected', [
        (None, 0),
        (0, 0),
        (1, 1),
        (5, 1),
        ('bottom', 'B'),
        ('left', 'L'),
        ('Top', 'T'),
        ('r', 'R'),
        ('x', 1),
        ('', 1),
    ])
    def test_normalize_border(self, value, expected):
        assert normalize_border(value) == expected

    def test_normalize_header_defaults(self):
        header = normalize_header({'height': 5}, 0)

        assert header.width == 0
        assert header.border == 0
        assert header.alignment == 'L'
        assert header.value == ''
        assert header.fill is False

    def test_normalize_header_coloured(self):
        header = normalize_header({'height': 5, 'backgroundColor': '1,2,3', 'textColor': '4,5,6'}, 0)

        assert header.background_color == (1, 2, 3)
        assert header.text_color == (4, 5, 6)
        assert header.fill is True

    def test_normalize_header_accepts_snake_case_keys(self):
        header = normalize_header({'height': 5, 'background_color': (1, 2, 3), 'text_color': (4, 5, 6)}, 0)
        assert header.fill is True

    def test_normalize_header_accepts_dataclass(self):
        header = normalize_header(TableHeader(height=4, alignment='right', border='top'), 0)

        assert header.alignment == 'R'
        assert header.border == 'T'

    def test_missing_height(self):
        with pytest.raises(TableLayoutError, match='Height value is missing for table header "2"'):
            normalize_header({'width': 10}, 2)

    @pytest.mark.parametrize('value,expected', [('7', 7.0), (' 7.5 ', 7.5), (6, 6.0)])
    def test_numeric_strings_are_accepted(self, value, expected):
        header = normalize_header({'height': value, 'width': value}, 0)

        assert header.height == expected
        assert header.width == expected

    @pytest.mark.parametrize('field,value', [
        ('height', 'tall'),
        ('height', -1),
        ('height', True),
        ('height', [7]),
        ('width', 'wide'),
        ('width', -20),
    ])
    def test_invalid_geometry(self, field, value):
        header = {'height': 5, 'width': 10}
        header[field] = value

        with pytest.raises(TableLayoutError, match=f'{field.capitalize()} value is invalid for table header "3"'):
            normalize_header(header, 3)

    def test_background_without_text_color(self):
        with pytest.raises(TableLayoutError, match='Text color is missing'):
            normalize_header({'height': 5, 'backgroundColor': '1,2,3'}, 0)

    def test_invalid_text_color(self):
        with pytest.raises(TableLayoutError, match='Text color for table header "0" is invalid'):
            normalize_header({'height': 5, 'backgroundColor': '1,2,3', 'textColor': '1,2'}, 0)

    def test_rejects_non_mapping_header(self):
        with pytest.raises(TableLayoutError):
            normalize_header('Product', 0)


class TestTableDataValidation:
    """Test row and sub-row column counts"""

    def test_valid_data(self):
        validate_table_data(2, [['a', 'b'], ['c', 'd']], {0: [['e', 'f']]})

    def test_row_column_mismatch(self):
        with pytest.raises(TableLayoutError, match='table data index "1"'):
            validate_table_data(2, [['a', 'b'], ['c']])

    def test_sub_row_column_mismatch(self):
        with pytest.raises(TableLayoutError, match='Sub data "1" of table data index "0"'):
            validate_table_data(2, [['a', 'b']], {0: [['c', 'd'], ['e']]})

    def test_sub_rows_as_list(self):
        with pytest.raises(TableLayoutError, match='table data index "1"'):
            validate_table_data(2, [['a', 'b'], ['c', 'd']], [None, [['e', 'f', 'g']]])

    def test_string_row_is_rejected(self):
        with pytest.raises(TableLayoutError, match='not a sequence'):
            validate_table_data(2, ['ab'])


class TestTableRenderer:
    """Test cell emission against a mocked engine"""

    @pytest.fixture
    def pdf(self):
        return Mock()

    @pytest.fixture
    def renderer(self, pdf):
        return TableRenderer(pdf, lambda value: str(value))

    @pytest.fixture
    def header(self):
        return [
            {'value': 'A', 'width': 20, 'height': 5, 'border': 1},
            {'value': 'B', 'width': 30, 'height': 6, 'border': 'top', 'alignment': 'center',
             'backgroundColor': '10,20,30', 'textColor': '255,255,255'},
        ]

    def test_header_only(self, renderer, pdf, header):
        renderer.render(header)

        assert pdf.method_calls == [
            call.cell(1, 6),
            call.set_fill_color(255, 255, 255),
            call.set_text_color(0, 0, 0),
            call.cell(20, 5, 'A', 1, align='L', fill=False),
            call.set_fill_color(10, 20, 30),
            call.set_text_color(255, 255, 255),
            call.cell(30, 6, 'B', 'T', align='C', fill=True),
            call.ln(6),
            call.set_fill_color(255, 255, 255),
            call.set_text_color(0, 0, 0),
        ]

    def test_rows_and_sub_rows(self, renderer, pdf, header):
        renderer.render(header, [['x', 'y'], ['z', 1]], {0: [['sx', 'sy']]})

        body = pdf.method_calls[10:]
        assert body == [
            call.cell(1, 6),
            call.cell(20, 5, 'x', 1, align='L'),
            call.cell(30, 6, 'y', 'T', align='C'),
            call.ln(6),
            call.cell(1, 6),
            call.cell(20, 5, 'sx', 1, align='L'),
            call.cell(30, 6, 'sy', 'T', align='C'),
            call.ln(6),
            call.cell(1, 6),
            call.cell(20, 5, 'z', 1, align='L'),
            call.cell(30, 6, '1', 'T', align='C'),
            call.ln(6),
        ]

    def test_sub_row_indent(self, pdf, header):
        renderer = TableRenderer(pdf, str, indent=1, sub_row_indent=5)
        renderer.render(header, [['x', 'y']], {0: [['sx', 'sy']]})

        indents = [c for c in pdf.method_calls if c == call.cell(5, 6)]
        assert len(indents) == 1

    def test_zero_indent_skips_indent_cell(self, pdf, header):
        renderer = TableRenderer(pdf, str, indent=0)
        renderer.render(header)

        assert pdf.method_calls[0] == call.set_fill_color(255, 255, 255)

    def test_custom_default_colors(self, pdf):
        renderer = TableRenderer(pdf, str, default_background_color=(1, 1, 1), default_text_color=(2, 2, 2))
        renderer.render([{'height': 5}])

        assert call.set_fill_color(1, 1, 1) in pdf.method_calls
        assert call.set_text_color(2, 2, 2) in pdf.method_calls

    def test_values_are_formatted(self, pdf, header):
        format_text = Mock(side_effect=lambda value: f"<{value}>")
        renderer = TableRenderer(pdf, format_text)
        renderer.render(header, [['x', 'y']])

        assert [c.args[0] for c in format_text.call_args_list] == ['A', 'B', 'x', 'y']

    def test_returns_normalized_headers(self, renderer, header):
        headers = renderer.render(header)

        assert [h.alignment for h in headers] == ['L', 'C']
        assert [h.fill for h in headers] == [False, True]

    def test_nothing_drawn_on_invalid_data(self, renderer, pdf, header):
        with pytest.raises(TableLayoutError):
            renderer.render(header, [['only one']])
        assert pdf.method_calls == []

    def test_nothing_drawn_on_invalid_header(self, renderer, pdf, header):
        header[1]['textColor'] = 'white'
        with pytest.raises(TableLayoutError):
            renderer.render(header, [['x', 'y']])
        assert pdf.method_calls == []

    def test_numeric_string_geometry_reaches_engine_as_numbers(self, renderer, pdf):
        renderer.render([{'value': 'A', 'width': '20', 'height': '7'}], [['x']])

        assert call.cell(20.0, 7.0, 'x', 0, align='L') in pdf.method_calls

    def test_nothing_drawn_on_invalid_height(self, renderer, pdf):
        with pytest.raises(TableLayoutError, match='Height value is invalid'):
            renderer.render([{'width': 20, 'height': 'seven'}], [['x']])
        assert pdf.method_calls == []

    def test_empty_header(self, renderer):
        with pytest.raises(TableLayoutError, match='at least one column'):
            renderer.render([])
