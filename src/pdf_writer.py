import io
import os
import uuid
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import requests
from fpdf import FPDF
from PIL import Image, UnidentifiedImageError

from .exceptions import (
    PDFConfigurationError,
    ImageLoadError,
    MissingPageLogoError,
    PDFOutputError,
    TableLayoutError,
)
from .language import Language
from .response import PDFResponse, INLINE, ATTACHMENT
from .style import StyleHandler
from .table_layout import TableRenderer, TableHeader, parse_color
from .utils import get_default_config, merge_config, is_remote_path


# Font families shipped with the engine
CORE_FONT_FAMILIES = ('courier', 'helvetica', 'symbol', 'times', 'zapfdingbats')
FONT_ALIASES = {'arial': 'helvetica'}
FALLBACK_FONT_FAMILY = 'helvetica'

ORIENTATIONS = {'p': 'P', 'portrait': 'P', 'l': 'L', 'landscape': 'L'}
UNITS = ('mm', 'cm', 'in', 'pt')
PAGE_SIZES = ('a3', 'a4', 'a5', 'letter', 'legal')

DEFAULT_FONT_DIRECTORY = Path(__file__).resolve().parent.parent / 'fonts'


class PDFWriter:
    """Creates a PDF document with the fpdf2 engine.

    The writer is configured from the ``pdf`` section of the application
    config and starts with one empty page. Text passed to the drawing
    helpers may be a language variable; it is resolved through ``language``
    before it reaches the engine.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 language: Optional[Language] = None,
                 style: Optional[StyleHandler] = None):
        self.config = merge_config(get_default_config(), config or {})
        self.pdf_config = self.config['pdf']
        self.logger = logging.getLogger(__name__)
        self.language = language or Language.from_config(self.config)
        self.style_handler = style or StyleHandler.from_config(self.config)

        self.font_directory = Path(self.pdf_config.get('font_directory') or DEFAULT_FONT_DIRECTORY)
        try:
            self.default_background_color = parse_color(
                self.pdf_config['default_background_color'], 'Default background color')
            self.default_text_color = parse_color(
                self.pdf_config['default_text_color'], 'Default text color')
        except TableLayoutError as e:
            raise PDFConfigurationError(str(e)) from e
        self._unicode_families = set()
        self._registered_styles = set()
        self._current_family = None

        orientation, unit, page_size = self._validate_page_setup()
        self.pdf = FPDF(orientation=orientation, unit=unit, format=page_size)

        margins = self.pdf_config.get('margins', {})
        self.pdf.set_left_margin(margins.get('left', 1))
        self.pdf.set_right_margin(margins.get('right', 1))
        if margins.get('top') is not None:
            self.pdf.set_top_margin(margins['top'])
        self.pdf.add_page()

        default_font = self.pdf_config.get('default_font') or {}
        if default_font.get('family'):
            self.set_font(default_font['family'], default_font.get('size', 8))

        self.logger.debug(f"PDF writer ready: {orientation} {page_size} in {unit}")

    def _validate_page_setup(self) -> Tuple[str, str, Union[str, Tuple[float, float]]]:
        orientation = str(self.pdf_config.get('orientation', 'Portrait'))
        if orientation.lower() not in ORIENTATIONS:
            raise PDFConfigurationError(f"Unsupported page orientation: {orientation}")

        unit = str(self.pdf_config.get('unit', 'mm')).lower()
        if unit not in UNITS:
            raise PDFConfigurationError(f"Unsupported unit: {unit}")

        page_size = self.pdf_config.get('page_size', 'A4')
        if isinstance(page_size, str):
            if page_size.lower() not in PAGE_SIZES:
                raise PDFConfigurationError(f"Unsupported page size: {page_size}")
            page_size = page_size.lower()
        elif isinstance(page_size, Sequence) and len(page_size) == 2:
            try:
                page_size = (float(page_size[0]), float(page_size[1]))
            except (TypeError, ValueError):
                raise PDFConfigurationError(f"Unsupported page size: {page_size}") from None
            if page_size[0] <= 0 or page_size[1] <= 0:
                raise PDFConfigurationError(f"Unsupported page size: {page_size}")
        else:
            raise PDFConfigurationError(f"Unsupported page size: {page_size}")

        return ORIENTATIONS[orientation.lower()], unit, page_size

    def add_image(self, image_path: str = '', x: Optional[float] = None, y: Optional[float] = None,
                  height: float = 0, width: float = 0, link: Any = '') -> None:
        """Adds an image at the given coordinates.

        If ``image_path`` is empty, the page logo of the active style is used.
        Remote images (http/https) are downloaded first. A width or height of
        0 scales the image proportionally.
        """
        if not image_path:
            image_path = self.style_handler.get_style().get_page_logo()

            if not image_path:
                raise MissingPageLogoError(
                    'Please specify an image path, as no page logo is defined for the active style.')

        if is_remote_path(image_path):
            image = self._fetch_remote_image(image_path)
        else:
            if not os.path.isfile(image_path):
                raise ImageLoadError(f"Image not found: {image_path}")
            image = image_path

        try:
            self.pdf.image(image, x=x, y=y, w=width, h=height, link=link)
        except (UnidentifiedImageError, OSError) as e:
            self.logger.error(f"Could not load image {image_path}: {e}")
            raise ImageLoadError(f"Could not load image {image_path}: {e}") from e

    def _fetch_remote_image(self, url: str) -> Image.Image:
        http_config = self.config.get('http', {})
        headers = {'User-Agent': http_config.get('user_agent', 'fpdfwriter/1.0')}

        try:
            response = requests.get(url, headers=headers, timeout=http_config.get('timeout', 30))
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(f"Could not download image {url}: {e}")
            raise ImageLoadError(f"Could not download image {url}: {e}") from e

        try:
            image = Image.open(io.BytesIO(response.content))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            self.logger.error(f"Downloaded file is not a valid image: {url}")
            raise ImageLoadError(f"Downloaded file is not a valid image: {url}") from e

        self.logger.debug(f"Downloaded image {url} ({image.format}, {image.size[0]}x{image.size[1]})")
        return image

    def add_table(self, table_header: Sequence[Union[TableHeader, Dict[str, Any]]],
                  table_data: Sequence[Sequence[Any]] = (),
                  sub_table_data: Any = None):
        """Adds a table with the given header descriptors, rows and sub-rows."""
        table_config = self.pdf_config.get('table') or {}
        renderer = TableRenderer(
            self.pdf,
            self.format_text,
            default_background_color=self.default_background_color,
            default_text_color=self.default_text_color,
            indent=table_config.get('indent', 1),
            sub_row_indent=table_config.get('sub_row_indent'),
        )
        return renderer.render(table_header, table_data, sub_table_data)

    def add_text(self, text: str, x: float, y: float, variables: Optional[Dict[str, Any]] = None) -> None:
        """Adds the given text (or language variable) at the given coordinates."""
        self.pdf.text(x, y, self.format_text(text, variables))

    def format_text(self, text: Any, variables: Optional[Dict[str, Any]] = None) -> str:
        """Formats a text for use within the document.

        ``text`` may be a language variable. Core fonts only cover Latin-1,
        so characters outside of it are replaced while such a font is active.
        """
        if text is None:
            return ''
        if not isinstance(text, str):
            text = str(text)

        text = self.language.get_dynamic_variable(text, variables)

        if self._current_family not in self._unicode_families:
            text = text.encode('latin-1', 'replace').decode('latin-1')

        return text

    def get_download_name(self, name: str = '') -> str:
        """Returns a file name for downloading the document.

        An empty name is replaced by a random one, a missing '.pdf' suffix
        is appended.
        """
        if not name:
            name = uuid.uuid4().hex[:8] + '.pdf'
        elif not name.endswith('.pdf'):
            name += '.pdf'

        return name

    def get_source_code(self) -> bytes:
        """Returns the source of the pdf document."""
        return bytes(self.pdf.output())

    def save_on_disk(self, path: Union[str, Path]) -> Path:
        """Saves the document at the given path."""
        path = Path(path)
        source = self.get_source_code()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'wb') as f:
                f.write(source)
        except OSError as e:
            self.logger.error(f"Could not save PDF to {path}: {e}")
            raise PDFOutputError(f"Could not save PDF to {path}: {e}") from e

        self.logger.info(f"PDF saved: {path} ({len(source)} bytes)")
        return path

    def register_font(self, family: str, filename: str, style: str = '') -> None:
        """Registers a TrueType font, relative file names resolve against the font directory."""
        font_path = Path(filename)
        if not font_path.is_absolute():
            font_path = self.font_directory / font_path

        family = family.lower()
        style = ''.join(sorted(style.upper().replace('U', '')))
        try:
            self.pdf.add_font(family, style, str(font_path))
        except OSError as e:
            self.logger.error(f"Could not register font {family} from {font_path}: {e}")
            raise PDFConfigurationError(f"Could not register font {family} from {font_path}: {e}") from e
        self._unicode_families.add(family)
        self._registered_styles.add((family, style))
        self.logger.debug(f"Registered font {family} ({style or 'regular'}) from {font_path}")

    def set_font(self, font_family: str, size: float = 8, bold: bool = False,
                 italic: bool = False, underline: bool = False) -> None:
        """Sets the font used for writing the next text."""
        font_family = font_family.lower()
        font_family = FONT_ALIASES.get(font_family, font_family)
        if font_family not in CORE_FONT_FAMILIES and font_family not in self._unicode_families:
            self.logger.debug(f"Unknown font family '{font_family}', using {FALLBACK_FONT_FAMILY}")
            font_family = FALLBACK_FONT_FAMILY

        style_string = ''
        if bold:
            style_string += 'B'
        if italic:
            style_string += 'I'
        if underline:
            style_string += 'U'

        face = style_string.replace('U', '')
        if font_family in self._unicode_families and (font_family, face) not in self._registered_styles:
            raise PDFConfigurationError(
                f"Font {font_family} has no registered style '{face or 'regular'}'")

        self.pdf.set_font(font_family, style_string, size)
        self._current_family = font_family

    def add_page(self) -> None:
        self.pdf.add_page()

    def line_break(self, height: Optional[float] = None) -> None:
        self.pdf.ln(height)

    @property
    def page_count(self) -> int:
        return self.pdf.page_no()

    def show_download_dialog(self, name: str = '') -> PDFResponse:
        """Returns a response that makes the browser show its 'Save as' dialog."""
        return PDFResponse(self.get_source_code(), self.get_download_name(name), ATTACHMENT)

    def show_in_browser(self, name: str = '') -> PDFResponse:
        """Returns a response that shows the document within the browser.

        Browsers without a PDF viewer will download it under the given name.
        """
        return PDFResponse(self.get_source_code(), self.get_download_name(name), INLINE)
