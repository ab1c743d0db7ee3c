from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class Style:
    """Visual style of the host application."""
    page_logo: str = ''

    def get_page_logo(self) -> str:
        return self.page_logo


class StyleHandler:
    """Provides the active style."""

    def __init__(self, style: Style = None):
        self._style = style or Style()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'StyleHandler':
        style_config = config.get('style', {}) or {}
        return cls(Style(page_logo=style_config.get('page_logo') or ''))

    def get_style(self) -> Style:
        return self._style
