"""
HTTP response wrapper for delivering a rendered PDF to a browser.

``inline`` lets the browser display the document with its PDF viewer,
``attachment`` forces the "Save as" dialog.
"""

from typing import Dict, List, Tuple, BinaryIO

INLINE = 'inline'
ATTACHMENT = 'attachment'


class PDFResponse:
    """A rendered PDF together with the headers needed to send it."""

    def __init__(self, body: bytes, filename: str, disposition: str = INLINE):
        if disposition not in (INLINE, ATTACHMENT):
            raise ValueError(f"Unsupported content disposition: {disposition}")
        self.body = bytes(body)
        self.filename = filename
        self.disposition = disposition

    @property
    def content_type(self) -> str:
        if self.disposition == ATTACHMENT:
            return 'application/x-download'
        return 'application/pdf'

    @property
    def headers(self) -> Dict[str, str]:
        filename = self.filename.replace('"', '')
        return {
            'Content-Type': self.content_type,
            'Content-Disposition': f'{self.disposition}; filename="{filename}"',
            'Content-Length': str(len(self.body)),
            'Cache-Control': 'private, max-age=0, must-revalidate',
            'Pragma': 'public',
        }

    def header_list(self) -> List[Tuple[str, str]]:
        return list(self.headers.items())

    def write_to(self, stream: BinaryIO) -> int:
        """Write the document body to a binary stream."""
        return stream.write(self.body)

    def __call__(self, environ, start_response):
        """WSGI entry point."""
        start_response('200 OK', self.header_list())
        return [self.body]

    def __repr__(self) -> str:
        return f"PDFResponse(filename={self.filename!r}, disposition={self.disposition!r}, size={len(self.body)})"
