from typing import NamedTuple, Optional

HTML_MEDIA_TYPES = ("text/html", "application/xhtml+xml")


class HttpResponse(NamedTuple):
    """Response from HTTP fetch operation."""
    status_code: int
    text: str
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= int(self.status_code) < 300

    @property
    def is_html(self) -> bool:
        """True unless the Content-Type names something other than HTML.

        A missing Content-Type counts as HTML so the body is still scanned.
        """
        if not self.content_type:
            return True
        media_type = self.content_type.split(";", 1)[0].strip().lower()
        return media_type in HTML_MEDIA_TYPES
