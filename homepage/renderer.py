"""
Home page renderer.
Fills the quote and hostname insertion points of the bundled HTML template.
"""

import codecs
from pathlib import Path
from typing import Callable, Optional, Union

from bs4 import BeautifulSoup

from utils import renderer_logger, log_performance, TemplateError, ErrorCodes
from .hostname import resolve_hostname

QUOTE_SELECTOR = "#quote"
HOST_SELECTOR = "#host"

TEMPLATE_ENCODING = "utf-8"


def encode_page(html: str) -> bytes:
    """按 UTF-16 编码页面（大端序，带 BOM）"""
    return codecs.BOM_UTF16_BE + html.encode("utf-16-be")


class PageRenderer:
    """首页渲染器"""

    def __init__(self, template_path: Union[str, Path],
                 hostname_resolver: Callable[[], str] = resolve_hostname):
        self.template_path = Path(template_path)
        self.hostname_resolver = hostname_resolver

    def load_template(self) -> Optional[str]:
        """读取模板，模板不存在时返回 None"""
        try:
            return self.template_path.read_text(encoding=TEMPLATE_ENCODING)
        except FileNotFoundError:
            renderer_logger.warning(f"[Renderer] Template not found: {self.template_path}")
            return None

    @log_performance("Renderer")
    def render(self, quote: str) -> bytes:
        """渲染首页，返回编码后的字节"""
        template = self.load_template()
        if template is None:
            return b""

        # 每次渲染都重新解析，避免追加的文本在请求间累积
        document = BeautifulSoup(template, "html.parser")
        self.populate(document, quote)
        return encode_page(str(document))

    def populate(self, document: BeautifulSoup, quote: str) -> BeautifulSoup:
        """向文档追加名言和主机名"""
        self._append_text(document, QUOTE_SELECTOR, quote)

        hostname = self.hostname_resolver()
        self._append_text(document, HOST_SELECTOR, f'Hostname: "{hostname}"')
        return document

    def _append_text(self, document: BeautifulSoup, selector: str, text: str) -> None:
        element = document.select_one(selector)
        if element is None:
            raise TemplateError(
                f"Template {self.template_path.name} has no element matching '{selector}'",
                ErrorCodes.TEMPLATE_MISSING_ELEMENT,
                context={"selector": selector}
            )
        element.append(text)
