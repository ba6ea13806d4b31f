"""Output format writers for the license list."""

from license_core.writers.base import LicenseFormatWriter, ListInfo, TocEntry
from license_core.writers.html import HtmlFormatWriter, RdfaFormatWriter
from license_core.writers.json_writer import JsonFormatWriter
from license_core.writers.markdown import MarkdownFormatWriter
from license_core.writers.rdf import RdfFormatWriter
from license_core.writers.text import TemplateFormatWriter, TextFormatWriter
from license_core.writers.website import WebsiteFormatWriter

__all__ = [
    "LicenseFormatWriter",
    "ListInfo",
    "TocEntry",
    "TextFormatWriter",
    "TemplateFormatWriter",
    "HtmlFormatWriter",
    "RdfaFormatWriter",
    "JsonFormatWriter",
    "WebsiteFormatWriter",
    "RdfFormatWriter",
    "MarkdownFormatWriter",
]
