from markfill.markup.html import HtmlMarkup, MarkupProvider, iter_elements
from markfill.markup.registry import TemplateRegistry, template_content
from markfill.markup.tables import rename_table_tags

__all__ = [
    "HtmlMarkup",
    "MarkupProvider",
    "TemplateRegistry",
    "iter_elements",
    "rename_table_tags",
    "template_content",
]
