"""
Helpers Module - Text and date formatting used by templates
"""

from datetime import date, datetime
from flask import current_app
from markupsafe import Markup, escape


def format_date(value):
    """
    Format an ISO date string (or date) as 'Month D, YYYY'

    Unparseable strings are returned unchanged; empty values become ''.
    """
    if not value:
        return ''
    if isinstance(value, (date, datetime)):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError:
            current_app.logger.debug(f"Could not parse date: {value}")
            return value
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def truncate_text(text, max_length=100):
    """Truncate text to max_length characters, adding '...' when cut"""
    if not text or len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


def category_label(category):
    """Human label for a project category value"""
    labels = {
        'coding': 'Coding Project',
        'photography': 'Photography',
        'creative': 'Creative Content',
        'data': 'Data Analysis',
        'animation': 'Animation',
        'design': 'Design',
    }
    return labels.get(category, (category or '').title())


BLOCK_TAGS = {
    'normal': 'p',
    'h2': 'h2',
    'h3': 'h3',
    'h4': 'h4',
    'blockquote': 'blockquote',
}
MARK_TAGS = {
    'strong': 'strong',
    'em': 'em',
    'code': 'code',
    'underline': 'u',
}


def _render_span(span, mark_defs):
    html = escape(span.get('text') or '')
    for mark in span.get('marks') or []:
        if mark in MARK_TAGS:
            tag = MARK_TAGS[mark]
            html = Markup(f'<{tag}>{html}</{tag}>')
        elif mark in mark_defs and mark_defs[mark].get('href'):
            html = Markup('<a href="{}">{}</a>').format(mark_defs[mark]['href'], html)
    return html


def render_rich_text(blocks):
    """
    Render rich text to HTML

    Accepts a single string, plain strings (one paragraph each) and Portable Text blocks with
    styles, list items, decorator marks and link annotations. Everything else
    is skipped. Text is always escaped.
    """
    if isinstance(blocks, str):
        blocks = [blocks]
    parts = []
    open_list = None
    for block in blocks or []:
        if isinstance(block, str):
            block = {'_type': 'block', 'children': [{'text': block}]}
        if not isinstance(block, dict) or block.get('_type', 'block') != 'block':
            continue

        mark_defs = {d.get('_key'): d for d in block.get('markDefs') or []}
        inner = Markup('').join(_render_span(child, mark_defs) for child in block.get('children') or [])

        list_tag = {'bullet': 'ul', 'number': 'ol'}.get(block.get('listItem'))
        if open_list and open_list != list_tag:
            parts.append(Markup(f'</{open_list}>'))
            open_list = None
        if list_tag:
            if not open_list:
                parts.append(Markup(f'<{list_tag}>'))
                open_list = list_tag
            parts.append(Markup('<li>{}</li>').format(inner))
            continue

        tag = BLOCK_TAGS.get(block.get('style') or 'normal', 'p')
        parts.append(Markup(f'<{tag}>{{}}</{tag}>').format(inner))

    if open_list:
        parts.append(Markup(f'</{open_list}>'))
    return Markup('\n').join(parts)


__all__ = [
    'format_date',
    'truncate_text',
    'category_label',
    'render_rich_text'
]
