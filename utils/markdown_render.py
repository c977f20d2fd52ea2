"""
Chat message rendering.
Assistant replies arrive as GitHub-flavoured markdown. The generated HTML is
sanitized with nh3 so only an allow-list of tags, attributes and URL schemes
reaches the page.
"""

import markdown
import nh3
from markupsafe import Markup

MARKDOWN_EXTENSIONS = ['tables', 'fenced_code', 'sane_lists', 'nl2br']

ALLOWED_TAGS = {
    'p', 'br', 'hr', 'strong', 'em', 'b', 'i', 'del', 'code', 'pre', 'blockquote',
    'ul', 'ol', 'li', 'a', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'table', 'thead', 'tbody', 'tr', 'th', 'td',
}

# rel and target are set on every link by the sanitizer
ALLOWED_ATTRIBUTES = {
    'a': {'href', 'title'},
    'code': {'class'},
}

ALLOWED_URL_SCHEMES = {'http', 'https', 'mailto'}


def render_markdown(text: str) -> Markup:
    """
    Convert chat markdown to safe HTML.

    Links open in a new tab; script-like URLs and raw HTML outside the
    allow-list are dropped.

    Args:
        text: Markdown source

    Returns:
        Markup safe to embed in templates
    """
    if not text:
        return Markup('')
    html = markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
    html = nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        url_schemes=ALLOWED_URL_SCHEMES,
        link_rel='noopener noreferrer',
        set_tag_attribute_values={'a': {'target': '_blank'}},
    )
    return Markup(html)
