"""
Open Graph link previews for URLs pasted into posts.

``fetch_preview`` downloads the page with ``requests`` and reads the
``og:*`` meta tags (falling back to ``<title>``). Any failure yields an
empty dict so a broken link never breaks posting.
"""

import html
import logging
import re

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

USER_AGENT = "SocialHub/1.0 (Link Preview)"

META_TAG_RE = re.compile(r'<meta\s+[^>]*>', re.IGNORECASE)
ATTR_RE = re.compile(r'([\w:-]+)\s*=\s*(?:"([^"]*)"|\'([^\']*)\')', re.IGNORECASE)
TITLE_RE = re.compile(r'<title[^>]*>(.*?)</title>', re.IGNORECASE | re.DOTALL)

OG_FIELDS = ('title', 'description', 'image', 'url')

# Only the head is needed.
MAX_CHARS = 512 * 1024


def parse_open_graph(document):
    """
    Extract Open Graph fields from an HTML document.

    Returns:
        dict: Subset of ``title``, ``description``, ``image``, ``url``.
    """
    preview = {}
    for tag in META_TAG_RE.findall(document):
        attrs = {
            name.lower(): html.unescape(double if double else single)
            for name, double, single in ATTR_RE.findall(tag)
        }
        prop = attrs.get('property') or attrs.get('name') or ''
        if not prop.lower().startswith('og:'):
            continue
        key = prop[3:].lower()
        if key in OG_FIELDS and key not in preview and attrs.get('content'):
            preview[key] = attrs['content'].strip()

    if 'title' not in preview:
        match = TITLE_RE.search(document)
        if match:
            title = html.unescape(match.group(1)).strip()
            if title:
                preview['title'] = title
    return preview


def fetch_preview(url):
    """Fetch ``url`` and return its Open Graph preview, or ``{}``."""
    if not re.match(r'^https?://', url or '', re.IGNORECASE):
        return {}

    try:
        response = requests.get(
            url,
            timeout=settings.LINK_PREVIEW_TIMEOUT,
            headers={"User-Agent": USER_AGENT},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Link preview failed for {url}: {e}")
        return {}

    content_type = response.headers.get('Content-Type', '')
    if 'html' not in content_type.lower():
        return {}
    document = response.text[:MAX_CHARS]

    preview = parse_open_graph(document)
    if preview and 'url' not in preview:
        preview['url'] = url
    return preview
