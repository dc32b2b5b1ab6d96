"""
Input Sanitization Module

Cleans user input and externally fetched recipe data before it is stored.
The API returns JSON, so text is normalized rather than HTML-escaped.
"""

import html
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from constants import MAX_LENGTHS

# Control characters and null bytes
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=10000):
    """
    Normalize free text: decode entities, drop control characters, trim.

    Args:
        text: The text to clean (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Cleaned string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = html.unescape(text)
    text = _CONTROL_CHARS.sub('', text).strip()

    if len(text) > max_length:
        text = text[:max_length - 3] + '...'

    return text


def strip_html(text):
    """Turn an HTML fragment into plain text, keeping list items and breaks as lines."""
    if not text:
        return ''
    if '<' not in text:
        return sanitize_text(text)

    soup = BeautifulSoup(text, 'html.parser')
    for li in soup.find_all('li'):
        li.insert_before('• ')
        li.append('\n')
    for br in soup.find_all('br'):
        br.replace_with('\n')
    for p in soup.find_all('p'):
        p.append('\n')

    plain = soup.get_text()
    plain = plain.replace('**', '')
    plain = re.sub(r'\n{3,}', '\n\n', plain)
    return sanitize_text(plain)


def sanitize_url(url):
    """
    Accept only absolute http(s) URLs.

    Returns:
        The stripped URL if acceptable, empty string otherwise
    """
    if not url or not isinstance(url, str):
        return ''

    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError:
        return ''

    if parsed.scheme.lower() not in ('http', 'https') or not parsed.netloc:
        return ''
    if len(url) > MAX_LENGTHS['source_url']:
        return ''
    return url


def sanitize_recipe_name(name, max_length=None):
    """
    Clean a recipe name for storage.

    Returns:
        Cleaned recipe name, or 'Onbekend recept' when nothing usable remains
    """
    if max_length is None:
        max_length = MAX_LENGTHS['recipe_name']

    name = sanitize_text(name, max_length=max_length)
    name = re.sub(r'[#*]+', '', name)
    name = re.sub(r'\s+', ' ', name).strip()
    return name or 'Onbekend recept'


def sanitize_instructions(steps):
    """
    Clean a list of instruction steps.

    Steps containing bullets or line breaks are split into separate steps;
    fragments of five characters or fewer are dropped.
    """
    cleaned = []
    for step in steps or []:
        text = strip_html(step)
        if '•' in text:
            parts = text.split('•')
        elif '\n' in text:
            parts = text.split('\n')
        else:
            parts = [text]
        for part in parts:
            part = part.strip()
            if len(part) > 5:
                cleaned.append(part[:MAX_LENGTHS['instruction']])
    return cleaned
