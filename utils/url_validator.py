"""
SSRF Protection Module

Recipe import fetches pages from user-supplied URLs. Every URL is checked
before the request is made: http(s) only, and the host must resolve to
public addresses.
"""

import ipaddress
import re
import socket
from urllib.parse import urlparse

import requests

DEFAULT_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
    'Accept-Language': 'nl-NL,nl;q=0.9,en;q=0.8',
}

_URL_IN_TEXT = re.compile(r'https?://[^\s]+', re.IGNORECASE)


class SSRFError(Exception):
    """Raised when a URL fails SSRF validation or the response is too large."""
    pass


def extract_url(text):
    """
    Pull the URL out of shared text.

    Share sheets produce messages like "Ik kwam een lekker recept tegen
    https://picnic.app/nl/go/xyz"; a bare URL is returned unchanged.
    """
    if not text:
        return ''
    text = text.strip()
    if re.match(r'^https?://', text, re.IGNORECASE) and ' ' not in text:
        return text
    match = _URL_IN_TEXT.search(text)
    return match.group(0) if match else text


def is_public_address(ip_str):
    """True when the address is routable on the public internet."""
    try:
        ip = ipaddress.ip_address(ip_str.split('%', 1)[0])
    except ValueError:
        return False
    return not (ip.is_private or ip.is_loopback or ip.is_reserved or
                ip.is_link_local or ip.is_multicast or ip.is_unspecified)


def is_safe_url(url):
    """
    Validate that a URL is safe to fetch.

    Returns (is_safe, error_message) tuple.
    """
    if not url:
        return False, "Empty URL"

    try:
        parsed = urlparse(url)
    except ValueError:
        return False, "Invalid URL format"

    if parsed.scheme not in ('http', 'https'):
        return False, f"Invalid scheme: {parsed.scheme or 'none'}. Only http and https are allowed."

    hostname = parsed.hostname
    if not hostname:
        return False, "No hostname in URL"
    if hostname.lower() in ('localhost', 'localhost.localdomain'):
        return False, "Cannot access localhost"

    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        pass
    else:
        if not is_public_address(hostname):
            return False, f"Cannot access private/internal IP: {hostname}"
        return True, None

    try:
        resolved = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror:
        return False, f"Cannot resolve hostname: {hostname}"

    for _family, _type, _proto, _canon, sockaddr in resolved:
        if not is_public_address(sockaddr[0]):
            return False, f"Hostname resolves to private/internal IP: {sockaddr[0]}"

    return True, None


def safe_fetch(url, headers=None, timeout=10, max_size=10 * 1024 * 1024):
    """
    Fetch a URL with SSRF protection and a response size limit.

    Raises:
        SSRFError: If the URL fails validation or the body exceeds max_size
        requests.RequestException: For network and HTTP errors
    """
    is_safe, error = is_safe_url(url)
    if not is_safe:
        raise SSRFError(error)

    response = requests.get(url, headers=headers or DEFAULT_HEADERS, timeout=timeout, stream=True)
    response.raise_for_status()

    content_length = response.headers.get('content-length')
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        response.close()
        raise SSRFError(f"Response too large: {content_length} bytes (max {max_size})")

    chunks = []
    received = 0
    for chunk in response.iter_content(chunk_size=8192):
        received += len(chunk)
        if received > max_size:
            response.close()
            raise SSRFError(f"Response exceeded maximum size of {max_size} bytes")
        chunks.append(chunk)

    response._content = b''.join(chunks)
    return response
