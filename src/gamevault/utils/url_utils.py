# ===== IMPORTS & DEPENDENCIES =====
import re
from typing import Any

# ===== CONFIGURATION & CONSTANTS =====
# A `/t_<size>/` path segment; the lookbehind keeps it out of the `//host` authority.
SIZE_TOKEN_PATTERN = re.compile(r'(?<=[^/])/t_[^/]+/')


# ===== UTILITY FUNCTIONS =====

def format_igdb_image(url: Any, size: str = "t_cover_big") -> str:
    """
    Turns an IGDB image path into a fully-qualified HTTPS URL at the given size.

    IGDB returns protocol-relative paths such as
    `//images.igdb.com/igdb/image/upload/t_thumb/abc.jpg`; the first `t_<size>/`
    segment selects the rendition. Anything that is not a URL comes back as an
    empty string, and formatting an already formatted URL changes nothing.
    """
    if not isinstance(url, str):
        return ""
    url = url.strip()
    if url.startswith('//'):
        url = f"https:{url}"
    elif url.startswith('http://'):
        url = f"https://{url[len('http://'):]}"
    elif not url.startswith('https://'):
        return ""

    if len(url) <= len('https://'):
        return ""
    return SIZE_TOKEN_PATTERN.sub(f"/{size}/", url, count=1)
