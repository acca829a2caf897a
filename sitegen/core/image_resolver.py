"""
Image resolution - replaces placeholder image directives with real photography

Directives are deduplicated across every page of one bundle through a
request-scoped ImageCache: identical (width, height, keywords) triples issue
exactly one external lookup.
"""
import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple
from urllib.parse import parse_qs, unquote_plus, urlsplit
from bs4 import Tag

from sitegen.core.image_search import ImageSearchClient, parameterize_image_url
from sitegen.core.page_document import PageDocument, PageState
from sitegen.models.errors import ImageLookupError

logger = logging.getLogger(__name__)

PLACEHOLDER_HOSTS = (
    "source.unsplash.com",
    "placehold.co",
    "placehold.it",
    "via.placeholder.com",
    "placeholder.com",
    "dummyimage.com",
    "picsum.photos",
    "loremflickr.com",
)
DEFAULT_SIZE = (1200, 800)
QUERY_KEYS = ("query", "q", "keywords", "search", "term", "text")

_SIZE_PATTERN = re.compile(r"(\d{2,5})\s*[xX×]\s*(\d{2,5})")
# Shorthand form emitted by some prompts: 1200x600:"team,people"
_BARE_DIRECTIVE = re.compile(r'^(\d{2,5})\s*[xX×]\s*(\d{2,5})\s*[:?]\s*["\']?([^"\']*)["\']?$')
_PICSUM_SIZE = re.compile(r"^/(?:id/\d+/)?(\d{2,5})(?:/(\d{2,5}))?")
_KEYWORD_SPLIT = re.compile(r"[,\s+/]+")

CacheKey = Tuple[int, int, str]


@dataclass(frozen=True)
class ImageDirective:
    """Placeholder image reference awaiting resolution"""
    width: int
    height: int
    keywords: str

    @property
    def cache_key(self) -> CacheKey:
        return (self.width, self.height, self.keywords)

    @property
    def orientation(self) -> str:
        if self.width > self.height * 1.2:
            return "landscape"
        if self.height > self.width * 1.2:
            return "portrait"
        return "squarish"

    @property
    def query(self) -> str:
        return self.keywords.replace(",", " ")


def normalize_keywords(raw: str) -> str:
    """Lower-case, split on commas/whitespace/plus, drop punctuation, de-duplicate, comma-join"""
    seen = []
    for token in _KEYWORD_SPLIT.split(unquote_plus(raw or "").lower()):
        token = re.sub(r"[^\w-]", "", token).strip("-_")
        if token and not token.isdigit() and token not in seen:
            seen.append(token)
    return ",".join(seen)


def _is_placeholder_host(host: str) -> bool:
    host = host.lower()
    return any(host == known or host.endswith("." + known) for known in PLACEHOLDER_HOSTS)


def _size_from_src(parts) -> Optional[Tuple[int, int]]:
    match = _SIZE_PATTERN.search(parts.path)
    if match:
        return int(match.group(1)), int(match.group(2))
    if parts.netloc.lower().endswith("picsum.photos"):
        picsum = _PICSUM_SIZE.match(parts.path)
        if picsum:
            width = int(picsum.group(1))
            height = int(picsum.group(2) or width)
            return width, height
    return None


def _keywords_from_query(query: str) -> str:
    if not query:
        return ""
    if "=" in query:
        params = parse_qs(query)
        for key in QUERY_KEYS:
            if params.get(key):
                return normalize_keywords(params[key][0])
        return ""
    return normalize_keywords(query)


def parse_directive(img: Tag, fallback_keyword: str) -> Optional[ImageDirective]:
    """
    Parse a placeholder directive out of an <img> element.

    Keywords come from the src query string, else the alt text, else the fallback term.

    Returns:
        ImageDirective, or None when the element is not a placeholder
    """
    src = (img.get("src") or "").strip()
    if not src:
        return None
    bare = _BARE_DIRECTIVE.match(src)
    if bare:
        keywords = (
            normalize_keywords(bare.group(3))
            or normalize_keywords(img.get("alt") or "")
            or normalize_keywords(fallback_keyword)
        )
        return ImageDirective(width=int(bare.group(1)), height=int(bare.group(2)), keywords=keywords)

    parts = urlsplit(src if "//" in src else "//" + src)
    if not _is_placeholder_host(parts.netloc):
        return None

    width, height = _size_from_src(parts) or DEFAULT_SIZE
    keywords = (
        _keywords_from_query(parts.query)
        or normalize_keywords(img.get("alt") or "")
        or normalize_keywords(fallback_keyword)
    )
    return ImageDirective(width=width, height=height, keywords=keywords)


class ImageCache:
    """
    Request-scoped dedupe cache: (width, height, keywords) -> resolved URL or None.

    The first lookup for a key creates the task; concurrent and later lookups
    for the same key await that task instead of issuing another request.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, "asyncio.Task[Optional[str]]"] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def resolve(
        self,
        directive: ImageDirective,
        lookup: Callable[[ImageDirective], Awaitable[Optional[str]]],
    ) -> Optional[str]:
        task = self._entries.get(directive.cache_key)
        if task is None:
            task = asyncio.ensure_future(lookup(directive))
            self._entries[directive.cache_key] = task
        return await task


def _make_lookup(search_client: ImageSearchClient) -> Callable[[ImageDirective], Awaitable[Optional[str]]]:
    async def lookup(directive: ImageDirective) -> Optional[str]:
        try:
            base_url = await search_client.search(directive.query, directive.orientation)
        except ImageLookupError as e:
            logger.warning(f"[Images] ✗ Lookup failed, keeping placeholder | keywords: {directive.keywords} | error: {e}")
            return None
        return parameterize_image_url(base_url, directive.width, directive.height)
    return lookup


def _apply(img: Tag, directive: ImageDirective, url: Optional[str]) -> None:
    if not url:
        return
    img["src"] = url
    img.attrs.pop("srcset", None)
    if not (img.get("alt") or "").strip():
        img["alt"] = directive.query
    img["loading"] = "lazy"


async def resolve_images(
    pages: Sequence[PageDocument],
    search_client: ImageSearchClient,
    cache: ImageCache,
    fallback_keyword: str = "business",
) -> List[PageDocument]:
    """
    Resolve every placeholder directive across all pages concurrently.

    A missing search credential skips the stage and returns the pages untouched.

    Args:
        pages: Normalized pages of one bundle
        search_client: Image search collaborator
        cache: Cache scoped to this bundle build
        fallback_keyword: Keyword used when neither query string nor alt text supplies one

    Returns:
        Pages in IMAGES_RESOLVED state
    """
    if not search_client.configured:
        logger.warning("[Images] No image search credential - skipping image resolution")
        return list(pages)

    soups = [page.copy_soup() for page in pages]
    targets: List[Tuple[Tag, ImageDirective]] = []
    for soup in soups:
        for img in soup.find_all("img"):
            directive = parse_directive(img, fallback_keyword)
            if directive is not None:
                targets.append((img, directive))

    lookup = _make_lookup(search_client)
    urls = await asyncio.gather(*(cache.resolve(directive, lookup) for _, directive in targets))
    for (img, directive), url in zip(targets, urls):
        _apply(img, directive, url)

    resolved = sum(1 for url in urls if url)
    logger.info(
        f"[Images] ✓ Resolved placeholders | "
        f"directives: {len(targets)} | "
        f"unique_lookups: {len(cache)} | "
        f"resolved: {resolved} | "
        f"left_as_placeholder: {len(targets) - resolved}"
    )
    return [page.advance(soup, PageState.IMAGES_RESOLVED) for page, soup in zip(pages, soups)]
