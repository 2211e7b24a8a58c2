"""Everything between a web request and the renderer.

A request handler needs to turn client input into a code and a size, put an ETag on
the response, and send PNG bytes. The HTTP part is left to whatever framework serves
the images. These are the pieces it would call.

:created: 2026-10-19
"""

import hashlib
import io
import ipaddress
import warnings

from PIL.Image import Image as ImageType

from identicon_image.decode import CODE_MASK
from identicon_image.globs import (
    DEFAULT_IDENTICON_SIZE,
    MAX_IDENTICON_SIZE,
    MIN_IDENTICON_SIZE,
    RENDER_VERSION,
)
from identicon_image.identicon_cache import IdenticonCache
from identicon_image.quilt import QuiltRenderer


class IdenticonCodeSource:
    """Derive identicon codes from salted hashes.

    :param salt: a secret string mixed into every hash. It should be fairly long so
        codes can't be traced back to addresses.
    :raises ValueError: if salt is empty
    """

    def __init__(self, salt: str) -> None:
        if not salt:
            msg = "An identicon salt is required."
            raise ValueError(msg)
        self._salt = salt

    def _hash_to_code(self, text: str) -> int:
        """Return the first four bytes of the salted SHA-1 as an unsigned int."""
        digest = hashlib.sha1(f"{text}+{self._salt}".encode()).digest()
        return int.from_bytes(digest[:4], "big")

    def from_address(self, address: str) -> int:
        """Return the code for an IPv4 or IPv6 address.

        :param address: e.g., "192.168.0.1"
        :return: a 32-bit code
        :raises ValueError: if address is not an IP address
        """
        return self._hash_to_code(str(int(ipaddress.ip_address(address))))

    def from_seed(self, seed: str) -> int:
        """Return the code for any identifying string (a user name, an email)."""
        return self._hash_to_code(seed)

    def from_request(self, code_param: str | None, remote_addr: str) -> int:
        """Return the requested code, or the client's code if none was requested.

        :param code_param: the value of a "code" query parameter, if any. Decimal or
            0x-prefixed hex.
        :param remote_addr: the client's address
        :return: a 32-bit code. 0 if code_param can't be read.
        """
        if not code_param:
            return self.from_address(remote_addr)
        base = 16 if code_param.lower().startswith("0x") else 10
        try:
            return int(code_param, base) & CODE_MASK
        except ValueError:
            msg = f"Unreadable identicon code {code_param!r}. Using 0."
            warnings.warn(msg, stacklevel=2)
            return 0


def get_identicon_size(size_param: str | None) -> int:
    """Read a size query parameter.

    :param size_param: the value of a "size" query parameter, if any
    :return: the size clamped to [MIN_IDENTICON_SIZE, MAX_IDENTICON_SIZE], or
        DEFAULT_IDENTICON_SIZE if missing or unreadable
    """
    if not size_param:
        return DEFAULT_IDENTICON_SIZE
    try:
        size = int(size_param)
    except ValueError:
        msg = f"Unreadable identicon size {size_param!r}. Using default."
        warnings.warn(msg, stacklevel=2)
        return DEFAULT_IDENTICON_SIZE
    return max(MIN_IDENTICON_SIZE, min(MAX_IDENTICON_SIZE, size))


def get_identicon_etag(code: int, size: int, version: int = RENDER_VERSION) -> str:
    """Return a weak ETag for one code at one size and render version."""
    return f'W/"{code & CODE_MASK:x}@{size}v{version}"'


def encode_png(image: ImageType) -> bytes:
    """Encode an image as PNG bytes."""
    in_mem_file = io.BytesIO()
    image.save(in_mem_file, format="PNG")
    return in_mem_file.getvalue()


def get_identicon_bytes(
    renderer: QuiltRenderer,
    code: int,
    size: int,
    cache: IdenticonCache | None = None,
    version: int = RENDER_VERSION,
) -> tuple[str, bytes]:
    """Return an ETag and PNG bytes for one identicon.

    :param renderer: renders on a cache miss
    :param code: identicon code
    :param size: image size in pixels
    :param cache: optional cache keyed by ETag. Concurrent misses on one ETag
        render once.
    :param version: folded into the ETag. Bump when rendering changes.
    :return: (etag, png bytes)

    Answering a matching If-None-Match with a 304 is up to the caller, who can
    compare against the returned ETag before sending bytes.
    """
    etag = get_identicon_etag(code, size, version)

    def render_png() -> bytes:
        return encode_png(renderer.render(code, size))

    if cache is None:
        return etag, render_png()
    return etag, cache.get_or_add(etag, render_png)
