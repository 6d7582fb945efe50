import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from time import monotonic

import httpx

from updatebot.errors import AvatarError
from updatebot.services.sniff import detect_content_type

logger = logging.getLogger(__name__)

ALLOWED_AVATAR_MIME_TYPES = ["image/png", "image/jpeg"]

DEFAULT_FETCH_TIMEOUT = 10.0


@dataclass(frozen=True)
class EncodedAvatar:
    """Avatar image ready to be sent to Discord."""

    content: str
    mime_type: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.content}"


def is_absolute_url(source: str) -> bool:
    """Return True if ``source`` parses as a URL with both a scheme and a host."""
    try:
        url = httpx.URL(source)
    except (httpx.InvalidURL, TypeError):
        return False
    return bool(url.scheme) and bool(url.host)


def fetch_image(
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> bytes:
    """Download an image over HTTP.

    ``timeout`` bounds the whole download, not only each network step.

    Raises:
        AvatarError: On request, network, deadline or non-200 failures.
    """
    logger.debug("Fetching avatar from %s", url)
    deadline = monotonic() + timeout
    with httpx.Client(timeout=timeout, transport=transport) as client:
        try:
            request = client.build_request("GET", url)
        except httpx.InvalidURL as e:
            raise AvatarError(f"failed to create request: {e}") from e

        try:
            response = client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise AvatarError(f"failed to get image from server: {e}") from e

        try:
            if response.status_code != 200:
                logger.warning("Image server returned %s for %s", response.status_code, url)
                raise AvatarError(
                    "image server responded with non-200 error: "
                    f"{response.status_code} {response.reason_phrase}"
                )

            chunks = []
            try:
                for chunk in response.iter_bytes():
                    if monotonic() > deadline:
                        logger.warning("Avatar download from %s exceeded %ss", url, timeout)
                        raise AvatarError(
                            f"failed to get image from server: download exceeded {timeout}s"
                        )
                    chunks.append(chunk)
            except httpx.HTTPError as e:
                raise AvatarError(f"failed to get image from server: {e}") from e
        finally:
            response.close()

        return b"".join(chunks)


def read_image_file(path: str) -> bytes:
    """Read a local image file.

    Raises:
        AvatarError: If the file does not exist or cannot be read.
    """
    file_path = Path(path)
    try:
        file_path.stat()
        data = file_path.read_bytes()
    except OSError as e:
        raise AvatarError(str(e)) from e

    logger.debug("Read %d bytes from %s", len(data), file_path)
    return data


def encode_avatar(data: bytes) -> EncodedAvatar:
    """Validate image bytes and base64-encode them.

    Raises:
        AvatarError: If the data is empty or not an allowed image type.
    """
    if not data:
        raise AvatarError("image file was empty")

    content_type = detect_content_type(data)
    logger.debug("Detected avatar content type: %s", content_type)

    if content_type not in ALLOWED_AVATAR_MIME_TYPES:
        raise AvatarError(f"mime type {content_type} not allowed")

    return EncodedAvatar(
        content=base64.b64encode(data).decode("ascii"),
        mime_type=content_type,
    )


def resolve_avatar(
    source: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> EncodedAvatar:
    """Load an avatar from a URL or a file path and encode it.

    Args:
        source: An absolute http(s) URL, or a path on the local filesystem.
        timeout: Download timeout in seconds, used for URLs only.
        transport: Optional httpx transport, used for URLs only.

    Returns:
        The base64 encoded image and its sniffed MIME type.

    Raises:
        AvatarError: If the image cannot be loaded or is not PNG/JPEG.
    """
    if is_absolute_url(source):
        data = fetch_image(source, timeout=timeout, transport=transport)
    else:
        data = read_image_file(source)

    return encode_avatar(data)
