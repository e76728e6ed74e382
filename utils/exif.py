import logging
from datetime import UTC, datetime

import piexif

logger = logging.getLogger(__name__)

EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"


def resolve_capture_date(image_bytes: bytes) -> datetime:
    """
    Determines the capture timestamp of an image from its bytes.
    Priority: EXIF DateTimeOriginal > Now

    The EXIF wall-clock value carries no zone and is read as UTC.
    Never raises; stripped, non-JPEG or corrupt images fall back to now.
    """
    try:
        # piexif treats anything that is not JPEG/TIFF/WebP/Exif data as a
        # file path, so reject other payloads up front.
        if not image_bytes or image_bytes[:2] not in (b"\xff\xd8", b"II", b"MM"):
            raise ValueError("no EXIF container")

        exif_dict = piexif.load(image_bytes)
        raw = exif_dict.get("Exif", {}).get(piexif.ExifIFD.DateTimeOriginal)
        if raw:
            if isinstance(raw, bytes):
                raw = raw.decode("ascii", errors="replace")
            dt_str = raw.strip("\x00 ")
            return datetime.strptime(dt_str, EXIF_DATETIME_FORMAT).replace(tzinfo=UTC)
    except Exception as e:
        logger.debug(f"No usable EXIF capture date, using now: {e}")

    return datetime.now(UTC)
