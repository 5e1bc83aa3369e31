from __future__ import annotations

import io
from typing import BinaryIO, Optional

import qrcode
from PIL import Image, UnidentifiedImageError

from ..core.exceptions import CollaboratorUnavailable

PERMISSION_DENIED = "permission_denied"
NO_CAMERA = "no_camera"
NOT_FOUND = "not_found"
UNKNOWN = "unknown"

_MESSAGES = {
    PERMISSION_DENIED: "Camera permission denied. Please enable camera access in your browser settings to scan the QR code.",
    NO_CAMERA: "No camera found. Please ensure a camera is connected and enabled.",
    NOT_FOUND: "No QR code detected in the image.",
    UNKNOWN: "Failed to start camera. Please check permissions and refresh the page.",
}


class QrDecodeError(CollaboratorUnavailable):
    def __init__(self, kind: str):
        super().__init__(_MESSAGES.get(kind, _MESSAGES[UNKNOWN]))
        self.kind = kind if kind in _MESSAGES else UNKNOWN


def camera_error(error_name: Optional[str]) -> QrDecodeError:
    """Map a browser media error name to a decode failure."""
    name = error_name or ""
    if "NotAllowedError" in name:
        return QrDecodeError(PERMISSION_DENIED)
    if "NotFoundError" in name:
        return QrDecodeError(NO_CAMERA)
    return QrDecodeError(UNKNOWN)


def decode_qr_image(stream: BinaryIO) -> str:
    """Decode the first QR symbol in an uploaded image."""
    try:
        img = Image.open(stream).convert("RGB")
    except UnidentifiedImageError as e:
        raise QrDecodeError(NOT_FOUND) from e

    # pyzbar loads the zbar shared library on import
    from pyzbar.pyzbar import decode as pyzbar_decode

    decoded = pyzbar_decode(img)
    if not decoded:
        raise QrDecodeError(NOT_FOUND)
    return decoded[0].data.decode("utf-8").strip()


def render_qr_png(data: str) -> io.BytesIO:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf
