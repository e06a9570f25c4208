"""
QR codes for gym self check-in and member check-in cards
"""
import io
import json
from dataclasses import dataclass

import qrcode

from gymcrm.core import settings
from gymcrm.core.conversions import coerce_int


class InvalidQRPayload(ValueError):
    pass


@dataclass
class MemberQR:
    member_id: int
    gym_id: int
    qr_code: str


def gym_checkin_url(gym_code: str) -> str:
    return f"{settings.ATTENDANCE_BASE_URL}/mark_attendance/{gym_code}"


def member_payload(member_id: int, gym_id: int) -> str:
    return json.dumps(
        {"memberId": member_id, "gymId": gym_id, "qrCode": f"MEMBER-{gym_id}-{member_id}"},
        separators=(",", ":"),
    )


def parse_member_payload(raw: str) -> MemberQR:
    """Decode scanned member QR text; raises ``InvalidQRPayload`` when malformed."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise InvalidQRPayload("Invalid QR code") from e
    if not isinstance(data, dict):
        raise InvalidQRPayload("Invalid QR code")

    member_id = coerce_int(data.get("memberId"))
    gym_id = coerce_int(data.get("gymId"))
    if member_id is None or gym_id is None:
        raise InvalidQRPayload("Invalid QR code")
    return MemberQR(member_id=member_id, gym_id=gym_id, qr_code=str(data.get("qrCode") or ""))


def render_png(data: str, box_size: int = 8, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
