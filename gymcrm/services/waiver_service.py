"""
Printable liability waiver, rendered with reportlab
"""
import io
import textwrap
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

HEADER_COLOR = (0x2C / 255, 0x3E / 255, 0x50 / 255)
FOOTER_COLOR = (0x66 / 255, 0x66 / 255, 0x66 / 255)
LEFT = 60
RIGHT_COLUMN = 320

WAIVER_PARAGRAPHS = [
    "I acknowledge that participation in fitness activities involves inherent risks of injury including "
    "but not limited to sprains, strains, fractures, and cardiovascular complications. I voluntarily "
    "assume all risks associated with my participation and use of facilities.",
    "I hereby release, waive, and discharge the fitness center, its owners, employees, and agents from "
    "any liability, claims, or damages arising from my participation in activities or use of facilities.",
    "I certify that I am in good physical condition and have no medical conditions that would prevent "
    "safe participation. I agree to follow all facility rules and safety guidelines.",
]

HEALTH_QUESTIONS = [
    "Do you have any heart conditions or cardiovascular disease?",
    "Do you have any injuries or physical limitations?",
    "Are you currently taking any medications?",
]


class _Form:
    """Top-down cursor over a reportlab canvas"""

    def __init__(self, c: canvas.Canvas):
        self.c = c
        self.width, self.height = A4
        self.y = self.height - 50

    def centered(self, text: str, size: int, color=HEADER_COLOR, font="Helvetica-Bold"):
        self.c.setFillColorRGB(*color)
        self.c.setFont(font, size)
        self.c.drawCentredString(self.width / 2, self.y, text)
        self.y -= size + 8

    def heading(self, text: str, size: int = 12):
        self.c.setFillColorRGB(*HEADER_COLOR)
        self.c.setFont("Helvetica-Bold", size)
        self.c.drawString(LEFT, self.y, text)
        self.y -= 22

    def field(self, label: str, x: float, y: float, line_length: float) -> float:
        self.c.setFillColorRGB(0, 0, 0)
        self.c.setFont("Helvetica", 10)
        self.c.drawString(x, y, label)
        start = x + self.c.stringWidth(label, "Helvetica", 10) + 5
        self.c.line(start, y - 2, start + line_length, y - 2)
        return y - 25

    def row(self, left: tuple, right: Optional[tuple] = None):
        next_y = self.field(left[0], LEFT, self.y, left[1])
        if right:
            next_y = min(next_y, self.field(right[0], RIGHT_COLUMN, self.y, right[1]))
        self.y = next_y

    def paragraph(self, text: str, size: int = 9, width: int = 105):
        self.c.setFillColorRGB(0, 0, 0)
        self.c.setFont("Helvetica", size)
        for line in textwrap.wrap(text, width=width):
            self.c.drawString(LEFT, self.y, line)
            self.y -= size + 3
        self.y -= 6

    def yes_no(self, question: str):
        self.c.setFillColorRGB(0, 0, 0)
        self.c.setFont("Helvetica", 9)
        self.c.drawString(LEFT, self.y, question)
        self.c.drawString(self.width - 150, self.y, "[ ] Yes    [ ] No")
        self.y -= 18


def build_waiver_pdf(gym_name: Optional[str] = None) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle("Liability Waiver and Release Form")
    form = _Form(c)

    form.centered((gym_name or "Fitness Center Gym").upper(), 18)
    form.centered("LIABILITY WAIVER AND RELEASE FORM", 14)
    form.y -= 12

    form.heading("PARTICIPANT INFORMATION")
    form.row(("Full Name:", 180), ("Date of Birth:", 140))
    form.row(("Address:", 400))
    form.row(("Phone:", 170), ("Email:", 170))
    form.row(("Emergency Contact:", 140), ("Emergency Phone:", 120))
    form.y -= 10

    form.centered("WAIVER AND RELEASE OF LIABILITY", 12)
    for text in WAIVER_PARAGRAPHS:
        form.paragraph(text)

    form.centered("HEALTH SCREENING", 11)
    for question in HEALTH_QUESTIONS:
        form.yes_no(question)
    form.y -= 8
    form.yes_no("I consent to photos/videos for promotional purposes:")
    form.y -= 14

    form.centered("ACKNOWLEDGMENT AND SIGNATURE", 12)
    form.centered(
        "I have read and understood this waiver and sign it voluntarily without inducement.",
        9, color=(0, 0, 0), font="Helvetica",
    )
    form.y -= 6
    form.row(("Participant Signature:", 180), ("Date:", 120))
    form.y -= 8
    form.heading("FOR PARTICIPANTS UNDER 18 YEARS:", 10)
    form.row(("Parent/Guardian Signature:", 160), ("Date:", 120))

    if form.y < 80:
        c.showPage()
    c.setFillColorRGB(*FOOTER_COLOR)
    c.setFont("Helvetica", 8)
    c.drawCentredString(
        form.width / 2, 50,
        "This waiver is valid for the duration of membership and must be renewed annually.",
    )

    c.showPage()
    c.save()
    buf.seek(0)
    return buf.read()
