"""
Drawing backends for the work order forms.

The form layout code only talks to a ``DrawingBackend``: a page measured in
millimetres with the origin at the top-left corner, a current font, and a
handful of primitives (text, line, rectangle, table). ``ReportLabBackend``
renders those primitives onto a ReportLab canvas; tests substitute a
recording backend so layouts can be checked without producing PDFs.
"""

import logging
import os
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, Table, TableStyle

logger = logging.getLogger(__name__)

# (family, weight) -> built-in PDF font
FONT_NAMES = {
    ("helvetica", "normal"): "Helvetica",
    ("helvetica", "bold"): "Helvetica-Bold",
    ("helvetica", "italic"): "Helvetica-Oblique",
    ("helvetica", "bolditalic"): "Helvetica-BoldOblique",
    ("times", "normal"): "Times-Roman",
    ("times", "bold"): "Times-Bold",
    ("courier", "normal"): "Courier",
    ("courier", "bold"): "Courier-Bold",
}

LINE_HEIGHT_FACTOR = 1.15
DEFAULT_FONT_SIZE = 16
DEFAULT_LINE_WIDTH = 0.200025

# Printable band used when a table runs onto another page
PAGE_TOP_MM = 14
PAGE_BOTTOM_MM = 283


class DrawingBackend:
    """
    Base drawing backend: font state, measurement and word wrapping.

    Subclasses implement the drawing primitives. Measurement uses the
    standard PDF font metrics so every backend fits text identically.
    """

    def __init__(self):
        self.font_family = "helvetica"
        self.font_weight = "normal"
        self.font_size = DEFAULT_FONT_SIZE
        self.line_width = DEFAULT_LINE_WIDTH

    # -- state --------------------------------------------------------------

    @property
    def font_name(self):
        name = FONT_NAMES.get((self.font_family, self.font_weight))
        if name is None:
            name = "Helvetica-Bold" if self.font_weight == "bold" else "Helvetica"
        return name

    def set_font(self, family, weight="normal"):
        self.font_family = family.lower()
        self.font_weight = weight.lower()

    def set_font_size(self, size):
        self.font_size = size

    def set_line_width(self, width):
        self.line_width = width

    # -- measurement --------------------------------------------------------

    def get_text_width(self, text):
        """Rendered width of ``text`` in millimetres at the current font."""
        return stringWidth(str(text), self.font_name, self.font_size) / mm

    def line_height(self):
        """Distance between baselines of wrapped lines, in millimetres."""
        return self.font_size * LINE_HEIGHT_FACTOR / mm

    def split_text_to_size(self, text, max_width):
        """
        Word-wrap ``text`` into lines no wider than ``max_width`` millimetres.

        Explicit newlines start a new line. A single word wider than the
        limit is broken between characters.
        """
        lines = []
        for paragraph in str(text).replace("\r\n", "\n").split("\n"):
            wrapped = simpleSplit(paragraph, self.font_name, self.font_size, max_width * mm)
            if not wrapped:
                lines.append("")
                continue
            for line in wrapped:
                lines.extend(self._break_long_line(line, max_width))
        return lines

    def _break_long_line(self, line, max_width):
        if self.get_text_width(line) <= max_width:
            return [line]
        pieces = []
        current = ""
        for char in line:
            if current and self.get_text_width(current + char) > max_width:
                pieces.append(current)
                current = char.lstrip()
            else:
                current += char
        if current:
            pieces.append(current)
        return pieces

    # -- primitives ---------------------------------------------------------

    def text(self, value, x, y, align=None):
        raise NotImplementedError

    def line(self, x1, y1, x2, y2):
        raise NotImplementedError

    def rect(self, x, y, width, height):
        raise NotImplementedError

    def table(self, head, body, start_y, left, col_widths, font_size=9,
              cell_padding=1.8, head_fill=(238, 238, 238), grid_line_width=0.1):
        """
        Draw a grid table and return the y position below its last row.

        Tables too long for the page continue on a new page, so the returned
        position is on whichever page the table ended.
        """
        raise NotImplementedError

    def add_page(self):
        raise NotImplementedError

    def output(self):
        """Finish the document and return it as bytes."""
        raise NotImplementedError

    def save(self, path):
        """
        Write the finished document to ``path``.

        The bytes are rendered completely before the file is opened and are
        written through a temporary file, so a failed render never leaves a
        partial PDF behind.
        """
        data = self.output()
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)
        tmp_path = f"{path}.part"
        try:
            with open(tmp_path, "wb") as fh:
                fh.write(data)
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        return path


def _rgb(value):
    red, green, blue = value
    return colors.Color(red / 255.0, green / 255.0, blue / 255.0)


class ReportLabBackend(DrawingBackend):
    """A4 document drawn on a ReportLab canvas."""

    def __init__(self, title=None, invariant=False):
        super().__init__()
        self.page_width, self.page_height = A4
        self._buffer = BytesIO()
        # invariant=True drops the creation date and random document id so
        # identical input produces identical bytes
        self.canvas = canvas.Canvas(self._buffer, pagesize=A4, invariant=int(bool(invariant)))
        if title:
            self.canvas.setTitle(title)
        self._data = None

    def _y(self, y):
        return self.page_height - y * mm

    def text(self, value, x, y, align=None):
        lines = value if isinstance(value, (list, tuple)) else [value]
        self.canvas.setFont(self.font_name, self.font_size)
        step = self.line_height()
        for index, line in enumerate(lines):
            px, py = x * mm, self._y(y + index * step)
            line = str(line)
            if align == "right":
                self.canvas.drawRightString(px, py, line)
            elif align == "center":
                self.canvas.drawCentredString(px, py, line)
            else:
                self.canvas.drawString(px, py, line)

    def line(self, x1, y1, x2, y2):
        self.canvas.setLineWidth(self.line_width * mm)
        self.canvas.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def rect(self, x, y, width, height):
        self.canvas.setLineWidth(self.line_width * mm)
        self.canvas.rect(x * mm, self._y(y + height), width * mm, height * mm, stroke=1, fill=0)

    def table(self, head, body, start_y, left, col_widths, font_size=9,
              cell_padding=1.8, head_fill=(238, 238, 238), grid_line_width=0.1):
        cell_style = ParagraphStyle(
            name="TableCell",
            fontName="Helvetica",
            fontSize=font_size,
            leading=font_size * LINE_HEIGHT_FACTOR,
            alignment=TA_LEFT,
        )
        head_style = ParagraphStyle(
            name="TableHeader", parent=cell_style, fontName="Helvetica-Bold"
        )

        # cells are flowable lists so a tall row can be split between lines
        rows = [[[Paragraph(escape(str(cell)), head_style)] for cell in head]]
        for row in body:
            rows.append([[Paragraph(escape(str(cell)), cell_style)] for cell in row])

        widths = [w * mm for w in col_widths]
        table = Table(rows, colWidths=widths, repeatRows=1, splitInRow=1)
        padding = cell_padding * mm
        table.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BACKGROUND", (0, 0), (-1, 0), _rgb(head_fill)),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                    ("GRID", (0, 0), (-1, -1), grid_line_width * mm, _rgb((200, 200, 200))),
                    ("LEFTPADDING", (0, 0), (-1, -1), padding),
                    ("RIGHTPADDING", (0, 0), (-1, -1), padding),
                    ("TOPPADDING", (0, 0), (-1, -1), padding),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), padding),
                ]
            )
        )

        y = start_y
        while True:
            available = (PAGE_BOTTOM_MM - y) * mm
            _, height = table.wrapOn(self.canvas, sum(widths), available)
            parts = table.split(sum(widths), available) if height > available else []
            if len(parts) < 2:
                if height > available and y > PAGE_TOP_MM:
                    # not even the header and one line fit in what is left
                    self.add_page()
                    y = PAGE_TOP_MM
                    continue
                table.drawOn(self.canvas, left * mm, self._y(y) - height)
                return y + height / mm

            first, table = parts[0], parts[1]
            _, first_height = first.wrapOn(self.canvas, sum(widths), available)
            first.drawOn(self.canvas, left * mm, self._y(y) - first_height)
            self.add_page()
            y = PAGE_TOP_MM

    def add_page(self):
        self.canvas.showPage()

    def output(self):
        if self._data is None:
            self.canvas.showPage()
            self.canvas.save()
            self._data = self._buffer.getvalue()
            logger.debug(f"Rendered PDF document ({len(self._data)} bytes)")
        return self._data
