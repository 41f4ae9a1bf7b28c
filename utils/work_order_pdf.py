"""
Customer drop-off and pick-up forms for a work order.

Both forms are drawn at fixed coordinates (see ``utils.form_layout``) so the
printout lines up with the shop's legacy paper forms. Sections are stacked
with an explicit vertical cursor: every ``draw_*`` function takes the y
position it starts at and returns the next free one.
"""

import logging
import os
from collections import namedtuple
from decimal import Decimal
from io import BytesIO

from utils import form_layout as layout
from utils.formatters import (
    accessories_summary,
    address,
    date_only,
    generated_timestamp,
    join_or_dash,
    money,
    text_or_dash,
)
from utils.pdf_backend import ReportLabBackend
from utils.text_fit import fit_text

logger = logging.getLogger(__name__)

DEFAULT_COMPANY_INFO = {
    "name": "Humphreys Audio and Vintage Audio Repair",
    "address": "16610 Bayview Ave., Unit #7, Newmarket ON   Ph: (416) 923-3777",
    "contact": "humphreys.repair@rogers.com/www.humphreysrepaircentre.com",
    "warranty": "Warranty: 1 month on replaced parts and labour.",
}

FormTotals = namedtuple("FormTotals", ["total", "payable"])


def company_info_from_config(config):
    """Build the form letterhead from the SHOP_* settings of a Flask config."""
    return {
        "name": config.get("SHOP_NAME") or DEFAULT_COMPANY_INFO["name"],
        "address": config.get("SHOP_ADDRESS_LINE") or DEFAULT_COMPANY_INFO["address"],
        "contact": config.get("SHOP_CONTACT_LINE") or DEFAULT_COMPANY_INFO["contact"],
        "warranty": config.get("WARRANTY_TEXT") or DEFAULT_COMPANY_INFO["warranty"],
    }


def drop_off_filename(item):
    return f"drop-off-form-{item.reference_id}.pdf"


def pick_up_filename(item):
    return f"pick-up-form-{item.reference_id}.pdf"


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


def line_field(backend, x, y, width, label, value):
    """Draw one form field: value just above a rule, label just below it."""
    spec = layout.LINE_FIELD
    # Tables leave their own font behind, so always reset it here
    backend.set_font(layout.FONT_FAMILY, "normal")
    backend.set_font_size(spec["font_size"])
    fitted = fit_text(value, width - spec["fit_padding"], backend.get_text_width)
    backend.text(fitted, x + spec["value_dx"], y + spec["value_dy"])
    backend.line(x, y + spec["rule_dy"], x + width, y + spec["rule_dy"])
    backend.text(label, x, y + spec["label_dy"])


def wrap_to_box(backend, value, max_width, max_lines):
    """
    Word-wrap text for a bordered box, keeping at most ``max_lines`` lines.

    When the text is too long for the box, the last visible line ends with
    "..." instead of spilling past the border.
    """
    lines = backend.split_text_to_size(text_or_dash(value), max_width)
    if max_lines < 1:
        return []
    if len(lines) <= max_lines:
        return lines
    overflow = " ".join([lines[max_lines - 1], lines[max_lines]])
    last = fit_text(overflow + " ...", max_width, backend.get_text_width)
    return lines[: max_lines - 1] + [last]


def _box_line_capacity(backend, box_height, text_dy):
    usable = box_height - text_dy - layout.BOX_BOTTOM_PADDING
    if usable < 0:
        return 0
    return int(usable // backend.line_height()) + 1


def draw_header(backend, title, company_info=None):
    spec = layout.HEADER
    info = company_info or DEFAULT_COMPANY_INFO

    backend.set_font(layout.FONT_FAMILY, "bold")
    backend.set_font_size(spec["shop_name_size"])
    backend.text(info["name"], *spec["shop_name"])

    backend.set_font(layout.FONT_FAMILY, "normal")
    backend.set_font_size(spec["info_size"])
    backend.text(info["address"], *spec["address"])
    backend.text(info["contact"], *spec["contact"])

    backend.set_font(layout.FONT_FAMILY, "bold")
    backend.set_font_size(spec["title_size"])
    backend.text(title, *spec["title"])
    backend.set_line_width(spec["rule_width"])
    backend.line(layout.PAGE["left"], spec["rule_y"], layout.PAGE["right"], spec["rule_y"])


def _common_field_values(item):
    customer = item.customer
    return {
        "first_name": text_or_dash(customer.first_name),
        "last_name": text_or_dash(customer.last_name),
        "address": address(
            customer.address_line_1,
            customer.address_line_2,
            customer.city,
            customer.province,
        ),
        "address_line_2": text_or_dash(customer.address_line_2),
        "city": text_or_dash(customer.city),
        "email": text_or_dash(customer.email),
        "home_phone": text_or_dash(customer.home_phone),
        "work_phone": text_or_dash(customer.work_phone),
        "extension": text_or_dash(customer.extension_text),
        "deposit": money(item.deposit),
        "payment_method": join_or_dash(item.payment_method_names),
        "item_name": text_or_dash(item.item_name),
        "brand": join_or_dash(item.brand_names),
        "model_number": text_or_dash(item.model_number),
        "serial_number": text_or_dash(item.serial_number),
    }


def _draw_fields(backend, y, values, names):
    for name in names:
        label, x, dy, width = layout.COMMON_FIELDS[name]
        line_field(backend, x, y + dy, width, label, values[name])


def draw_common(backend, item, y_start):
    """
    Draw the customer and equipment block shared by both forms.

    The block always occupies the same height; long values are truncated by
    the text fitter rather than pushing later sections down.

    Returns:
        float: ``y_start`` plus the fixed block height.
    """
    spec = layout.COMMON
    y = y_start
    values = _common_field_values(item)

    backend.set_font_size(spec["heading_size"])
    backend.set_font(layout.FONT_FAMILY, "bold")
    x, dy = spec["customer_id"]
    backend.text(f"Customer ID: {item.reference_id}", x, y + dy)
    x, dy = spec["date_received"]
    backend.text(f"Date Received: {date_only(item.created_at)}", x, y + dy)

    _draw_fields(
        backend,
        y,
        values,
        [
            "first_name", "last_name", "address",
            "address_line_2", "city", "email",
            "home_phone", "work_phone", "extension",
        ],
    )

    backend.set_font(layout.FONT_FAMILY, "normal")
    backend.set_font_size(spec["checkbox_font_size"])
    box_width, box_height = spec["checkbox_size"]
    for label, box_x, box_dy, label_x in layout.CHECKBOXES:
        backend.rect(box_x, y + box_dy, box_width, box_height)
        backend.text(label, label_x, y + box_dy + spec["checkbox_label_dy"])

    _draw_fields(backend, y, values, ["deposit", "payment_method"])

    backend.set_line_width(spec["separator_width"])
    backend.line(
        layout.PAGE["left"],
        y + spec["separator_dy"],
        layout.PAGE["right"],
        y + spec["separator_dy"],
    )

    _draw_fields(backend, y, values, ["item_name", "brand"])
    backend.set_font(layout.FONT_FAMILY, "bold")
    backend.set_font_size(spec["heading_size"])
    x, dy = spec["item_customer_id_label"]
    backend.text("Customer ID", x, y + dy)
    x, dy = spec["item_customer_id_value"]
    backend.text(str(item.reference_id), x, y + dy)

    _draw_fields(backend, y, values, ["model_number", "serial_number"])

    backend.set_font(layout.FONT_FAMILY, "normal")
    backend.set_font_size(spec["accessories_size"])
    x, dy = spec["accessories"]
    backend.text(
        fit_text(accessories_summary(item), spec["accessories_width"], backend.get_text_width),
        x,
        y + dy,
    )

    return y + spec["height"]


def line_item_rows(item):
    """Table body for the pick-up form; one placeholder row when empty."""
    if not item.line_items:
        return [list(layout.LINE_ITEMS_TABLE["empty_row"])]
    return [
        [
            text_or_dash(line.item_name),
            money(line.unit_price),
            text_or_dash(line.quantity_text),
            text_or_dash(line.line_total_text),
        ]
        for line in item.line_items
    ]


def draw_line_items_table(backend, item, start_y):
    """Draw the line item table and return the y position below it."""
    spec = layout.LINE_ITEMS_TABLE
    width = layout.PAGE["width"] - spec["margin_left"] - spec["margin_right"]
    final_y = backend.table(
        spec["head"],
        line_item_rows(item),
        start_y=start_y,
        left=spec["margin_left"],
        col_widths=[width * fraction for fraction in spec["col_fractions"]],
        font_size=spec["font_size"],
        cell_padding=spec["cell_padding"],
        head_fill=spec["head_fill"],
        grid_line_width=spec["grid_line_width"],
    )
    if final_y is None:
        final_y = start_y + layout.PICK_UP["table_fallback_height"]
    return final_y


def _amount(value):
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def compute_totals(item):
    """Total charges (parts + delivery + labour) and the balance after deposit."""
    total = _amount(item.parts_total) + _amount(item.delivery_total) + _amount(item.labour_total)
    payable = total - _amount(item.deposit)
    return FormTotals(total=total, payable=payable)


def draw_totals(backend, item, totals_y):
    spec = layout.TOTALS
    x = spec["x"]
    totals = compute_totals(item)

    backend.set_font(layout.FONT_FAMILY, "normal")
    backend.set_font_size(spec["font_size"])
    backend.text(f"Parts Total: {money(item.parts_total)}", x, totals_y + spec["parts_dy"], align="right")
    backend.text(
        f"Pick Up / Delivery: {money(item.delivery_total)}",
        x,
        totals_y + spec["delivery_dy"],
        align="right",
    )
    backend.text(f"Labour Total: {money(item.labour_total)}", x, totals_y + spec["labour_dy"], align="right")
    backend.text(f"Deposit: {money(item.deposit)}", x, totals_y + spec["deposit_dy"], align="right")

    backend.set_font(layout.FONT_FAMILY, "bold")
    backend.text(f"Total: {money(totals.total)}", x, totals_y + spec["total_dy"], align="right")
    backend.text(f"Total Payable: {money(totals.payable)}", x, totals_y + spec["payable_dy"], align="right")
    return totals


def _draw_footer(backend, value):
    backend.set_font(layout.FONT_FAMILY, "normal")
    backend.set_font_size(layout.PAGE["footer_size"])
    backend.text(value, layout.PAGE["left"], layout.PAGE["footer_y"])


# ---------------------------------------------------------------------------
# Form drivers
# ---------------------------------------------------------------------------


class WorkOrderFormPDF:
    """
    Base class for the two customer forms.

    Subclasses draw their variant-specific body; this class draws the header
    and shared customer block and emits the finished document.
    """

    title = None
    kind = None

    def __init__(self, work_order, company_info=None, backend=None, invariant=False):
        self.work_order = work_order
        self.company_info = company_info or DEFAULT_COMPANY_INFO
        self.backend = backend or ReportLabBackend(
            title=f"{self.title} - {work_order.reference_id}", invariant=invariant
        )

    @property
    def filename(self):
        raise NotImplementedError

    def _build_body(self, y):
        raise NotImplementedError

    def build(self):
        """Draw the whole form onto the backend."""
        draw_header(self.backend, self.title, self.company_info)
        y = draw_common(self.backend, self.work_order, layout.COMMON["start_y"])
        self._build_body(y)
        return self.backend

    def generate_pdf(self, filename=None):
        """
        Render the form.

        Returns the path written when ``filename`` is given, otherwise a
        rewound BytesIO holding the PDF.
        """
        logger.info(f"Rendering {self.kind} form for work order {self.work_order.reference_id}")
        self.build()
        if filename:
            try:
                self.backend.save(filename)
            except OSError as e:
                logger.error(
                    f"Could not write {self.kind} form for work order "
                    f"{self.work_order.reference_id} to {filename}: {e}"
                )
                raise
            return filename
        buffer = BytesIO(self.backend.output())
        buffer.seek(0)
        return buffer


class DropOffFormPDF(WorkOrderFormPDF):
    title = layout.DROP_OFF["title"]
    kind = "drop-off"

    def __init__(self, work_order, company_info=None, backend=None, invariant=False, now=None):
        super().__init__(work_order, company_info, backend, invariant)
        self.now = now

    @property
    def filename(self):
        return drop_off_filename(self.work_order)

    def _draw_box(self, y, heading, value):
        spec = layout.DROP_OFF
        backend = self.backend
        backend.set_line_width(spec["box_line_width"])
        backend.rect(spec["box_x"], y, spec["box_width"], spec["box_height"])
        backend.set_font(layout.FONT_FAMILY, "bold")
        backend.set_font_size(spec["heading_size"])
        backend.text(heading, spec["box_x"] + spec["heading_dx"], y + spec["heading_dy"])

        backend.set_font(layout.FONT_FAMILY, "normal")
        backend.set_font_size(spec["text_size"])
        capacity = _box_line_capacity(backend, spec["box_height"], spec["text_dy"])
        lines = wrap_to_box(backend, value, spec["wrap_width"], capacity)
        backend.text(lines, spec["box_x"] + spec["heading_dx"], y + spec["text_dy"])

    def _build_body(self, y):
        item = self.work_order
        self._draw_box(y, "Problem Description", item.problem_description)
        self._draw_box(y + layout.DROP_OFF["second_box_dy"], "Work Done / Notes", item.work_done)
        _draw_footer(self.backend, f"Generated: {generated_timestamp(self.now)}")


class PickUpFormPDF(WorkOrderFormPDF):
    title = layout.PICK_UP["title"]
    kind = "pick-up"

    @property
    def filename(self):
        return pick_up_filename(self.work_order)

    def _build_body(self, y):
        spec = layout.PICK_UP
        backend = self.backend
        item = self.work_order

        table_y = draw_line_items_table(backend, item, y + spec["table_gap"])
        if table_y + spec["totals_dy"] + layout.TOTALS["payable_dy"] > layout.PAGE["body_bottom"]:
            backend.add_page()
            table_y = layout.PAGE["continuation_top"]

        backend.set_font(layout.FONT_FAMILY, "bold")
        backend.set_font_size(spec["heading_size"])
        backend.text("Problem Description", spec["problem_x"], table_y + spec["heading_dy"])
        backend.text("Work Done", spec["work_done_x"], table_y + spec["heading_dy"])

        backend.set_font(layout.FONT_FAMILY, "normal")
        backend.rect(spec["problem_x"], table_y + spec["box_dy"], spec["box_width"], spec["box_height"])
        backend.rect(spec["work_done_x"], table_y + spec["box_dy"], spec["box_width"], spec["box_height"])

        backend.set_font_size(spec["text_size"])
        capacity = _box_line_capacity(
            backend, spec["box_dy"] + spec["box_height"], spec["text_dy"]
        )
        backend.text(
            wrap_to_box(backend, item.problem_description, spec["wrap_width"], capacity),
            spec["problem_x"] + spec["text_dx"],
            table_y + spec["text_dy"],
        )
        backend.text(
            wrap_to_box(backend, item.work_done, spec["wrap_width"], capacity),
            spec["work_done_x"] + spec["text_dx"],
            table_y + spec["text_dy"],
        )

        totals_y = table_y + spec["totals_dy"]
        draw_totals(backend, item, totals_y)

        # draw_totals leaves the bold font active
        backend.set_font_size(spec["text_size"])
        backend.text(
            f"Technician(s): {join_or_dash(item.worker_names)}",
            spec["problem_x"],
            totals_y + spec["technicians_dy"],
        )
        backend.text(
            f"Date Finished: {date_only(item.updated_at)}",
            spec["problem_x"],
            totals_y + spec["finished_dy"],
        )

        _draw_footer(self.backend, self.company_info["warranty"])


def _output_path(form, filename, output_dir):
    if filename:
        return filename
    if output_dir:
        return os.path.join(output_dir, form.filename)
    return None


def generate_drop_off_form(work_order, company_info=None, filename=None,
                           output_dir=None, backend=None, invariant=False, now=None):
    """Generate the customer drop-off form for a work order."""
    pdf = DropOffFormPDF(
        work_order, company_info, backend=backend, invariant=invariant, now=now
    )
    return pdf.generate_pdf(_output_path(pdf, filename, output_dir))


def generate_pick_up_form(work_order, company_info=None, filename=None,
                          output_dir=None, backend=None, invariant=False):
    """Generate the customer pick-up form, with line items and totals."""
    pdf = PickUpFormPDF(work_order, company_info, backend=backend, invariant=invariant)
    return pdf.generate_pdf(_output_path(pdf, filename, output_dir))
