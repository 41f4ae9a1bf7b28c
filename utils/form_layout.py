"""
Layout constants for the customer drop-off and pick-up forms.

All positions are millimetres on an A4 page with the origin at the top-left
corner. The values reproduce the shop's legacy printed forms and must not be
tweaked casually: staff fill in the paper copies by hand around them.

Offsets named ``*_dy`` are relative to the running vertical cursor of the
section they belong to, not to the page.
"""

PAGE = {
    "width": 210,
    "left": 14,
    "right": 196,
    "footer_y": 290,
    "footer_size": 9,
    # content below this continues on a new page, resuming at continuation_top
    "body_bottom": 283,
    "continuation_top": 14,
}

FONT_FAMILY = "helvetica"

# Value above the rule, label below it
LINE_FIELD = {
    "font_size": 11,
    "value_dx": 1,
    "value_dy": -1.2,
    "rule_dy": 0.6,
    "label_dy": 4.5,
    "fit_padding": 2,
}

HEADER = {
    "shop_name": (14, 14),
    "shop_name_size": 18,
    "address": (14, 19),
    "contact": (14, 23.5),
    "info_size": 8.5,
    "title": (14, 31),
    "title_size": 16,
    "rule_y": 34,
    "rule_width": 0.5,
}

COMMON = {
    "start_y": 44,
    "height": 102,
    "heading_size": 12,
    "customer_id": (14, 0),
    "date_received": (112, 0),
    "separator_dy": 66,
    "separator_width": 0.8,
    "item_customer_id_label": (112, 79),
    "item_customer_id_value": (150, 79),
    "accessories": (14, 100),
    "accessories_width": 180,
    "accessories_size": 10,
    "checkbox_size": (12, 5),
    "checkbox_label_dy": 4,
    "checkbox_font_size": 11,
}

# name: (label, x, dy, width), in drawing order
COMMON_FIELDS = {
    "first_name": ("First Name", 14, 13, 40),
    "last_name": ("Last Name", 60, 13, 40),
    "address": ("Address", 106, 13, 86),
    "address_line_2": ("Apart/Suite / Entry Code", 14, 24, 40),
    "city": ("City", 60, 24, 40),
    "email": ("Email", 106, 24, 86),
    "home_phone": ("Home Phone", 14, 35, 40),
    "work_phone": ("Work Phone / Cell", 60, 35, 40),
    "extension": ("Extension", 106, 35, 40),
    "deposit": ("Deposit", 54, 58, 34),
    "payment_method": ("Payment Method", 100, 58, 50),
    "item_name": ("Item", 14, 79, 46),
    "brand": ("Brand", 64, 79, 40),
    "model_number": ("Model Number", 14, 91, 46),
    "serial_number": ("Serial Number", 64, 91, 40),
}

# (label, box x, box dy, label x); two rows of three, ticked by hand
CHECKBOXES = [
    ("Location", 14, 40, 29),
    ("Cord", 58, 40, 73),
    ("Remote Control", 102, 40, 117),
    ("Albums/CDs/Cassettes", 14, 49, 29),
    ("DVDs/VHS", 74, 49, 91),
    ("Cables", 112, 49, 127),
]

DROP_OFF = {
    "title": "Customer Drop Off Form",
    "box_x": 14,
    "box_width": 182,
    "box_height": 58,
    "box_line_width": 0.3,
    "second_box_dy": 65,
    "heading_dx": 2,
    "heading_dy": 6,
    "heading_size": 11,
    "text_dy": 12,
    "text_size": 10,
    "wrap_width": 176,
}

PICK_UP = {
    "title": "Customer Pick Up Form",
    "table_gap": 2,
    # used when the backend cannot report where the table ended
    "table_fallback_height": 40,
    "heading_dy": 8,
    "heading_size": 11,
    "problem_x": 14,
    "work_done_x": 108,
    "box_dy": 10,
    "box_width": 88,
    "box_height": 44,
    "text_dx": 2,
    "text_dy": 16,
    "text_size": 10,
    "wrap_width": 84,
    "totals_dy": 62,
    "technicians_dy": 29,
    "finished_dy": 36,
}

LINE_ITEMS_TABLE = {
    "head": ["Item", "Price", "Quantity", "Total"],
    "empty_row": ["-", "$0.00", "-", "-"],
    "font_size": 9,
    "cell_padding": 1.8,
    "head_fill": (238, 238, 238),
    "grid_line_width": 0.1,
    "margin_left": 14,
    "margin_right": 14,
    # fractions of the available width
    "col_fractions": (0.4, 0.2, 0.2, 0.2),
}

TOTALS = {
    "x": 196,
    "font_size": 10,
    "parts_dy": 0,
    "delivery_dy": 7,
    "labour_dy": 14,
    "deposit_dy": 21,
    "total_dy": 29,
    "payable_dy": 37,
}

# Vertical room kept free under wrapped text inside a bordered box
BOX_BOTTOM_PADDING = 2
