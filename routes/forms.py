"""
Printable customer forms for work orders.

The work order detail page posts the record it already has loaded; these
routes render it and hand the PDF back for download or inline viewing.
"""

import logging

from flask import Blueprint, current_app, jsonify, request, send_file

from models.work_order import InvalidWorkOrderError, WorkOrderDetail
from utils.work_order_pdf import (
    company_info_from_config,
    drop_off_filename,
    generate_drop_off_form,
    generate_pick_up_form,
    pick_up_filename,
)

logger = logging.getLogger(__name__)

forms_bp = Blueprint("forms", __name__)

FORM_FILENAMES = {
    "drop-off": drop_off_filename,
    "pick-up": pick_up_filename,
}


def _generator(kind):
    if kind == "drop-off":
        return generate_drop_off_form
    return generate_pick_up_form


def _load_work_order():
    """
    Parse the posted JSON body.

    Returns:
        (WorkOrderDetail, None) on success, or (None, response) with a 400
        JSON error ready to return.
    """
    data = request.get_json(silent=True)
    if data is None:
        return None, (jsonify({"success": False, "error": "Expected a JSON work order"}), 400)
    try:
        return WorkOrderDetail.from_dict(data), None
    except InvalidWorkOrderError as e:
        return None, (jsonify({"success": False, "error": str(e)}), 400)


@forms_bp.route("/forms/<kind>", methods=["POST"])
def render_form(kind):
    """
    Render a drop-off or pick-up form.

    POST body (JSON): the work order detail record, e.g.
    {
        "reference_id": 1042,
        "customer": {"first_name": "Ada", ...},
        "line_items": [...],
        ...
    }

    Query params:
        inline=1  serve the PDF for viewing instead of as an attachment
    """
    if kind not in FORM_FILENAMES:
        return jsonify({"success": False, "error": f"Unknown form: {kind}"}), 404

    work_order, error = _load_work_order()
    if error:
        return error

    try:
        pdf_buffer = _generator(kind)(
            work_order,
            company_info=company_info_from_config(current_app.config),
            invariant=current_app.config.get("PDF_INVARIANT", False),
        )
    except Exception as e:
        logger.error(
            f"Error generating {kind} form for work order {work_order.reference_id}: {e}"
        )
        return jsonify({"success": False, "error": "Error generating PDF"}), 500

    inline = request.args.get("inline", "").lower() in ("1", "true", "yes")
    return send_file(
        pdf_buffer,
        as_attachment=not inline,
        download_name=FORM_FILENAMES[kind](work_order),
        mimetype="application/pdf",
    )
