"""
HTTP tests for the printable form routes.

Forms are rendered for real through ReportLab; only the failure path mocks
the generator.
"""

import pytest

import routes.forms as forms_routes


@pytest.mark.integration
class TestFormRoutes:
    def test_drop_off_form_download(self, client, work_order_data):
        """POST /work_orders/forms/drop-off should return the PDF as an attachment."""
        response = client.post("/work_orders/forms/drop-off", json=work_order_data)

        assert response.status_code == 200
        assert response.mimetype == "application/pdf"
        assert response.data.startswith(b"%PDF")
        disposition = response.headers["Content-Disposition"]
        assert disposition.startswith("attachment")
        assert "drop-off-form-1042.pdf" in disposition

    def test_pick_up_form_download(self, client, work_order_data):
        response = client.post("/work_orders/forms/pick-up", json=work_order_data)

        assert response.status_code == 200
        assert response.mimetype == "application/pdf"
        assert "pick-up-form-1042.pdf" in response.headers["Content-Disposition"]

    def test_inline_view(self, client, work_order_data):
        response = client.post("/work_orders/forms/pick-up?inline=1", json=work_order_data)

        assert response.status_code == 200
        assert response.headers["Content-Disposition"].startswith("inline")

    def test_testing_config_renders_identical_bytes(self, client, work_order_data):
        first = client.post("/work_orders/forms/pick-up", json=work_order_data).data
        second = client.post("/work_orders/forms/pick-up", json=work_order_data).data
        assert first == second

    def test_minimal_work_order(self, client):
        response = client.post("/work_orders/forms/pick-up", json={"reference_id": 7})
        assert response.status_code == 200

    def test_body_must_be_json(self, client):
        response = client.post(
            "/work_orders/forms/drop-off", data="not json", content_type="text/plain"
        )

        assert response.status_code == 400
        assert response.get_json()["success"] is False

    def test_missing_reference_id(self, client, work_order_data):
        del work_order_data["reference_id"]

        response = client.post("/work_orders/forms/drop-off", json=work_order_data)

        assert response.status_code == 400
        assert response.get_json() == {"success": False, "error": "reference_id is required"}

    @pytest.mark.parametrize(
        "changes",
        [{"customer": "Ada"}, {"customer": 42}, {"line_items": ["Drive belt"]}, {"reference_id": "abc"}],
    )
    def test_malformed_work_order_is_rejected(self, client, work_order_data, changes):
        """POST with a customer or line item that is not an object should be a 400, not a 500."""
        work_order_data.update(changes)

        response = client.post("/work_orders/forms/drop-off", json=work_order_data)

        assert response.status_code == 400
        assert response.get_json()["success"] is False

    def test_unknown_form(self, client, work_order_data):
        response = client.post("/work_orders/forms/invoice", json=work_order_data)
        assert response.status_code == 404

    def test_only_post_is_allowed(self, client):
        assert client.get("/work_orders/forms/drop-off").status_code == 405

    def test_generation_error_returns_500(self, client, work_order_data, mocker):
        mock_generate = mocker.patch(
            "routes.forms.generate_drop_off_form", side_effect=RuntimeError("boom")
        )

        response = client.post("/work_orders/forms/drop-off", json=work_order_data)

        assert response.status_code == 500
        assert response.get_json() == {"success": False, "error": "Error generating PDF"}
        assert mock_generate.called

    def test_shop_settings_reach_the_form(self, app, client, work_order_data, mocker):
        app.config["SHOP_NAME"] = "Bench Test Audio"
        spy = mocker.spy(forms_routes, "generate_pick_up_form")

        client.post("/work_orders/forms/pick-up", json=work_order_data)

        assert spy.call_args.kwargs["company_info"]["name"] == "Bench Test Audio"
        assert spy.call_args.kwargs["invariant"] is True


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "healthy"
