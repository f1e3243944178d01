"""Tests for the Flask HTTP layer."""

import os
import sys

import fitz
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


class TestIndex:
    def test_lists_operations_and_catalog(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        data = resp.get_json()
        names = {op["name"] for op in data["operations"]}
        assert "check_contrast" in names
        assert "validate_form" in names
        assert "get_wcag_checklist" in data["catalog"]
        assert data["catalog"] == sorted(data["catalog"])


class TestCheck:
    def test_contrast(self, client):
        resp = client.post("/check/check_contrast", json={"foreground": "#333333", "background": "#FFFFFF"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["summary"]["passed"] == 2
        assert data["summary"]["levelAA"] == {"passed": 1, "failed": 0}
        assert data["machine"]["results"][0]["criterion"] == "1.4.3"
        assert "WCAG CONTRAST CHECK" in data["human"]
        assert len(data["content"]) == 2

    def test_empty_body_uses_defaults(self, client):
        resp = client.post("/check/check_multiple_ways")
        assert resp.status_code == 200
        assert resp.get_json()["summary"]["failed"] == 1

    def test_unknown_operation_is_404(self, client):
        resp = client.post("/check/check_everything", json={})
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Unknown operation: check_everything"

    def test_bad_payload_is_400(self, client):
        resp = client.post("/check/check_contrast", json={"foreground": "#000"})
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    @pytest.mark.parametrize(
        "operation, payload",
        [
            ("check_landmarks", {"landmarks": None}),
            ("check_link_purpose", {"linkText": None}),
            ("check_target_size", {"elementType": "button", "width": "wide", "height": 44}),
        ],
    )
    def test_wrong_typed_payload_is_400(self, client, operation, payload):
        resp = client.post(f"/check/{operation}", json=payload)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_modern_colour_syntax(self, client):
        resp = client.post("/check/check_contrast", json={"foreground": "rgb(51 51 51)", "background": "#fff"})
        assert resp.status_code == 200
        assert resp.get_json()["machine"]["results"][0]["value"] == 12.63

    def test_non_object_body_is_400(self, client):
        resp = client.post("/check/check_contrast", json=["#000", "#fff"])
        assert resp.status_code == 400

    def test_get_not_allowed(self, client):
        assert client.get("/check/check_contrast").status_code == 405


class TestReportPdf:
    def test_returns_pdf(self, client):
        resp = client.post(
            "/report/check_page_title.pdf",
            json={"hasTitle": True, "titleText": "Home"},
        )
        assert resp.status_code == 200
        assert resp.mimetype == "application/pdf"
        assert resp.data[:5] == b"%PDF-"
        assert "check_page_title_report.pdf" in resp.headers["Content-Disposition"]
        doc = fitz.open(stream=resp.data, filetype="pdf")
        assert doc.metadata["title"] == "WCAG Page Title Check"
        doc.close()

    def test_custom_title(self, client):
        resp = client.post(
            "/report/check_language.pdf?title=Language%20audit",
            json={"hasLangAttribute": False},
        )
        doc = fitz.open(stream=resp.data, filetype="pdf")
        assert doc.metadata["title"] == "Language audit"
        doc.close()

    def test_unknown_operation(self, client):
        assert client.post("/report/nope.pdf", json={}).status_code == 404

    def test_wrong_typed_payload_is_400(self, client):
        resp = client.post("/report/check_page_title.pdf", json={"hasTitle": None})
        assert resp.status_code == 400


class TestTools:
    def test_successful_call(self, client):
        resp = client.post("/tools/check_language", json={"hasLangAttribute": True, "langValue": "en"})
        assert resp.status_code == 200
        assert "isError" not in resp.get_json()

    def test_errors_are_reported_in_body(self, client):
        resp = client.post("/tools/nope", json={})
        assert resp.status_code == 200
        assert resp.get_json()["isError"] is True

    def test_catalog_tool(self, client):
        resp = client.post("/tools/get_all_wcag_criteria", json={"level": "AAA", "category": "aria"})
        assert "Total: 3 criteria" in resp.get_json()["content"][0]["text"]

    def test_wrong_typed_payload_is_reported_in_body(self, client):
        resp = client.post("/tools/check_landmarks", json={"landmarks": None})
        assert resp.status_code == 200
        assert resp.get_json()["isError"] is True

    def test_non_object_body(self, client):
        assert client.post("/tools/check_language", json=[1, 2]).status_code == 400


class TestCriteria:
    def test_all(self, client):
        data = client.get("/criteria").get_json()
        assert data["total"] == 78
        assert len(data["criteria"]) == 78

    def test_filtered(self, client):
        data = client.get("/criteria?level=A&category=media").get_json()
        assert data["total"] == 6
        assert all(c["level"] == "A" for c in data["criteria"])

    def test_bad_level(self, client):
        assert client.get("/criteria?level=Z").status_code == 400

    def test_checklist(self, client):
        resp = client.get("/checklist/AAA")
        assert resp.status_code == 200
        assert "Total: 78 criteria to check" in resp.get_json()["content"][0]["text"]

    def test_bad_checklist_level(self, client):
        assert client.get("/checklist/ZZ").status_code == 400
