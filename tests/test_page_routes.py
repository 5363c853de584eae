"""Server-rendered page and form posts."""

from __future__ import annotations

from codeshield.api.deps import get_session_store
from codeshield.errors import GatewayError
from codeshield.models.results import BestPracticesResult, RemediationSuggestion
from tests.factories import SAMPLE_CODE, make_scan_result, make_vulnerability


class TestPage:
    def test_page_renders_and_sets_cookie(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "Code Shield" in resp.text
        assert "codeshield_session" in resp.cookies
        for language in ("JavaScript", "C#", "CSS"):
            assert f'<option value="{language}"' in resp.text

    def test_cookie_refreshed_on_every_visit(self, client):
        first = client.get("/")
        token = first.cookies["codeshield_session"]
        second = client.get("/")
        set_cookie = second.headers.get("set-cookie")
        assert set_cookie is not None
        assert f"codeshield_session={token}" in set_cookie
        assert "max-age=1800" in set_cookie.lower()

    def test_upload_accept_filter_advertised(self, client):
        resp = client.get("/")
        assert 'accept=".js,.ts,.jsx,.tsx,.py' in resp.text

    def test_security_headers_applied(self, client):
        resp = client.get("/")
        assert "script-src 'none'" in resp.headers["content-security-policy"]
        assert resp.headers["x-content-type-options"] == "nosniff"


class TestScanForm:
    def test_invalid_form_shows_errors_without_gateway_call(self, client, gateway):
        resp = client.post("/scan", data={"language": "", "code": "a" * 19})
        assert resp.status_code == 200
        assert "Please select a language." in resp.text
        assert "Please enter at least 20 characters of code." in resp.text
        gateway.scan.assert_not_called()

    def test_post_redirects_to_results(self, client, gateway):
        gateway.scan.return_value = make_scan_result()
        resp = client.post(
            "/scan",
            data={"language": "Python", "code": SAMPLE_CODE},
            follow_redirects=False,
        )
        assert resp.status_code == 303
        assert resp.headers["location"] == "/#scan-results"

    def test_findings_rendered_in_order_with_badges(self, client, gateway):
        gateway.scan.return_value = make_scan_result(
            make_vulnerability("Hardcoded secret", "Critical"),
            make_vulnerability("Verbose errors", "Low"),
            make_vulnerability(
                "Weak hash",
                "Medium",
                references=["https://cwe.mitre.org/data/definitions/328.html", "javascript:alert(1)"],
            ),
        )
        resp = client.post("/scan", data={"language": "Python", "code": SAMPLE_CODE})

        text = resp.text
        assert "Found 3 potential vulnerabilities." in text
        assert text.count('class="finding"') == 3
        assert text.index("Hardcoded secret") < text.index("Verbose errors") < text.index("Weak hash")
        assert 'badge-destructive">Critical' in text
        assert 'badge-outline">Low' in text
        assert 'badge-secondary">Medium' in text
        assert 'href="https://cwe.mitre.org/data/definitions/328.html"' in text
        assert 'href="javascript:alert(1)"' not in text

    def test_zero_findings_shows_success_toast(self, client, gateway):
        gateway.scan.return_value = make_scan_result()
        resp = client.post("/scan", data={"language": "Python", "code": SAMPLE_CODE})
        assert "Scan Complete: No Vulnerabilities Found" in resp.text
        assert 'class="finding"' not in resp.text

    def test_gateway_failure_keeps_form(self, client, gateway):
        gateway.scan.side_effect = GatewayError("scan", "down")
        resp = client.post("/scan", data={"language": "Python", "code": SAMPLE_CODE})
        assert resp.status_code == 200
        assert resp.text.count("Scan Failed") == 1
        assert f">{SAMPLE_CODE}</textarea>" in resp.text
        assert '<option value="Python" selected>' in resp.text

    def test_submit_while_scanning_keeps_form(self, client, gateway):
        client.get("/")
        page = get_session_store().get(client.cookies["codeshield_session"])
        page.scan.set_form(language="Python", code=SAMPLE_CODE)
        page.scan.is_loading = True

        client.post("/scan", data={"language": "Go", "code": "b" * 30})

        assert page.scan.language == "Python"
        assert page.scan.code == SAMPLE_CODE
        gateway.scan.assert_not_called()

    def test_finding_text_is_escaped(self, client, gateway):
        gateway.scan.return_value = make_scan_result(make_vulnerability("<img src=x onerror=alert(1)>"))
        resp = client.post("/scan", data={"language": "HTML", "code": SAMPLE_CODE})
        assert "<img src=x" not in resp.text
        assert "&lt;img src=x onerror=alert(1)&gt;" in resp.text


class TestUploadAndClear:
    def test_upload_sets_code(self, client):
        source = "SELECT * FROM users WHERE name = '$name';\n"
        resp = client.post("/scan/upload", files={"file": ("query.sql", source.encode(), "text/plain")})
        assert resp.status_code == 200
        assert "SELECT * FROM users WHERE name = &#39;$name&#39;;\n</textarea>" in resp.text

    def test_clear_code(self, client, gateway):
        gateway.scan.side_effect = GatewayError("scan", "down")
        client.post("/scan", data={"language": "Rust", "code": SAMPLE_CODE})
        resp = client.post("/scan/clear")
        assert f">{SAMPLE_CODE}</textarea>" not in resp.text
        assert '<option value="Rust" selected>' in resp.text


class TestRemediation:
    def test_suggestion_rendered_as_text(self, client, gateway):
        gateway.scan.return_value = make_scan_result(make_vulnerability("SQL injection"))
        gateway.remediate.return_value = RemediationSuggestion(text="<b>use</b> params")
        client.post("/scan", data={"language": "Python", "code": SAMPLE_CODE})

        resp = client.post("/scan/findings/0/remediation")

        assert resp.status_code == 200
        assert "AI Recommended Remediation" in resp.text
        assert "&lt;b&gt;use&lt;/b&gt; params" in resp.text
        gateway.remediate.assert_awaited_once_with(SAMPLE_CODE, "SQL injection", "Python")

    def test_unknown_finding_404(self, client):
        resp = client.post("/scan/findings/5/remediation")
        assert resp.status_code == 404

    def test_failure_keeps_scan_result(self, client, gateway):
        gateway.scan.return_value = make_scan_result(make_vulnerability("SQL injection"))
        gateway.remediate.side_effect = GatewayError("remediate", "down")
        client.post("/scan", data={"language": "Python", "code": SAMPLE_CODE})

        resp = client.post("/scan/findings/0/remediation")

        assert "Failed to get remediation" in resp.text
        assert "SQL injection" in resp.text


class TestBestPractices:
    def test_empty_language(self, client, gateway):
        resp = client.post("/best-practices", data={"language": ""})
        assert "Please select a language." in resp.text
        gateway.best_practices.assert_not_called()

    def test_markup_sanitized(self, client, gateway):
        gateway.best_practices.return_value = BestPracticesResult(
            language="Go", html="<h3>Go</h3><script>alert(1)</script><ul><li>Check errors</li></ul>"
        )
        resp = client.post("/best-practices", data={"language": "Go"})
        assert "<h3>Go</h3>" in resp.text
        assert "<li>Check errors</li>" in resp.text
        assert "<script>" not in resp.text

    def test_submit_while_loading_keeps_language(self, client, gateway):
        client.get("/")
        page = get_session_store().get(client.cookies["codeshield_session"])
        page.best_practices.set_form(language="Rust")
        page.best_practices.is_loading = True

        client.post("/best-practices", data={"language": "Go"})

        assert page.best_practices.language == "Rust"
        gateway.best_practices.assert_not_called()

    def test_failure_notification(self, client, gateway):
        gateway.best_practices.side_effect = GatewayError("best_practices", "down")
        resp = client.post("/best-practices", data={"language": "Go"})
        assert resp.text.count("Failed to get best practices") == 1


class TestNotifications:
    def test_dismiss(self, client, gateway):
        gateway.scan.side_effect = GatewayError("scan", "down")
        client.post("/scan", data={"language": "Python", "code": SAMPLE_CODE})
        notes = client.get("/api/v1/notifications").json()
        assert len(notes) == 1

        resp = client.post(f"/notifications/{notes[0]['id']}/dismiss")

        assert "Scan Failed" not in resp.text
        assert client.get("/api/v1/notifications").json() == []
