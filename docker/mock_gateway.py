"""Canned AI gateway for local development: python docker/mock_gateway.py"""

from http.server import HTTPServer, BaseHTTPRequestHandler
import json

SCAN_RESPONSE = {
    "vulnerabilities": [
        {
            "description": "SQL query built by string concatenation",
            "severity": "High",
            "location": "line 3",
            "recommendation": "Use parameterized queries.",
            "references": ["https://owasp.org/www-community/attacks/SQL_Injection"],
        },
        {
            "description": "Debug mode enabled",
            "severity": "Low",
            "location": "line 12",
            "recommendation": "Disable debug mode outside development.",
        },
    ]
}


class Handler(BaseHTTPRequestHandler):
    def _reply(self, status, payload):
        body = json.dumps(payload).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        request = json.loads(self.rfile.read(length) or b"{}")
        if self.path == "/scan":
            self._reply(200, SCAN_RESPONSE)
        elif self.path == "/remediate":
            self._reply(200, {
                "remediationSuggestions": (
                    f"// {request.get('language', '')}: fix for "
                    f"{request.get('vulnerabilityDescription', '')}\n"
                    "cursor.execute(\"SELECT * FROM users WHERE id = %s\", (user_id,))"
                ),
            })
        elif self.path == "/best-practices":
            self._reply(200, {
                "bestPractices": (
                    f"<h3>{request.get('language', '')}</h3>"
                    "<ul><li>Validate all input.</li><li>Never build SQL from strings.</li></ul>"
                ),
            })
        else:
            self._reply(404, {"error": "unknown flow"})

    def do_HEAD(self):
        self.send_response(200)
        self.end_headers()


HTTPServer(("0.0.0.0", 3400), Handler).serve_forever()
