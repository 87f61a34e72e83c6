import unittest

from fastapi.testclient import TestClient

from backend.app import create_app
from backend.dependencies import get_mailer
from backend.mailer import ContactMessage, DeliveryError, InMemoryMailer

VALID = {
    "name": "A",
    "email": "a@b.com",
    "subject": "Hi",
    "message": "Hello there",
}


class FailingMailer:
    def __init__(self):
        self.attempts = 0

    def send(self, contact):
        self.attempts += 1
        raise DeliveryError("535 authentication failed for user@example.com")


class ContactApiTests(unittest.TestCase):
    def setUp(self):
        self.app = create_app()
        self.mailer = InMemoryMailer()
        self.app.dependency_overrides[get_mailer] = lambda: self.mailer
        self.client = TestClient(self.app)

    def test_valid_submission_sends_exactly_once(self):
        response = self.client.post("/api/contact", json=VALID)
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertTrue(payload["success"])
        self.assertIn("Message sent successfully", payload["message"])
        self.assertEqual(len(self.mailer.outbox), 1)
        self.assertEqual(self.mailer.outbox[0].email, "a@b.com")

    def test_invalid_email_is_rejected_without_delivery(self):
        response = self.client.post(
            "/api/contact", json={**VALID, "email": "not-an-email"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(), {"error": "Please provide a valid email address"}
        )
        self.assertEqual(self.mailer.outbox, [])

    def test_missing_or_blank_fields_are_rejected(self):
        for payload in (
            {k: v for k, v in VALID.items() if k != "subject"},
            {**VALID, "name": ""},
            {**VALID, "message": "   "},
        ):
            response = self.client.post("/api/contact", json=payload)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json(), {"error": "All fields are required"})
        self.assertEqual(self.mailer.outbox, [])

    def test_email_with_trailing_newline_is_rejected(self):
        response = self.client.post("/api/contact", json={**VALID, "email": "a@b.com\nx"})
        self.assertEqual(response.status_code, 400)

    def test_delivery_failure_is_generic_500(self):
        failing = FailingMailer()
        self.app.dependency_overrides[get_mailer] = lambda: failing
        response = self.client.post("/api/contact", json=VALID)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(), {"error": "Failed to send message. Please try again later."}
        )
        self.assertEqual(failing.attempts, 1)

    def test_contact_rate_limit(self):
        for _ in range(5):
            self.assertEqual(self.client.post("/api/contact", json=VALID).status_code, 200)
        response = self.client.post("/api/contact", json=VALID)
        self.assertEqual(response.status_code, 429)
        self.assertEqual(len(self.mailer.outbox), 5)


class DefaultMailerTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app())
        self.mailer = get_mailer()
        if not isinstance(self.mailer, InMemoryMailer):
            self.skipTest("SMTP credentials are configured")
        self.mailer.reset()

    def test_submission_lands_in_outbox(self):
        response = self.client.post("/api/contact", json=VALID)
        self.assertEqual(response.status_code, 200)
        self.assertEqual([m.subject for m in self.mailer.outbox], ["Hi"])

    def test_outbox_starts_empty(self):
        self.assertEqual(self.mailer.outbox, [])


class ContactMessageTests(unittest.TestCase):
    def test_html_body_escapes_user_input(self):
        message = ContactMessage(
            name="<script>x</script>",
            email="a@b.com",
            subject="Hi",
            message="line one\nline <b>two</b>",
        )
        body = message.html_body()
        self.assertNotIn("<script>", body)
        self.assertIn("line one<br>line &lt;b&gt;two&lt;/b&gt;", body)
        self.assertEqual(message.mail_subject(), "Portfolio Contact: Hi")


if __name__ == "__main__":
    unittest.main()
