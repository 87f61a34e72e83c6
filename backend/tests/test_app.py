import unittest

from fastapi.testclient import TestClient

from backend.app import create_app
from backend.dependencies import get_repository_source


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        self.app = create_app()
        self.client = TestClient(self.app)

    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["status"], "OK")
        self.assertEqual(payload["version"], "1.0.0")
        self.assertGreaterEqual(payload["uptime"], 0)
        self.assertTrue(payload["timestamp"].endswith("Z"))
        self.assertGreater(payload["memory"]["maxRss"], 0)

    def test_api_index_and_endpoint_map(self):
        index = self.client.get("/api")
        self.assertEqual(index.status_code, 200)
        payload = index.json()
        self.assertEqual(payload["documentation"], "http://testserver/api/docs")
        self.assertIn("/api/health", payload["endpoints"])
        self.assertEqual(payload["author"]["github"], "https://github.com/AnnShrestha")

        docs = self.client.get("/api/docs").json()
        self.assertEqual(docs["baseUrl"], "http://testserver/api")
        self.assertEqual(docs["endpoints"]["contact"]["method"], "POST")
        self.assertEqual(docs["endpoints"]["gis"]["upload"]["path"], "/upload/gis")
        self.assertEqual(docs["examples"]["gisData"], "http://testserver/api/gis/data/points")

    def test_error_model_is_documented(self):
        schema = self.client.get("/openapi.json").json()
        self.assertIn("ErrorResponse", schema["components"]["schemas"])
        contact = schema["paths"]["/api/contact"]["post"]["responses"]
        self.assertIn("429", contact)

    def test_static_content_endpoints(self):
        portfolio = self.client.get("/api/portfolio").json()
        self.assertEqual(portfolio["name"], "Annan Shrestha")
        self.assertEqual(len(portfolio["projects"]), 3)

        publications = self.client.get("/api/publications").json()
        self.assertEqual([p["id"] for p in publications], [1, 2, 3])

        blog = self.client.get("/api/blog").json()
        self.assertEqual(blog[0]["slug"], "getting-started-web-gis-development")

        analytics = self.client.get("/api/analytics").json()
        self.assertEqual(analytics["totalVisitors"], 1250)
        self.assertIn("lastUpdated", analytics)

    def test_spatial_data_falls_back_to_points(self):
        polygons = self.client.get("/api/gis/data/polygons").json()
        self.assertEqual(polygons["features"][0]["geometry"]["type"], "Polygon")

        unknown = self.client.get("/api/gis/data/rivers").json()
        self.assertEqual(unknown["features"][0]["geometry"]["type"], "Point")

    def test_gis_analyze_echoes_request(self):
        response = self.client.post(
            "/api/gis/analyze",
            json={"dataType": "raster", "analysisType": "area", "parameters": {"band": 4}},
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["dataType"], "raster")
        self.assertEqual(payload["parameters"], {"band": 4})
        self.assertEqual(payload["status"], "completed")
        self.assertEqual(payload["results"]["metadata"]["crs"], "EPSG:4326")
        self.assertIn("processedAt", payload["results"]["metadata"])

    def test_resume_download_redirects(self):
        response = self.client.get("/api/resume/download", follow_redirects=False)
        self.assertEqual(response.status_code, 302)
        self.assertIn("drive.google.com", response.headers["location"])

    def test_unknown_endpoint_returns_json_404(self):
        response = self.client.get("/api/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {
                "error": "Endpoint not found",
                "message": "The requested endpoint GET /api/nope was not found.",
            },
        )

    def test_security_and_rate_limit_headers(self):
        response = self.client.get("/api/portfolio")
        self.assertEqual(response.headers["X-Content-Type-Options"], "nosniff")
        self.assertIn("connect-src 'self' https://api.github.com",
                      response.headers["Content-Security-Policy"])
        self.assertEqual(response.headers["X-RateLimit-Limit"], "100")

    def test_global_rate_limit(self):
        self.app.state.rate_limiter.max_requests = 2
        self.client.get("/api/blog")
        self.client.get("/api/blog")
        response = self.client.get("/api/blog")
        self.assertEqual(response.status_code, 429)
        self.assertIn("Too many requests", response.json()["error"])

    def test_unhandled_error_is_reported_as_500(self):
        class Broken:
            def list_repos(self):
                raise RuntimeError("boom")

        self.app.dependency_overrides[get_repository_source] = lambda: Broken()
        client = TestClient(self.app, raise_server_exceptions=False)
        response = client.get("/api/github/repos")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "Internal server error")
        self.assertEqual(response.json()["message"], "boom")


if __name__ == "__main__":
    unittest.main()
