"""
Integration tests for geometry codec and distance endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestDecodeEndpoint:
    """Tests for POST /api/geometry/decode."""

    def test_decode_point(self, client, point_wkt):
        """Test decoding stored point text."""
        response = client.post("/api/geometry/decode", json={"wkt": point_wkt})

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "Point"
        assert data["coordinates"] == [{"longitude": -8.6125, "latitude": 41.1579}]
        assert data["geojson"] == {
            "type": "Point",
            "coordinates": [-8.6125, 41.1579],
        }

    def test_decode_linestring(self, client, linestring_wkt):
        """Test decoding stored linestring text."""
        response = client.post(
            "/api/geometry/decode", json={"wkt": linestring_wkt}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "LineString"
        assert len(data["coordinates"]) == 3
        assert data["geojson"]["type"] == "LineString"
        assert data["geojson"]["coordinates"][0] == [-8.614, 41.158]

    def test_malformed_point_returns_400(self, client):
        """Test that codec errors are reported as 400."""
        response = client.post("/api/geometry/decode", json={"wkt": "POINT(abc)"})

        assert response.status_code == 400
        assert "detail" in response.json()

    def test_unsupported_geometry_returns_400(self, client):
        """Test that only POINT and LINESTRING keywords are decoded."""
        response = client.post(
            "/api/geometry/decode",
            json={"wkt": "POLYGON((0 0, 1 0, 1 1, 0 0))"},
        )

        assert response.status_code == 400
        assert "Unsupported geometry" in response.json()["detail"]

    def test_single_vertex_linestring_returns_400(self, client):
        """Test that a linestring with one vertex is rejected."""
        response = client.post(
            "/api/geometry/decode", json={"wkt": "LINESTRING(-8.6 41.1)"}
        )

        assert response.status_code == 400

    def test_out_of_range_returns_400(self, client):
        """Test that out-of-range coordinates in text are rejected."""
        response = client.post(
            "/api/geometry/decode", json={"wkt": "POINT(200 41.1)"}
        )

        assert response.status_code == 400


class TestEncodeEndpoint:
    """Tests for POST /api/geometry/encode."""

    def test_encode_point(self, client):
        """Test encoding a single vertex as point text."""
        response = client.post(
            "/api/geometry/encode",
            json={
                "type": "Point",
                "coordinates": [{"longitude": -8.6125, "latitude": 41.1579}],
            },
        )

        assert response.status_code == 200
        assert response.json()["wkt"] == "POINT(-8.6125 41.1579)"

    def test_encode_linestring(self, client):
        """Test encoding drawn vertices as linestring text."""
        response = client.post(
            "/api/geometry/encode",
            json={
                "type": "LineString",
                "coordinates": [
                    {"longitude": -8.614, "latitude": 41.158},
                    {"longitude": -8.612, "latitude": 41.158},
                ],
            },
        )

        assert response.status_code == 200
        assert response.json()["wkt"] == "LINESTRING(-8.614 41.158, -8.612 41.158)"

    def test_point_with_two_coordinates_returns_400(self, client):
        """Test that a Point takes exactly one coordinate."""
        response = client.post(
            "/api/geometry/encode",
            json={
                "type": "Point",
                "coordinates": [
                    {"longitude": 0, "latitude": 0},
                    {"longitude": 1, "latitude": 1},
                ],
            },
        )

        assert response.status_code == 400

    def test_linestring_with_one_coordinate_returns_400(self, client):
        """Test that a LineString needs at least two coordinates."""
        response = client.post(
            "/api/geometry/encode",
            json={
                "type": "LineString",
                "coordinates": [{"longitude": 0, "latitude": 0}],
            },
        )

        assert response.status_code == 400

    def test_empty_coordinates_returns_422(self, client):
        """Test request validation of the vertex list."""
        response = client.post(
            "/api/geometry/encode", json={"type": "Point", "coordinates": []}
        )

        assert response.status_code == 422


class TestFeaturesEndpoint:
    """Tests for POST /api/geometry/features."""

    def test_builds_feature_collection(self, client, point_wkt, linestring_wkt):
        """Test layer building with points first."""
        response = client.post(
            "/api/geometry/features",
            json={
                "lines": [
                    {"id": "levada-1", "path": linestring_wkt, "color": "#1e90ff"}
                ],
                "points": [{"id": "mill-far", "geom": point_wkt}],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "FeatureCollection"
        assert [f["id"] for f in data["features"]] == ["mill-far", "levada-1"]

    def test_malformed_feature_returns_400(self, client):
        """Test that the offending feature is named."""
        response = client.post(
            "/api/geometry/features",
            json={"lines": [{"id": "levada-x", "path": "LINESTRING()"}]},
        )

        assert response.status_code == 400
        assert "levada-x" in response.json()["detail"]

    def test_duplicate_ids_return_422(self, client, point_wkt):
        """Test that point ids must be unique."""
        response = client.post(
            "/api/geometry/features",
            json={
                "points": [
                    {"id": "mill-1", "geom": point_wkt},
                    {"id": "mill-1", "geom": "POINT(10 10)"},
                ]
            },
        )

        assert response.status_code == 422


class TestDistanceEndpoint:
    """Tests for POST /api/distance."""

    def test_one_degree_latitude(self, client):
        """Test distance along a meridian."""
        response = client.post(
            "/api/distance",
            json={
                "a": {"longitude": 0, "latitude": 0},
                "b": {"longitude": 0, "latitude": 1},
            },
        )

        assert response.status_code == 200
        assert response.json()["distance_m"] == pytest.approx(111_195, abs=1)

    def test_same_coordinate_is_zero(self, client):
        """Test zero distance for coincident coordinates."""
        response = client.post(
            "/api/distance",
            json={
                "a": {"longitude": -8.6125, "latitude": 41.1579},
                "b": {"longitude": -8.6125, "latitude": 41.1579},
            },
        )

        assert response.json()["distance_m"] == 0.0
