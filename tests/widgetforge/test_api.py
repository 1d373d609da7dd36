"""API endpoint tests (in-process, no server)."""

import inspect
from concurrent.futures import ThreadPoolExecutor

import pytest

from widgetforge.config import settings


@pytest.fixture
def project_id(test_client) -> str:
    """Create an empty project and return its id."""
    response = test_client.post("/projects", json={"name": "API Widget"})
    assert response.status_code == 201
    return response.json()["id"]


def _add_text(client, project_id: str, text: str) -> dict:
    response = client.post(f"/projects/{project_id}/layers", json={
        "element": {"type": "text", "payload": {"text": text}},
    })
    assert response.status_code == 201
    return response.json()


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, test_client):
        """Health endpoint returns OK status."""
        response = test_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data


class TestProjectsEndpoint:
    """Tests for project CRUD."""

    def test_create_and_get(self, test_client, project_id):
        response = test_client.get(f"/projects/{project_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "API Widget"
        assert data["background"]["type"] == "solid"
        assert data["_version"] == 1

    def test_list(self, test_client, project_id):
        projects = test_client.get("/projects").json()["projects"]
        assert [p["id"] for p in projects] == [project_id]
        assert projects[0]["layerCount"] == 0

    def test_get_unknown(self, test_client):
        response = test_client.get("/projects/missing")
        assert response.status_code == 404

    def test_create_from_template(self, test_client):
        response = test_client.post("/projects", json={
            "template_id": "aurora_glow", "widget_type": "countdown", "size": "large",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["templateId"] == "aurora_glow"
        assert data["size"] == "large"
        assert data["background"]["type"] == "gradient"
        assert len(data["layers"]) == 2

    def test_create_from_unknown_template(self, test_client):
        response = test_client.post("/projects", json={"template_id": "missing"})
        assert response.status_code == 404

    def test_update(self, test_client, project_id):
        response = test_client.patch(f"/projects/{project_id}", json={"name": "Renamed", "size": "small"})
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert test_client.get(f"/projects/{project_id}").json()["size"] == "small"

    def test_delete(self, test_client, project_id):
        assert test_client.delete(f"/projects/{project_id}").status_code == 204
        assert test_client.get(f"/projects/{project_id}").status_code == 404
        assert test_client.delete(f"/projects/{project_id}").status_code == 404

    def test_duplicate_and_favorite(self, test_client, project_id):
        copy = test_client.post(f"/projects/{project_id}/duplicate").json()
        assert copy["name"] == "API Widget Copy"
        assert copy["id"] != project_id

        response = test_client.post(f"/projects/{project_id}/favorite")
        assert response.json() == {"id": project_id, "isFavorite": True}

    def test_replace_reports_dropped_layers(self, test_client, project_id):
        """PUT decodes the document tolerantly and lists dropped layers."""
        _add_text(test_client, project_id, "keep")
        document = test_client.get(f"/projects/{project_id}").json()
        document["layers"].append({
            "id": "bad", "name": "Bad", "zIndex": 5,
            "element": {"type": "video", "payload": {}},
        })

        response = test_client.put(f"/projects/{project_id}", json=document)
        assert response.status_code == 200
        data = response.json()
        assert len(data["project"]["layers"]) == 1
        assert data["issues"][0]["path"].startswith("layers[1]")

    def test_replace_rejects_bad_root(self, test_client, project_id):
        document = test_client.get(f"/projects/{project_id}").json()
        document["createdAt"] = "yesterday"
        assert test_client.put(f"/projects/{project_id}", json=document).status_code == 422

    def test_replace_resets_bad_background(self, test_client, project_id):
        """A background that cannot be decoded is replaced with the default."""
        document = test_client.get(f"/projects/{project_id}").json()
        document["background"] = {"type": "video", "payload": {}}
        response = test_client.put(f"/projects/{project_id}", json=document)
        assert response.status_code == 200
        data = response.json()
        assert data["project"]["background"]["type"] == "solid"
        assert [issue["path"] for issue in data["issues"]] == ["background"]

    def test_replace_rejects_bad_version(self, test_client, project_id):
        document = test_client.get(f"/projects/{project_id}").json()
        document["_version"] = "1"
        response = test_client.put(f"/projects/{project_id}", json=document)
        assert response.status_code == 422
        assert "_version" in response.json()["detail"]

    def test_background(self, test_client, project_id):
        response = test_client.put(f"/projects/{project_id}/background", json={
            "type": "glassmorphism", "payload": {"preset": "darkGlass"},
        })
        assert response.status_code == 200
        assert response.json()["payload"]["preset"] == "darkGlass"

        bad = test_client.put(f"/projects/{project_id}/background", json={"type": "video"})
        assert bad.status_code == 422


class TestLayersEndpoint:
    """Tests for layer ordering through the API."""

    def test_add_move_remove(self, test_client, project_id):
        """Add A, B, C; move C to the front; remove A leaves a gap."""
        a = _add_text(test_client, project_id, "A")
        _add_text(test_client, project_id, "B")
        c = _add_text(test_client, project_id, "C")
        assert c["zIndex"] == 2

        response = test_client.post(f"/projects/{project_id}/layers/{c['id']}/move", json={"to_index": 0})
        assert response.status_code == 200
        assert [(l["name"], l["zIndex"]) for l in response.json()["layers"]] == [("C", 0), ("A", 1), ("B", 2)]

        assert test_client.delete(f"/projects/{project_id}/layers/{a['id']}").status_code == 204
        layers = test_client.get(f"/projects/{project_id}/layers").json()["layers"]
        assert [(l["name"], l["zIndex"]) for l in layers] == [("C", 0), ("B", 2)]

    def test_sorted_listing(self, test_client, project_id):
        a = _add_text(test_client, project_id, "A")
        _add_text(test_client, project_id, "B")
        test_client.post(f"/projects/{project_id}/layers/{a['id']}/move", json={"to_index": 5})
        layers = test_client.get(f"/projects/{project_id}/layers", params={"paint_order": True}).json()["layers"]
        assert [l["name"] for l in layers] == ["B", "A"]

    def test_unknown_layer(self, test_client, project_id):
        assert test_client.delete(f"/projects/{project_id}/layers/missing").status_code == 404
        move = test_client.post(f"/projects/{project_id}/layers/missing/move", json={"to_index": 0})
        assert move.status_code == 404
        assert test_client.get(f"/projects/{project_id}/layers/missing").status_code == 404

    def test_unknown_element_rejected(self, test_client, project_id):
        response = test_client.post(f"/projects/{project_id}/layers", json={
            "element": {"type": "video", "payload": {}},
        })
        assert response.status_code == 422

    def test_layer_limit(self, test_client, project_id, monkeypatch):
        monkeypatch.setattr(settings, "MAX_LAYERS", 1)
        _add_text(test_client, project_id, "A")
        response = test_client.post(f"/projects/{project_id}/layers", json={
            "element": {"type": "text", "payload": {}},
        })
        assert response.status_code == 422

    def test_frame_clamped(self, test_client, project_id):
        response = test_client.post(f"/projects/{project_id}/layers", json={
            "element": {"type": "shape", "payload": {"type": "circle"}},
            "frame": {"x": -5, "y": 10, "width": 300, "height": 40},
        })
        data = response.json()
        assert data["name"] == "Shape: Circle"
        assert data["frame"]["x"] == 0
        assert data["frame"]["width"] == 100


class TestResolveEndpoint:
    """Tests for data-binding resolution."""

    def test_resolve_with_snapshot(self, test_client, project_id):
        layer = test_client.post(f"/projects/{project_id}/layers", json={
            "element": {"type": "dataBinding", "payload": {
                "dataType": "readingStreak", "prefix": "Day ", "suffix": "!",
            }},
        }).json()

        response = test_client.post(f"/projects/{project_id}/resolve", json={
            "snapshot": {"readingStreak": 9},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["values"] == {layer["id"]: "Day 9!"}
        element = data["project"]["layers"][0]["element"]
        assert element == {"type": "text", "payload": {**element["payload"], "text": "Day 9!"}}

    def test_resolve_missing_value(self, test_client, project_id):
        layer = test_client.post(f"/projects/{project_id}/layers", json={
            "element": {"type": "dataBinding", "payload": {"dataType": "planName", "prefix": "Plan: "}},
        }).json()
        data = test_client.post(f"/projects/{project_id}/resolve", json={"snapshot": {}}).json()
        assert data["values"][layer["id"]] == "—"

    def test_resolve_placeholder(self, test_client, project_id):
        """Without a snapshot, placeholder data is used."""
        layer = test_client.post(f"/projects/{project_id}/layers", json={
            "element": {"type": "dataBinding", "payload": {"dataType": "verseReference"}},
        }).json()
        data = test_client.post(f"/projects/{project_id}/resolve", json={}).json()
        assert data["values"][layer["id"]] == "John 3:16"


class TestPresetsEndpoint:
    """Tests for the catalog endpoints."""

    def test_gradients(self, test_client):
        data = test_client.get("/presets/gradients").json()
        assert len(data["presets"]) == 12
        assert data["presets"][0]["fill"]["stops"][0]["id"] == "sunrise_gold-0"

        ocean = test_client.get("/presets/gradients", params={"category": "Ocean"}).json()
        assert [p["id"] for p in ocean["presets"]] == ["ocean_deep", "ocean_tropical"]

    def test_gradient_lookup(self, test_client):
        assert test_client.get("/presets/gradients/dark_midnight").json()["name"] == "Midnight"
        assert test_client.get("/presets/gradients/missing").status_code == 404

    def test_verse_cards(self, test_client):
        data = test_client.get("/presets/verse-cards", params={"free_only": True}).json()
        assert len(data["templates"]) == 6

    def test_templates(self, test_client):
        data = test_client.get("/templates", params={"category": "Featured"}).json()
        assert [t["id"] for t in data["templates"]] == ["classic_white", "midnight_gold", "aurora_glow"]
        assert "project" not in data["templates"][0]

        searched = test_client.get("/templates", params={"q": "oled"}).json()
        assert [t["id"] for t in searched["templates"]] == ["true_dark"]

    def test_template_detail(self, test_client):
        data = test_client.get("/templates/serif_classic").json()
        assert data["project"]["id"] == "template-serif_classic"
        assert test_client.get("/templates/missing").status_code == 404


class TestEndpointDispatch:
    """Tests for how project endpoints are scheduled."""

    def test_project_endpoints_run_in_threadpool(self):
        """Endpoints that touch the library are plain functions, not coroutines."""
        from widgetforge.api.projects import router

        for route in router.routes:
            assert not inspect.iscoroutinefunction(route.endpoint), route.path

    def test_concurrent_layer_adds(self, test_client, project_id):
        """Parallel adds each get a distinct zIndex."""
        with ThreadPoolExecutor(max_workers=4) as pool:
            layers = list(pool.map(lambda i: _add_text(test_client, project_id, f"L{i}"), range(8)))
        assert sorted(layer["zIndex"] for layer in layers) == list(range(8))
