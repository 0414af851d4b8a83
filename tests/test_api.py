"""Integration tests for the quote REST endpoints."""

import pytest

BASE = "/api/v1/quotes"


def create(client, **payload):
    response = client.post(f"{BASE}/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
class TestCrudEndpoints:
    def test_health(self, client) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["quotes"] == 0

    def test_create_quote(self, client) -> None:
        data = create(client, title="Test Item", description="Test Description",
                      category="Test", tags=[" Wisdom ", "wisdom", "Life"])
        assert data["id"] == 1
        assert data["title"] == "Test Item"
        assert data["category"] == "Test"
        assert data["status"] == "ACTIVE"
        assert data["tags"] == ["life", "wisdom"]
        assert "created_at" in data and "updated_at" in data

    @pytest.mark.parametrize("payload", [
        {"title": "", "description": "Description"},
        {"title": "   "},
        {"description": "no title"},
        {"title": "x" * 101},
        {"title": "x", "status": 5},
        {"title": "x", "tags": [1, 2]},
        {"title": "x", "tags": 7},
        {"title": "x", "tags": "single"},
    ])
    def test_create_invalid_quote(self, client, payload) -> None:
        response = client.post(f"{BASE}/", json=payload)
        assert response.status_code == 400
        assert client.get(f"{BASE}/").json() == []

    def test_create_with_bad_status_is_400(self, client) -> None:
        response = client.post(f"{BASE}/", json={"title": "T", "status": "DELETED"})
        assert response.status_code == 400

    def test_create_accepts_lowercase_status(self, client) -> None:
        data = create(client, title="T", status="inactive")
        assert data["status"] == "INACTIVE"

    def test_list_quotes(self, client) -> None:
        create(client, title="Item 1")
        create(client, title="Item 2")
        response = client.get(f"{BASE}/")
        assert response.status_code == 200
        assert [q["title"] for q in response.json()] == ["Item 1", "Item 2"]

    def test_get_quote(self, client) -> None:
        created = create(client, title="Test Item")
        response = client.get(f"{BASE}/{created['id']}")
        assert response.status_code == 200
        assert response.json()["title"] == "Test Item"

    def test_get_missing_quote(self, client) -> None:
        assert client.get(f"{BASE}/999").status_code == 404

    def test_update_quote(self, client) -> None:
        created = create(client, title="Original Title", description="Original", category="Work")
        response = client.put(f"{BASE}/{created['id']}",
                              json={"title": "Updated Title", "description": "Updated"})
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["title"] == "Updated Title"
        assert data["description"] == "Updated"
        assert data["category"] == "Work"
        assert data["created_at"] == created["created_at"]

    def test_update_missing_quote(self, client) -> None:
        response = client.put(f"{BASE}/999", json={"title": "x"})
        assert response.status_code == 404

    def test_update_invalid_title(self, client) -> None:
        created = create(client, title="Keep")
        response = client.put(f"{BASE}/{created['id']}", json={"title": ""})
        assert response.status_code == 400
        assert client.get(f"{BASE}/{created['id']}").json()["title"] == "Keep"

    @pytest.mark.parametrize("payload", [
        {"status": 3},
        {"tags": [1]},
        {"tags": 7},
        {"title": 42},
    ])
    def test_update_with_wrong_types_is_400(self, client, payload) -> None:
        created = create(client, title="Keep", tags=["a"])
        response = client.put(f"{BASE}/{created['id']}", json=payload)
        assert response.status_code == 400
        stored = client.get(f"{BASE}/{created['id']}").json()
        assert stored["title"] == "Keep"
        assert stored["tags"] == ["a"]

    def test_update_null_status_and_tags_are_kept(self, client) -> None:
        created = create(client, title="Keep", status="INACTIVE", tags=["a", "b"])
        response = client.put(f"{BASE}/{created['id']}",
                              json={"status": None, "tags": None, "description": None})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "INACTIVE"
        assert data["tags"] == ["a", "b"]
        assert data["description"] is None

    def test_delete_quote(self, client) -> None:
        created = create(client, title="Doomed")
        response = client.delete(f"{BASE}/{created['id']}")
        assert response.status_code == 204
        assert client.get(f"{BASE}/{created['id']}").status_code == 404

    def test_delete_missing_quote(self, client) -> None:
        assert client.delete(f"{BASE}/999").status_code == 404


@pytest.mark.integration
class TestQueryEndpoints:
    @pytest.fixture(autouse=True)
    def _populate(self, client) -> None:
        create(client, title="Active Item", category="Work", tags=["urgent", "focus"],
               author="Ada", source="Notes", publisher="Self")
        create(client, title="Inactive Item", category="work", status="INACTIVE",
               tags=["urgent"])
        create(client, title="Personal Item", description="weekend", category="Personal",
               tags=["home"])

    def test_by_status(self, client) -> None:
        response = client.get(f"{BASE}/status/ACTIVE")
        assert response.status_code == 200
        assert [q["title"] for q in response.json()] == ["Active Item", "Personal Item"]
        assert len(client.get(f"{BASE}/status/inactive").json()) == 1

    def test_by_unknown_status(self, client) -> None:
        assert client.get(f"{BASE}/status/GONE").status_code == 400

    def test_by_category(self, client) -> None:
        assert len(client.get(f"{BASE}/category/WORK").json()) == 2

    def test_by_tag_author_source_publisher(self, client) -> None:
        assert len(client.get(f"{BASE}/tag/urg").json()) == 2
        assert len(client.get(f"{BASE}/author/ada").json()) == 1
        assert len(client.get(f"{BASE}/source/notes").json()) == 1
        assert len(client.get(f"{BASE}/publisher/SELF").json()) == 1

    def test_grouped(self, client) -> None:
        response = client.get(f"{BASE}/grouped")
        assert response.status_code == 200
        grouped = response.json()
        # Grouping uses the category as stored, so "Work" and "work" differ.
        assert set(grouped) == {"Work", "work", "Personal"}
        assert sum(len(v) for v in grouped.values()) == 3

    def test_tags(self, client) -> None:
        assert client.get(f"{BASE}/tags").json() == ["focus", "home", "urgent"]

    def test_popular_tags(self, client) -> None:
        response = client.get(f"{BASE}/tags/popular", params={"limit": 1})
        assert response.json() == ["urgent"]

    def test_popular_tags_large_limit(self, client) -> None:
        response = client.get(f"{BASE}/tags/popular", params={"limit": 5000})
        assert response.status_code == 200
        assert response.json() == ["urgent", "focus", "home"]

    def test_all_and_any_tags(self, client) -> None:
        all_tags = client.get(f"{BASE}/tags/all", params=[("tags", "urgent"), ("tags", "focus")])
        assert [q["title"] for q in all_tags.json()] == ["Active Item"]
        any_tag = client.get(f"{BASE}/tags/any", params=[("tags", "focus"), ("tags", "home")])
        assert [q["title"] for q in any_tag.json()] == ["Active Item", "Personal Item"]

    def test_stats(self, client) -> None:
        response = client.get(f"{BASE}/stats/status")
        assert response.json() == {"ACTIVE": 2, "INACTIVE": 1, "ARCHIVED": 0}

    def test_search(self, client) -> None:
        response = client.get(f"{BASE}/search", params={"query": "WEEKEND"})
        assert response.status_code == 200
        assert [q["title"] for q in response.json()] == ["Personal Item"]

    def test_search_requires_query(self, client) -> None:
        assert client.get(f"{BASE}/search").status_code == 400

    def test_archive(self, client) -> None:
        assert client.post(f"{BASE}/archive").json() == {"archived": 1}
        assert client.post(f"{BASE}/archive").json() == {"archived": 0}
        assert client.get(f"{BASE}/stats/status").json()["ARCHIVED"] == 1
