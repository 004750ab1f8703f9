"""Tests for the quote HTTP endpoints."""

import pytest


@pytest.fixture
def author(client):
    response = client.post("/authors", json={"name": "Seneca", "bio": "Stoic"})
    assert response.status_code == 201
    return response.json()


def create(client, author_id, content="We suffer more in imagination", tags=None):
    response = client.post(
        "/quotes",
        json={"content": content, "author_id": author_id, "tags": tags or []},
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateQuote:
    def test_created(self, client, author):
        response = client.post(
            "/quotes",
            json={
                "content": "Luck is what happens",
                "author_id": author["id"],
                "source": "Letters",
                "tags": ["luck", "preparation"],
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["author_id"] == author["id"]
        assert data["tags"] == ["luck", "preparation"]
        assert data["source"] == "Letters"

    def test_missing_author(self, client):
        response = client.post("/quotes", json={"content": "q", "author_id": 42})

        assert response.status_code == 404
        assert response.json()["code"] == "AUTHOR_NOT_FOUND"
        assert client.get("/quotes").json()["meta"]["total"] == 0

    def test_empty_content(self, client, author):
        response = client.post(
            "/quotes", json={"content": "", "author_id": author["id"]}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestReadQuotes:
    def test_get_quote_includes_author(self, client, author):
        created = create(client, author["id"])

        response = client.get(f"/quotes/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["author_name"] == "Seneca"
        assert data["author_bio"] == "Stoic"

    def test_get_missing_quote(self, client):
        response = client.get("/quotes/3")

        assert response.status_code == 404
        assert response.json()["code"] == "QUOTE_NOT_FOUND"

    def test_list(self, client, author):
        for i in range(3):
            create(client, author["id"], content=f"q{i}")

        response = client.get("/quotes", params={"limit": 2})

        data = response.json()
        assert [q["content"] for q in data["data"]] == ["q0", "q1"]
        assert data["meta"] == {"total": 3, "limit": 2, "offset": 0}

    def test_list_by_author(self, client, author):
        other = client.post("/authors", json={"name": "Other"}).json()
        create(client, author["id"], content="mine")
        create(client, other["id"], content="theirs")

        response = client.get("/quotes", params={"author_id": author["id"]})

        assert response.status_code == 200
        data = response.json()
        assert [q["content"] for q in data["data"]] == ["mine"]
        assert data["meta"]["total"] == 1

    def test_list_by_missing_author(self, client):
        response = client.get("/quotes", params={"author_id": 77})

        assert response.status_code == 404
        assert response.json()["code"] == "AUTHOR_NOT_FOUND"

    @pytest.mark.parametrize("raw", ["abc", "1.5", "3x"])
    def test_list_by_invalid_author_id(self, client, raw):
        response = client.get("/quotes", params={"author_id": raw})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_AUTHOR_ID"

    @pytest.mark.parametrize("raw", ["0", "-1", "99999999999999999999"])
    def test_list_by_numeric_unknown_author_id(self, client, raw):
        response = client.get("/quotes", params={"author_id": raw})

        assert response.status_code == 404
        assert response.json()["code"] == "AUTHOR_NOT_FOUND"

    def test_empty_author_id_lists_everything(self, client, author):
        other = client.post("/authors", json={"name": "Other"}).json()
        create(client, author["id"], content="mine")
        create(client, other["id"], content="theirs")

        response = client.get("/quotes?author_id=")

        assert response.status_code == 200
        assert response.json()["meta"]["total"] == 2

    def test_huge_offset_falls_back(self, client, author):
        create(client, author["id"], content="mine")

        response = client.get("/quotes", params={"offset": "9" * 20})

        assert response.status_code == 200
        assert response.json()["meta"]["offset"] == 0
        assert len(response.json()["data"]) == 1

    def test_search(self, client, author):
        create(client, author["id"], content="The obstacle is the way")
        create(client, author["id"], content="Memento mori")

        response = client.get("/quotes/search", params={"q": "WAY"})

        data = response.json()
        assert [q["content"] for q in data["data"]] == ["The obstacle is the way"]
        assert data["meta"]["total"] == 1

    def test_search_requires_query(self, client):
        response = client.get("/quotes/search")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_random_empty(self, client):
        response = client.get("/quotes/random")

        assert response.status_code == 404
        assert response.json()["code"] == "NO_QUOTES_FOUND"

    def test_random(self, client, author):
        ids = {create(client, author["id"], content=f"q{i}")["id"] for i in range(3)}

        response = client.get("/quotes/random")

        assert response.status_code == 200
        assert response.json()["id"] in ids


class TestUpdateQuote:
    def test_update(self, client, author):
        created = create(client, author["id"])

        response = client.put(
            f"/quotes/{created['id']}",
            json={"content": "Edited", "author_id": author["id"], "tags": ["t"]},
        )

        assert response.status_code == 200
        assert response.json()["content"] == "Edited"
        assert response.json()["tags"] == ["t"]

    def test_update_to_missing_author(self, client, author):
        created = create(client, author["id"])

        response = client.put(
            f"/quotes/{created['id']}",
            json={"content": "Edited", "author_id": 404},
        )

        assert response.status_code == 404
        assert response.json()["code"] == "AUTHOR_NOT_FOUND"
        stored = client.get(f"/quotes/{created['id']}").json()
        assert stored["author_id"] == author["id"]


class TestDeleteQuote:
    def test_delete(self, client, author):
        created = create(client, author["id"])

        response = client.delete(f"/quotes/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/quotes/{created['id']}").status_code == 404

    def test_delete_missing(self, client):
        response = client.delete("/quotes/1")

        assert response.status_code == 404
        assert response.json()["code"] == "QUOTE_NOT_FOUND"
