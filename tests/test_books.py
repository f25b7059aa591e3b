"""
Tests for Books Endpoints

Tests:
- POST /books: create, validation, duplicate policy
- GET /books: pagination, filtering, ordering
- GET /books/{book_id}: detail with paginated reviews, invalid vs unknown id
"""

from fastapi import status
from fastapi.testclient import TestClient

from bookreviews.config import Settings
from bookreviews.main import create_app
from bookreviews.utils.identifiers import new_id


# =============================================================================
# Create Book
# =============================================================================


class TestCreateBook:
    """Tests for POST /books"""

    def test_create_book_success(self, client: TestClient, alice: dict):
        response = client.post(
            "/books",
            json={
                "title": "1984",
                "author": "George Orwell",
                "genre": "Dystopian Fiction",
                "description": "A dystopian novel",
                "publishedYear": 1949,
            },
            headers=alice["headers"],
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["message"] == "Book added successfully"
        book = data["book"]
        assert book["title"] == "1984"
        assert book["author"] == "George Orwell"
        assert book["genre"] == "Dystopian Fiction"
        assert book["description"] == "A dystopian novel"
        assert book["publishedYear"] == 1949
        assert book["averageRating"] == 0
        assert book["totalReviews"] == 0
        assert len(book["id"]) == 32
        assert "createdAt" in book

    def test_create_book_minimal(self, client: TestClient, alice: dict):
        response = client.post(
            "/books",
            json={"title": "Dune", "author": "Frank Herbert", "genre": "Science Fiction"},
            headers=alice["headers"],
        )

        assert response.status_code == status.HTTP_201_CREATED
        book = response.json()["book"]
        assert book["description"] == ""
        assert book["publishedYear"] is None

    def test_create_book_strips_whitespace(self, client: TestClient, alice: dict):
        response = client.post(
            "/books",
            json={"title": "  Dune ", "author": " Frank Herbert", "genre": "Sci-Fi "},
            headers=alice["headers"],
        )

        assert response.json()["book"]["title"] == "Dune"

    def test_create_book_missing_genre(self, client: TestClient, alice: dict):
        response = client.post(
            "/books",
            json={"title": "Dune", "author": "Frank Herbert"},
            headers=alice["headers"],
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Title, author, and genre are required"}

    def test_create_book_blank_title(self, client: TestClient, alice: dict):
        response = client.post(
            "/books",
            json={"title": "   ", "author": "Frank Herbert", "genre": "Science Fiction"},
            headers=alice["headers"],
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Title, author, and genre are required"

    def test_create_book_requires_auth(self, client: TestClient):
        response = client.post(
            "/books",
            json={"title": "Dune", "author": "Frank Herbert", "genre": "Science Fiction"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_duplicates_allowed_by_default(self, create_book):
        first = create_book()
        second = create_book()

        assert first["id"] != second["id"]

    def test_duplicates_rejected_when_enabled(self, database):
        settings = Settings(reject_duplicate_books=True)
        app = create_app(settings=settings, database=database)

        with TestClient(app) as client:
            signup = client.post(
                "/signup",
                json={"username": "carol", "email": "carol@example.com", "password": "password123"},
            )
            headers = {"Authorization": f"Bearer {signup.json()['token']}"}
            payload = {"title": "Animal Farm", "author": "George Orwell", "genre": "Fiction"}

            first = client.post("/books", json=payload, headers=headers)
            second = client.post(
                "/books",
                json={**payload, "title": "ANIMAL FARM", "author": "george orwell"},
                headers=headers,
            )

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_409_CONFLICT
        assert second.json() == {"error": "Book with this title and author already exists"}


# =============================================================================
# List Books
# =============================================================================


class TestListBooks:
    """Tests for GET /books"""

    def test_list_books_empty(self, client: TestClient):
        response = client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["books"] == []
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 0,
            "totalBooks": 0,
            "hasNext": False,
            "hasPrev": False,
        }

    def test_list_books_newest_first(self, client: TestClient, create_book):
        older = create_book(title="Animal Farm")
        newer = create_book(title="1984")

        response = client.get("/books")

        ids = [book["id"] for book in response.json()["books"]]
        assert ids == [newer["id"], older["id"]]

    def test_second_page(self, client: TestClient, create_book):
        older = create_book(title="Animal Farm")
        create_book(title="1984")

        response = client.get("/books?page=2&limit=1")

        data = response.json()
        assert [book["id"] for book in data["books"]] == [older["id"]]
        assert data["pagination"] == {
            "currentPage": 2,
            "totalPages": 2,
            "totalBooks": 2,
            "hasNext": False,
            "hasPrev": True,
        }

    def test_page_past_the_end_is_empty(self, client: TestClient, create_book):
        create_book()

        response = client.get("/books?page=5")

        data = response.json()
        assert data["books"] == []
        assert data["pagination"]["currentPage"] == 5
        assert data["pagination"]["hasNext"] is False

    def test_malformed_pagination_falls_back(self, client: TestClient, create_book):
        create_book()

        response = client.get("/books?page=abc&limit=0")

        assert response.status_code == status.HTTP_200_OK
        pagination = response.json()["pagination"]
        assert pagination["currentPage"] == 1
        assert pagination["totalPages"] == 1

    def test_huge_page_number_falls_back(self, client: TestClient, create_book):
        book = create_book()

        response = client.get("/books?page=99999999999999999999&limit=10")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["pagination"]["currentPage"] == 1
        assert [b["id"] for b in data["books"]] == [book["id"]]

    def test_huge_limit_falls_back(self, client: TestClient, create_book):
        create_book()

        response = client.get("/books?limit=99999999999999999999")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["pagination"]["totalPages"] == 1

    def test_filter_by_author(self, client: TestClient, create_book):
        create_book(title="1984", author="George Orwell")
        create_book(title="Animal Farm", author="George Orwell")
        create_book(title="Dune", author="Frank Herbert", genre="Science Fiction")

        response = client.get("/books?author=orwell")

        data = response.json()
        assert data["pagination"]["totalBooks"] == 2
        assert {book["title"] for book in data["books"]} == {"1984", "Animal Farm"}

    def test_filter_by_genre(self, client: TestClient, create_book):
        create_book(title="1984", genre="Dystopian Fiction")
        create_book(title="Dune", author="Frank Herbert", genre="Science Fiction")
        create_book(title="Emma", author="Jane Austen", genre="Romance")

        response = client.get("/books?genre=FICTION")

        assert {book["title"] for book in response.json()["books"]} == {"1984", "Dune"}

    def test_filters_combine(self, client: TestClient, create_book):
        create_book(title="1984", author="George Orwell", genre="Dystopian Fiction")
        create_book(title="Homage to Catalonia", author="George Orwell", genre="Memoir")

        response = client.get("/books?author=orwell&genre=memoir")

        assert [book["title"] for book in response.json()["books"]] == ["Homage to Catalonia"]

    def test_filter_is_literal_not_pattern(self, client: TestClient, create_book):
        create_book(title="1984", author="George Orwell")

        response = client.get("/books", params={"author": "%"})

        assert response.json()["books"] == []


# =============================================================================
# Get Book Detail
# =============================================================================


class TestGetBook:
    """Tests for GET /books/{book_id}"""

    def test_get_book_detail(self, client: TestClient, sample_book: dict, alice: dict):
        response = client.get(f"/books/{sample_book['id']}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["book"]["id"] == sample_book["id"]
        assert data["book"]["title"] == "1984"
        assert data["book"]["addedBy"] == alice["id"]
        assert data["reviews"] == []
        assert data["reviewsPagination"] == {
            "currentPage": 1,
            "totalPages": 0,
            "totalReviews": 0,
            "hasNext": False,
            "hasPrev": False,
        }

    def test_invalid_book_id(self, client: TestClient):
        response = client.get("/books/not-an-id")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid book ID"}

    def test_unknown_book_id(self, client: TestClient):
        response = client.get(f"/books/{new_id()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Book not found"}

    def test_reviews_are_paginated(self, client: TestClient, sample_book: dict, register):
        for i in range(7):
            reviewer = register(f"reader{i}")
            client.post(
                f"/books/{sample_book['id']}/reviews",
                json={"rating": 1 + i % 5, "comment": f"review {i}"},
                headers=reviewer["headers"],
            )

        first = client.get(f"/books/{sample_book['id']}").json()
        second = client.get(f"/books/{sample_book['id']}?page=2").json()

        assert [review["comment"] for review in first["reviews"]] == [
            f"review {i}" for i in range(5)
        ]
        assert [review["comment"] for review in second["reviews"]] == ["review 5", "review 6"]
        assert first["reviewsPagination"] == {
            "currentPage": 1,
            "totalPages": 2,
            "totalReviews": 7,
            "hasNext": True,
            "hasPrev": False,
        }
        assert second["reviews"][0]["username"] == "reader5"
        assert second["reviewsPagination"]["hasPrev"] is True
