"""Tests for GraphQL mutations: happy paths, error codes and transactions."""

from __future__ import annotations

import pytest

from tests.graphql.conftest import (
    ADD_AUTHOR_MUTATION,
    ADD_BOOK_MUTATION,
    BOOKS_QUERY,
    DELETE_AUTHOR_MUTATION,
    DELETE_BOOK_MUTATION,
    error_codes,
)

pytestmark = pytest.mark.usefixtures("seeded")

UPDATE_BOOK_MUTATION = """
    mutation UpdateBook(
        $title: String!
        $newTitle: String
        $newPublicationDate: String
        $newCategories: [String!]
    ) {
        updateBook(
            title: $title
            newTitle: $newTitle
            newPublicationDate: $newPublicationDate
            newCategories: $newCategories
        ) {
            id
            title
            publicationDate
            categories
        }
    }
"""


def _book_variables(**overrides: object) -> dict[str, object]:
    variables: dict[str, object] = {
        "title": "Moon Palace",
        "authorId": 2,
        "publicationDate": "1989-03-01",
        "categories": ["Fiction", "Coming of age"],
    }
    variables.update(overrides)
    return variables


async def _titles(gql) -> list[str]:
    result = await gql(BOOKS_QUERY)
    return [book["title"] for book in result.data["books"]]


class TestAddBook:
    async def test_creates_book_for_existing_author(self, gql) -> None:
        result = await gql(ADD_BOOK_MUTATION, _book_variables())

        assert result.errors is None
        assert result.data["addBook"] == {
            "id": 7,
            "title": "Moon Palace",
            "publicationDate": "1989-03-01",
            "categories": ["Fiction", "Coming of age"],
            "author": {"name": "Paul Auster"},
        }
        assert (await _titles(gql))[-1] == "Moon Palace"

    async def test_empty_categories_allowed(self, gql) -> None:
        result = await gql(ADD_BOOK_MUTATION, _book_variables(categories=[]))

        assert result.errors is None
        assert result.data["addBook"]["categories"] == []

    async def test_missing_author_writes_nothing(self, gql) -> None:
        result = await gql(ADD_BOOK_MUTATION, _book_variables(authorId=999))

        assert result.data == {"addBook": None}
        assert result.errors[0].message == "Author not found"
        assert error_codes(result) == ["NOT_FOUND"]
        assert "Moon Palace" not in await _titles(gql)

    @pytest.mark.parametrize("publication_date", ["yesterday", "1989-13-01", ""])
    async def test_rejects_invalid_date(self, gql, publication_date: str) -> None:
        result = await gql(ADD_BOOK_MUTATION, _book_variables(publicationDate=publication_date))

        assert error_codes(result) == ["VALIDATION_ERROR"]
        assert "publicationDate" in result.errors[0].message

    async def test_rejects_blank_title(self, gql) -> None:
        result = await gql(ADD_BOOK_MUTATION, _book_variables(title="   "))

        assert error_codes(result) == ["VALIDATION_ERROR"]
        assert result.errors[0].message.startswith("title:")

    async def test_rejects_duplicate_title(self, gql) -> None:
        result = await gql(ADD_BOOK_MUTATION, _book_variables(title="1984"))

        assert error_codes(result) == ["CONFLICT"]
        assert (await _titles(gql)).count("1984") == 1


class TestAddAuthor:
    async def test_creates_author(self, gql) -> None:
        result = await gql(ADD_AUTHOR_MUTATION, {"name": "  Ursula K. Le Guin "})

        assert result.errors is None
        assert result.data["addAuthor"] == {"id": 7, "name": "Ursula K. Le Guin"}

    async def test_duplicate_name_is_conflict(self, gql) -> None:
        result = await gql(ADD_AUTHOR_MUTATION, {"name": "George Orwell"})

        assert error_codes(result) == ["CONFLICT"]

    async def test_failed_mutation_keeps_earlier_ones(self, gql) -> None:
        document = """
            mutation {
                first: addAuthor(name: "Octavia E. Butler") { id }
                second: addAuthor(name: "George Orwell") { id }
            }
        """
        result = await gql(document)

        assert result.data["first"] == {"id": 7}
        assert result.data["second"] is None
        assert error_codes(result) == ["CONFLICT"]
        assert result.errors[0].path == ["second"]

        again = await gql(ADD_AUTHOR_MUTATION, {"name": "Octavia E. Butler"})
        assert error_codes(again) == ["CONFLICT"]


class TestUpdateBook:
    async def test_only_provided_fields_change(self, gql) -> None:
        result = await gql(UPDATE_BOOK_MUTATION, {"title": "1984", "newTitle": "Nineteen Eighty-Four"})

        assert result.errors is None
        assert result.data["updateBook"] == {
            "id": 4,
            "title": "Nineteen Eighty-Four",
            "publicationDate": "1949-06-08",
            "categories": ["Dystopian", "Political Fiction"],
        }

    async def test_updates_date_and_categories(self, gql) -> None:
        result = await gql(
            UPDATE_BOOK_MUTATION,
            {
                "title": "The Bell Jar",
                "newPublicationDate": "1963-01-15",
                "newCategories": ["Classics"],
            },
        )

        assert result.errors is None
        book = result.data["updateBook"]
        assert book["title"] == "The Bell Jar"
        assert book["publicationDate"] == "1963-01-15"
        assert book["categories"] == ["Classics"]

    async def test_empty_categories_clear_them(self, gql) -> None:
        result = await gql(UPDATE_BOOK_MUTATION, {"title": "1984", "newCategories": []})

        assert result.errors is None
        assert result.data["updateBook"]["categories"] == []

    async def test_no_changes_returns_book(self, gql) -> None:
        result = await gql(UPDATE_BOOK_MUTATION, {"title": "1984"})

        assert result.errors is None
        assert result.data["updateBook"]["title"] == "1984"

    async def test_unknown_title_is_not_found(self, gql) -> None:
        result = await gql(UPDATE_BOOK_MUTATION, {"title": "Ulysses", "newTitle": "Odyssey"})

        assert result.errors[0].message == "Book not found"
        assert error_codes(result) == ["NOT_FOUND"]

    @pytest.mark.parametrize(
        "variables",
        [
            {"newTitle": None},
            {"newTitle": ""},
            {"newPublicationDate": None},
            {"newCategories": None},
        ],
    )
    async def test_explicit_null_or_empty_title_is_rejected(self, gql, variables: dict) -> None:
        result = await gql(UPDATE_BOOK_MUTATION, {"title": "1984", **variables})

        assert error_codes(result) == ["VALIDATION_ERROR"]
        assert "1984" in await _titles(gql)

    async def test_renaming_to_existing_title_is_conflict(self, gql) -> None:
        result = await gql(UPDATE_BOOK_MUTATION, {"title": "1984", "newTitle": "The Bell Jar"})

        assert error_codes(result) == ["CONFLICT"]


class TestDeleteBook:
    async def test_returns_deleted_book(self, gql) -> None:
        result = await gql(DELETE_BOOK_MUTATION, {"title": "City of Glass"})

        assert result.errors is None
        assert result.data["deleteBook"] == {
            "id": 2,
            "title": "City of Glass",
            "author": {"name": "Paul Auster"},
        }
        assert "City of Glass" not in await _titles(gql)

    async def test_second_delete_is_not_found(self, gql) -> None:
        await gql(DELETE_BOOK_MUTATION, {"title": "City of Glass"})
        result = await gql(DELETE_BOOK_MUTATION, {"title": "City of Glass"})

        assert error_codes(result) == ["NOT_FOUND"]


class TestDeleteAuthor:
    async def test_restrict_policy_refuses_author_with_books(self, gql) -> None:
        result = await gql(DELETE_AUTHOR_MUTATION, {"id": 4})

        assert error_codes(result) == ["CONFLICT"]
        assert "1984" in await _titles(gql)

    async def test_deletes_author_without_books(self, gql) -> None:
        await gql(DELETE_BOOK_MUTATION, {"title": "1984"})

        result = await gql(DELETE_AUTHOR_MUTATION, {"id": 4})

        assert result.errors is None
        assert result.data["deleteAuthor"] == {"id": 4, "name": "George Orwell"}

    async def test_unknown_author_is_not_found(self, gql) -> None:
        result = await gql(DELETE_AUTHOR_MUTATION, {"id": 999})

        assert error_codes(result) == ["NOT_FOUND"]


class TestMutationDocuments:
    async def test_mutations_after_a_rolled_back_one_read_fresh_data(self, gql) -> None:
        document = """
            mutation {
                added: addBook(
                    title: "Moon Palace"
                    authorId: 2
                    publicationDate: "1989-03-01"
                    categories: ["Fiction"]
                ) { author { name books { title } } }
                clash: addAuthor(name: "Kate Chopin") { id }
                renamed: updateBook(title: "Moon Palace", newTitle: "Moon Palace (Revised)") {
                    categories
                    author { name books { title categories } }
                }
            }
        """
        result = await gql(document)

        assert error_codes(result) == ["CONFLICT"]
        assert result.errors[0].path == ["clash"]
        assert result.data["added"] == {
            "author": {"name": "Paul Auster", "books": [{"title": "City of Glass"}, {"title": "Moon Palace"}]},
        }
        assert result.data["clash"] is None
        assert result.data["renamed"] == {
            "categories": ["Fiction"],
            "author": {
                "name": "Paul Auster",
                "books": [
                    {"title": "City of Glass", "categories": ["Fiction", "Mystery"]},
                    {"title": "Moon Palace (Revised)", "categories": ["Fiction"]},
                ],
            },
        }

    async def test_failed_update_leaves_later_deletes_working(self, gql) -> None:
        document = """
            mutation {
                before: deleteBook(title: "City of Glass") { title author { name } }
                missing: updateBook(title: "Ulysses", newTitle: "Odyssey") { id }
                after: deleteBook(title: "The Bell Jar") { title author { name } }
            }
        """
        result = await gql(document)

        assert error_codes(result) == ["NOT_FOUND"]
        assert result.data == {
            "before": {"title": "City of Glass", "author": {"name": "Paul Auster"}},
            "missing": None,
            "after": {"title": "The Bell Jar", "author": {"name": "Sylvia Plath"}},
        }
        titles = await _titles(gql)
        assert "City of Glass" not in titles
        assert "The Bell Jar" not in titles
