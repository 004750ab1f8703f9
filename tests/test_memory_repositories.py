"""
Tests for the in-memory repositories.

They must honour the same contracts as the SQL repositories, including
the foreign key rules of the schema.
"""

import pytest

from quotes_api.exceptions import ConflictError, NotFoundError
from quotes_api.protocols import (
    AuthorRepositoryProtocol,
    QuoteRepositoryProtocol,
)
from quotes_api.schemas.author import CreateAuthorInput, UpdateAuthorInput
from quotes_api.schemas.pagination import ListParams
from quotes_api.schemas.quote import CreateQuoteInput, UpdateQuoteInput


def test_repositories_satisfy_protocols(author_repo, quote_repo):
    assert isinstance(author_repo, AuthorRepositoryProtocol)
    assert isinstance(quote_repo, QuoteRepositoryProtocol)


class TestInMemoryAuthorRepository:
    @pytest.mark.asyncio
    async def test_create_assigns_sequential_ids(self, author_repo):
        first = await author_repo.create(CreateAuthorInput(name="A"))
        second = await author_repo.create(CreateAuthorInput(name="B"))

        assert (first.id, second.id) == (1, 2)
        assert first.created_at == first.updated_at

    @pytest.mark.asyncio
    async def test_returned_entities_are_copies(self, author_repo):
        created = await author_repo.create(CreateAuthorInput(name="A"))
        created.name = "mutated"

        assert (await author_repo.get_by_id(created.id)).name == "A"

    @pytest.mark.asyncio
    async def test_get_by_name_is_exact(self, author_repo):
        await author_repo.create(CreateAuthorInput(name="Mark Twain"))

        assert await author_repo.get_by_name("Mark") is None
        assert await author_repo.get_by_name("mark twain") is None
        found = await author_repo.get_by_name("Mark Twain")
        assert found is not None and found.id == 1

    @pytest.mark.asyncio
    async def test_update_bumps_updated_at(self, author_repo):
        created = await author_repo.create(CreateAuthorInput(name="A"))

        updated = await author_repo.update(
            created.id, UpdateAuthorInput(name="B", bio="bio")
        )

        assert updated.name == "B"
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at

    @pytest.mark.asyncio
    async def test_missing_ids(self, author_repo):
        with pytest.raises(NotFoundError):
            await author_repo.get_by_id(1)
        with pytest.raises(NotFoundError):
            await author_repo.update(1, UpdateAuthorInput(name="x"))
        with pytest.raises(NotFoundError):
            await author_repo.delete(1)

    @pytest.mark.asyncio
    async def test_delete_restricted_by_quotes(self, author_repo, quote_repo):
        author = await author_repo.create(CreateAuthorInput(name="A"))
        await quote_repo.create(CreateQuoteInput(content="q", author_id=author.id))

        with pytest.raises(ConflictError):
            await author_repo.delete(author.id)

        assert await author_repo.count() == 1

    @pytest.mark.asyncio
    async def test_search_and_count_search(self, author_repo):
        for name in ["Ann", "Joanna", "Bob", "ANNE"]:
            await author_repo.create(CreateAuthorInput(name=name))

        page = await author_repo.search("ann", ListParams(limit=2, offset=1))

        assert [a.name for a in page] == ["Joanna", "ANNE"]
        assert await author_repo.count_search("ann") == 3
        assert await author_repo.count_search("zzz") == 0


class TestInMemoryQuoteRepository:
    @pytest.mark.asyncio
    async def test_create_requires_author(self, quote_repo):
        with pytest.raises(NotFoundError) as exc_info:
            await quote_repo.create(CreateQuoteInput(content="q", author_id=1))

        assert exc_info.value.code == "AUTHOR_NOT_FOUND"
        assert await quote_repo.count() == 0

    @pytest.mark.asyncio
    async def test_reads_join_author(self, author_repo, quote_repo):
        author = await author_repo.create(
            CreateAuthorInput(name="Seneca", bio="Stoic")
        )
        quote = await quote_repo.create(
            CreateQuoteInput(content="q", author_id=author.id, tags=["t"])
        )

        fetched = await quote_repo.get_by_id(quote.id)

        assert fetched.author_name == "Seneca"
        assert fetched.author_bio == "Stoic"
        assert fetched.tags == ["t"]

    @pytest.mark.asyncio
    async def test_author_rename_shows_in_quote_reads(
        self, author_repo, quote_repo
    ):
        author = await author_repo.create(CreateAuthorInput(name="Old"))
        quote = await quote_repo.create(
            CreateQuoteInput(content="q", author_id=author.id)
        )
        await author_repo.update(author.id, UpdateAuthorInput(name="New"))

        assert (await quote_repo.get_by_id(quote.id)).author_name == "New"

    @pytest.mark.asyncio
    async def test_update_requires_author(self, author_repo, quote_repo):
        author = await author_repo.create(CreateAuthorInput(name="A"))
        quote = await quote_repo.create(
            CreateQuoteInput(content="q", author_id=author.id)
        )

        with pytest.raises(NotFoundError):
            await quote_repo.update(
                quote.id, UpdateQuoteInput(content="x", author_id=50)
            )

        assert (await quote_repo.get_by_id(quote.id)).content == "q"

    @pytest.mark.asyncio
    async def test_list_by_author_and_count(self, author_repo, quote_repo):
        a = await author_repo.create(CreateAuthorInput(name="A"))
        b = await author_repo.create(CreateAuthorInput(name="B"))
        for author_id in [a.id, b.id, a.id, a.id]:
            await quote_repo.create(
                CreateQuoteInput(content="q", author_id=author_id)
            )

        page = await quote_repo.list_by_author(a.id, ListParams(limit=2))

        assert [q.id for q in page] == [1, 3]
        assert await quote_repo.count_by_author(a.id) == 3
        assert await quote_repo.count_by_author(b.id) == 1

    @pytest.mark.asyncio
    async def test_random_on_empty(self, quote_repo):
        with pytest.raises(NotFoundError) as exc_info:
            await quote_repo.get_random()

        assert exc_info.value.code == "NO_QUOTES_FOUND"

    @pytest.mark.asyncio
    async def test_delete(self, author_repo, quote_repo):
        author = await author_repo.create(CreateAuthorInput(name="A"))
        quote = await quote_repo.create(
            CreateQuoteInput(content="q", author_id=author.id)
        )

        await quote_repo.delete(quote.id)

        assert await quote_repo.count() == 0
        with pytest.raises(NotFoundError):
            await quote_repo.delete(quote.id)
