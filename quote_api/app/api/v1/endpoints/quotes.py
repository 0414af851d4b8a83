"""
Quote endpoints for API v1.

These routes expose CRUD operations on quotes plus read‑only views
built by ``QuoteService``: filters by status, category, tag, author,
source and publisher, grouping by category, tag statistics, status
counts and text search.  ``POST /archive`` moves inactive quotes to
the archived status.

Fixed paths are declared before ``/{quote_id}`` so that they are not
captured by the identifier route.
"""

from typing import Dict, List

from fastapi import APIRouter, HTTPException, Query, status

from quote_api.app.models.quote import Quote, QuoteStatus
from quote_api.app.schemas.quote import (
    ArchiveResult,
    QuoteCreate,
    QuoteRead,
    QuoteUpdate,
    to_read_list,
)
from quote_api.app.services.quote_service import QuoteService


router = APIRouter()


# ----------------------------------------------------------------------
# Collection views
# ----------------------------------------------------------------------
@router.get("/", response_model=List[QuoteRead])
async def list_quotes() -> List[QuoteRead]:
    """Return all quotes ordered by id."""
    return to_read_list(await QuoteService.find_all())


@router.get("/status/{quote_status}", response_model=List[QuoteRead])
async def list_quotes_by_status(quote_status: str) -> List[QuoteRead]:
    """Return quotes with the given status (name is case‑insensitive)."""
    try:
        parsed = QuoteStatus.parse(quote_status)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return to_read_list(await QuoteService.find_by_status(parsed))


@router.get("/category/{category}", response_model=List[QuoteRead])
async def list_quotes_by_category(category: str) -> List[QuoteRead]:
    return to_read_list(await QuoteService.find_by_category(category))


@router.get("/tag/{tag}", response_model=List[QuoteRead])
async def list_quotes_by_tag(tag: str) -> List[QuoteRead]:
    """Return quotes having a tag equal to or containing ``tag``."""
    return to_read_list(await QuoteService.find_by_tag(tag))


@router.get("/author/{author}", response_model=List[QuoteRead])
async def list_quotes_by_author(author: str) -> List[QuoteRead]:
    return to_read_list(await QuoteService.find_by_author(author))


@router.get("/source/{source}", response_model=List[QuoteRead])
async def list_quotes_by_source(source: str) -> List[QuoteRead]:
    return to_read_list(await QuoteService.find_by_source(source))


@router.get("/publisher/{publisher}", response_model=List[QuoteRead])
async def list_quotes_by_publisher(publisher: str) -> List[QuoteRead]:
    return to_read_list(await QuoteService.find_by_publisher(publisher))


@router.get("/grouped", response_model=Dict[str, List[QuoteRead]])
async def group_quotes_by_category() -> Dict[str, List[QuoteRead]]:
    """Return quotes grouped by category.

    Quotes without a category are listed under ``Uncategorized``.
    """
    grouped = await QuoteService.group_by_category()
    return {category: to_read_list(quotes) for category, quotes in grouped.items()}


@router.get("/tags", response_model=List[str])
async def list_tags() -> List[str]:
    """Return every distinct tag, sorted alphabetically."""
    return sorted(await QuoteService.get_all_unique_tags())


@router.get("/tags/popular", response_model=List[str])
async def list_popular_tags(limit: int = Query(5, ge=0)) -> List[str]:
    """Return the most used tags, most frequent first."""
    return await QuoteService.get_most_popular_tags(limit)


@router.get("/tags/all", response_model=List[QuoteRead])
async def list_quotes_with_all_tags(tags: List[str] = Query(...)) -> List[QuoteRead]:
    """Return quotes carrying every one of the given tags."""
    return to_read_list(await QuoteService.find_by_all_tags(tags))


@router.get("/tags/any", response_model=List[QuoteRead])
async def list_quotes_with_any_tag(tags: List[str] = Query(...)) -> List[QuoteRead]:
    """Return quotes carrying at least one of the given tags."""
    return to_read_list(await QuoteService.find_by_any_tag(tags))


@router.get("/stats/status", response_model=Dict[str, int])
async def status_statistics() -> Dict[str, int]:
    """Return the number of quotes in each status."""
    counts = await QuoteService.count_by_status()
    return {quote_status.value: count for quote_status, count in counts.items()}


@router.get("/search", response_model=List[QuoteRead])
async def search_quotes(query: str = Query(..., description="Text to look for")) -> List[QuoteRead]:
    """Search titles, descriptions and categories case‑insensitively."""
    return to_read_list(await QuoteService.search(query))


@router.post("/archive", response_model=ArchiveResult)
async def archive_inactive_quotes() -> ArchiveResult:
    """Move all INACTIVE quotes to ARCHIVED."""
    archived = await QuoteService.archive_inactive_items()
    return ArchiveResult(archived=archived)


# ----------------------------------------------------------------------
# Single quote CRUD
# ----------------------------------------------------------------------
@router.post("/", response_model=QuoteRead, status_code=status.HTTP_201_CREATED)
async def create_quote(quote_in: QuoteCreate) -> QuoteRead:
    """Create a new quote.

    Returns 400 if the title is missing, blank or too long.
    """
    quote = Quote(**quote_in.model_dump())
    try:
        saved = await QuoteService.save(quote)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return QuoteRead.model_validate(saved)


@router.get("/{quote_id}", response_model=QuoteRead)
async def get_quote(quote_id: int) -> QuoteRead:
    """Retrieve a single quote by its ID.  Raises 404 if not found."""
    quote = await QuoteService.find_by_id(quote_id)
    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Quote {quote_id} not found")
    return QuoteRead.model_validate(quote)


@router.put("/{quote_id}", response_model=QuoteRead)
async def update_quote(quote_id: int, updates: QuoteUpdate) -> QuoteRead:
    """Update an existing quote.

    Only fields present in the body are changed; an explicit ``null``
    for ``status`` or ``tags`` leaves that field as it is.  Returns 404 if the
    quote does not exist and 400 if the result fails validation.
    """
    if not await QuoteService.exists_by_id(quote_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Quote {quote_id} not found")
    try:
        updated = await QuoteService.update(quote_id, updates.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return QuoteRead.model_validate(updated)


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quote(quote_id: int) -> None:
    """Delete a quote.  Raises 404 if not found."""
    try:
        await QuoteService.delete_by_id(quote_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None
