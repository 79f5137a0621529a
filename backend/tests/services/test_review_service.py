"""Review Service - tests for review use cases and their parent-place check.

Tests cover:
    - create requires an existing place and records author and place
    - list is scoped to one place
    - author/admin may update and delete, others are Forbidden
    - place_id and author never change on update
"""

from datetime import datetime, timezone
from itertools import count

import pytest

from trouver.core.domain_types import Principal, Role, UserId
from trouver.core.errors import ForbiddenError, NotFoundError, OperationTimeoutError
from trouver.core.pagination import Filter
from trouver.infrastructure.place_repository import DocumentPlaceRepository
from trouver.infrastructure.review_repository import DocumentReviewRepository
from trouver.schemas.place import PlaceCreate
from trouver.schemas.review import ReviewCreate, ReviewUpdate
from trouver.services.place_service import PlaceService
from trouver.services.review_service import ReviewService
from tests.services.fake_store import InMemoryDocumentStore

STORE = "trouver"
NOW = datetime(2026, 5, 4, 9, 30, tzinfo=timezone.utc)

AUTHOR = Principal(UserId("u1"))
OTHER = Principal(UserId("u2"))
ADMIN = Principal(UserId("root"), Role.ADMIN)


def _ids(prefix: str):
    counter = count(1)
    return lambda: f"{prefix}{next(counter)}"


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def places(store):
    return PlaceService(
        DocumentPlaceRepository(store), STORE, "places",
        id_factory=_ids("p"), clock=lambda: NOW,
    )


@pytest.fixture
def reviews(store):
    return ReviewService(
        DocumentReviewRepository(store),
        DocumentPlaceRepository(store),
        store=STORE,
        collection="reviews",
        places_collection="places",
        id_factory=_ids("r"),
        clock=lambda: NOW,
    )


@pytest.fixture
async def place(places):
    return await places.create(
        AUTHOR, PlaceCreate(title="Cafe X", description="Good coffee"),
    )


def _review(content: str = "Great flat white", rating: float = 4.5) -> ReviewCreate:
    return ReviewCreate(content=content, rating=rating)


# ─── create ──────────────────────────────────────────────────────

async def test_create_review_for_place(reviews, place, store):
    review = await reviews.create(OTHER, place.id, _review())
    assert review.id == "r1"
    assert review.place_id == place.id
    assert review.user_id == "u2"
    assert review.created_at == NOW
    assert store.documents(STORE, "reviews")["r1"]["content"] == "Great flat white"


async def test_create_review_for_missing_place(reviews, store):
    with pytest.raises(NotFoundError) as exc_info:
        await reviews.create(AUTHOR, "ghost", _review())
    assert exc_info.value.context.resource_type == "Place"
    assert store.writes == []


# ─── get / list ──────────────────────────────────────────────────

async def test_get_review(reviews, place):
    await reviews.create(AUTHOR, place.id, _review())
    assert (await reviews.get("r1")).rating == 4.5


async def test_list_scoped_to_place(reviews, places, place):
    other_place = await places.create(
        AUTHOR, PlaceCreate(title="Bar Y", description="Cocktails"),
    )
    await reviews.create(AUTHOR, place.id, _review("one"))
    await reviews.create(AUTHOR, other_place.id, _review("two"))
    await reviews.create(OTHER, place.id, _review("three"))
    listed = await reviews.list(place.id, Filter())
    assert [r.content for r in listed] == ["one", "three"]


async def test_list_for_place_without_reviews(reviews, place):
    assert await reviews.list(place.id, Filter()) == []


# ─── update / delete ─────────────────────────────────────────────

async def test_author_updates_rating(reviews, place):
    await reviews.create(OTHER, place.id, _review())
    updated = await reviews.update(OTHER, "r1", ReviewUpdate(rating=2))
    assert updated.rating == 2
    assert updated.content == "Great flat white"


async def test_update_keeps_place_and_author(reviews, place):
    await reviews.create(OTHER, place.id, _review())
    changes = ReviewUpdate.model_validate(
        {"content": "Edited", "place_id": "elsewhere", "user_id": "u9"},
    )
    updated = await reviews.update(ADMIN, "r1", changes)
    assert updated.content == "Edited"
    assert updated.place_id == place.id
    assert updated.user_id == "u2"


async def test_place_owner_cannot_edit_others_review(reviews, place, store):
    await reviews.create(OTHER, place.id, _review())
    writes_before = len(store.writes)
    with pytest.raises(ForbiddenError):
        await reviews.update(AUTHOR, "r1", ReviewUpdate(rating=0))
    with pytest.raises(ForbiddenError):
        await reviews.delete(AUTHOR, "r1")
    assert len(store.writes) == writes_before


async def test_admin_deletes_review(reviews, place):
    await reviews.create(OTHER, place.id, _review())
    await reviews.delete(ADMIN, "r1")
    with pytest.raises(NotFoundError):
        await reviews.get("r1")


async def test_deleting_place_leaves_reviews(reviews, places, place):
    await reviews.create(OTHER, place.id, _review())
    await places.delete(AUTHOR, place.id)
    assert (await reviews.get("r1")).place_id == place.id


async def test_slow_review_listing_times_out():
    slow = InMemoryDocumentStore(delay_seconds=0.5)
    service = ReviewService(
        DocumentReviewRepository(slow), DocumentPlaceRepository(slow),
        STORE, "reviews", "places", timeout_seconds=0.05,
    )
    with pytest.raises(OperationTimeoutError):
        await service.list("p1", Filter())
