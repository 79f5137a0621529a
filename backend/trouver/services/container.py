"""Service Container - wires the store client, repositories and services once per app.

Invariants:
    - One store client (connection pool) shared by every repository and request
    - Namespaces (store/collection names) and the deadline come from Settings
"""

from dataclasses import dataclass

from trouver.config import Settings
from trouver.core.repository_protocols import DocumentStoreClient
from trouver.infrastructure.place_repository import DocumentPlaceRepository
from trouver.infrastructure.review_repository import DocumentReviewRepository
from trouver.services.place_service import PlaceService
from trouver.services.review_service import ReviewService


@dataclass
class ServiceContainer:
    store: DocumentStoreClient
    places: PlaceService
    reviews: ReviewService


def build_container(settings: Settings, store: DocumentStoreClient) -> ServiceContainer:
    place_repository = DocumentPlaceRepository(store)
    review_repository = DocumentReviewRepository(store)
    return ServiceContainer(
        store=store,
        places=PlaceService(
            place_repository,
            store=settings.store_name,
            collection=settings.places_collection,
            timeout_seconds=settings.operation_timeout_seconds,
        ),
        reviews=ReviewService(
            review_repository,
            place_repository,
            store=settings.store_name,
            collection=settings.reviews_collection,
            places_collection=settings.places_collection,
            timeout_seconds=settings.operation_timeout_seconds,
        ),
    )
