from fastapi import Request

from app.collection.service import CollectionService


def get_collection_service(request: Request) -> CollectionService:
    return request.app.state.collection
