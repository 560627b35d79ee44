"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from wathiqa.boundary.db.CRUD import section_crud, document_crud

    section, created = await section_crud.get_or_create(db, address)
"""

from wathiqa.boundary.db.CRUD.base_crud import BaseCRUD
from wathiqa.boundary.db.CRUD.block_crud import BlockCRUD, block_crud
from wathiqa.boundary.db.CRUD.section_crud import SectionCRUD, section_crud
from wathiqa.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from wathiqa.boundary.db.CRUD.paper_crud import PaperCRUD, paper_crud
from wathiqa.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from wathiqa.boundary.db.CRUD.annotation_crud import (
    AnnotationCRUD,
    comment_crud,
    recommendation_crud,
    report_crud,
)
from wathiqa.boundary.db.CRUD.favorite_crud import FavoriteCRUD, favorite_crud
from wathiqa.boundary.db.CRUD.activity_crud import ActivityCRUD, activity_crud

__all__ = [
    "BaseCRUD",
    "BlockCRUD",
    "block_crud",
    "SectionCRUD",
    "section_crud",
    "DocumentCRUD",
    "document_crud",
    "PaperCRUD",
    "paper_crud",
    "UserCRUD",
    "user_crud",
    "AnnotationCRUD",
    "comment_crud",
    "recommendation_crud",
    "report_crud",
    "FavoriteCRUD",
    "favorite_crud",
    "ActivityCRUD",
    "activity_crud",
]
