import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from myskool.database import get_db
from myskool.models.program import Program
from myskool.models.user import User
from myskool.utils.pagination import Page, PageRequest

logger = logging.getLogger("myskool.repositories")

# JSON property name -> column
SORTABLE = {
    "id": Program.id,
    "coverContentType": Program.cover_content_type,
    "title": Program.title,
    "description": Program.description,
    "startDate": Program.start_date,
    "endDate": Program.end_date,
    "tags": Program.tags,
}


class ProgramRepository:
    """SQL store for Program rows. One instance per request session."""

    def __init__(self, db: Session):
        self.db = db

    def save(self, program: Program) -> Program:
        """Insert when the program has no id, otherwise merge it onto the stored row."""
        if program.id is None:
            self.db.add(program)
        else:
            program = self.db.merge(program)
        self.db.commit()
        self.db.refresh(program)
        return program

    def find_by_id(self, program_id: int) -> Optional[Program]:
        return self.db.get(Program, program_id)

    def exists_by_id(self, program_id: int) -> bool:
        return self.db.query(Program.id).filter(Program.id == program_id).first() is not None

    def count(self) -> int:
        return self.db.query(Program).count()

    def find_all(self, page_request: PageRequest) -> Page[Program]:
        query = self.db.query(Program)
        total = query.count()

        order_by = []
        for prop, direction in page_request.sort:
            column = SORTABLE.get(prop)
            if column is None:
                raise ValueError(f"No property '{prop}' found for type 'Program'")
            order_by.append(column.desc() if direction == "desc" else column.asc())
        if not order_by:
            order_by.append(Program.id.asc())

        rows = (
            query.order_by(*order_by)
            .offset(page_request.offset)
            .limit(page_request.size)
            .all()
        )
        return Page(
            content=rows,
            number=page_request.page,
            size=page_request.size,
            total_elements=total,
            sort=page_request.sort,
        )

    def delete_by_id(self, program_id: int) -> None:
        deleted = self.db.query(Program).filter(Program.id == program_id).delete()
        self.db.commit()
        if not deleted:
            logger.debug("No Program %s to delete", program_id)

    def find_by_user_is_current_user(self, user: User) -> list[Program]:
        return (
            self.db.query(Program)
            .filter(Program.user_id == user.id)
            .order_by(Program.id.asc())
            .all()
        )


def get_program_repository(db: Session = Depends(get_db)) -> ProgramRepository:
    return ProgramRepository(db)
