from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from myskool.config import settings
from myskool.errors import BadRequestAlertException
from myskool.models.program import Program
from myskool.models.user import User
from myskool.repositories.program import SORTABLE, ProgramRepository, get_program_repository
from myskool.schemas.program import ProgramIn, ProgramOut, ProgramPatch
from myskool.utils.auth import get_current_user
from myskool.utils.header_util import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
)
from myskool.utils.pagination import Pageable, PageRequest, generate_pagination_headers

import logging
logger = logging.getLogger("myskool.programs")


ENTITY_NAME = "program"
MERGE_PATCH_JSON = "application/merge-patch+json"

program_pageable = Pageable(SORTABLE.keys())

router = APIRouter(
    prefix=f"{settings.API_PREFIX}/programs",
    tags=["Programs"],
    dependencies=[Depends(get_current_user)],
)


def require_merge_patch(request: Request):
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != MERGE_PATCH_JSON:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Content type '{content_type}' not supported, use '{MERGE_PATCH_JSON}'",
        )


def _check_identity(path_id: int, body_id: Optional[int], repo: ProgramRepository):
    if body_id is None:
        raise BadRequestAlertException("Invalid id", ENTITY_NAME, "idnull")
    if body_id != path_id:
        raise BadRequestAlertException("Invalid ID", ENTITY_NAME, "idinvalid")
    if not repo.exists_by_id(path_id):
        raise BadRequestAlertException("Entity not found", ENTITY_NAME, "idnotfound")


# 新增
@router.post("", response_model=ProgramOut, status_code=status.HTTP_201_CREATED)
def create_program(
    body: ProgramIn,
    response: Response,
    repo: ProgramRepository = Depends(get_program_repository),
    user: User = Depends(get_current_user),
):
    logger.debug("REST request to save Program : %s", body)
    if body.id is not None:
        raise BadRequestAlertException("A new program cannot already have an ID", ENTITY_NAME, "idexists")

    result = repo.save(Program(**body.model_dump(exclude={"id"}), user_id=user.id))

    response.headers["Location"] = f"{settings.API_PREFIX}/programs/{result.id}"
    response.headers.update(create_entity_creation_alert(ENTITY_NAME, str(result.id)))
    return result


# 整筆取代
@router.put("/{program_id}", response_model=ProgramOut)
def update_program(
    program_id: int,
    body: ProgramIn,
    response: Response,
    repo: ProgramRepository = Depends(get_program_repository),
):
    logger.debug("REST request to update Program : %s, %s", program_id, body)
    _check_identity(program_id, body.id, repo)

    # every payload field is set explicitly so merge overwrites it, owner is left alone
    result = repo.save(Program(id=body.id, **body.model_dump(exclude={"id"})))

    response.headers.update(create_entity_update_alert(ENTITY_NAME, str(body.id)))
    return result


# 部分更新：只覆寫有給值的欄位
@router.patch(
    "/{program_id}",
    response_model=ProgramOut,
    dependencies=[Depends(require_merge_patch)],
)
def partial_update_program(
    program_id: int,
    body: ProgramPatch,
    response: Response,
    repo: ProgramRepository = Depends(get_program_repository),
):
    logger.debug("REST request to partial update Program partially : %s, %s", program_id, body)
    _check_identity(program_id, body.id, repo)

    existing = repo.find_by_id(body.id)
    if existing is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    changes = body.model_dump(exclude={"id"}, exclude_unset=True, exclude_none=True)
    for k, v in changes.items():
        setattr(existing, k, v)
    result = repo.save(existing)

    response.headers.update(create_entity_update_alert(ENTITY_NAME, str(body.id)))
    return result


@router.get("", response_model=list[ProgramOut])
def get_all_programs(
    request: Request,
    response: Response,
    page_request: PageRequest = Depends(program_pageable),
    repo: ProgramRepository = Depends(get_program_repository),
):
    logger.debug("REST request to get a page of Programs")
    page = repo.find_all(page_request)
    response.headers.update(generate_pagination_headers(request.url, page))
    return page.content


# 我的 program（需在 /{program_id} 之前註冊）
@router.get("/mine", response_model=list[ProgramOut])
def get_my_programs(
    repo: ProgramRepository = Depends(get_program_repository),
    user: User = Depends(get_current_user),
):
    logger.debug("REST request to get Programs of user : %s", user.id)
    return repo.find_by_user_is_current_user(user)


@router.get("/{program_id}", response_model=ProgramOut)
def get_program(program_id: int, repo: ProgramRepository = Depends(get_program_repository)):
    logger.debug("REST request to get Program : %s", program_id)
    program = repo.find_by_id(program_id)
    if program is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return program


@router.delete("/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_program(program_id: int, repo: ProgramRepository = Depends(get_program_repository)):
    logger.debug("REST request to delete Program : %s", program_id)
    repo.delete_by_id(program_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=create_entity_deletion_alert(ENTITY_NAME, str(program_id)),
    )
