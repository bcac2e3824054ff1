"""
invest_portal.api.routers.project_tasks

Tasks on an investment project and the completion/review workflow
(`investment-projects.tasks.*`, `investment-projects.tasks.completions.*`).

Responsibilities:
- Assign tasks on a project the caller can see.
- Accept completion reports; a report moves the task to `in_progress`.
- Review a report: approval closes the task (`done`), rejection sends it back
  (`rejected`). Review is a PUT, so read-only roles are turned away by the
  gate's method check as well as by the route name.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
)

from invest_portal.access.deps import enforce_role_access
from invest_portal.api.deps import db_session
from invest_portal.api.routers.investment_projects import get_visible_project
from invest_portal.auth.deps import get_principal
from invest_portal.auth.models import Principal
from invest_portal.db.models import (
    CompletionStatus,
    InvestmentProject,
    ProjectTask,
    TaskCompletion,
    TaskStatus,
)
from invest_portal.db.repositories.project_tasks import ProjectTaskRepo, TaskCompletionRepo
from invest_portal.db.repositories.users import UserRepo
from invest_portal.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(
    prefix="/v1/investment-projects/{project_id}/tasks",
    tags=["project-tasks"],
    dependencies=[Depends(enforce_role_access), Depends(get_principal)],
)


class TaskIn(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    assigned_to: int
    due_date: date | None = None


class TaskUpdate(TaskIn):
    status: TaskStatus = TaskStatus.new


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    title: str
    description: str | None
    assigned_to: int
    created_by: int | None
    due_date: date | None
    status: TaskStatus


class CompletionIn(BaseModel):
    comment: str | None = Field(default=None, max_length=2000)


class ReviewIn(BaseModel):
    status: Literal["approved", "rejected"]
    reviewer_comment: str | None = Field(default=None, max_length=2000)


class CompletionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: int
    submitted_by: int
    comment: str | None
    status: CompletionStatus
    reviewer_comment: str | None
    reviewed_by: int | None
    reviewed_at: datetime | None


async def _get_task_or_404(session: AsyncSession, project: InvestmentProject, task_id: int) -> ProjectTask:
    task = await ProjectTaskRepo(session).get(task_id)
    if task is None or task.project_id != project.id:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Task not found")
    return task


async def _check_assignee(session: AsyncSession, assigned_to: int) -> None:
    if await UserRepo(session).get(assigned_to) is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Unknown user")


@router.get("", response_model=list[TaskOut], name="investment-projects.tasks.index")
async def list_tasks(
    project_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[ProjectTask]:
    project = await get_visible_project(session, project_id, principal)
    return await ProjectTaskRepo(session).list_for_project(project.id)


@router.post("", response_model=TaskOut, status_code=HTTP_201_CREATED, name="investment-projects.tasks.store")
async def create_task(
    project_id: int,
    body: TaskIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ProjectTask:
    project = await get_visible_project(session, project_id, principal)
    await _check_assignee(session, body.assigned_to)
    task = await ProjectTaskRepo(session).create(
        project_id=project.id,
        created_by=int(principal.subject),
        **body.model_dump(),
    )
    await session.commit()
    log.info("task_created", task_id=task.id, project_id=project.id, assigned_to=task.assigned_to)
    return task


@router.put("/{task_id}", response_model=TaskOut, name="investment-projects.tasks.update")
async def update_task(
    project_id: int,
    task_id: int,
    body: TaskUpdate,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ProjectTask:
    project = await get_visible_project(session, project_id, principal)
    task = await _get_task_or_404(session, project, task_id)
    await _check_assignee(session, body.assigned_to)
    await ProjectTaskRepo(session).update(task, **body.model_dump())
    await session.commit()
    return task


@router.delete("/{task_id}", status_code=HTTP_204_NO_CONTENT, name="investment-projects.tasks.destroy")
async def delete_task(
    project_id: int,
    task_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> None:
    project = await get_visible_project(session, project_id, principal)
    task = await _get_task_or_404(session, project, task_id)
    await ProjectTaskRepo(session).delete(task)
    await session.commit()


@router.post(
    "/{task_id}/completions",
    response_model=CompletionOut,
    status_code=HTTP_201_CREATED,
    name="investment-projects.tasks.completions.store",
)
async def submit_completion(
    project_id: int,
    task_id: int,
    body: CompletionIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> TaskCompletion:
    project = await get_visible_project(session, project_id, principal)
    task = await _get_task_or_404(session, project, task_id)
    completion = await TaskCompletionRepo(session).submit(
        task, submitted_by=int(principal.subject), comment=body.comment
    )
    await session.commit()
    log.info("task_completion_submitted", task_id=task.id, completion_id=completion.id)
    return completion


@router.put(
    "/{task_id}/completions/{completion_id}/review",
    response_model=CompletionOut,
    name="investment-projects.tasks.completions.review",
)
async def review_completion(
    project_id: int,
    task_id: int,
    completion_id: int,
    body: ReviewIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> TaskCompletion:
    project = await get_visible_project(session, project_id, principal)
    task = await _get_task_or_404(session, project, task_id)
    repo = TaskCompletionRepo(session)
    completion = await repo.get(completion_id)
    if completion is None or completion.task_id != task.id:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Completion not found")
    await repo.review(
        completion,
        task,
        status=CompletionStatus(body.status),
        reviewed_by=int(principal.subject),
        reviewer_comment=body.reviewer_comment,
    )
    await session.commit()
    log.info("task_completion_reviewed", completion_id=completion.id, status=body.status)
    return completion
