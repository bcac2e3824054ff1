from __future__ import annotations

from datetime import UTC, date, datetime

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.db.models import CompletionStatus, ProjectTask, TaskCompletion, TaskStatus


class ProjectTaskRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_project(self, project_id: int) -> list[ProjectTask]:
        stmt = (
            select(ProjectTask)
            .where(ProjectTask.project_id == project_id)
            .order_by(desc(ProjectTask.created_at), desc(ProjectTask.id))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, task_id: int) -> ProjectTask | None:
        return await self._session.get(ProjectTask, task_id)

    async def create(
        self,
        *,
        project_id: int,
        title: str,
        assigned_to: int,
        created_by: int | None,
        description: str | None = None,
        due_date: date | None = None,
    ) -> ProjectTask:
        task = ProjectTask(
            project_id=project_id,
            title=title,
            description=description,
            assigned_to=assigned_to,
            created_by=created_by,
            due_date=due_date,
            status=TaskStatus.new,
        )
        self._session.add(task)
        await self._session.flush()
        return task

    async def update(
        self,
        task: ProjectTask,
        *,
        title: str,
        description: str | None,
        assigned_to: int,
        due_date: date | None,
        status: TaskStatus,
    ) -> ProjectTask:
        task.title = title
        task.description = description
        task.assigned_to = assigned_to
        task.due_date = due_date
        task.status = status
        await self._session.flush()
        return task

    async def delete(self, task: ProjectTask) -> None:
        await self._session.delete(task)
        await self._session.flush()


class TaskCompletionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, completion_id: int) -> TaskCompletion | None:
        return await self._session.get(TaskCompletion, completion_id)

    async def submit(self, task: ProjectTask, *, submitted_by: int, comment: str | None) -> TaskCompletion:
        completion = TaskCompletion(
            task_id=task.id,
            submitted_by=submitted_by,
            comment=comment,
            status=CompletionStatus.pending,
            reviewer_comment=None,
            reviewed_by=None,
            reviewed_at=None,
        )
        self._session.add(completion)
        task.status = TaskStatus.in_progress
        await self._session.flush()
        return completion

    async def review(
        self,
        completion: TaskCompletion,
        task: ProjectTask,
        *,
        status: CompletionStatus,
        reviewed_by: int,
        reviewer_comment: str | None,
    ) -> TaskCompletion:
        completion.status = status
        completion.reviewer_comment = reviewer_comment
        completion.reviewed_by = reviewed_by
        completion.reviewed_at = datetime.now(tz=UTC).replace(tzinfo=None)
        task.status = TaskStatus.done if status == CompletionStatus.approved else TaskStatus.rejected
        await self._session.flush()
        return completion
