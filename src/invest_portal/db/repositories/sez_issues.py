from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from invest_portal.db.models import IssueSeverity, IssueStatus, SezIssue


class SezIssueRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_sez(self, sez_id: int) -> list[SezIssue]:
        stmt = (
            select(SezIssue)
            .where(SezIssue.sez_id == sez_id)
            .order_by(desc(SezIssue.created_at), desc(SezIssue.id))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, issue_id: int) -> SezIssue | None:
        return await self._session.get(SezIssue, issue_id)

    async def create(
        self,
        *,
        sez_id: int,
        title: str,
        description: str,
        severity: IssueSeverity,
        category: str | None = None,
        status: IssueStatus = IssueStatus.open,
    ) -> SezIssue:
        issue = SezIssue(
            sez_id=sez_id,
            title=title,
            description=description,
            category=category,
            severity=severity,
            status=status,
        )
        self._session.add(issue)
        await self._session.flush()
        return issue

    async def update(
        self,
        issue: SezIssue,
        *,
        title: str,
        description: str,
        category: str | None,
        severity: IssueSeverity,
        status: IssueStatus,
    ) -> SezIssue:
        issue.title = title
        issue.description = description
        issue.category = category
        issue.severity = severity
        issue.status = status
        await self._session.flush()
        return issue

    async def delete(self, issue: SezIssue) -> None:
        await self._session.delete(issue)
        await self._session.flush()
