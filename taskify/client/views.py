"""View-models for the dashboard, task list and project detail screens.

Pure functions over the client's cached collections. Datetimes are compared
as naive UTC, the form the API returns them in; pass ``now`` explicitly to get
deterministic results.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional
from uuid import UUID

from pydantic import BaseModel

from models.task import TaskStatus
from taskify.schemas.project import ProjectResponse
from taskify.schemas.task import TaskResponse

ALL = "all"

STATUS_COLORS = {
    "completed": "#43e97b",
    "in-progress": "#4facfe",
    "todo": "#f093fb",
    "overdue": "#ff6b6b",
}


class DashboardSummary(BaseModel):
    total: int
    completed: int
    in_progress: int
    todo: int
    due_today: int
    overdue: int
    completed_today: int
    completion_rate: float


class ChartSlice(BaseModel):
    name: str
    value: int
    color: str


class DayActivity(BaseModel):
    day: date
    completed: int
    in_progress: int
    overdue: int


class DayCount(BaseModel):
    day: date
    label: str
    tasks: int


class ProjectGroup(BaseModel):
    project: ProjectResponse
    tasks: list[TaskResponse]


class ProjectProgress(BaseModel):
    total: int
    todo: int
    in_progress: int
    completed: int
    percent_complete: float


def _naive_utc(dt: Optional[datetime]) -> datetime:
    dt = dt or datetime.now(timezone.utc)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _same_id(a, b) -> bool:
    return a is not None and b is not None and str(a) == str(b)


def is_overdue(task: TaskResponse, now: datetime) -> bool:
    return _naive_utc(task.due_date) < now and task.status != TaskStatus.completed


def filter_tasks(
    tasks: Iterable[TaskResponse],
    status: Optional[str] = None,
    priority: Optional[str] = None,
    project_id: Optional[UUID | str] = None,
) -> list[TaskResponse]:
    """Tasks matching every given constraint; ``None`` or ``"all"`` means unconstrained."""
    result = []
    for task in tasks:
        if status not in (None, ALL) and task.status.value != str(status):
            continue
        if priority not in (None, ALL) and task.priority.value != str(priority):
            continue
        if project_id not in (None, ALL) and not _same_id(task.project_id, project_id):
            continue
        result.append(task)
    return result


def dashboard_summary(tasks: list[TaskResponse], now: Optional[datetime] = None) -> DashboardSummary:
    now = _naive_utc(now)
    today = now.date()

    completed = [t for t in tasks if t.status == TaskStatus.completed]
    in_progress = sum(1 for t in tasks if t.status == TaskStatus.in_progress)

    return DashboardSummary(
        total=len(tasks),
        completed=len(completed),
        in_progress=in_progress,
        todo=sum(1 for t in tasks if t.status == TaskStatus.todo),
        due_today=sum(1 for t in tasks if _naive_utc(t.due_date).date() == today),
        overdue=sum(1 for t in tasks if is_overdue(t, now)),
        # A completed task's last update is taken as its completion time
        completed_today=sum(1 for t in completed if _naive_utc(t.updated_at).date() == today),
        completion_rate=(len(completed) / len(tasks) * 100) if tasks else 0.0,
    )


def status_breakdown(tasks: list[TaskResponse], now: Optional[datetime] = None) -> list[ChartSlice]:
    """Pie-chart slices; empty slices are left out. Overdue tasks also count in their status."""
    now = _naive_utc(now)
    counts = {
        "completed": sum(1 for t in tasks if t.status == TaskStatus.completed),
        "in-progress": sum(1 for t in tasks if t.status == TaskStatus.in_progress),
        "todo": sum(1 for t in tasks if t.status == TaskStatus.todo),
        "overdue": sum(1 for t in tasks if is_overdue(t, now)),
    }
    return [
        ChartSlice(name=name, value=value, color=STATUS_COLORS[name])
        for name, value in counts.items()
        if value > 0
    ]


def week_activity(tasks: list[TaskResponse], now: Optional[datetime] = None) -> list[DayActivity]:
    """Monday to Sunday of the current week, bucketing tasks by creation day."""
    now = _naive_utc(now)
    monday = now.date() - timedelta(days=now.weekday())

    days = []
    for offset in range(7):
        day = monday + timedelta(days=offset)
        created = [t for t in tasks if _naive_utc(t.created_at).date() == day]
        days.append(
            DayActivity(
                day=day,
                completed=sum(1 for t in created if t.status == TaskStatus.completed),
                in_progress=sum(1 for t in created if t.status == TaskStatus.in_progress),
                overdue=sum(1 for t in created if is_overdue(t, now)),
            )
        )
    return days


def created_last_7_days(tasks: list[TaskResponse], now: Optional[datetime] = None) -> list[DayCount]:
    """Per-day creation counts for the seven days ending today, oldest first."""
    today = _naive_utc(now).date()
    created_days = [_naive_utc(t.created_at).date() for t in tasks]

    series = []
    for back in range(6, -1, -1):
        day = today - timedelta(days=back)
        series.append(
            DayCount(day=day, label=day.strftime("%d/%m"), tasks=created_days.count(day))
        )
    return series


def group_by_project(
    tasks: list[TaskResponse], projects: list[ProjectResponse]
) -> tuple[list[ProjectGroup], list[TaskResponse]]:
    """Projects that have tasks, in project order, and the tasks without a project."""
    groups = []
    for project in projects:
        project_tasks = [t for t in tasks if _same_id(t.project_id, project.id)]
        if project_tasks:
            groups.append(ProjectGroup(project=project, tasks=project_tasks))

    unassigned = [t for t in tasks if t.project_id is None]
    return groups, unassigned


def project_progress(tasks: list[TaskResponse], project_id: UUID | str) -> ProjectProgress:
    project_tasks = [t for t in tasks if _same_id(t.project_id, project_id)]
    completed = sum(1 for t in project_tasks if t.status == TaskStatus.completed)

    return ProjectProgress(
        total=len(project_tasks),
        todo=sum(1 for t in project_tasks if t.status == TaskStatus.todo),
        in_progress=sum(1 for t in project_tasks if t.status == TaskStatus.in_progress),
        completed=completed,
        percent_complete=(completed / len(project_tasks) * 100) if project_tasks else 0.0,
    )
