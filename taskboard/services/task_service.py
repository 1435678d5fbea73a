from sqlalchemy.orm import Session
from sqlalchemy import and_, case, func, select
from datetime import datetime, time, timedelta
from typing import List
from ..core.exceptions import NotFoundError
from ..db.models.task import Task, Subtask, utcnow
from ..schemas.task import TaskCreate, TaskUpdate, TaskStats, WeeklyCount
from ..utils.logger import get_logger
from .auth import AuthContext

logger = get_logger(__name__)

WEEKLY_WINDOW_DAYS = 7


class TaskService:
    """
    Task and subtask operations scoped to the authenticated user.

    Updates and deletes filter on the owner in the statement itself, so an id
    belonging to someone else matches zero rows and the call is a no-op.
    """

    def __init__(self, db: Session, user: AuthContext):
        self.db = db
        self.user = user

    def _owned_task_ids(self):
        return select(Task.id).where(Task.user_id == self.user.id)

    def list_tasks(self) -> List[Task]:
        try:
            tasks = (
                self.db.query(Task)
                .filter(Task.user_id == self.user.id)
                .order_by(Task.created_at.desc(), Task.id.desc())
                .all()
            )
            logger.info(f"Retrieved {len(tasks)} tasks for user {self.user.id}")
            return tasks

        except Exception as e:
            logger.error(f"Error retrieving tasks: {e}")
            raise

    def create_task(self, task_data: TaskCreate) -> Task:
        try:
            task = Task(
                user_id=self.user.id,
                title=task_data.title,
                description=task_data.description,
                priority=task_data.priority,
                category=task_data.category,
                due_date=task_data.due_date,
                completed=0,
            )

            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)

            logger.info(f"Task created: {task.id} - {task.title}")
            return task

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating task: {e}")
            raise

    def update_task(self, task_id: int, task_data: TaskUpdate) -> int:
        try:
            updated = (
                self.db.query(Task)
                .filter(and_(Task.id == task_id, Task.user_id == self.user.id))
                .update(
                    {
                        Task.title: task_data.title,
                        Task.description: task_data.description,
                        Task.priority: task_data.priority,
                        Task.category: task_data.category,
                        Task.due_date: task_data.due_date,
                        Task.completed: 1 if task_data.completed else 0,
                    },
                    synchronize_session=False,
                )
            )
            self.db.commit()

            if updated:
                logger.info(f"Task updated: {task_id}")
            else:
                logger.warning(f"Task {task_id} not found for user {self.user.id}, nothing updated")
            return updated

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating task {task_id}: {e}")
            raise

    def delete_task(self, task_id: int) -> int:
        # Subtasks go with the row through the foreign key cascade
        try:
            deleted = (
                self.db.query(Task)
                .filter(and_(Task.id == task_id, Task.user_id == self.user.id))
                .delete(synchronize_session=False)
            )
            self.db.commit()

            if deleted:
                logger.info(f"Task deleted: {task_id}")
            else:
                logger.warning(f"Task {task_id} not found for user {self.user.id}, nothing deleted")
            return deleted

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting task {task_id}: {e}")
            raise

    def list_subtasks(self, task_id: int) -> List[Subtask]:
        return (
            self.db.query(Subtask)
            .join(Task, Subtask.task_id == Task.id)
            .filter(and_(Task.id == task_id, Task.user_id == self.user.id))
            .order_by(Subtask.id.asc())
            .all()
        )

    def create_subtask(self, task_id: int, title: str) -> Subtask:
        task = self.db.query(Task).filter(
            and_(Task.id == task_id, Task.user_id == self.user.id)
        ).first()
        if not task:
            logger.warning(f"Task {task_id} not found for user {self.user.id}")
            raise NotFoundError("Task not found")

        try:
            subtask = Subtask(task_id=task.id, title=title, completed=0)
            self.db.add(subtask)
            self.db.commit()
            self.db.refresh(subtask)

            logger.info(f"Subtask created: {subtask.id} on task {task_id}")
            return subtask

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating subtask on task {task_id}: {e}")
            raise

    def update_subtask(self, subtask_id: int, completed) -> int:
        try:
            updated = (
                self.db.query(Subtask)
                .filter(
                    and_(
                        Subtask.id == subtask_id,
                        Subtask.task_id.in_(self._owned_task_ids()),
                    )
                )
                .update({Subtask.completed: 1 if completed else 0}, synchronize_session=False)
            )
            self.db.commit()

            if updated:
                logger.info(f"Subtask updated: {subtask_id}")
            else:
                logger.warning(f"Subtask {subtask_id} not found for user {self.user.id}, nothing updated")
            return updated

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating subtask {subtask_id}: {e}")
            raise

    def delete_subtask(self, subtask_id: int) -> int:
        try:
            deleted = (
                self.db.query(Subtask)
                .filter(
                    and_(
                        Subtask.id == subtask_id,
                        Subtask.task_id.in_(self._owned_task_ids()),
                    )
                )
                .delete(synchronize_session=False)
            )
            self.db.commit()

            if deleted:
                logger.info(f"Subtask deleted: {subtask_id}")
            else:
                logger.warning(f"Subtask {subtask_id} not found for user {self.user.id}, nothing deleted")
            return deleted

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting subtask {subtask_id}: {e}")
            raise

    def get_task_stats(self) -> TaskStats:
        try:
            total, completed, high_priority_pending = (
                self.db.query(
                    func.count(Task.id),
                    func.coalesce(func.sum(case((Task.completed == 1, 1), else_=0)), 0),
                    func.coalesce(
                        func.sum(
                            case(
                                (and_(Task.priority == "high", Task.completed == 0), 1),
                                else_=0,
                            )
                        ),
                        0,
                    ),
                )
                .filter(Task.user_id == self.user.id)
                .one()
            )

            # Window opens at midnight UTC seven days back
            window_start = datetime.combine(
                utcnow().date() - timedelta(days=WEEKLY_WINDOW_DAYS), time.min
            )
            day = func.date(Task.created_at)
            weekly_rows = (
                self.db.query(day, func.count(Task.id))
                .filter(and_(Task.user_id == self.user.id, Task.created_at >= window_start))
                .group_by(day)
                .order_by(day.asc())
                .all()
            )

            return TaskStats(
                total=total,
                completed=completed,
                high_priority_pending=high_priority_pending,
                weekly=[WeeklyCount(date=day_value, count=count) for day_value, count in weekly_rows],
            )

        except Exception as e:
            logger.error(f"Error getting task stats: {e}")
            raise
