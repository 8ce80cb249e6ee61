"""Data access layer (repositories) for persistence operations.

Repositories encapsulate queries on skills, workers, and jobs and hand back
frozen domain models rather than ORM rows, so nothing downstream holds a
live ORM graph.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from workmatch.domain.models import JobPosting, JobStatus, WorkerProfile

from .exceptions import DataIntegrityError, PersistenceError
from .schema import JobModel, SkillModel, WorkerModel

logger = logging.getLogger(__name__)


class SkillRepository:
    """Repository for the skills catalogue."""

    def __init__(self, session: Session):
        self.session = session

    def get_or_create(self, name: str) -> SkillModel:
        """Return the skill row with this exact name, inserting it if missing.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            skill = self.session.execute(
                select(SkillModel).where(SkillModel.name == name)
            ).scalar_one_or_none()
            if skill is None:
                skill = SkillModel(name=name)
                self.session.add(skill)
                self.session.flush()
            return skill
        except SQLAlchemyError as e:
            logger.error(f"Error resolving skill {name!r}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to resolve skill: {e}") from e

    def resolve_all(self, names: Iterable[str]) -> List[SkillModel]:
        """Resolve many skill names, in sorted order."""
        return [self.get_or_create(name) for name in sorted(names)]

    def list_names(self) -> List[str]:
        """Return every skill name in the catalogue, sorted."""
        try:
            return list(self.session.execute(select(SkillModel.name).order_by(SkillModel.name)).scalars())
        except SQLAlchemyError as e:
            logger.error(f"Error listing skills: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list skills: {e}") from e


class WorkerRepository:
    """Repository for worker-related database operations."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session
        self.skills = SkillRepository(session)

    def get_by_id(self, worker_id: str) -> Optional[WorkerProfile]:
        """Retrieve a worker by primary key.

        Returns:
            WorkerProfile if found, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            worker_model = self.session.get(WorkerModel, worker_id)
            return worker_model.to_domain() if worker_model is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving worker {worker_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve worker: {e}") from e

    def get_name(self, worker_id: str) -> Optional[str]:
        """Return the display name stored for a worker, if any."""
        try:
            worker_model = self.session.get(WorkerModel, worker_id)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving worker {worker_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve worker: {e}") from e
        return worker_model.name if worker_model is not None else None

    def list_available(self) -> List[WorkerProfile]:
        """Return all workers currently open to work, ordered by id.

        Raises:
            PersistenceError: If database error occurs
        """
        return self._list(select(WorkerModel).where(WorkerModel.is_available.is_(True)))

    def list_all(self) -> List[WorkerProfile]:
        """Return every worker, ordered by id."""
        return self._list(select(WorkerModel))

    def _list(self, stmt) -> List[WorkerProfile]:
        try:
            worker_models = self.session.execute(stmt.order_by(WorkerModel.id)).scalars().all()
            return [worker_model.to_domain() for worker_model in worker_models]
        except SQLAlchemyError as e:
            logger.error(f"Error listing workers: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list workers: {e}") from e

    def upsert(self, worker: WorkerProfile, name: Optional[str] = None) -> WorkerProfile:
        """Insert a new worker or update an existing one.

        Args:
            worker: Worker domain model to persist
            name: Optional display name

        Returns:
            Persisted WorkerProfile

        Raises:
            DataIntegrityError: On constraint violation
            PersistenceError: If database error occurs
        """
        try:
            worker_model = self.session.get(WorkerModel, worker.id)
            if worker_model is None:
                worker_model = WorkerModel(id=worker.id)
                self.session.add(worker_model)

            worker_model.apply(worker, name=name)
            worker_model.skills = self.skills.resolve_all(worker.skills)
            self.session.flush()
            return worker_model.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error upserting worker {worker.id}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to upsert worker due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting worker {worker.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to upsert worker: {e}") from e


class JobRepository:
    """Repository for job-related database operations."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session
        self.skills = SkillRepository(session)

    def get_by_id(self, job_id: str) -> Optional[JobPosting]:
        """Retrieve a job by primary key, whatever its status.

        Returns:
            JobPosting if found, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            job_model = self.session.get(JobModel, job_id)
            return job_model.to_domain() if job_model is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve job: {e}") from e

    def get_title(self, job_id: str) -> Optional[str]:
        """Return the title stored for a job, if any."""
        try:
            job_model = self.session.get(JobModel, job_id)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve job: {e}") from e
        return job_model.title if job_model is not None else None

    def list_active(self) -> List[JobPosting]:
        """Return all ACTIVE jobs, ordered by id.

        Raises:
            PersistenceError: If database error occurs
        """
        return self._list(select(JobModel).where(JobModel.status == JobStatus.ACTIVE.value))

    def list_all(self) -> List[JobPosting]:
        """Return every job, ordered by id."""
        return self._list(select(JobModel))

    def _list(self, stmt) -> List[JobPosting]:
        try:
            job_models = self.session.execute(stmt.order_by(JobModel.id)).scalars().all()
            return [job_model.to_domain() for job_model in job_models]
        except SQLAlchemyError as e:
            logger.error(f"Error listing jobs: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list jobs: {e}") from e

    def upsert(
        self,
        job: JobPosting,
        title: Optional[str] = None,
        status: JobStatus = JobStatus.ACTIVE,
    ) -> JobPosting:
        """Insert a new job or update an existing one.

        Args:
            job: Job domain model to persist
            title: Optional display title
            status: Lifecycle status to store

        Returns:
            Persisted JobPosting

        Raises:
            DataIntegrityError: On constraint violation
            PersistenceError: If database error occurs
        """
        try:
            job_model = self.session.get(JobModel, job.id)
            if job_model is None:
                job_model = JobModel(id=job.id)
                self.session.add(job_model)

            job_model.apply(job, title=title, status=status)
            job_model.skills = self.skills.resolve_all(job.required_skills)
            self.session.flush()
            return job_model.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error upserting job {job.id}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to upsert job due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting job {job.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to upsert job: {e}") from e
