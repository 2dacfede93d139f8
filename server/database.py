from __future__ import annotations

import datetime as dt
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, create_engine, select
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Mapped, Session, declarative_base, mapped_column, relationship, selectinload, sessionmaker

from reporting.models import Organization, TaskRecord, TaskStatus, WebsiteCredential
from server.config import get_settings
from server.database_utils import as_date, as_datetime, day_range


Base = declarative_base()


class OrganizationModel(Base):
    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)

    websites: Mapped[List["WebsiteModel"]] = relationship(
        "WebsiteModel",
        back_populates="organization",
        cascade="all, delete-orphan",
        order_by="WebsiteModel.position",
    )
    tasks: Mapped[List["TaskModel"]] = relationship("TaskModel", back_populates="organization")


class WebsiteModel(Base):
    __tablename__ = "websites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String, nullable=False)
    identification_code: Mapped[str] = mapped_column(String, nullable=False, default="")
    password: Mapped[str] = mapped_column(String, nullable=False, default="")

    organization: Mapped[OrganizationModel] = relationship("OrganizationModel", back_populates="websites")


class LabelModel(Base):
    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    color: Mapped[str] = mapped_column(String, nullable=False, default="#90EE90")


class TaskModel(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String, nullable=False, default=TaskStatus.IN_PROGRESS.value)
    start_date: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=False))
    deadline: Mapped[dt.datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    target_period: Mapped[dt.datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    organization_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True
    )
    label_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("labels.id", ondelete="SET NULL"), nullable=True
    )

    organization: Mapped[Optional[OrganizationModel]] = relationship("OrganizationModel", back_populates="tasks")
    label: Mapped[Optional[LabelModel]] = relationship("LabelModel")


@dataclass(frozen=True)
class TaskFilters:
    status: Optional[TaskStatus] = None
    label_id: Optional[int] = None
    deadline: Optional[dt.date] = None
    target_period: Optional[dt.date] = None


settings = get_settings()

# Echoed statements must not print website passwords bound as parameters.
engine = create_engine(settings.database.url, echo=settings.database.echo, hide_parameters=True)
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, class_=Session)


def init_db() -> None:
    url = make_url(settings.database.url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)


@contextmanager
def get_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def save_organization(
    name: str,
    type: str,
    websites: Sequence[Tuple[str, str, str]] = (),
) -> int:
    """Store an organization with ``(name, identification_code, password)`` websites in order."""
    with get_session() as session:
        record = OrganizationModel(name=name, type=type)
        for position, (site_name, code, password) in enumerate(websites):
            record.websites.append(
                WebsiteModel(position=position, name=site_name, identification_code=code, password=password)
            )
        session.add(record)
        session.flush()
        return record.id


def delete_organization(organization_id: int) -> bool:
    with get_session() as session:
        record = session.get(OrganizationModel, organization_id)
        if record is None:
            return False
        session.delete(record)
    return True


def save_label(name: str, color: str = "#90EE90") -> int:
    with get_session() as session:
        record = LabelModel(name=name, color=color)
        session.add(record)
        session.flush()
        return record.id


def save_task(
    title: str,
    *,
    deadline: dt.date | dt.datetime,
    target_period: dt.date | dt.datetime,
    organization_id: Optional[int],
    status: TaskStatus = TaskStatus.IN_PROGRESS,
    label_id: Optional[int] = None,
    description: Optional[str] = None,
    start_date: Optional[dt.date | dt.datetime] = None,
) -> int:
    with get_session() as session:
        record = TaskModel(
            title=title,
            description=description,
            status=TaskStatus(status).value,
            start_date=as_datetime(start_date),
            deadline=as_datetime(deadline),
            target_period=as_datetime(target_period),
            organization_id=organization_id,
            label_id=label_id,
        )
        session.add(record)
        session.flush()
        return record.id


def _to_organization(record: OrganizationModel) -> Organization:
    return Organization(
        id=record.id,
        name=record.name,
        type=record.type,
        websites=tuple(
            WebsiteCredential(
                name=site.name,
                identification_code=site.identification_code,
                password=site.password,
            )
            for site in record.websites
        ),
    )


def _to_task_record(record: TaskModel) -> TaskRecord:
    return TaskRecord(
        id=record.id,
        title=record.title,
        status=TaskStatus(record.status),
        deadline=as_date(record.deadline),
        target_period=as_date(record.target_period),
        organization=_to_organization(record.organization) if record.organization else None,
        label=record.label.name if record.label else None,
    )


def find_tasks(filters: Optional[TaskFilters] = None) -> List[TaskRecord]:
    """Return matching tasks in id order with organization, websites and label resolved."""
    filters = filters or TaskFilters()
    stmt = (
        select(TaskModel)
        .options(
            selectinload(TaskModel.organization).selectinload(OrganizationModel.websites),
            selectinload(TaskModel.label),
        )
        .order_by(TaskModel.id)
    )
    if filters.status is not None:
        stmt = stmt.where(TaskModel.status == TaskStatus(filters.status).value)
    if filters.label_id is not None:
        stmt = stmt.where(TaskModel.label_id == filters.label_id)
    if filters.deadline is not None:
        start, end = day_range(filters.deadline)
        stmt = stmt.where(TaskModel.deadline >= start, TaskModel.deadline < end)
    if filters.target_period is not None:
        start, end = day_range(filters.target_period)
        stmt = stmt.where(TaskModel.target_period >= start, TaskModel.target_period < end)

    with get_session() as session:
        return [_to_task_record(record) for record in session.scalars(stmt)]


def reset_db() -> None:
    """Drop and recreate every table; used by tests and local seeding."""
    Base.metadata.drop_all(bind=engine)
    init_db()
