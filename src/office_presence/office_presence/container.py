from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from .access.resolver import AccessResolver
from .admin.mysql_statistics_repository import MySQLStatisticsRepository
from .admin.repository import StatisticsRepository
from .admin.service import AdminService
from .analytics.service import AnalyticsService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .capacity.mysql_capacity_repository import MySQLCapacityRepository
from .capacity.repository import CapacityRepository
from .capacity.service import CapacityService
from .common.datetime_utils import today_local
from .database.connection import DBConfig, DatabaseConnection
from .delegations.mysql_delegation_repository import MySQLDelegationRepository
from .delegations.registry import DelegationRegistry
from .delegations.repository import DelegationRepository
from .delegations.service import DelegationService
from .users.directory import HierarchyDirectory
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import TeamService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    delegations_repo: DelegationRepository
    attendance_repo: AttendanceRepository
    capacity_repo: CapacityRepository
    statistics_repo: StatisticsRepository

    directory: HierarchyDirectory
    registry: DelegationRegistry
    resolver: AccessResolver

    user_service: UserService
    team_service: TeamService
    delegation_service: DelegationService
    attendance_service: AttendanceService
    capacity_service: CapacityService
    analytics_service: AnalyticsService
    admin_service: AdminService


def assemble(
    *,
    users_repo: UserRepository,
    delegations_repo: DelegationRepository,
    attendance_repo: AttendanceRepository,
    capacity_repo: CapacityRepository,
    statistics_repo: StatisticsRepository,
    clock: Callable[[], date] = today_local,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, in-memory in tests)."""

    directory = HierarchyDirectory(users_repo)
    registry = DelegationRegistry(delegations_repo, clock=clock)
    resolver = AccessResolver(directory, registry)

    return Container(
        users_repo=users_repo,
        delegations_repo=delegations_repo,
        attendance_repo=attendance_repo,
        capacity_repo=capacity_repo,
        statistics_repo=statistics_repo,
        directory=directory,
        registry=registry,
        resolver=resolver,
        user_service=UserService(users_repo, directory, resolver),
        team_service=TeamService(directory, resolver),
        delegation_service=DelegationService(delegations_repo, registry, directory, resolver),
        attendance_service=AttendanceService(attendance_repo, resolver, clock=clock),
        capacity_service=CapacityService(capacity_repo, attendance_repo, resolver, clock=clock),
        analytics_service=AnalyticsService(attendance_repo, resolver, clock=clock),
        admin_service=AdminService(statistics_repo, resolver),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        delegations_repo=MySQLDelegationRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        capacity_repo=MySQLCapacityRepository(conn),
        statistics_repo=MySQLStatisticsRepository(conn),
    )
