from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.fingerprint_attendance import FingerprintAttendanceService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_MATCH_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .fingerprints.matcher import FingerprintMatcher
from .fingerprints.mysql_device_repository import MySQLFingerprintDeviceRepository
from .fingerprints.mysql_log_repository import MySQLFingerprintLogRepository
from .fingerprints.mysql_template_repository import MySQLFingerprintTemplateRepository
from .fingerprints.service import FingerprintService
from .job_types.mysql_job_type_repository import MySQLJobTypeRepository
from .job_types.repository import JobTypeRepository
from .job_types.service import JobTypeService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .sites.mysql_site_repository import MySQLSiteRepository
from .sites.repository import SiteRepository
from .sites.service import SiteService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.service import WorkerService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    workers_repo: WorkerRepository
    sites_repo: SiteRepository
    job_types_repo: JobTypeRepository
    attendance_repo: AttendanceRepository
    payroll_repo: PayrollRepository

    worker_service: WorkerService
    site_service: SiteService
    job_type_service: JobTypeService
    attendance_service: AttendanceService
    fingerprint_service: FingerprintService
    fingerprint_attendance_service: FingerprintAttendanceService
    payroll_service: PayrollService


def build_container(
    *,
    db_config: Mapping,
    matcher: Optional[FingerprintMatcher] = None,
    match_threshold: int = DEFAULT_MATCH_THRESHOLD,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    workers_repo = MySQLWorkerRepository(conn)
    sites_repo = MySQLSiteRepository(conn)
    job_types_repo = MySQLJobTypeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        workers_repo,
        sites_repo,
        strategy_factory=AttendanceStrategyFactory(),
    )
    fingerprint_service = FingerprintService(
        MySQLFingerprintTemplateRepository(conn),
        MySQLFingerprintDeviceRepository(conn),
        MySQLFingerprintLogRepository(conn),
        workers_repo,
        sites_repo,
        matcher=matcher,
        match_threshold=match_threshold,
    )

    return Container(
        conn=conn,
        workers_repo=workers_repo,
        sites_repo=sites_repo,
        job_types_repo=job_types_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        worker_service=WorkerService(workers_repo, sites_repo, job_types_repo),
        site_service=SiteService(sites_repo, job_types_repo),
        job_type_service=JobTypeService(job_types_repo),
        attendance_service=attendance_service,
        fingerprint_service=fingerprint_service,
        fingerprint_attendance_service=FingerprintAttendanceService(
            fingerprint_service, attendance_service, attendance_repo
        ),
        payroll_service=PayrollService(payroll_repo, attendance_repo, workers_repo, sites_repo, job_types_repo),
    )
