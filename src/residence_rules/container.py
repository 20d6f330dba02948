from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reconciler import AttendanceReconciler
from .attendance.service import AttendanceService
from .clearance.mysql_clearance_repository import MySQLClearanceRepository
from .clearance.state_machine import ClearanceStateMachine
from .common.clock import Clock, SystemClock
from .complaints.mysql_complaint_repository import MySQLComplaintRepository
from .complaints.service import ComplaintReplyService
from .database.connection import DBConfig, DatabaseConnection
from .notifications.dispatcher import NotificationDispatcher
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationInbox
from .permissions.mysql_permission_repository import MySQLPermissionRepository
from .permissions.service import PermissionService
from .residents.mysql_resident_repository import MySQLResidentRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    clock: Clock

    residents_repo: MySQLResidentRepository
    attendance_repo: MySQLAttendanceRepository
    permissions_repo: MySQLPermissionRepository
    complaints_repo: MySQLComplaintRepository
    notifications_repo: MySQLNotificationRepository
    clearance_repo: MySQLClearanceRepository

    reconciler: AttendanceReconciler
    attendance_service: AttendanceService
    permission_service: PermissionService
    notification_dispatcher: NotificationDispatcher
    complaint_reply_service: ComplaintReplyService
    notification_inbox: NotificationInbox
    clearance: ClearanceStateMachine


def build_container(*, db_config: dict, clock: Optional[Clock] = None, sender_name: Optional[str] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    clock = clock or SystemClock()

    residents_repo = MySQLResidentRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    permissions_repo = MySQLPermissionRepository(conn)
    complaints_repo = MySQLComplaintRepository(conn)
    notifications_repo = MySQLNotificationRepository(conn)
    clearance_repo = MySQLClearanceRepository(conn)

    dispatcher = NotificationDispatcher(notifications_repo, clock=clock, sender_name=sender_name)

    return Container(
        conn=conn,
        clock=clock,
        residents_repo=residents_repo,
        attendance_repo=attendance_repo,
        permissions_repo=permissions_repo,
        complaints_repo=complaints_repo,
        notifications_repo=notifications_repo,
        clearance_repo=clearance_repo,
        reconciler=AttendanceReconciler(residents_repo, attendance_repo),
        attendance_service=AttendanceService(attendance_repo, residents_repo, clock=clock),
        permission_service=PermissionService(permissions_repo, clock=clock),
        notification_dispatcher=dispatcher,
        complaint_reply_service=ComplaintReplyService(complaints_repo, dispatcher),
        notification_inbox=NotificationInbox(notifications_repo),
        clearance=ClearanceStateMachine(clearance_repo, clock=clock),
    )
