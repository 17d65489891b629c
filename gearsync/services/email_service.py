"""이메일 서비스 — 알림 메일 작성 및 발송.

Email Service — Composes and sends notification emails.
Messages are composed during the request and queued on FastAPI
BackgroundTasks, so delivery runs after the response is sent and the
request transaction is committed. SMTP failures are logged and never
abort the business operation that triggered the email.
"""

import logging
from html import escape

from fastapi import BackgroundTasks

from gearsync.config import settings
from gearsync.models.appointment import Appointment
from gearsync.models.project import Project
from gearsync.models.user import User
from gearsync.utils.email import send_email

logger = logging.getLogger(__name__)


def _layout(title: str, body: str) -> str:
    """공통 HTML 레이아웃 (Shared minimal HTML wrapper)."""
    return (
        "<html><body style=\"font-family: Arial, sans-serif; color: #222;\">"
        f"<h2>{escape(title)}</h2>"
        f"{body}"
        f"<p style=\"color: #888; font-size: 12px;\">{escape(settings.APP_NAME)} · "
        f"<a href=\"{settings.APP_URL}\">{settings.APP_URL}</a></p>"
        "</body></html>"
    )


class EmailService:
    """알림 메일 발송 서비스.

    Notification email service. Every public method builds a short HTML
    body and queues it for delivery on the request's background tasks.
    """

    async def _deliver(self, to: str, subject: str, html: str, text: str) -> bool:
        """메일을 발송하고 실패 시 로그만 남깁니다.

        Send one email. Returns False and logs the failure instead of raising.
        """
        try:
            if not await send_email(to=to, subject=subject, html=html, text=text):
                return False
        except Exception:
            logger.exception("Failed to send email %r to %s", subject, to)
            return False
        logger.info("Sent email %r to %s", subject, to)
        return True

    def send_welcome_email(self, background_tasks: BackgroundTasks, user: User) -> None:
        """회원가입 환영 메일 (Welcome email after customer registration)."""
        subject = f"Welcome to {settings.APP_NAME}"
        text = f"Hi {user.first_name}, your {settings.APP_NAME} account is ready."
        body = f"<p>Hi {escape(user.first_name)},</p><p>Your account is ready. You can now add your vehicles and book services.</p>"
        background_tasks.add_task(self._deliver, user.email, subject, _layout(subject, body), text)

    def send_staff_credentials(self, background_tasks: BackgroundTasks, user: User, temporary_password: str) -> None:
        """직원/관리자 계정 임시 비밀번호 안내 메일.

        Send the temporary password of a newly provisioned employee or admin.
        """
        subject = f"Your {settings.APP_NAME} {user.role.lower()} account"
        text = (
            f"Hi {user.first_name}, an account was created for you.\n"
            f"Email: {user.email}\nTemporary password: {temporary_password}\n"
            "You will be asked to change it on first login."
        )
        body = (
            f"<p>Hi {escape(user.first_name)},</p>"
            "<p>An account was created for you.</p>"
            f"<p>Email: <b>{escape(user.email)}</b><br>"
            f"Temporary password: <b>{escape(temporary_password)}</b></p>"
            "<p>You will be asked to change it on first login.</p>"
        )
        background_tasks.add_task(self._deliver, user.email, subject, _layout(subject, body), text)

    def send_password_changed(self, background_tasks: BackgroundTasks, user: User) -> None:
        """비밀번호 변경 확인 메일 (Password change confirmation)."""
        subject = "Your password was changed"
        text = f"Hi {user.first_name}, your password was changed. Contact us if this was not you."
        body = f"<p>Hi {escape(user.first_name)},</p><p>Your password was changed. Contact us if this was not you.</p>"
        background_tasks.add_task(self._deliver, user.email, subject, _layout(subject, body), text)

    def send_password_reset_otp(self, background_tasks: BackgroundTasks, user: User, otp: str) -> None:
        """비밀번호 재설정 OTP 메일 (Password reset code)."""
        subject = "Your password reset code"
        text = f"Your password reset code is {otp}. It expires in {settings.OTP_EXPIRE_MINUTES} minutes."
        body = (
            f"<p>Hi {escape(user.first_name)},</p>"
            f"<p>Your password reset code is <b style=\"font-size: 20px;\">{escape(otp)}</b>.</p>"
            f"<p>It expires in {settings.OTP_EXPIRE_MINUTES} minutes.</p>"
        )
        background_tasks.add_task(self._deliver, user.email, subject, _layout(subject, body), text)

    def send_password_reset_confirmation(self, background_tasks: BackgroundTasks, user: User) -> None:
        """비밀번호 재설정 완료 메일 (Password reset confirmation)."""
        subject = "Your password was reset"
        text = f"Hi {user.first_name}, your password was reset successfully."
        body = f"<p>Hi {escape(user.first_name)},</p><p>Your password was reset successfully.</p>"
        background_tasks.add_task(self._deliver, user.email, subject, _layout(subject, body), text)

    def send_appointment_confirmation(self, background_tasks: BackgroundTasks, appointment: Appointment) -> None:
        """예약 확정 메일 — 직원 배정 시 고객에게 발송.

        Appointment confirmation sent to the customer when an employee is assigned.
        """
        customer: User = appointment.customer
        when: str = appointment.scheduled_date_time.strftime("%Y-%m-%d %H:%M UTC")
        services: str = ", ".join(s.name for s in appointment.services)
        technician: str = appointment.employee.full_name if appointment.employee else "our team"
        subject = "Your appointment is confirmed"
        text = (
            f"Hi {customer.first_name}, your appointment on {when} for "
            f"{appointment.vehicle.registration_number} is confirmed.\n"
            f"Services: {services}\nTechnician: {technician}\n"
            f"Cost: {appointment.final_cost if appointment.final_cost is not None else appointment.estimated_cost}"
        )
        body = (
            f"<p>Hi {escape(customer.first_name)},</p>"
            f"<p>Your appointment on <b>{when}</b> for "
            f"<b>{escape(appointment.vehicle.registration_number)}</b> is confirmed.</p>"
            f"<p>Services: {escape(services)}<br>Technician: {escape(technician)}</p>"
        )
        background_tasks.add_task(self._deliver, customer.email, subject, _layout(subject, body), text)

    def send_project_approved(self, background_tasks: BackgroundTasks, project: Project) -> None:
        """프로젝트 승인 메일 (Project approval notice to the customer)."""
        customer: User = project.customer
        subject = f"Your project \"{project.name}\" was approved"
        text = (
            f"Hi {customer.first_name}, your project {project.name} was approved.\n"
            f"Estimated cost: {project.estimated_cost}\n"
            f"Estimated duration: {project.estimated_duration_hours} hours"
        )
        body = (
            f"<p>Hi {escape(customer.first_name)},</p>"
            f"<p>Your project <b>{escape(project.name)}</b> was approved.</p>"
            f"<p>Estimated cost: {project.estimated_cost}<br>"
            f"Estimated duration: {project.estimated_duration_hours} hours</p>"
        )
        background_tasks.add_task(self._deliver, customer.email, subject, _layout(subject, body), text)

    def send_project_rejected(self, background_tasks: BackgroundTasks, project: Project, reason: str) -> None:
        """프로젝트 거절 메일 (Project rejection notice to the customer)."""
        customer: User = project.customer
        subject = f"Your project \"{project.name}\" was not approved"
        text = f"Hi {customer.first_name}, your project {project.name} was not approved.\nReason: {reason}"
        body = (
            f"<p>Hi {escape(customer.first_name)},</p>"
            f"<p>Your project <b>{escape(project.name)}</b> was not approved.</p>"
            f"<p>Reason: {escape(reason)}</p>"
        )
        background_tasks.add_task(self._deliver, customer.email, subject, _layout(subject, body), text)


# 싱글턴 인스턴스 — Singleton instance
email_service: EmailService = EmailService()
