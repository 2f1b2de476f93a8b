from fastapi import APIRouter

import admissions.models  # noqa: F401
from admissions.modules.applications.router import detail_router as application_detail_router
from admissions.modules.applications.router import router as applications_router
from admissions.modules.auth.router import router as auth_router
from admissions.modules.courses.router import router as courses_router
from admissions.modules.faculty.router import router as faculty_router
from admissions.modules.faculty.router import student_router
from admissions.modules.forms.router import router as forms_router
from admissions.modules.notifications.router import router as notifications_router
from admissions.modules.payments.router import router as payments_router
from admissions.modules.users.router import router as users_router
from admissions.modules.verification.admin_router import router as verification_admin_router
from admissions.modules.verification.router import router as verification_officer_router

api_router = APIRouter()

# Account endpoints live at the root: /register, /login, /change-password
api_router.include_router(auth_router, tags=["Authentication"])

api_router.include_router(users_router, prefix="/api/users", tags=["Users"])

api_router.include_router(courses_router, prefix="/api/courses", tags=["Courses"])

api_router.include_router(forms_router, prefix="/api/forms", tags=["Form Templates"])

api_router.include_router(applications_router, prefix="/api/applications", tags=["Applications"])
api_router.include_router(application_detail_router, prefix="/api/application", tags=["Applications"])

api_router.include_router(
    verification_admin_router,
    prefix="/api/verification-admin",
    tags=["Verification Admin"],
)

api_router.include_router(
    verification_officer_router,
    prefix="/api/verification-officer",
    tags=["Verification Officer"],
)

api_router.include_router(payments_router, prefix="/api/payments", tags=["Payments"])

api_router.include_router(
    notifications_router,
    prefix="/api/student-notifications",
    tags=["Student Notifications"],
)

api_router.include_router(faculty_router, prefix="/api/faculty", tags=["Faculty"])
api_router.include_router(student_router, prefix="/api/student", tags=["Student Dashboard"])
