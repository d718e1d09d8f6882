from fastapi import APIRouter
from salon_admin.api.api_v1.endpoints import auth, services, nailtechs, appointments, reports

router = APIRouter()

# Include all routers
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(services.router, prefix="/services", tags=["Services"])
router.include_router(nailtechs.router, prefix="/nailtechs", tags=["Nail Technicians"])
router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
router.include_router(reports.router, prefix="/reports", tags=["Reports"])
