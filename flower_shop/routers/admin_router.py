from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ..auth import create_access_token, get_credential_verifier, get_current_admin, get_optional_admin
from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, ADMIN_SESSION_COOKIE
from ..crud import get_dashboard_metrics
from ..database import get_db
from ..schemas import AdminCheck, AdminContext, DashboardOut, LoginRequest, Token

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=Token)
def admin_login(
    body: LoginRequest,
    response: Response,
    verify=Depends(get_credential_verifier),
):
    """
    Admin login endpoint. The token is returned and also set as a session cookie.
    """
    if not verify(body.username, body.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(body.username)
    response.set_cookie(
        ADMIN_SESSION_COOKIE,
        access_token,
        httponly=True,
        samesite="lax",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/check", response_model=AdminCheck)
def admin_check(admin=Depends(get_optional_admin)):
    return {"authenticated": admin is not None}


@router.get("/dashboard", response_model=DashboardOut)
def admin_dashboard(
    current_admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """
    Totals for the back-office landing page (Admin only)
    """
    return get_dashboard_metrics(db)
