from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt
from sqlalchemy.orm import Session

from profitlens.config import settings
from profitlens.db import get_db
from profitlens.services.scope import OutletView
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore

auth_scheme = HTTPBearer(auto_error=False)

def require_auth(creds: HTTPAuthorizationCredentials | None = Depends(auth_scheme)) -> str:
    """Verify a bearer token issued by the identity provider and return its subject."""
    if not creds:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    options = {"verify_aud": settings.JWT_AUD is not None}
    try:
        data = jwt.decode(
            creds.credentials, settings.APP_SECRET, algorithms=["HS256"],
            audience=settings.JWT_AUD, issuer=settings.JWT_ISS, options=options,
        )
        return data["sub"]
    except (jwt.PyJWTError, KeyError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

def get_store(db: Session = Depends(get_db)) -> EntityStore:
    return EntityStore(db)

def get_workspace(request: Request) -> Workspace:
    return request.app.state.workspace

def current_time() -> datetime:
    # business "today" is the date in the configured timezone
    return datetime.now(ZoneInfo(settings.TZ))

def require_view(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace)) -> OutletView:
    view = ws.view(store)
    if view is None:
        raise HTTPException(409, detail="No outlet selected; create an outlet first")
    return view

def guard_response(verdict):
    """Pass a refused delete through as a 409 carrying the guard's message."""
    if verdict.success:
        return {"success": True}
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"success": False, "message": verdict.message})
