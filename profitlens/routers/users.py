from fastapi import APIRouter, Depends, HTTPException
from urllib.parse import quote

from profitlens.deps import get_store, require_auth
from profitlens.models.core import UserProfile
from profitlens.schemas.users import UserProfileIn, UserProfileOut
from profitlens.store import EntityStore

router = APIRouter(prefix="/users", tags=["users"])

AVATAR_URL = "https://api.dicebear.com/8.x/initials/svg?seed={}"


def _out(u: UserProfile) -> dict:
    return {"id": u.id, "name": u.name, "role": u.role, "avatar_url": u.avatar_url}


@router.get("/me", response_model=UserProfileOut)
def me(store: EntityStore = Depends(get_store), sub: str = Depends(require_auth)):
    u = store.get(UserProfile, sub)
    if not u:
        raise HTTPException(404, detail="Profile not found")
    return _out(u)


@router.put("/me", response_model=UserProfileOut)
def upsert_me(body: UserProfileIn, store: EntityStore = Depends(get_store), sub: str = Depends(require_auth)):
    """Create or rename the caller's own profile; the role is never taken from the body."""
    name = body.name.strip()
    if not name:
        raise HTTPException(422, detail="name must not be blank")
    fields = {"name": name, "avatar_url": AVATAR_URL.format(quote(name))}
    u = store.update(UserProfile, sub, fields) or store.insert(UserProfile, {"id": sub, **fields})
    store.commit()
    return _out(u)
