from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from streakboard.api.deps import get_db
from streakboard.crud import list_categories, provision_user
from streakboard.schemas import CategoryOut, UserOut, UserProvisionIn

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/v1/users/provision", response_model=UserOut)
def users_provision(payload: UserProvisionIn, db: Session = Depends(get_db)) -> UserOut:
    user = provision_user(db, payload.email, payload.username, payload.full_name)
    return UserOut.model_validate(user)


@router.get("/v1/categories", response_model=list[CategoryOut])
def categories(db: Session = Depends(get_db)) -> list[CategoryOut]:
    return [CategoryOut.model_validate(c) for c in list_categories(db)]
