from typing import Optional

from sqlalchemy.orm import Session
from app import models

def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()

def get_user_with_role(db: Session, user_id: int, role: models.UserRole) -> Optional[models.User]:
    return db.query(models.User).filter(
        models.User.id == user_id,
        models.User.role == role.value,
    ).first()
