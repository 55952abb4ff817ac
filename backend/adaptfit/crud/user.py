import uuid
from sqlalchemy.orm import Session
from adaptfit.models.user import User
from adaptfit.utils.utils import hash_password


def get_user(db: Session, user_id: str):
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()

def create_user(db: Session, email: str, password: str):
    db_user = User(
        id=uuid.uuid4().hex,
        email=email,
        password=hash_password(password),
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user
